"""Domain models for user biometrics and nutrition targets."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID


class Sex(Enum):
    """Biological sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"


class ActivityLevel(Enum):
    """Activity level with its TDEE multiplier."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @property
    def multiplier(self) -> float:
        """Return the TDEE multiplier for this level."""
        return _ACTIVITY_MULTIPLIERS[self]


_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


class FitnessGoal(Enum):
    """Direction of the user's weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class BiometricProfile:
    """Snapshot of the inputs used to derive nutrition targets."""

    sex: Sex
    birth_year: int
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    fitness_goal: FitnessGoal

    def age(self, today: date) -> int:
        """Return the age in whole years as of ``today``'s calendar year."""
        return today.year - self.birth_year


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro goals."""

    calorie_goal: int
    protein_g: float
    carbs_g: float
    fat_g: float
    bmr: float | None = None
    tdee: float | None = None


@dataclass(frozen=True)
class UserProfile:
    """Stored profile for a user."""

    user_id: UUID
    biometrics: BiometricProfile
    targets: NutritionTargets
    target_weight_kg: float | None = None
    timezone: str = "UTC"
