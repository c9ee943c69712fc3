"""Daily calorie and macro goal calculator."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from fuel_tracker.domain.profile import (
    BiometricProfile,
    FitnessGoal,
    NutritionTargets,
    Sex,
)

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9

MIN_MANUAL_CALORIES = 1000
MAX_MANUAL_CALORIES = 4000


@dataclass(frozen=True)
class GoalFormula:
    """Constants for Mifflin-St Jeor and the macro split."""

    weight_factor: float = 10.0
    height_factor: float = 6.25
    age_factor: float = 5.0
    sex_constants: dict[Sex, float] = field(
        default_factory=lambda: {
            Sex.MALE: 5.0,
            Sex.FEMALE: -161.0,
            Sex.UNSPECIFIED: -78.0,
        }
    )
    goal_offsets: dict[FitnessGoal, float] = field(
        default_factory=lambda: {
            FitnessGoal.LOSE: -500.0,
            FitnessGoal.MAINTAIN: 0.0,
            FitnessGoal.GAIN: 300.0,
        }
    )
    protein_per_kg: float = 2.0
    gain_protein_per_kg: float = 2.2
    fat_calorie_share: float = 0.28
    min_weight_kg: float = 30.0
    max_weight_kg: float = 500.0
    min_height_cm: float = 100.0
    max_height_cm: float = 300.0
    max_age: int = 150
    fallback_tdee: float = 2000.0
    min_tdee: float = 800.0
    max_tdee: float = 8000.0


DEFAULT_GOAL_FORMULA = GoalFormula()


def calculate_bmr(
    profile: BiometricProfile,
    today: date | None = None,
    formula: GoalFormula = DEFAULT_GOAL_FORMULA,
) -> float:
    """Return basal metabolic rate in kcal per day."""
    today = today or datetime.now(tz=UTC).date()
    weight = _clamp(profile.weight_kg, formula.min_weight_kg, formula.max_weight_kg)
    height = _clamp(profile.height_cm, formula.min_height_cm, formula.max_height_cm)
    return (
        formula.weight_factor * weight
        + formula.height_factor * height
        - formula.age_factor * profile.age(today)
        + formula.sex_constants[profile.sex]
    )


def calculate_tdee(
    profile: BiometricProfile,
    today: date | None = None,
    formula: GoalFormula = DEFAULT_GOAL_FORMULA,
) -> float:
    """Return total daily energy expenditure in kcal per day."""
    today = today or datetime.now(tz=UTC).date()
    age = profile.age(today)
    if age <= 0 or age >= formula.max_age:
        return formula.fallback_tdee
    tdee = calculate_bmr(profile, today, formula) * profile.activity_level.multiplier
    return _clamp(tdee, formula.min_tdee, formula.max_tdee)


def compute_goals(
    profile: BiometricProfile,
    today: date | None = None,
    formula: GoalFormula = DEFAULT_GOAL_FORMULA,
) -> NutritionTargets:
    """Derive daily calorie and macro targets from biometrics."""
    today = today or datetime.now(tz=UTC).date()
    bmr = calculate_bmr(profile, today, formula)
    tdee = calculate_tdee(profile, today, formula)
    calorie_goal = round(tdee + formula.goal_offsets[profile.fitness_goal])

    weight = _clamp(profile.weight_kg, formula.min_weight_kg, formula.max_weight_kg)
    per_kg = (
        formula.gain_protein_per_kg
        if profile.fitness_goal is FitnessGoal.GAIN
        else formula.protein_per_kg
    )
    protein_g = weight * per_kg
    fat_g = calorie_goal * formula.fat_calorie_share / FAT_KCAL_PER_G
    carbs_g = (
        calorie_goal - protein_g * PROTEIN_KCAL_PER_G - fat_g * FAT_KCAL_PER_G
    ) / CARBS_KCAL_PER_G

    return NutritionTargets(
        calorie_goal=calorie_goal,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        bmr=bmr,
        tdee=tdee,
    )


def clamp_calorie_goal(calories: int) -> int:
    """Clamp a manually entered calorie goal to the supported range."""
    return int(_clamp(calories, MIN_MANUAL_CALORIES, MAX_MANUAL_CALORIES))


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))
