"""Achievement definitions and progress."""

from dataclasses import dataclass
from enum import Enum


class AchievementTier(Enum):
    """Achievement rarity, ordered from bronze to platinum."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class AchievementCategory(Enum):
    """Which counter an achievement tracks."""

    STREAK = "streak"
    MEALS = "meals"
    WEIGH_INS = "weigh_ins"
    WEIGHT_LOST = "weight_lost"
    WEIGHT_GAINED = "weight_gained"


@dataclass(frozen=True)
class AchievementDefinition:
    """Static metadata for an achievement."""

    title: str
    description: str
    category: AchievementCategory
    tier: AchievementTier
    target_value: int


class AchievementType(Enum):
    """All achievements a user can unlock."""

    FIRST_DAY = "first_day"
    STREAK_3 = "streak_3"
    STREAK_7 = "streak_7"
    STREAK_14 = "streak_14"
    STREAK_30 = "streak_30"
    STREAK_60 = "streak_60"
    STREAK_100 = "streak_100"
    STREAK_365 = "streak_365"
    FIRST_MEAL = "first_meal"
    MEALS_10 = "meals_10"
    MEALS_50 = "meals_50"
    MEALS_100 = "meals_100"
    MEALS_500 = "meals_500"
    MEALS_1000 = "meals_1000"
    FIRST_WEIGH_IN = "first_weigh_in"
    LOST_5 = "lost_5"
    LOST_10 = "lost_10"
    LOST_25 = "lost_25"
    GAINED_5 = "gained_5"
    GAINED_10 = "gained_10"

    @property
    def definition(self) -> AchievementDefinition:
        return ACHIEVEMENTS[self]


def _streak(title: str, days: int, tier: AchievementTier) -> AchievementDefinition:
    description = (
        "Log your first day of meals"
        if days == 1
        else f"Log meals for {days} consecutive days"
    )
    return AchievementDefinition(
        title, description, AchievementCategory.STREAK, tier, days
    )


def _meals(title: str, count: int, tier: AchievementTier) -> AchievementDefinition:
    description = "Log your first meal" if count == 1 else f"Log {count:,} meals"
    return AchievementDefinition(
        title, description, AchievementCategory.MEALS, tier, count
    )


ACHIEVEMENTS: dict[AchievementType, AchievementDefinition] = {
    AchievementType.FIRST_DAY: _streak("Getting Started", 1, AchievementTier.BRONZE),
    AchievementType.STREAK_3: _streak("Three's Company", 3, AchievementTier.BRONZE),
    AchievementType.STREAK_7: _streak("First Week", 7, AchievementTier.BRONZE),
    AchievementType.STREAK_14: _streak("Two Week Warrior", 14, AchievementTier.SILVER),
    AchievementType.STREAK_30: _streak("Monthly Master", 30, AchievementTier.SILVER),
    AchievementType.STREAK_60: _streak("Two Month Champion", 60, AchievementTier.GOLD),
    AchievementType.STREAK_100: _streak("Century Club", 100, AchievementTier.GOLD),
    AchievementType.STREAK_365: _streak(
        "Year of Dedication", 365, AchievementTier.PLATINUM
    ),
    AchievementType.FIRST_MEAL: _meals("First Bite", 1, AchievementTier.BRONZE),
    AchievementType.MEALS_10: _meals("Getting Serious", 10, AchievementTier.BRONZE),
    AchievementType.MEALS_50: _meals("Halfway Hero", 50, AchievementTier.SILVER),
    AchievementType.MEALS_100: _meals("Century Logger", 100, AchievementTier.SILVER),
    AchievementType.MEALS_500: _meals("Food Journalist", 500, AchievementTier.GOLD),
    AchievementType.MEALS_1000: _meals(
        "Nutrition Master", 1000, AchievementTier.PLATINUM
    ),
    AchievementType.FIRST_WEIGH_IN: AchievementDefinition(
        "Scale Friend",
        "Log your first weight",
        AchievementCategory.WEIGH_INS,
        AchievementTier.BRONZE,
        1,
    ),
    AchievementType.LOST_5: AchievementDefinition(
        "5kg Down",
        "Lose 5 kilograms",
        AchievementCategory.WEIGHT_LOST,
        AchievementTier.SILVER,
        5,
    ),
    AchievementType.LOST_10: AchievementDefinition(
        "10kg Down",
        "Lose 10 kilograms",
        AchievementCategory.WEIGHT_LOST,
        AchievementTier.GOLD,
        10,
    ),
    AchievementType.LOST_25: AchievementDefinition(
        "Transformation",
        "Lose 25 kilograms",
        AchievementCategory.WEIGHT_LOST,
        AchievementTier.PLATINUM,
        25,
    ),
    AchievementType.GAINED_5: AchievementDefinition(
        "5kg Gained",
        "Gain 5 kilograms",
        AchievementCategory.WEIGHT_GAINED,
        AchievementTier.SILVER,
        5,
    ),
    AchievementType.GAINED_10: AchievementDefinition(
        "10kg Gained",
        "Gain 10 kilograms",
        AchievementCategory.WEIGHT_GAINED,
        AchievementTier.GOLD,
        10,
    ),
}


@dataclass(frozen=True)
class AchievementSnapshot:
    """Counters that achievements are evaluated against."""

    current_streak: int
    total_meals: int
    weigh_ins: int
    weight_change_kg: float


@dataclass(frozen=True)
class AchievementProgress:
    """Progress toward a single achievement."""

    achievement: AchievementType
    current_value: int
    progress: float
    unlocked: bool
