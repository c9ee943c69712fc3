"""Nutrition domain models."""

from dataclasses import dataclass
from datetime import date

from fuel_tracker.domain.profile import NutritionTargets


@dataclass(frozen=True)
class FoodMeasurement:
    """Calories, macros and micronutrients for a food, meal or day.

    Macros, fiber, sugar and saturated fat are grams; sodium and cholesterol
    are milligrams.
    """

    calories: int = 0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0
    saturated_fat_g: float = 0.0
    cholesterol_mg: float = 0.0

    def __add__(self, other: "FoodMeasurement") -> "FoodMeasurement":
        return FoodMeasurement(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
            fiber_g=self.fiber_g + other.fiber_g,
            sugar_g=self.sugar_g + other.sugar_g,
            sodium_mg=self.sodium_mg + other.sodium_mg,
            saturated_fat_g=self.saturated_fat_g + other.saturated_fat_g,
            cholesterol_mg=self.cholesterol_mg + other.cholesterol_mg,
        )

    @staticmethod
    def zero() -> "FoodMeasurement":
        return FoodMeasurement()

    def scaled(self, servings: float) -> "FoodMeasurement":
        """Return the measurement for ``servings`` servings.

        Calories are truncated to whole kcal.
        """
        return FoodMeasurement(
            calories=int(self.calories * servings),
            protein_g=self.protein_g * servings,
            carbs_g=self.carbs_g * servings,
            fat_g=self.fat_g * servings,
            fiber_g=self.fiber_g * servings,
            sugar_g=self.sugar_g * servings,
            sodium_mg=self.sodium_mg * servings,
            saturated_fat_g=self.saturated_fat_g * servings,
            cholesterol_mg=self.cholesterol_mg * servings,
        )


@dataclass(frozen=True)
class MacroSplit:
    """Fraction of calories contributed by each macro, each in [0, 1]."""

    protein: float
    carbs: float
    fat: float

    def as_percentages(self) -> dict[str, int]:
        """Return whole-number percentages for display."""
        return {
            "protein": int(self.protein * 100),
            "carbs": int(self.carbs * 100),
            "fat": int(self.fat * 100),
        }


@dataclass(frozen=True)
class LoggedDay:
    """Whether a calendar day has at least one meal with calories."""

    day: date
    has_meals: bool


@dataclass(frozen=True)
class DaySummary:
    """Consumed totals for a day alongside the user's targets."""

    day: date
    consumed: FoodMeasurement
    targets: NutritionTargets
    meals_logged: int
