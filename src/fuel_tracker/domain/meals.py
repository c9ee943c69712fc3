"""Domain models for meal logging."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID

from fuel_tracker.domain.nutrition import FoodMeasurement

MIN_SERVINGS = 0.25


class MealType(Enum):
    """Meal slot within a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @classmethod
    def suggested(cls, hour: int) -> "MealType":
        """Return the meal type that usually happens at ``hour``."""
        if 6 <= hour <= 10:  # noqa: PLR2004
            return cls.BREAKFAST
        if 11 <= hour <= 14:  # noqa: PLR2004
            return cls.LUNCH
        if 17 <= hour <= 21:  # noqa: PLR2004
            return cls.DINNER
        return cls.SNACK


class FoodSource(Enum):
    """Where a food item's nutrition came from."""

    MANUAL = "manual"
    BARCODE = "barcode"
    DATABASE = "database"
    RECIPE = "recipe"
    QUICK_ADD = "quick_add"


@dataclass(frozen=True)
class FoodItem:
    """A food eaten as part of a meal, with per-serving nutrition."""

    name: str
    per_serving: FoodMeasurement
    servings: float = 1.0
    serving_size: float = 100.0
    serving_unit: str = "g"
    brand: str | None = None
    barcode: str | None = None
    source: FoodSource = FoodSource.MANUAL
    id: UUID | None = None

    @property
    def totals(self) -> FoodMeasurement:
        """Return nutrition for the number of servings eaten."""
        return self.per_serving.scaled(self.servings)

    def with_servings(self, servings: float) -> "FoodItem":
        """Return a copy with the serving count, floored at a quarter serving."""
        return replace(self, servings=max(MIN_SERVINGS, servings))

    def duplicate(self) -> "FoodItem":
        """Return an unsaved copy of this item."""
        return replace(self, id=None)


@dataclass(frozen=True)
class MealRecord:
    """A logged meal with its food items."""

    id: UUID
    user_id: UUID
    meal_type: MealType
    logged_at: datetime
    items: list[FoodItem] = field(default_factory=list)
    is_deleted: bool = False

    @property
    def totals(self) -> FoodMeasurement:
        total = FoodMeasurement.zero()
        for item in self.items:
            total = total + item.totals
        return total

    @property
    def fingerprint(self) -> str:
        """Return the sorted, lowercased item names joined by ``|``."""
        return "|".join(sorted(item.name.lower() for item in self.items))
