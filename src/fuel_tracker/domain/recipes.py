"""Domain models for recipes."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID

from fuel_tracker.domain.nutrition import FoodMeasurement

BASE_QUANTITY = 100.0
MINUTES_PER_HOUR = 60


class RecipeCategory(Enum):
    """Recipe grouping shown in recipe lists."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    DESSERT = "dessert"
    BEVERAGE = "beverage"
    SALAD = "salad"
    SOUP = "soup"
    SMOOTHIE = "smoothie"
    OTHER = "other"


class IngredientUnit(Enum):
    """Unit an ingredient quantity is measured in."""

    GRAM = "g"
    KILOGRAM = "kg"
    OUNCE = "oz"
    POUND = "lb"
    CUP = "cup"
    TABLESPOON = "tbsp"
    TEASPOON = "tsp"
    MILLILITER = "ml"
    LITER = "L"
    PIECE = "piece"
    SLICE = "slice"


@dataclass(frozen=True)
class RecipeIngredient:
    """An ingredient with nutrition given per 100 units of its quantity."""

    name: str
    quantity: float
    unit: IngredientUnit
    per_100: FoodMeasurement

    @property
    def nutrition(self) -> FoodMeasurement:
        """Return nutrition for the ingredient's quantity."""
        return self.per_100.scaled(self.quantity / BASE_QUANTITY)

    def with_quantity(self, quantity: float) -> "RecipeIngredient":
        return replace(self, quantity=quantity)


@dataclass(frozen=True)
class Recipe:
    """A user's recipe made of ingredients and split into servings."""

    user_id: UUID
    name: str
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    servings: int = 1
    description: str = ""
    prep_time_minutes: int | None = None
    cook_time_minutes: int | None = None
    instructions: list[str] = field(default_factory=list)
    category: RecipeCategory = RecipeCategory.OTHER
    is_favorite: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    id: UUID | None = None

    @property
    def total_time_minutes(self) -> int | None:
        if self.prep_time_minutes is None and self.cook_time_minutes is None:
            return None
        return (self.prep_time_minutes or 0) + (self.cook_time_minutes or 0)

    @property
    def formatted_total_time(self) -> str | None:
        """Return the total time as ``45 min``, ``1 hr`` or ``1 hr 15 min``."""
        total = self.total_time_minutes
        if total is None:
            return None
        if total < MINUTES_PER_HOUR:
            return f"{total} min"
        hours, minutes = divmod(total, MINUTES_PER_HOUR)
        if minutes == 0:
            return f"{hours} hr"
        return f"{hours} hr {minutes} min"
