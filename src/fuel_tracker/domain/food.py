"""Food database domain models."""

from dataclasses import dataclass

from fuel_tracker.domain.meals import FoodItem, FoodSource
from fuel_tracker.domain.nutrition import FoodMeasurement

USDA_ID_PREFIX = "usda-"


@dataclass(frozen=True)
class ScannedProduct:
    """A product found by barcode or search, with per-serving nutrition."""

    barcode: str
    name: str
    nutrition: FoodMeasurement
    serving_size: float = 100.0
    serving_unit: str = "g"
    serving_size_description: str | None = None
    brand: str | None = None
    image_url: str | None = None
    nutrition_grade: str | None = None
    category: str | None = None
    quantity: str | None = None

    @property
    def display_name(self) -> str:
        if self.brand:
            return f"{self.brand} - {self.name}"
        return self.name

    @property
    def formatted_serving_size(self) -> str:
        if self.serving_size_description:
            return self.serving_size_description
        return f"{int(self.serving_size)}{self.serving_unit}"

    def to_food_item(self, servings: float = 1.0) -> FoodItem:
        """Convert the product into a loggable food item."""
        return FoodItem(
            name=self.name,
            per_serving=self.nutrition,
            servings=servings,
            serving_size=self.serving_size,
            serving_unit=self.serving_unit,
            brand=self.brand,
            barcode=self.barcode,
            source=(
                FoodSource.DATABASE
                if self.barcode.startswith(USDA_ID_PREFIX)
                else FoodSource.BARCODE
            ),
        )
