"""Supabase repository for meals and food items."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fuel_tracker.domain.meals import FoodItem, FoodSource, MealRecord, MealType
from fuel_tracker.domain.nutrition import FoodMeasurement
from fuel_tracker.services.meals import MealRepository

_MEAL_COLUMNS = "id, user_id, meal_type, logged_at, is_deleted, food_items(*)"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meal(
        self,
        user_id: UUID,
        meal_type: MealType,
        logged_at: datetime,
        items: list[FoodItem],
    ) -> MealRecord:
        """Create a meal row and its food item rows."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "meal_type": meal_type.value,
                    "logged_at": logged_at.isoformat(),
                    "is_deleted": False,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        meal_id = UUID(response.data[0]["id"])

        saved_items = items
        if items:
            items_response = (
                self.client.table("food_items")
                .insert([_item_payload(meal_id, item) for item in items])
                .execute()
            )
            if items_response.data:
                saved_items = [_parse_item(row) for row in items_response.data]

        return MealRecord(
            id=meal_id,
            user_id=user_id,
            meal_type=meal_type,
            logged_at=logged_at,
            items=saved_items,
        )

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal with its items."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals that are not deleted, logged in [start, end)."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("is_deleted", False)
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def mark_deleted(self, meal_id: UUID) -> None:
        """Flag a meal as deleted."""
        self.client.table("meals").update({"is_deleted": True}).eq(
            "id", str(meal_id)
        ).execute()

    def count_meals(self, user_id: UUID) -> int:
        """Return the number of meals that are not deleted."""
        response = (
            self.client.table("meals")
            .select("id", count="exact")
            .eq("user_id", str(user_id))
            .eq("is_deleted", False)
            .execute()
        )
        if response.count is not None:
            return response.count
        return len(response.data or [])


def _item_payload(meal_id: UUID, item: FoodItem) -> dict[str, object]:
    nutrition = item.per_serving
    return {
        "meal_id": str(meal_id),
        "name": item.name,
        "brand": item.brand,
        "barcode": item.barcode,
        "serving_size": item.serving_size,
        "serving_unit": item.serving_unit,
        "servings": item.servings,
        "source": item.source.value,
        "calories": nutrition.calories,
        "protein_g": nutrition.protein_g,
        "carbs_g": nutrition.carbs_g,
        "fat_g": nutrition.fat_g,
        "fiber_g": nutrition.fiber_g,
        "sugar_g": nutrition.sugar_g,
        "sodium_mg": nutrition.sodium_mg,
        "saturated_fat_g": nutrition.saturated_fat_g,
        "cholesterol_mg": nutrition.cholesterol_mg,
    }


def _parse_item(row: dict[str, object]) -> FoodItem:
    return FoodItem(
        id=UUID(row["id"]) if row.get("id") else None,
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        barcode=row.get("barcode"),
        serving_size=float(row.get("serving_size") or 100.0),
        serving_unit=str(row.get("serving_unit") or "g"),
        servings=float(row.get("servings") or 1.0),
        source=FoodSource(row.get("source") or FoodSource.MANUAL.value),
        per_serving=FoodMeasurement(
            calories=int(row.get("calories") or 0),
            protein_g=float(row.get("protein_g") or 0.0),
            carbs_g=float(row.get("carbs_g") or 0.0),
            fat_g=float(row.get("fat_g") or 0.0),
            fiber_g=float(row.get("fiber_g") or 0.0),
            sugar_g=float(row.get("sugar_g") or 0.0),
            sodium_mg=float(row.get("sodium_mg") or 0.0),
            saturated_fat_g=float(row.get("saturated_fat_g") or 0.0),
            cholesterol_mg=float(row.get("cholesterol_mg") or 0.0),
        ),
    )


def _parse_meal(row: dict[str, object]) -> MealRecord:
    return MealRecord(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        meal_type=MealType(row["meal_type"]),
        logged_at=datetime.fromisoformat(row["logged_at"]),
        items=[_parse_item(item) for item in row.get("food_items") or []],
        is_deleted=bool(row.get("is_deleted", False)),
    )
