"""Supabase repository for recipes."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fuel_tracker.domain.nutrition import FoodMeasurement
from fuel_tracker.domain.recipes import (
    IngredientUnit,
    Recipe,
    RecipeCategory,
    RecipeIngredient,
)
from fuel_tracker.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for recipes.

    Ingredients and instructions are stored as JSON columns on the row.
    """

    client: Client

    def create_recipe(self, recipe: Recipe) -> Recipe:
        """Create a recipe row."""
        response = (
            self.client.table("recipes").insert(_recipe_payload(recipe)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recipe")
        return _parse_recipe(response.data[0])

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return a user's recipes, newest first."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def update_recipe(self, recipe: Recipe) -> None:
        self.client.table("recipes").update(_recipe_payload(recipe)).eq(
            "id", str(recipe.id)
        ).execute()

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.client.table("recipes").delete().eq("id", str(recipe_id)).execute()


def _recipe_payload(recipe: Recipe) -> dict[str, object]:
    return {
        "user_id": str(recipe.user_id),
        "name": recipe.name,
        "description": recipe.description,
        "ingredients": [_ingredient_payload(item) for item in recipe.ingredients],
        "servings": recipe.servings,
        "prep_time_minutes": recipe.prep_time_minutes,
        "cook_time_minutes": recipe.cook_time_minutes,
        "instructions": list(recipe.instructions),
        "category": recipe.category.value,
        "is_favorite": recipe.is_favorite,
        "created_at": recipe.created_at.isoformat() if recipe.created_at else None,
        "updated_at": recipe.updated_at.isoformat() if recipe.updated_at else None,
    }


def _ingredient_payload(ingredient: RecipeIngredient) -> dict[str, object]:
    per_100 = ingredient.per_100
    return {
        "name": ingredient.name,
        "quantity": ingredient.quantity,
        "unit": ingredient.unit.value,
        "calories": per_100.calories,
        "protein_g": per_100.protein_g,
        "carbs_g": per_100.carbs_g,
        "fat_g": per_100.fat_g,
        "fiber_g": per_100.fiber_g,
        "sugar_g": per_100.sugar_g,
        "sodium_mg": per_100.sodium_mg,
        "saturated_fat_g": per_100.saturated_fat_g,
        "cholesterol_mg": per_100.cholesterol_mg,
    }


def _parse_ingredient(row: dict[str, object]) -> RecipeIngredient:
    return RecipeIngredient(
        name=str(row.get("name", "")),
        quantity=float(row.get("quantity") or 0.0),
        unit=IngredientUnit(row.get("unit") or IngredientUnit.GRAM.value),
        per_100=FoodMeasurement(
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


def _optional_datetime(value: object) -> datetime | None:
    return datetime.fromisoformat(value) if isinstance(value, str) else None


def _parse_recipe(row: dict[str, object]) -> Recipe:
    return Recipe(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        description=str(row.get("description") or ""),
        ingredients=[_parse_ingredient(item) for item in row.get("ingredients") or []],
        servings=int(row.get("servings") or 1),
        prep_time_minutes=row.get("prep_time_minutes"),
        cook_time_minutes=row.get("cook_time_minutes"),
        instructions=[str(step) for step in row.get("instructions") or []],
        category=RecipeCategory(row.get("category") or RecipeCategory.OTHER.value),
        is_favorite=bool(row.get("is_favorite", False)),
        created_at=_optional_datetime(row.get("created_at")),
        updated_at=_optional_datetime(row.get("updated_at")),
    )
