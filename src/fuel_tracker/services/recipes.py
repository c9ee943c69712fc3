"""Recipe management and logging."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from fuel_tracker.domain.meals import FoodItem, FoodSource, MealRecord, MealType
from fuel_tracker.domain.nutrition import FoodMeasurement
from fuel_tracker.domain.recipes import Recipe, RecipeCategory
from fuel_tracker.services.meals import MealLogService
from fuel_tracker.services.stats import aggregate

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes."""

    def create_recipe(self, recipe: Recipe) -> Recipe:
        """Store a new recipe and return it with its id."""

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id."""

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return a user's recipes, newest first."""

    def update_recipe(self, recipe: Recipe) -> None:
        """Replace a stored recipe."""

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Remove a recipe."""


def recipe_totals(recipe: Recipe) -> FoodMeasurement:
    """Return nutrition for the whole recipe."""
    return aggregate(ingredient.nutrition for ingredient in recipe.ingredients)


def recipe_per_serving(recipe: Recipe) -> FoodMeasurement:
    """Return nutrition for one serving. Calories use whole-number division."""
    if recipe.servings <= 0:
        return FoodMeasurement.zero()
    totals = recipe_totals(recipe)
    return replace(
        totals.scaled(1 / recipe.servings),
        calories=totals.calories // recipe.servings,
    )


def recipe_food_item(recipe: Recipe, servings: float = 1.0) -> FoodItem:
    """Return a loggable food item for servings of the recipe."""
    item = FoodItem(
        name=recipe.name,
        per_serving=recipe_per_serving(recipe),
        serving_size=1.0,
        serving_unit="serving",
        source=FoodSource.RECIPE,
    )
    return item.with_servings(servings)


@dataclass
class RecipeService:
    """Service for saving, browsing and logging recipes."""

    repository: RecipeRepository
    meal_service: MealLogService

    def add_recipe(
        self, user_id: UUID, recipe: Recipe, now: datetime | None = None
    ) -> Recipe:
        """Save a new recipe for the user."""
        now = now or datetime.now(tz=UTC)
        created = self.repository.create_recipe(
            replace(recipe, user_id=user_id, id=None, created_at=now, updated_at=now)
        )
        _logger.info("Recipe saved: user_id=%s recipe_id=%s", user_id, created.id)
        return created

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        """Return a user's recipe if it exists."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            return None
        return recipe

    def list_recipes(
        self,
        user_id: UUID,
        query: str | None = None,
        category: RecipeCategory | None = None,
        favorites_only: bool = False,
    ) -> list[Recipe]:
        """Return recipes filtered by category, favorites and a search term."""
        recipes = self.repository.list_recipes(user_id)
        if category is not None:
            recipes = [recipe for recipe in recipes if recipe.category is category]
        if favorites_only:
            recipes = [recipe for recipe in recipes if recipe.is_favorite]
        term = (query or "").strip().casefold()
        if term:
            recipes = [
                recipe
                for recipe in recipes
                if term in recipe.name.casefold()
                or term in recipe.description.casefold()
            ]
        return recipes

    def update_recipe(
        self,
        user_id: UUID,
        recipe_id: UUID,
        recipe: Recipe,
        now: datetime | None = None,
    ) -> Recipe | None:
        """Replace a recipe's contents, keeping its identity."""
        existing = self.get_recipe(user_id, recipe_id)
        if existing is None:
            return None
        updated = replace(
            recipe,
            id=existing.id,
            user_id=existing.user_id,
            created_at=existing.created_at,
            updated_at=now or datetime.now(tz=UTC),
        )
        self.repository.update_recipe(updated)
        return updated

    def toggle_favorite(
        self, user_id: UUID, recipe_id: UUID, now: datetime | None = None
    ) -> Recipe | None:
        existing = self.get_recipe(user_id, recipe_id)
        if existing is None:
            return None
        updated = replace(
            existing,
            is_favorite=not existing.is_favorite,
            updated_at=now or datetime.now(tz=UTC),
        )
        self.repository.update_recipe(updated)
        return updated

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> bool:
        """Delete a recipe. Return False when it doesn't exist."""
        if self.get_recipe(user_id, recipe_id) is None:
            return False
        self.repository.delete_recipe(recipe_id)
        _logger.info("Recipe deleted: user_id=%s recipe_id=%s", user_id, recipe_id)
        return True

    def log_recipe(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: UUID,
        servings: float = 1.0,
        meal_type: MealType | None = None,
        logged_at: datetime | None = None,
        timezone_name: str = "UTC",
    ) -> MealRecord | None:
        """Log servings of a recipe as a meal."""
        recipe = self.get_recipe(user_id, recipe_id)
        if recipe is None:
            return None
        return self.meal_service.log_meal(
            user_id,
            [recipe_food_item(recipe, servings)],
            meal_type=meal_type,
            logged_at=logged_at,
            timezone_name=timezone_name,
        )
