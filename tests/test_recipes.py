"""Tests for recipes."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from fuel_tracker.domain.meals import FoodSource, MealType
from fuel_tracker.domain.nutrition import FoodMeasurement
from fuel_tracker.domain.recipes import (
    IngredientUnit,
    Recipe,
    RecipeCategory,
    RecipeIngredient,
)
from fuel_tracker.services.meals import MealLogService
from fuel_tracker.services.recipes import (
    RecipeService,
    recipe_food_item,
    recipe_per_serving,
    recipe_totals,
)
from tests.conftest import InMemoryMealRepository, InMemoryRecipeRepository

NOW = datetime(2024, 6, 12, 12, 0, tzinfo=UTC)


def _ingredient(
    name: str, quantity: float, calories: int, protein_g: float
) -> RecipeIngredient:
    return RecipeIngredient(
        name=name,
        quantity=quantity,
        unit=IngredientUnit.GRAM,
        per_100=FoodMeasurement(calories=calories, protein_g=protein_g),
    )


def _recipe(**overrides) -> Recipe:  # type: ignore[no-untyped-def]
    fields = {
        "user_id": uuid4(),
        "name": "Chicken Rice Bowl",
        "ingredients": [
            _ingredient("chicken", 150, 165, 31),
            _ingredient("rice", 200, 130, 2.7),
        ],
        "servings": 3,
    }
    fields.update(overrides)
    return Recipe(**fields)


def _service(
    meal_repository: InMemoryMealRepository,
) -> tuple[RecipeService, InMemoryRecipeRepository]:
    repository = InMemoryRecipeRepository()
    return RecipeService(repository, MealLogService(meal_repository)), repository


def test_ingredient_nutrition_scales_from_100_units() -> None:
    ingredient = _ingredient("chicken", 150, 165, 31)

    assert ingredient.nutrition.calories == 247
    assert ingredient.nutrition.protein_g == pytest.approx(46.5)
    assert ingredient.with_quantity(50).nutrition.calories == 82


def test_totals_and_per_serving() -> None:
    recipe = _recipe()

    totals = recipe_totals(recipe)
    per_serving = recipe_per_serving(recipe)

    assert totals.calories == 247 + 260
    assert totals.protein_g == pytest.approx(46.5 + 5.4)
    assert per_serving.calories == 169
    assert per_serving.protein_g == pytest.approx((46.5 + 5.4) / 3)


def test_per_serving_without_servings_is_zero() -> None:
    assert recipe_per_serving(_recipe(servings=0)) == FoodMeasurement.zero()
    assert recipe_totals(_recipe(ingredients=[])) == FoodMeasurement.zero()


@pytest.mark.parametrize(
    ("prep", "cook", "expected"),
    [
        (None, None, None),
        (15, None, "15 min"),
        (20, 40, "1 hr"),
        (30, 45, "1 hr 15 min"),
        (None, 150, "2 hr 30 min"),
    ],
)
def test_formatted_total_time(
    prep: int | None, cook: int | None, expected: str | None
) -> None:
    recipe = _recipe(prep_time_minutes=prep, cook_time_minutes=cook)

    assert recipe.formatted_total_time == expected


def test_recipe_food_item_uses_per_serving_nutrition() -> None:
    item = recipe_food_item(_recipe(), servings=2)

    assert item.source is FoodSource.RECIPE
    assert item.serving_unit == "serving"
    assert item.totals.calories == 338


def test_add_and_list_recipes(meal_repository: InMemoryMealRepository) -> None:
    service, _ = _service(meal_repository)
    user_id = uuid4()
    older = service.add_recipe(
        user_id,
        _recipe(name="Lentil Soup", category=RecipeCategory.SOUP),
        now=NOW - timedelta(days=1),
    )
    newer = service.add_recipe(
        user_id,
        _recipe(description="Quick lunch with rice", category=RecipeCategory.LUNCH),
        now=NOW,
    )
    service.add_recipe(uuid4(), _recipe(name="Someone else's soup"), now=NOW)

    assert older.user_id == user_id
    assert older.created_at == older.updated_at == NOW - timedelta(days=1)
    assert [r.id for r in service.list_recipes(user_id)] == [newer.id, older.id]
    assert service.list_recipes(user_id, category=RecipeCategory.SOUP) == [older]
    assert service.list_recipes(user_id, query="  RICE ") == [newer]
    assert service.list_recipes(user_id, query="soup") == [older]
    assert service.list_recipes(user_id, favorites_only=True) == []


def test_update_keeps_identity(meal_repository: InMemoryMealRepository) -> None:
    service, repository = _service(meal_repository)
    user_id = uuid4()
    created = service.add_recipe(user_id, _recipe(), now=NOW)
    later = NOW + timedelta(hours=2)

    updated = service.update_recipe(
        user_id, created.id, _recipe(name="Bigger Bowl", servings=6), now=later
    )

    assert updated is not None
    assert updated.id == created.id
    assert updated.user_id == user_id
    assert updated.created_at == NOW
    assert updated.updated_at == later
    assert repository.recipes[created.id].name == "Bigger Bowl"
    assert service.update_recipe(uuid4(), created.id, _recipe()) is None


def test_toggle_favorite(meal_repository: InMemoryMealRepository) -> None:
    service, _ = _service(meal_repository)
    user_id = uuid4()
    created = service.add_recipe(user_id, _recipe(), now=NOW)

    first = service.toggle_favorite(user_id, created.id)
    second = service.toggle_favorite(user_id, created.id)

    assert first is not None
    assert first.is_favorite is True
    assert second is not None
    assert second.is_favorite is False
    assert service.toggle_favorite(user_id, uuid4()) is None


def test_delete_checks_owner(meal_repository: InMemoryMealRepository) -> None:
    service, repository = _service(meal_repository)
    user_id = uuid4()
    created = service.add_recipe(user_id, _recipe(), now=NOW)

    assert service.delete_recipe(uuid4(), created.id) is False
    assert service.get_recipe(uuid4(), created.id) is None
    assert service.delete_recipe(user_id, created.id) is True
    assert created.id not in repository.recipes


def test_log_recipe_creates_meal(meal_repository: InMemoryMealRepository) -> None:
    service, _ = _service(meal_repository)
    user_id = uuid4()
    created = service.add_recipe(user_id, _recipe(), now=NOW)

    meal = service.log_recipe(
        user_id,
        created.id,
        servings=1.5,
        logged_at=datetime(2024, 6, 13, 1, 0, tzinfo=UTC),
        timezone_name="America/New_York",
    )

    assert meal is not None
    assert meal.meal_type is MealType.DINNER
    assert meal.items[0].name == "Chicken Rice Bowl"
    assert meal.items[0].source is FoodSource.RECIPE
    assert meal.totals.calories == 253
    assert service.log_recipe(uuid4(), created.id) is None
