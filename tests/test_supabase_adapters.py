"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from fuel_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from fuel_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from fuel_tracker.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from fuel_tracker.adapters.supabase_weight_repository import (
    SupabaseWeightRepository,
)
from fuel_tracker.domain.meals import FoodSource, MealType
from fuel_tracker.domain.nutrition import FoodMeasurement
from fuel_tracker.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    FitnessGoal,
    NutritionTargets,
    Sex,
    UserProfile,
)
from fuel_tracker.domain.recipes import (
    IngredientUnit,
    Recipe,
    RecipeCategory,
    RecipeIngredient,
)
from fuel_tracker.domain.weight import WeightEntry, WeightSource
from tests.conftest import make_item


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None
    count: int | None = None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    count_queue: list[int] = field(default_factory=list)
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_options: dict[str, object] = field(default_factory=dict)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args, **kwargs) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "select"
        self.last_options = kwargs
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload, **kwargs) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_options = kwargs
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        count = self.count_queue.pop(0) if self.count_queue else None
        return FakeResponse(data=data, count=count)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _food_row(meal_id: str) -> dict[str, object]:
    return {
        "id": str(uuid4()),
        "meal_id": meal_id,
        "name": "Greek Yogurt",
        "brand": "Acme",
        "barcode": "12345678",
        "serving_size": 170,
        "serving_unit": "g",
        "servings": 1.5,
        "source": "barcode",
        "calories": 100,
        "protein_g": 17,
        "carbs_g": 6,
        "fat_g": 0.7,
    }


def test_meal_repository_create_inserts_meal_and_items() -> None:
    client = FakeSupabaseClient()
    meal_id = str(uuid4())
    client.table("meals").queue("insert", [{"id": meal_id}])
    client.table("food_items").queue("insert", [_food_row(meal_id)])

    repository = SupabaseMealRepository(client)
    meal = repository.create_meal(
        uuid4(),
        MealType.BREAKFAST,
        datetime(2024, 6, 12, 8, 0, tzinfo=UTC),
        [make_item("Greek Yogurt", 100, protein_g=17)],
    )

    assert str(meal.id) == meal_id
    assert meal.items[0].source is FoodSource.BARCODE
    assert meal.totals.calories == 150
    items_payload = client.table("food_items").last_payload
    assert isinstance(items_payload, list)
    assert items_payload[0]["meal_id"] == meal_id
    assert items_payload[0]["calories"] == 100


def test_meal_repository_create_failure() -> None:
    repository = SupabaseMealRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError, match="Failed to create meal"):
        repository.create_meal(
            uuid4(), MealType.LUNCH, datetime.now(tz=UTC), [make_item("x", 1)]
        )


def test_meal_repository_list_and_delete() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    user_id = uuid4()
    meal_id = str(uuid4())
    meals_table.queue(
        "select",
        [
            {
                "id": meal_id,
                "user_id": str(user_id),
                "meal_type": "dinner",
                "logged_at": "2024-06-12T19:00:00+00:00",
                "is_deleted": False,
                "food_items": [_food_row(meal_id)],
            }
        ],
    )

    repository = SupabaseMealRepository(client)
    meals = repository.list_meals(
        user_id,
        datetime(2024, 6, 12, tzinfo=UTC),
        datetime(2024, 6, 13, tzinfo=UTC),
    )
    repository.mark_deleted(meals[0].id)

    assert meals[0].meal_type is MealType.DINNER
    assert meals[0].items[0].per_serving.protein_g == 17
    assert ("is_deleted", False) in meals_table.last_filters
    assert meals_table.last_payload == {"is_deleted": True}


def test_meal_repository_count_uses_exact_count() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    meals_table.count_queue.append(42)

    repository = SupabaseMealRepository(client)

    assert repository.count_meals(uuid4()) == 42
    assert meals_table.last_options == {"count": "exact"}


def test_profile_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("profiles")
    user_id = uuid4()
    profile = UserProfile(
        user_id=user_id,
        biometrics=BiometricProfile(
            sex=Sex.FEMALE,
            birth_year=1990,
            height_cm=165,
            weight_kg=60,
            activity_level=ActivityLevel.LIGHT,
            fitness_goal=FitnessGoal.GAIN,
        ),
        targets=NutritionTargets(
            calorie_goal=2100, protein_g=120, carbs_g=250, fat_g=70, tdee=1800
        ),
        timezone="Europe/Paris",
    )

    repository = SupabaseProfileRepository(client)
    repository.save_profile(profile)
    payload = profiles_table.last_payload
    assert isinstance(payload, dict)
    assert profiles_table.last_options == {"on_conflict": "user_id"}

    profiles_table.queue("select", [payload])
    fetched = repository.get_profile(user_id)

    assert fetched == profile
    assert repository.get_profile(uuid4()) is None


def test_weight_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("weight_entries")
    table.queue(
        "insert",
        [
            {
                "weight_kg": 72.5,
                "recorded_at": "2024-06-12T07:00:00+00:00",
                "body_fat_pct": None,
                "source": "smart_scale",
            }
        ],
    )
    table.queue(
        "select",
        [{"weight_kg": "72.5", "recorded_at": "2024-06-12T07:00:00+00:00"}],
    )

    repository = SupabaseWeightRepository(client)
    created = repository.add_entry(
        uuid4(),
        WeightEntry(
            weight_kg=72.5,
            recorded_at=datetime(2024, 6, 12, 7, 0, tzinfo=UTC),
            source=WeightSource.SMART_SCALE,
        ),
    )
    entries = repository.list_entries(uuid4())

    assert created.source is WeightSource.SMART_SCALE
    assert entries[0].weight_kg == 72.5
    assert entries[0].source is WeightSource.MANUAL


def test_weight_repository_create_failure() -> None:
    repository = SupabaseWeightRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError, match="Failed to create weight entry"):
        repository.add_entry(
            uuid4(), WeightEntry(weight_kg=70, recorded_at=datetime.now(tz=UTC))
        )


def test_recipe_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("recipes")
    user_id = uuid4()
    recipe_id = uuid4()
    row = {
        "id": str(recipe_id),
        "user_id": str(user_id),
        "name": "Berry Smoothie",
        "description": None,
        "ingredients": [
            {
                "name": "Blueberries",
                "quantity": 150,
                "unit": "g",
                "calories": 57,
                "protein_g": 0.7,
                "fiber_g": 2.4,
            }
        ],
        "servings": 2,
        "prep_time_minutes": 5,
        "cook_time_minutes": None,
        "instructions": ["Blend"],
        "category": "smoothie",
        "is_favorite": True,
        "created_at": "2024-06-12T07:00:00+00:00",
        "updated_at": "2024-06-12T07:00:00+00:00",
    }
    table.queue("insert", [row])
    table.queue("select", [row])
    repository = SupabaseRecipeRepository(client)
    recipe = Recipe(
        user_id=user_id,
        name="Berry Smoothie",
        ingredients=[
            RecipeIngredient(
                name="Blueberries",
                quantity=150,
                unit=IngredientUnit.GRAM,
                per_100=FoodMeasurement(calories=57, protein_g=0.7, fiber_g=2.4),
            )
        ],
        servings=2,
        category=RecipeCategory.SMOOTHIE,
        created_at=datetime(2024, 6, 12, 7, 0, tzinfo=UTC),
    )

    created = repository.create_recipe(recipe)
    payload = table.last_payload

    assert payload["ingredients"][0]["fiber_g"] == 2.4
    assert payload["category"] == "smoothie"
    assert payload["created_at"] == "2024-06-12T07:00:00+00:00"
    assert created.id == recipe_id
    assert created.description == ""
    assert created.ingredients[0].per_100.fiber_g == 2.4
    assert created.ingredients[0].per_100.carbs_g == 0.0
    assert created.total_time_minutes == 5

    listed = repository.list_recipes(user_id)
    repository.update_recipe(created)
    repository.delete_recipe(recipe_id)

    assert [entry.name for entry in listed] == ["Berry Smoothie"]
    assert table.last_filters[-1] == ("id", str(recipe_id))
    assert repository.get_recipe(uuid4()) is None


def test_recipe_repository_create_failure() -> None:
    repository = SupabaseRecipeRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError, match="Failed to create recipe"):
        repository.create_recipe(Recipe(user_id=uuid4(), name="Toast"))
