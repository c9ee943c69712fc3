"""Pydantic request models and response payload builders."""

from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field

from fuel_tracker.domain.achievements import AchievementProgress
from fuel_tracker.domain.food import ScannedProduct
from fuel_tracker.domain.meals import FoodItem, FoodSource, MealRecord, MealType
from fuel_tracker.domain.nutrition import DaySummary, FoodMeasurement
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
from fuel_tracker.domain.weight import WeightEntry, WeightProgress, WeightSource
from fuel_tracker.services.health_score import health_score, health_score_label
from fuel_tracker.services.meals import FrequentMeal
from fuel_tracker.services.recipes import recipe_per_serving, recipe_totals
from fuel_tracker.services.stats import PeriodSummary, macro_split
from fuel_tracker.services.streaks import StreakResult


class BiometricsIn(BaseModel):
    """Biometric inputs for goal calculation."""

    sex: Sex = Sex.UNSPECIFIED
    birth_year: int = Field(ge=1900)
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    fitness_goal: FitnessGoal = FitnessGoal.MAINTAIN

    def to_domain(self) -> BiometricProfile:
        return BiometricProfile(
            sex=self.sex,
            birth_year=self.birth_year,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=self.activity_level,
            fitness_goal=self.fitness_goal,
        )


class ProfileIn(BiometricsIn):
    """Profile update payload."""

    target_weight_kg: float | None = Field(default=None, gt=0)
    timezone: str | None = None


class TargetsIn(BaseModel):
    """Manual target override payload."""

    calorie_goal: int
    protein_g: float
    carbs_g: float
    fat_g: float


class NutritionIn(BaseModel):
    """Per-serving nutrition payload."""

    calories: int = Field(default=0, ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    fiber_g: float = Field(default=0.0, ge=0)
    sugar_g: float = Field(default=0.0, ge=0)
    sodium_mg: float = Field(default=0.0, ge=0)
    saturated_fat_g: float = Field(default=0.0, ge=0)
    cholesterol_mg: float = Field(default=0.0, ge=0)

    def to_domain(self) -> FoodMeasurement:
        return FoodMeasurement(**self.model_dump())


class FoodItemIn(BaseModel):
    """Food item payload."""

    name: str = Field(min_length=1)
    nutrition: NutritionIn = Field(default_factory=NutritionIn)
    servings: float = 1.0
    serving_size: float = Field(default=100.0, gt=0)
    serving_unit: str = "g"
    brand: str | None = None
    barcode: str | None = None
    source: FoodSource = FoodSource.MANUAL

    def to_domain(self) -> FoodItem:
        item = FoodItem(
            name=self.name,
            per_serving=self.nutrition.to_domain(),
            serving_size=self.serving_size,
            serving_unit=self.serving_unit,
            brand=self.brand,
            barcode=self.barcode,
            source=self.source,
        )
        return item.with_servings(self.servings)


class MealIn(BaseModel):
    """Meal logging payload."""

    items: list[FoodItemIn] = Field(min_length=1)
    meal_type: MealType | None = None
    logged_at: AwareDatetime | None = None


class RepeatMealIn(BaseModel):
    """Payload for logging an earlier meal again."""

    meal_type: MealType | None = None
    logged_at: AwareDatetime | None = None


class WeightIn(BaseModel):
    """Weight logging payload."""

    weight_kg: float = Field(gt=0)
    recorded_at: AwareDatetime | None = None
    body_fat_pct: float | None = Field(default=None, ge=0, le=100)
    source: WeightSource = WeightSource.MANUAL


class IngredientIn(BaseModel):
    """Recipe ingredient payload. Nutrition is given per 100 units."""

    name: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    unit: IngredientUnit = IngredientUnit.GRAM
    nutrition: NutritionIn = Field(default_factory=NutritionIn)

    def to_domain(self) -> RecipeIngredient:
        return RecipeIngredient(
            name=self.name,
            quantity=self.quantity,
            unit=self.unit,
            per_100=self.nutrition.to_domain(),
        )


class RecipeIn(BaseModel):
    """Recipe create and update payload."""

    name: str = Field(min_length=1)
    description: str = ""
    ingredients: list[IngredientIn] = Field(default_factory=list)
    servings: int = Field(default=1, ge=1)
    prep_time_minutes: int | None = Field(default=None, ge=0)
    cook_time_minutes: int | None = Field(default=None, ge=0)
    instructions: list[str] = Field(default_factory=list)
    category: RecipeCategory = RecipeCategory.OTHER
    is_favorite: bool = False

    def to_domain(self, user_id: UUID) -> Recipe:
        return Recipe(
            user_id=user_id,
            name=self.name,
            description=self.description,
            ingredients=[item.to_domain() for item in self.ingredients],
            servings=self.servings,
            prep_time_minutes=self.prep_time_minutes,
            cook_time_minutes=self.cook_time_minutes,
            instructions=list(self.instructions),
            category=self.category,
            is_favorite=self.is_favorite,
        )


class LogRecipeIn(BaseModel):
    """Payload for logging servings of a recipe as a meal."""

    servings: float = Field(default=1.0, gt=0)
    meal_type: MealType | None = None
    logged_at: AwareDatetime | None = None


def measurement_payload(measurement: FoodMeasurement) -> dict[str, object]:
    return {
        "calories": measurement.calories,
        "protein_g": measurement.protein_g,
        "carbs_g": measurement.carbs_g,
        "fat_g": measurement.fat_g,
        "fiber_g": measurement.fiber_g,
        "sugar_g": measurement.sugar_g,
        "sodium_mg": measurement.sodium_mg,
        "saturated_fat_g": measurement.saturated_fat_g,
        "cholesterol_mg": measurement.cholesterol_mg,
    }


def targets_payload(targets: NutritionTargets) -> dict[str, object]:
    return {
        "calorie_goal": targets.calorie_goal,
        "protein_g": targets.protein_g,
        "carbs_g": targets.carbs_g,
        "fat_g": targets.fat_g,
        "bmr": targets.bmr,
        "tdee": targets.tdee,
    }


def profile_payload(profile: UserProfile) -> dict[str, object]:
    biometrics = profile.biometrics
    return {
        "user_id": str(profile.user_id),
        "sex": biometrics.sex.value,
        "birth_year": biometrics.birth_year,
        "height_cm": biometrics.height_cm,
        "weight_kg": biometrics.weight_kg,
        "activity_level": biometrics.activity_level.value,
        "fitness_goal": biometrics.fitness_goal.value,
        "target_weight_kg": profile.target_weight_kg,
        "timezone": profile.timezone,
        "targets": targets_payload(profile.targets),
    }


def item_payload(item: FoodItem) -> dict[str, object]:
    return {
        "id": str(item.id) if item.id else None,
        "name": item.name,
        "brand": item.brand,
        "barcode": item.barcode,
        "servings": item.servings,
        "serving_size": item.serving_size,
        "serving_unit": item.serving_unit,
        "source": item.source.value,
        "per_serving": measurement_payload(item.per_serving),
        "totals": measurement_payload(item.totals),
    }


def meal_payload(meal: MealRecord) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "meal_type": meal.meal_type.value,
        "logged_at": meal.logged_at.isoformat(),
        "items": [item_payload(item) for item in meal.items],
        "totals": measurement_payload(meal.totals),
    }


def frequent_meal_payload(entry: FrequentMeal) -> dict[str, object]:
    return {"count": entry.count, "meal": meal_payload(entry.meal)}


def day_payload(summary: DaySummary) -> dict[str, object]:
    """Return a day's totals with macro split and health score."""
    split = macro_split(summary.consumed)
    score = health_score(summary)
    return {
        "day": summary.day.isoformat(),
        "consumed": measurement_payload(summary.consumed),
        "targets": targets_payload(summary.targets),
        "meals_logged": summary.meals_logged,
        "macro_split": {
            "protein": split.protein,
            "carbs": split.carbs,
            "fat": split.fat,
        },
        "macro_percentages": split.as_percentages(),
        "health_score": score,
        "health_label": health_score_label(score),
    }


def week_payload(summary: PeriodSummary) -> dict[str, object]:
    return {
        "daily": [
            {
                "day": entry.day.isoformat(),
                "consumed": measurement_payload(entry.consumed),
                "meals_logged": entry.meals_logged,
            }
            for entry in summary.daily
        ],
        "avg_calories": summary.avg_calories,
        "avg_protein_g": summary.avg_protein_g,
        "avg_carbs_g": summary.avg_carbs_g,
        "avg_fat_g": summary.avg_fat_g,
        "days_under_goal": summary.days_under_goal,
        "days_over_goal": summary.days_over_goal,
    }


def streak_payload(result: StreakResult) -> dict[str, int]:
    return {"current": result.current, "longest": result.longest}


def weight_payload(entry: WeightEntry) -> dict[str, object]:
    return {
        "weight_kg": entry.weight_kg,
        "recorded_at": entry.recorded_at.isoformat(),
        "body_fat_pct": entry.body_fat_pct,
        "source": entry.source.value,
    }


def progress_payload(progress: WeightProgress) -> dict[str, object]:
    return {
        "start_weight_kg": progress.start_weight_kg,
        "current_weight_kg": progress.current_weight_kg,
        "target_weight_kg": progress.target_weight_kg,
        "total_change_kg": progress.total_change_kg,
        "remaining_kg": progress.remaining_kg,
        "progress_pct": progress.progress_pct,
        "average_weekly_change_kg": progress.average_weekly_change_kg,
        "is_on_track": progress.is_on_track,
        "projected_weeks_to_goal": progress.projected_weeks_to_goal,
    }


def achievement_payload(progress: AchievementProgress) -> dict[str, object]:
    definition = progress.achievement.definition
    return {
        "id": progress.achievement.value,
        "title": definition.title,
        "description": definition.description,
        "tier": definition.tier.value,
        "target_value": definition.target_value,
        "current_value": progress.current_value,
        "progress": progress.progress,
        "unlocked": progress.unlocked,
    }


def product_payload(product: ScannedProduct) -> dict[str, object]:
    return {
        "barcode": product.barcode,
        "name": product.name,
        "display_name": product.display_name,
        "brand": product.brand,
        "image_url": product.image_url,
        "serving_size": product.serving_size,
        "serving_unit": product.serving_unit,
        "serving_description": product.formatted_serving_size,
        "nutrition": measurement_payload(product.nutrition),
        "nutrition_grade": product.nutrition_grade,
        "category": product.category,
        "quantity": product.quantity,
    }


def recipe_payload(recipe: Recipe) -> dict[str, object]:
    """Return a recipe with whole-recipe and per-serving nutrition."""
    return {
        "id": str(recipe.id) if recipe.id else None,
        "name": recipe.name,
        "description": recipe.description,
        "servings": recipe.servings,
        "category": recipe.category.value,
        "is_favorite": recipe.is_favorite,
        "prep_time_minutes": recipe.prep_time_minutes,
        "cook_time_minutes": recipe.cook_time_minutes,
        "total_time_minutes": recipe.total_time_minutes,
        "formatted_total_time": recipe.formatted_total_time,
        "instructions": list(recipe.instructions),
        "ingredients": [
            {
                "name": ingredient.name,
                "quantity": ingredient.quantity,
                "unit": ingredient.unit.value,
                "per_100": measurement_payload(ingredient.per_100),
                "nutrition": measurement_payload(ingredient.nutrition),
            }
            for ingredient in recipe.ingredients
        ],
        "totals": measurement_payload(recipe_totals(recipe)),
        "per_serving": measurement_payload(recipe_per_serving(recipe)),
        "created_at": recipe.created_at.isoformat() if recipe.created_at else None,
        "updated_at": recipe.updated_at.isoformat() if recipe.updated_at else None,
    }
