"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fuel_tracker.adapters.fdc_client import HttpxFdcClient
from fuel_tracker.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from fuel_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from fuel_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from fuel_tracker.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from fuel_tracker.adapters.supabase_weight_repository import SupabaseWeightRepository
from fuel_tracker.config import Settings
from fuel_tracker.services.achievements import AchievementService
from fuel_tracker.services.cache import ProductCache
from fuel_tracker.services.food_database import FoodDatabaseService
from fuel_tracker.services.meals import MealLogService
from fuel_tracker.services.profiles import ProfileService
from fuel_tracker.services.recipes import RecipeService
from fuel_tracker.services.stats import StatsService
from fuel_tracker.services.streaks import StreakService
from fuel_tracker.services.weight import WeightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    meal_service: MealLogService
    stats_service: StatsService
    streak_service: StreakService
    weight_service: WeightService
    achievement_service: AchievementService
    recipe_service: RecipeService
    food_database_service: FoodDatabaseService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    meal_service = MealLogService(meal_repository)
    stats_service = StatsService(meal_repository)
    streak_service = StreakService(
        stats_service, window_days=resolved_settings.streak_window_days
    )
    weight_service = WeightService(SupabaseWeightRepository(supabase_client))
    achievement_service = AchievementService(
        streak_service=streak_service,
        meal_service=meal_service,
        weight_service=weight_service,
    )
    recipe_service = RecipeService(
        SupabaseRecipeRepository(supabase_client), meal_service
    )

    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
    )
    fdc_client = (
        HttpxFdcClient.create(
            api_key=resolved_settings.fdc_api_key,
            base_url=resolved_settings.fdc_base_url,
        )
        if resolved_settings.fdc_api_key
        else None
    )
    food_database_service = FoodDatabaseService(
        off_client=off_client,
        fdc_client=fdc_client,
        cache=ProductCache(),
        cache_ttl_seconds=resolved_settings.product_cache_ttl_seconds,
    )

    async def close_resources() -> None:
        await off_client.close()
        if fdc_client is not None:
            await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        meal_service=meal_service,
        stats_service=stats_service,
        streak_service=streak_service,
        weight_service=weight_service,
        achievement_service=achievement_service,
        recipe_service=recipe_service,
        food_database_service=food_database_service,
        close_resources=close_resources,
    )
