"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from fuel_tracker.domain.meals import FoodItem, MealRecord, MealType
from fuel_tracker.services.stats import day_bounds

_logger = logging.getLogger(__name__)

FREQUENT_MEAL_MIN_COUNT = 2


class MealRepository(Protocol):
    """Persistence interface for meals and their food items."""

    def create_meal(
        self,
        user_id: UUID,
        meal_type: MealType,
        logged_at: datetime,
        items: list[FoodItem],
    ) -> MealRecord:
        """Create a meal with its items and return it."""

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id, including soft-deleted ones."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals that are not deleted, logged in [start, end)."""

    def mark_deleted(self, meal_id: UUID) -> None:
        """Flag a meal as deleted."""

    def count_meals(self, user_id: UUID) -> int:
        """Return the number of meals that are not deleted."""


@dataclass(frozen=True)
class FrequentMeal:
    """A meal the user logs repeatedly, with how often it was logged."""

    meal: MealRecord
    count: int


@dataclass
class MealLogService:
    """Service for logging, listing and repeating meals."""

    repository: MealRepository

    def log_meal(
        self,
        user_id: UUID,
        items: list[FoodItem],
        meal_type: MealType | None = None,
        logged_at: datetime | None = None,
        timezone_name: str = "UTC",
    ) -> MealRecord:
        """Persist a meal.

        The meal type defaults to one suggested by the local hour in
        ``timezone_name``.
        """
        logged_at = logged_at or datetime.now(tz=UTC)
        local_hour = logged_at.astimezone(ZoneInfo(timezone_name)).hour
        meal_type = meal_type or MealType.suggested(local_hour)
        meal = self.repository.create_meal(user_id, meal_type, logged_at, items)
        _logger.info(
            "Meal logged: user_id=%s meal_id=%s items=%s calories=%s",
            user_id,
            meal.id,
            len(items),
            meal.totals.calories,
        )
        return meal

    def get_meals(
        self, user_id: UUID, day: date, timezone_name: str
    ) -> list[MealRecord]:
        """Return a calendar day's meals in the user's timezone, ordered by time."""
        tz = ZoneInfo(timezone_name)
        start, end = day_bounds(day, tz)
        meals = self.repository.list_meals(user_id, start, end)
        return sorted(meals, key=lambda meal: meal.logged_at)

    def get_meal(self, user_id: UUID, meal_id: UUID) -> MealRecord | None:
        """Return a user's meal if it exists and isn't deleted."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id or meal.is_deleted:
            return None
        return meal

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Soft-delete a meal. Return False when it doesn't exist."""
        if self.get_meal(user_id, meal_id) is None:
            return False
        self.repository.mark_deleted(meal_id)
        _logger.info("Meal deleted: user_id=%s meal_id=%s", user_id, meal_id)
        return True

    def get_recent_meals(
        self,
        user_id: UUID,
        days: int = 7,
        limit: int = 20,
        now: datetime | None = None,
    ) -> list[MealRecord]:
        """Return recent meals with items and calories, newest first."""
        meals = self._loggable_meals(user_id, days, now)
        return meals[:limit]

    def get_frequent_meals(
        self,
        user_id: UUID,
        days: int = 30,
        limit: int = 10,
        now: datetime | None = None,
    ) -> list[FrequentMeal]:
        """Return meals logged at least twice, most frequent first."""
        groups: dict[str, list[MealRecord]] = {}
        for meal in self._loggable_meals(user_id, days, now):
            groups.setdefault(meal.fingerprint, []).append(meal)

        frequent = [
            FrequentMeal(meal=meals[0], count=len(meals))
            for meals in groups.values()
            if len(meals) >= FREQUENT_MEAL_MIN_COUNT
        ]
        frequent.sort(key=lambda entry: entry.count, reverse=True)
        return frequent[:limit]

    def log_meal_again(
        self,
        user_id: UUID,
        meal_id: UUID,
        meal_type: MealType | None = None,
        logged_at: datetime | None = None,
        timezone_name: str = "UTC",
    ) -> MealRecord | None:
        """Log a copy of an earlier meal's items."""
        original = self.get_meal(user_id, meal_id)
        if original is None:
            return None
        items = [item.duplicate() for item in original.items]
        return self.log_meal(
            user_id, items, meal_type or original.meal_type, logged_at, timezone_name
        )

    def count_meals(self, user_id: UUID) -> int:
        """Return how many meals the user has logged."""
        return self.repository.count_meals(user_id)

    def _loggable_meals(
        self, user_id: UUID, days: int, now: datetime | None
    ) -> list[MealRecord]:
        now = now or datetime.now(tz=UTC)
        meals = self.repository.list_meals(user_id, now - timedelta(days=days), now)
        meals = [meal for meal in meals if meal.items and meal.totals.calories > 0]
        return sorted(meals, key=lambda meal: meal.logged_at, reverse=True)
