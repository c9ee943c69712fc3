"""Nutrition aggregation and statistics for logged meals."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from fuel_tracker.domain.meals import MealRecord
from fuel_tracker.domain.nutrition import (
    DaySummary,
    FoodMeasurement,
    LoggedDay,
    MacroSplit,
)
from fuel_tracker.domain.profile import NutritionTargets
from fuel_tracker.services.goals import (
    CARBS_KCAL_PER_G,
    FAT_KCAL_PER_G,
    PROTEIN_KCAL_PER_G,
)


class StatsRepository(Protocol):
    """Persistence interface for meal statistics."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals that are not deleted, logged in [start, end)."""


def aggregate(items: Iterable[FoodMeasurement]) -> FoodMeasurement:
    """Return the field-wise sum of measurements."""
    total = FoodMeasurement.zero()
    for item in items:
        total = total + item
    return total


def macro_split(measurement: FoodMeasurement) -> MacroSplit:
    """Return the share of calories coming from each macro."""
    if measurement.calories <= 0:
        return MacroSplit(protein=0.0, carbs=0.0, fat=0.0)
    calories = measurement.calories
    return MacroSplit(
        protein=_fraction(measurement.protein_g * PROTEIN_KCAL_PER_G, calories),
        carbs=_fraction(measurement.carbs_g * CARBS_KCAL_PER_G, calories),
        fat=_fraction(measurement.fat_g * FAT_KCAL_PER_G, calories),
    )


@dataclass
class PeriodSummary:
    """Aggregated totals for a period."""

    daily: list[DaySummary]
    avg_calories: float
    avg_protein_g: float
    avg_carbs_g: float
    avg_fat_g: float
    days_under_goal: int
    days_over_goal: int


@dataclass
class StatsService:
    """Service for computing nutrition totals by timezone."""

    repository: StatsRepository

    def get_day(
        self, user_id: UUID, day: date, timezone_name: str
    ) -> FoodMeasurement:
        """Return totals for a calendar day in the user's timezone."""
        meals = self._meals_on(user_id, day, timezone_name)
        return aggregate(meal.totals for meal in meals)

    def get_day_summary(
        self,
        user_id: UUID,
        day: date,
        targets: NutritionTargets,
        timezone_name: str,
    ) -> DaySummary:
        """Return a day's totals alongside the user's targets."""
        meals = self._meals_on(user_id, day, timezone_name)
        return DaySummary(
            day=day,
            consumed=aggregate(meal.totals for meal in meals),
            targets=targets,
            meals_logged=len(meals),
        )

    def get_week(
        self,
        user_id: UUID,
        targets: NutritionTargets,
        timezone_name: str,
        today: date | None = None,
    ) -> PeriodSummary:
        """Return totals and averages for the week containing ``today``."""
        tz = ZoneInfo(timezone_name)
        today = today or datetime.now(tz=tz).date()
        monday = today - timedelta(days=today.weekday())
        start, _ = day_bounds(monday, tz)
        _, end = day_bounds(monday + timedelta(days=6), tz)
        meals = self.repository.list_meals(user_id, start, end)

        daily = []
        for offset in range(7):
            day = monday + timedelta(days=offset)
            day_meals = [meal for meal in meals if _local_day(meal, tz) == day]
            daily.append(
                DaySummary(
                    day=day,
                    consumed=aggregate(meal.totals for meal in day_meals),
                    targets=targets,
                    meals_logged=len(day_meals),
                )
            )

        week_total = aggregate(entry.consumed for entry in daily)
        logged = [entry for entry in daily if entry.consumed.calories > 0]
        return PeriodSummary(
            daily=daily,
            avg_calories=week_total.calories / len(daily),
            avg_protein_g=week_total.protein_g / len(daily),
            avg_carbs_g=week_total.carbs_g / len(daily),
            avg_fat_g=week_total.fat_g / len(daily),
            days_under_goal=sum(
                1 for entry in logged if entry.consumed.calories <= targets.calorie_goal
            ),
            days_over_goal=sum(
                1 for entry in logged if entry.consumed.calories > targets.calorie_goal
            ),
        )

    def logged_days(
        self, user_id: UUID, start: date, end: date, timezone_name: str
    ) -> list[LoggedDay]:
        """Return one entry per day in [start, end], oldest first."""
        tz = ZoneInfo(timezone_name)
        range_start, _ = day_bounds(start, tz)
        _, range_end = day_bounds(end, tz)
        meals = self.repository.list_meals(user_id, range_start, range_end)
        with_meals = {
            _local_day(meal, tz) for meal in meals if meal.totals.calories > 0
        }
        days = (start + timedelta(days=n) for n in range((end - start).days + 1))
        return [LoggedDay(day=day, has_meals=day in with_meals) for day in days]

    def _meals_on(
        self, user_id: UUID, day: date, timezone_name: str
    ) -> list[MealRecord]:
        tz = ZoneInfo(timezone_name)
        start, end = day_bounds(day, tz)
        meals = self.repository.list_meals(user_id, start, end)
        return [meal for meal in meals if _local_day(meal, tz) == day]


def day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


def _local_day(meal: MealRecord, tz: ZoneInfo) -> date:
    return meal.logged_at.astimezone(tz).date()


def _fraction(kcal: float, calories: int) -> float:
    return max(0.0, min(1.0, kcal / calories))
