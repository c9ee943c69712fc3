"""Achievement evaluation."""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from fuel_tracker.domain.achievements import (
    AchievementCategory,
    AchievementProgress,
    AchievementSnapshot,
    AchievementType,
)
from fuel_tracker.services.meals import MealLogService
from fuel_tracker.services.streaks import StreakService
from fuel_tracker.services.weight import WeightService

_logger = logging.getLogger(__name__)


def evaluate_achievements(snapshot: AchievementSnapshot) -> list[AchievementProgress]:
    """Return progress toward every achievement for the given counters."""
    values = {
        AchievementCategory.STREAK: float(snapshot.current_streak),
        AchievementCategory.MEALS: float(snapshot.total_meals),
        AchievementCategory.WEIGH_INS: float(snapshot.weigh_ins),
        AchievementCategory.WEIGHT_LOST: max(0.0, -snapshot.weight_change_kg),
        AchievementCategory.WEIGHT_GAINED: max(0.0, snapshot.weight_change_kg),
    }
    progress = []
    for achievement in AchievementType:
        definition = achievement.definition
        value = values[definition.category]
        progress.append(
            AchievementProgress(
                achievement=achievement,
                current_value=int(value),
                progress=min(1.0, value / definition.target_value),
                unlocked=value >= definition.target_value,
            )
        )
    return progress


@dataclass
class AchievementService:
    """Collects a user's counters and evaluates achievements."""

    streak_service: StreakService
    meal_service: MealLogService
    weight_service: WeightService

    def snapshot(
        self, user_id: UUID, timezone_name: str, today: date | None = None
    ) -> AchievementSnapshot:
        """Return the counters achievements are measured against."""
        streaks = self.streak_service.compute(user_id, timezone_name, today)
        entries = self.weight_service.history(user_id)
        change = entries[-1].weight_kg - entries[0].weight_kg if entries else 0.0
        return AchievementSnapshot(
            current_streak=streaks.current,
            total_meals=self.meal_service.count_meals(user_id),
            weigh_ins=len(entries),
            weight_change_kg=change,
        )

    def evaluate(
        self, user_id: UUID, timezone_name: str, today: date | None = None
    ) -> list[AchievementProgress]:
        """Return achievement progress for a user."""
        snapshot = self.snapshot(user_id, timezone_name, today)
        progress = evaluate_achievements(snapshot)
        _logger.info(
            "Achievements evaluated: user_id=%s unlocked=%s",
            user_id,
            sum(1 for entry in progress if entry.unlocked),
        )
        return progress
