"""Weight tracking service."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from fuel_tracker.domain.weight import (
    BMICategory,
    WeightEntry,
    WeightProgress,
    WeightSource,
)


class WeightRepository(Protocol):
    """Persistence interface for weight entries."""

    def add_entry(self, user_id: UUID, entry: WeightEntry) -> WeightEntry:
        """Store a weight entry and return it."""

    def list_entries(self, user_id: UUID) -> list[WeightEntry]:
        """Return all of a user's entries, oldest first."""


def bmi(weight_kg: float, height_cm: float) -> float | None:
    """Return body mass index, or None when height is unknown."""
    if height_cm <= 0:
        return None
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_category(weight_kg: float, height_cm: float) -> BMICategory | None:
    value = bmi(weight_kg, height_cm)
    if value is None:
        return None
    return BMICategory.from_bmi(value)


@dataclass
class WeightService:
    """Service for logging weights and tracking progress."""

    repository: WeightRepository

    def log_weight(
        self,
        user_id: UUID,
        weight_kg: float,
        recorded_at: datetime | None = None,
        body_fat_pct: float | None = None,
        source: WeightSource = WeightSource.MANUAL,
    ) -> WeightEntry:
        """Record a weight measurement."""
        entry = WeightEntry(
            weight_kg=weight_kg,
            recorded_at=recorded_at or datetime.now(tz=UTC),
            body_fat_pct=body_fat_pct,
            source=source,
        )
        return self.repository.add_entry(user_id, entry)

    def history(self, user_id: UUID) -> list[WeightEntry]:
        """Return entries ordered by time."""
        return sorted(
            self.repository.list_entries(user_id), key=lambda entry: entry.recorded_at
        )

    def latest(self, user_id: UUID) -> WeightEntry | None:
        """Return the most recent entry."""
        entries = self.history(user_id)
        return entries[-1] if entries else None

    def get_progress(
        self,
        user_id: UUID,
        target_weight_kg: float,
        today: date | None = None,
        timezone_name: str = "UTC",
    ) -> WeightProgress | None:
        """Return progress from the first entry toward the target weight.

        Dates are calendar days in ``timezone_name``.
        """
        entries = self.history(user_id)
        if not entries:
            return None
        tz = ZoneInfo(timezone_name)
        first, last = entries[0], entries[-1]
        return WeightProgress(
            start_weight_kg=first.weight_kg,
            current_weight_kg=last.weight_kg,
            target_weight_kg=target_weight_kg,
            start_date=first.recorded_at.astimezone(tz).date(),
            today=today or datetime.now(tz=tz).date(),
        )
