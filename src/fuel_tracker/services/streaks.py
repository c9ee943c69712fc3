"""Logging streak computation."""

import asyncio
import logging
from collections.abc import Set
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from fuel_tracker.domain.nutrition import LoggedDay

STREAK_MILESTONES = (7, 14, 30, 60, 90, 180, 365)

_logger = logging.getLogger(__name__)


class LoggedDaySource(Protocol):
    """Provides the calendar days on which a user logged meals."""

    def logged_days(
        self, user_id: UUID, start: date, end: date, timezone_name: str
    ) -> list[LoggedDay]:
        """Return one entry per day in [start, end], oldest first."""


@dataclass(frozen=True)
class StreakResult:
    """Current and longest consecutive-day logging streaks."""

    current: int
    longest: int


def compute_streaks(
    logged_days: Set[date], today: date, window_days: int = 365
) -> StreakResult:
    """Scan back from ``today`` for consecutive logged days.

    A day without meals ends the running streak. An empty ``today`` does not
    end the current streak, since the user may still log later in the day.
    """
    current = 0
    longest = 0
    running = 0
    checking_current = True

    for day_offset in range(window_days):
        day = today - timedelta(days=day_offset)
        if day in logged_days:
            running += 1
            longest = max(longest, running)
            if checking_current:
                current += 1
        else:
            if checking_current and day_offset > 0:
                checking_current = False
            running = 0

    return StreakResult(current=current, longest=longest)


def milestone_reached(current: int) -> int | None:
    """Return the milestone ``current`` lands on exactly, if any."""
    if current in STREAK_MILESTONES:
        return current
    return None


@dataclass
class StreakService:
    """Computes streaks for a user from their logged days."""

    source: LoggedDaySource
    window_days: int = 365

    def compute(
        self, user_id: UUID, timezone_name: str, today: date | None = None
    ) -> StreakResult:
        """Return the user's streaks as of ``today`` in their timezone."""
        today = today or datetime.now(tz=ZoneInfo(timezone_name)).date()
        start = today - timedelta(days=self.window_days - 1)
        logged = {
            entry.day
            for entry in self.source.logged_days(user_id, start, today, timezone_name)
            if entry.has_meals
        }
        result = compute_streaks(logged, today, self.window_days)
        milestone = milestone_reached(result.current)
        if milestone is not None:
            _logger.info("Streak milestone: user_id=%s days=%s", user_id, milestone)
        return result

    async def compute_in_background(
        self, user_id: UUID, timezone_name: str, today: date | None = None
    ) -> StreakResult:
        """Run the streak scan on a worker thread."""
        return await asyncio.to_thread(self.compute, user_id, timezone_name, today)
