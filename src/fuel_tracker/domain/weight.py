"""Domain models for weight tracking."""

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

MAINTAIN_TOLERANCE = 0.02


class WeightSource(Enum):
    """Where a weight measurement came from."""

    MANUAL = "manual"
    APPLE_HEALTH = "apple_health"
    SMART_SCALE = "smart_scale"


@dataclass(frozen=True)
class WeightEntry:
    """A single weight measurement."""

    weight_kg: float
    recorded_at: datetime
    body_fat_pct: float | None = None
    source: WeightSource = WeightSource.MANUAL


class BMICategory(Enum):
    """WHO body mass index bands."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"

    @classmethod
    def from_bmi(cls, bmi: float) -> "BMICategory":
        if bmi < 18.5:  # noqa: PLR2004
            return cls.UNDERWEIGHT
        if bmi < 25:  # noqa: PLR2004
            return cls.NORMAL
        if bmi < 30:  # noqa: PLR2004
            return cls.OVERWEIGHT
        return cls.OBESE


@dataclass(frozen=True)
class WeightProgress:
    """Progress from a starting weight toward a target weight."""

    start_weight_kg: float
    current_weight_kg: float
    target_weight_kg: float
    start_date: date
    today: date

    @property
    def total_change_kg(self) -> float:
        return self.current_weight_kg - self.start_weight_kg

    @property
    def remaining_kg(self) -> float:
        return self.current_weight_kg - self.target_weight_kg

    @property
    def progress_pct(self) -> float:
        """Return the share of the distance to target already covered, 0-100."""
        if self.start_weight_kg == self.target_weight_kg:
            return 100.0
        needed = abs(self.target_weight_kg - self.start_weight_kg)
        achieved = abs(self.start_weight_kg - self.current_weight_kg)
        return min(achieved / needed * 100, 100.0)

    @property
    def average_weekly_change_kg(self) -> float:
        weeks = (self.today - self.start_date).days // 7
        if weeks <= 0:
            return 0.0
        return self.total_change_kg / weeks

    @property
    def is_on_track(self) -> bool:
        if self.target_weight_kg < self.start_weight_kg:
            return self.current_weight_kg <= self.start_weight_kg
        if self.target_weight_kg > self.start_weight_kg:
            return self.current_weight_kg >= self.start_weight_kg
        return (
            abs(self.current_weight_kg - self.target_weight_kg)
            / self.target_weight_kg
            < MAINTAIN_TOLERANCE
        )

    @property
    def projected_weeks_to_goal(self) -> int | None:
        weekly = self.average_weekly_change_kg
        if weekly == 0:
            return None
        return math.ceil(abs(self.remaining_kg / weekly))
