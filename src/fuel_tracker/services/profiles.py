"""User profile and nutrition target management."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import UUID

from fuel_tracker.domain.profile import BiometricProfile, NutritionTargets, UserProfile
from fuel_tracker.services.goals import clamp_calorie_goal, compute_goals

DEFAULT_TIMEZONE = "UTC"

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or replace a profile."""


@dataclass
class ProfileService:
    """Application service for profiles and targets."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile."""
        return self.repository.get_profile(user_id)

    def update_biometrics(
        self,
        user_id: UUID,
        biometrics: BiometricProfile,
        target_weight_kg: float | None = None,
        timezone: str | None = None,
        today: date | None = None,
    ) -> UserProfile:
        """Store new biometrics and recompute targets from them."""
        existing = self.repository.get_profile(user_id)
        targets = compute_goals(biometrics, today)
        if existing is None:
            profile = UserProfile(
                user_id=user_id,
                biometrics=biometrics,
                targets=targets,
                target_weight_kg=target_weight_kg,
                timezone=timezone or DEFAULT_TIMEZONE,
            )
        else:
            profile = replace(
                existing,
                biometrics=biometrics,
                targets=targets,
                target_weight_kg=(
                    target_weight_kg
                    if target_weight_kg is not None
                    else existing.target_weight_kg
                ),
                timezone=timezone or existing.timezone,
            )
        self.repository.save_profile(profile)
        _logger.info(
            "Targets recomputed: user_id=%s calories=%s",
            user_id,
            targets.calorie_goal,
        )
        return profile

    def set_targets(
        self,
        user_id: UUID,
        calorie_goal: int,
        protein_g: float,
        carbs_g: float,
        fat_g: float,
    ) -> UserProfile | None:
        """Override targets by hand. Return None when no profile exists."""
        existing = self.repository.get_profile(user_id)
        if existing is None:
            return None
        targets = NutritionTargets(
            calorie_goal=clamp_calorie_goal(calorie_goal),
            protein_g=max(0.0, protein_g),
            carbs_g=max(0.0, carbs_g),
            fat_g=max(0.0, fat_g),
            bmr=existing.targets.bmr,
            tdee=existing.targets.tdee,
        )
        profile = replace(existing, targets=targets)
        self.repository.save_profile(profile)
        return profile

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user's timezone or UTC if unset."""
        profile = self.repository.get_profile(user_id)
        if profile is None or not profile.timezone:
            return DEFAULT_TIMEZONE
        return profile.timezone
