"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fuel_tracker.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    FitnessGoal,
    NutritionTargets,
    Sex,
    UserProfile,
)
from fuel_tracker.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or replace a profile row."""
        biometrics = profile.biometrics
        targets = profile.targets
        self.client.table("profiles").upsert(
            {
                "user_id": str(profile.user_id),
                "sex": biometrics.sex.value,
                "birth_year": biometrics.birth_year,
                "height_cm": biometrics.height_cm,
                "weight_kg": biometrics.weight_kg,
                "activity_level": biometrics.activity_level.value,
                "fitness_goal": biometrics.fitness_goal.value,
                "calorie_goal": targets.calorie_goal,
                "protein_g": targets.protein_g,
                "carbs_g": targets.carbs_g,
                "fat_g": targets.fat_g,
                "bmr": targets.bmr,
                "tdee": targets.tdee,
                "target_weight_kg": profile.target_weight_kg,
                "timezone": profile.timezone,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        user_id=UUID(row["user_id"]),
        biometrics=BiometricProfile(
            sex=Sex(row.get("sex") or Sex.UNSPECIFIED.value),
            birth_year=int(row["birth_year"]),
            height_cm=float(row["height_cm"]),
            weight_kg=float(row["weight_kg"]),
            activity_level=ActivityLevel(row["activity_level"]),
            fitness_goal=FitnessGoal(row["fitness_goal"]),
        ),
        targets=NutritionTargets(
            calorie_goal=int(row["calorie_goal"]),
            protein_g=float(row["protein_g"]),
            carbs_g=float(row["carbs_g"]),
            fat_g=float(row["fat_g"]),
            bmr=_optional_float(row.get("bmr")),
            tdee=_optional_float(row.get("tdee")),
        ),
        target_weight_kg=_optional_float(row.get("target_weight_kg")),
        timezone=row.get("timezone") or "UTC",
    )
