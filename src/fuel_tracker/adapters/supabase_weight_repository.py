"""Supabase repository for weight entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fuel_tracker.domain.weight import WeightEntry, WeightSource
from fuel_tracker.services.weight import WeightRepository


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight entries."""

    client: Client

    def add_entry(self, user_id: UUID, entry: WeightEntry) -> WeightEntry:
        """Create a weight entry row."""
        response = (
            self.client.table("weight_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "weight_kg": entry.weight_kg,
                    "recorded_at": entry.recorded_at.isoformat(),
                    "body_fat_pct": entry.body_fat_pct,
                    "source": entry.source.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weight entry")
        return _parse_entry(response.data[0])

    def list_entries(self, user_id: UUID) -> list[WeightEntry]:
        """Return a user's entries, oldest first."""
        response = (
            self.client.table("weight_entries")
            .select("weight_kg, recorded_at, body_fat_pct, source")
            .eq("user_id", str(user_id))
            .order("recorded_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> WeightEntry:
    body_fat = row.get("body_fat_pct")
    return WeightEntry(
        weight_kg=float(row["weight_kg"]),
        recorded_at=datetime.fromisoformat(row["recorded_at"]),
        body_fat_pct=float(body_fat) if body_fat is not None else None,
        source=WeightSource(row.get("source") or WeightSource.MANUAL.value),
    )
