"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_use_metric_units(self, user_id: UUID) -> bool | None:
        """Return the stored unit preference for a user."""
        row = self._get_row(user_id, "use_metric_units")
        if row is None or row.get("use_metric_units") is None:
            return None
        return bool(row["use_metric_units"])

    def set_use_metric_units(self, user_id: UUID, use_metric_units: bool) -> None:
        """Create or update the user's unit preference."""
        self._upsert(user_id, {"use_metric_units": use_metric_units})

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the stored timezone for a user."""
        row = self._get_row(user_id, "timezone")
        if row is None:
            return None
        return row.get("timezone")

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Create or update the user's timezone."""
        self._upsert(user_id, {"timezone": timezone})

    def _get_row(self, user_id: UUID, columns: str) -> dict[str, object] | None:
        response = (
            self.client.table("user_settings")
            .select(columns)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def _upsert(self, user_id: UUID, values: dict[str, object]) -> None:
        self.client.table("user_settings").upsert(
            {
                "user_id": str(user_id),
                **values,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
