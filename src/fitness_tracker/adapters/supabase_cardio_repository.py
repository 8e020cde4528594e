"""Supabase repository for cardio activities."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.cardio import CardioActivity
from fitness_tracker.services.cardio import CardioRepository

_CARDIO_COLUMNS = (
    "id, user_id, date, activity_type, duration_minutes, calories_burned, "
    "distance_km, avg_heart_rate, notes"
)


@dataclass
class SupabaseCardioRepository(CardioRepository):
    """Supabase implementation for cardio activities."""

    client: Client

    def create_activity(
        self, user_id: UUID, activity: dict[str, object]
    ) -> CardioActivity:
        """Create a cardio activity row and return it."""
        payload = {**activity, "user_id": str(user_id)}
        if isinstance(payload.get("date"), date):
            payload["date"] = payload["date"].isoformat()
        response = self.client.table("cardio_activities").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create cardio activity")
        return _parse_activity(response.data[0])

    def list_activities(self, user_id: UUID, day: date) -> list[CardioActivity]:
        """Return a user's activities for a date."""
        response = (
            self.client.table("cardio_activities")
            .select(_CARDIO_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_activity(row) for row in response.data or []]

    def list_recent_activities(
        self, user_id: UUID, limit: int
    ) -> list[CardioActivity]:
        """Return recent activities, newest first."""
        response = (
            self.client.table("cardio_activities")
            .select(_CARDIO_COLUMNS)
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_activity(row) for row in response.data or []]


def _parse_activity(row: dict[str, object]) -> CardioActivity:
    distance = row.get("distance_km")
    heart_rate = row.get("avg_heart_rate")
    return CardioActivity(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        date=date.fromisoformat(str(row["date"])[:10]),
        activity_type=str(row["activity_type"]),
        duration_minutes=int(row.get("duration_minutes") or 0),
        calories_burned=int(row.get("calories_burned") or 0),
        distance_km=float(distance) if distance is not None else None,
        avg_heart_rate=int(heart_rate) if heart_rate is not None else None,
        notes=row.get("notes"),
    )
