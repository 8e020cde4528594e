"""Supabase repository for workout sessions."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.workouts import WorkoutSession
from fitness_tracker.services.workouts import WorkoutSessionRepository

_SESSION_COLUMNS = (
    "id, user_id, workout_name, date, started_at, ended_at, is_active, "
    "template_id, duration_minutes, total_volume"
)


@dataclass
class SupabaseWorkoutSessionRepository(WorkoutSessionRepository):
    """Supabase implementation for workout sessions."""

    client: Client

    def create_session(
        self,
        user_id: UUID,
        workout_name: str,
        started_at: datetime,
        template_id: UUID | None,
    ) -> WorkoutSession:
        """Create an active session row and return it."""
        response = (
            self.client.table("workout_sessions")
            .insert(
                {
                    "user_id": str(user_id),
                    "workout_name": workout_name,
                    "date": started_at.date().isoformat(),
                    "started_at": started_at.isoformat(),
                    "is_active": True,
                    "template_id": str(template_id) if template_id else None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create workout session")
        return _parse_session(response.data[0])

    def get_session(self, session_id: UUID) -> WorkoutSession | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("workout_sessions")
            .select(_SESSION_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def list_active_sessions(self, user_id: UUID) -> list[WorkoutSession]:
        """Return every active session for a user."""
        response = (
            self.client.table("workout_sessions")
            .select(_SESSION_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("is_active", True)
            .order("started_at", desc=False)
            .execute()
        )
        return [_parse_session(row) for row in response.data or []]

    def list_finished_sessions(
        self, user_id: UUID, limit: int
    ) -> list[WorkoutSession]:
        """Return finished sessions, newest first."""
        response = (
            self.client.table("workout_sessions")
            .select(_SESSION_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("is_active", False)
            .order("started_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_session(row) for row in response.data or []]

    def finish_session(
        self,
        session_id: UUID,
        ended_at: datetime,
        duration_minutes: int,
        total_volume: float,
    ) -> WorkoutSession:
        """Mark a session finished and return the updated row."""
        response = (
            self.client.table("workout_sessions")
            .update(
                {
                    "ended_at": ended_at.isoformat(),
                    "duration_minutes": duration_minutes,
                    "total_volume": total_volume,
                    "is_active": False,
                }
            )
            .eq("id", str(session_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to finish workout session")
        return _parse_session(response.data[0])

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session row."""
        self.client.table("workout_sessions").delete().eq(
            "id", str(session_id)
        ).execute()


def _parse_session(row: dict[str, object]) -> WorkoutSession:
    ended_at = row.get("ended_at")
    template_id = row.get("template_id")
    duration = row.get("duration_minutes")
    return WorkoutSession(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        workout_name=str(row.get("workout_name") or "Workout"),
        date=date.fromisoformat(str(row["date"])[:10]),
        started_at=datetime.fromisoformat(row["started_at"]),
        is_active=bool(row.get("is_active")),
        template_id=UUID(template_id) if template_id else None,
        ended_at=datetime.fromisoformat(ended_at) if ended_at else None,
        duration_minutes=int(duration) if duration is not None else None,
        total_volume=float(row.get("total_volume") or 0.0),
    )
