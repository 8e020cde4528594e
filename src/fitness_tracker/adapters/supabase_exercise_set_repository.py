"""Supabase repository for exercise sets."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.workouts import ExerciseSet, NewSet
from fitness_tracker.services.workouts import ExerciseSetRepository

_SET_COLUMNS = (
    "id, session_id, user_id, exercise_id, exercise_name, set_number, reps, "
    "weight, weight_unit, is_warmup, is_completed, created_at"
)


@dataclass
class SupabaseExerciseSetRepository(ExerciseSetRepository):
    """Supabase implementation for exercise sets."""

    client: Client

    def create_sets(
        self, user_id: UUID, session_id: UUID, sets: list[NewSet]
    ) -> list[ExerciseSet]:
        """Create set rows and return them."""
        payload = [
            {
                "user_id": str(user_id),
                "session_id": str(session_id),
                "exercise_id": item.exercise_id,
                "exercise_name": item.exercise_name,
                "set_number": item.set_number,
                "reps": item.reps,
                "weight": item.weight,
                "weight_unit": item.weight_unit,
                "is_warmup": item.is_warmup,
                "is_completed": item.is_completed,
            }
            for item in sets
        ]
        response = self.client.table("exercise_sets").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create exercise sets")
        return [_parse_set(row) for row in response.data]

    def get_set(self, set_id: UUID) -> ExerciseSet | None:
        """Return a set by id."""
        response = (
            self.client.table("exercise_sets")
            .select(_SET_COLUMNS)
            .eq("id", str(set_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_set(response.data[0])

    def list_sets(self, session_id: UUID) -> list[ExerciseSet]:
        """Return a session's sets ordered by set number."""
        response = (
            self.client.table("exercise_sets")
            .select(_SET_COLUMNS)
            .eq("session_id", str(session_id))
            .order("set_number", desc=False)
            .execute()
        )
        return [_parse_set(row) for row in response.data or []]

    def update_set(self, set_id: UUID, changes: dict[str, object]) -> ExerciseSet:
        """Apply field changes to a set and return it."""
        response = (
            self.client.table("exercise_sets")
            .update(changes)
            .eq("id", str(set_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update exercise set")
        return _parse_set(response.data[0])

    def delete_set(self, set_id: UUID) -> None:
        """Delete a set row."""
        self.client.table("exercise_sets").delete().eq("id", str(set_id)).execute()

    def delete_sets_for_session(self, session_id: UUID) -> None:
        """Delete every set in a session."""
        self.client.table("exercise_sets").delete().eq(
            "session_id", str(session_id)
        ).execute()

    def max_completed_weight(
        self,
        user_id: UUID,
        exercise_id: str,
        before: datetime | None,
        include_warmups: bool = True,
    ) -> float | None:
        """Return the heaviest completed set weight, optionally before a time."""
        query = (
            self.client.table("exercise_sets")
            .select("weight")
            .eq("user_id", str(user_id))
            .eq("exercise_id", exercise_id)
            .eq("is_completed", True)
        )
        if not include_warmups:
            query = query.eq("is_warmup", False)
        if before is not None:
            query = query.lt("created_at", before.isoformat())
        response = query.order("weight", desc=True).limit(1).execute()
        if not response.data:
            return None
        return float(response.data[0].get("weight") or 0.0)

    def list_completed_sets(
        self, user_id: UUID, exercise_id: str
    ) -> list[ExerciseSet]:
        """Return all completed sets for an exercise, newest first."""
        response = (
            self.client.table("exercise_sets")
            .select(_SET_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("exercise_id", exercise_id)
            .eq("is_completed", True)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_set(row) for row in response.data or []]


def _parse_set(row: dict[str, object]) -> ExerciseSet:
    created_at = row.get("created_at")
    return ExerciseSet(
        id=UUID(row["id"]),
        session_id=UUID(row["session_id"]),
        user_id=UUID(row["user_id"]),
        exercise_id=str(row["exercise_id"]),
        exercise_name=str(row.get("exercise_name") or ""),
        set_number=int(row.get("set_number") or 1),
        reps=int(row.get("reps") or 0),
        weight=float(row.get("weight") or 0.0),
        weight_unit=str(row.get("weight_unit") or "kg"),
        is_warmup=bool(row.get("is_warmup")),
        is_completed=bool(row.get("is_completed")),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )
