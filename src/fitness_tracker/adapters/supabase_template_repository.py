"""Supabase repository for workout templates."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.workouts import (
    DEFAULT_TEMPLATE_REPS,
    DEFAULT_TEMPLATE_SETS,
    TemplateExercise,
    WorkoutTemplate,
)
from fitness_tracker.services.templates import TemplateRepository


@dataclass
class SupabaseTemplateRepository(TemplateRepository):
    """Supabase implementation for workout templates."""

    client: Client

    def create_template(
        self, user_id: UUID, name: str, exercises: list[TemplateExercise]
    ) -> WorkoutTemplate:
        """Create a template row and return it."""
        response = (
            self.client.table("workout_templates")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "exercises": [
                        {
                            "exercise_id": exercise.exercise_id,
                            "exercise_name": exercise.exercise_name,
                            "sets": exercise.sets,
                            "reps": exercise.reps,
                        }
                        for exercise in exercises
                    ],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create workout template")
        return _parse_template(response.data[0])

    def get_template(self, template_id: UUID) -> WorkoutTemplate | None:
        """Return a template by id."""
        response = (
            self.client.table("workout_templates")
            .select("id, user_id, name, exercises")
            .eq("id", str(template_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_template(response.data[0])

    def list_templates(self, user_id: UUID) -> list[WorkoutTemplate]:
        """Return a user's templates, newest first."""
        response = (
            self.client.table("workout_templates")
            .select("id, user_id, name, exercises")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_template(row) for row in response.data or []]

    def delete_template(self, template_id: UUID) -> None:
        """Delete a template row."""
        self.client.table("workout_templates").delete().eq(
            "id", str(template_id)
        ).execute()


def _parse_template(row: dict[str, object]) -> WorkoutTemplate:
    exercises = []
    for item in row.get("exercises") or []:
        reps = item.get("reps", DEFAULT_TEMPLATE_REPS)
        exercises.append(
            TemplateExercise(
                exercise_id=str(item["exercise_id"]),
                exercise_name=str(item.get("exercise_name", "")),
                sets=int(item.get("sets") or DEFAULT_TEMPLATE_SETS),
                reps=[int(value) for value in reps]
                if isinstance(reps, list)
                else int(reps),
            )
        )
    return WorkoutTemplate(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        exercises=exercises,
    )
