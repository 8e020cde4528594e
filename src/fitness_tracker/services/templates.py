"""Workout template service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import InvalidEntryError, NotFoundError
from fitness_tracker.domain.workouts import TemplateExercise, WorkoutTemplate


class TemplateRepository(Protocol):
    """Persistence interface for workout templates."""

    def create_template(
        self, user_id: UUID, name: str, exercises: list[TemplateExercise]
    ) -> WorkoutTemplate:
        """Create a template and return it."""

    def get_template(self, template_id: UUID) -> WorkoutTemplate | None:
        """Return a template by id."""

    def list_templates(self, user_id: UUID) -> list[WorkoutTemplate]:
        """Return a user's templates."""

    def delete_template(self, template_id: UUID) -> None:
        """Delete a template."""


@dataclass
class TemplateService:
    """Manages saved workout templates."""

    repository: TemplateRepository

    def create_template(
        self, user_id: UUID, name: str, exercises: list[TemplateExercise]
    ) -> WorkoutTemplate:
        """Validate and save a template."""
        cleaned = name.strip()
        if not cleaned:
            raise InvalidEntryError("Please enter a workout name")
        if not exercises:
            raise InvalidEntryError("Please add at least one exercise")
        for exercise in exercises:
            if exercise.sets < 1:
                raise InvalidEntryError(
                    f"{exercise.exercise_name} needs at least one set"
                )
        return self.repository.create_template(user_id, cleaned, exercises)

    def get_template(self, user_id: UUID, template_id: UUID) -> WorkoutTemplate:
        template = self.repository.get_template(template_id)
        if template is None or template.user_id != user_id:
            raise NotFoundError(f"Workout template {template_id} not found")
        return template

    def list_templates(self, user_id: UUID) -> list[WorkoutTemplate]:
        return self.repository.list_templates(user_id)

    def delete_template(self, user_id: UUID, template_id: UUID) -> None:
        self.get_template(user_id, template_id)
        self.repository.delete_template(template_id)
