"""Domain models for workout sessions and sets."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

DEFAULT_TEMPLATE_SETS = 3
DEFAULT_TEMPLATE_REPS = 10


class SessionState(StrEnum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    FINISHED = "finished"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class WorkoutSession:
    """A workout session; only one may be active per user."""

    id: UUID
    user_id: UUID
    workout_name: str
    date: date
    started_at: datetime
    is_active: bool
    template_id: UUID | None = None
    ended_at: datetime | None = None
    duration_minutes: int | None = None
    total_volume: float = 0.0

    @property
    def state(self) -> SessionState:
        if self.is_active:
            return SessionState.ACTIVE
        return SessionState.FINISHED


@dataclass(frozen=True)
class ExerciseSet:
    """One set of an exercise within a session."""

    id: UUID
    session_id: UUID
    user_id: UUID
    exercise_id: str
    exercise_name: str
    set_number: int
    reps: int
    weight: float
    weight_unit: str
    is_warmup: bool = False
    is_completed: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class NewSet:
    """Set values before the row exists."""

    exercise_id: str
    exercise_name: str
    set_number: int
    reps: int
    weight: float
    weight_unit: str
    is_warmup: bool = False
    is_completed: bool = False


@dataclass(frozen=True)
class TemplateExercise:
    """An exercise entry in a workout template.

    `reps` is either one value for every set or a per-set list.
    """

    exercise_id: str
    exercise_name: str
    sets: int = DEFAULT_TEMPLATE_SETS
    reps: int | list[int] = DEFAULT_TEMPLATE_REPS

    def reps_for_set(self, set_number: int) -> int:
        if isinstance(self.reps, list):
            index = set_number - 1
            if 0 <= index < len(self.reps) and self.reps[index]:
                return self.reps[index]
            return DEFAULT_TEMPLATE_REPS
        return self.reps


@dataclass(frozen=True)
class WorkoutTemplate:
    """A saved list of exercises used to start sessions."""

    id: UUID
    user_id: UUID
    name: str
    exercises: list[TemplateExercise] = field(default_factory=list)


@dataclass(frozen=True)
class SessionSummary:
    """Result of finishing a session."""

    session: WorkoutSession
    incomplete_sets: int
    new_records: dict[str, float]

    @property
    def record_count(self) -> int:
        return len(self.new_records)


@dataclass(frozen=True)
class ExerciseStats:
    """Lifetime statistics for an exercise."""

    exercise_id: str
    max_weight: float
    total_volume: float
    total_sets: int
    average_reps: int
