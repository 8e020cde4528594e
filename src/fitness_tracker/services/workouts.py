"""Workout session state machine."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.aggregation import exercise_stats, session_volume
from fitness_tracker.domain.errors import (
    ConcurrentSessionConflict,
    InvalidEntryError,
    NotFoundError,
    SessionNotActiveError,
)
from fitness_tracker.domain.records import (
    flag_records_by_exercise,
    session_record_weights,
)
from fitness_tracker.domain.workouts import (
    DEFAULT_TEMPLATE_REPS,
    ExerciseSet,
    ExerciseStats,
    NewSet,
    SessionSummary,
    WorkoutSession,
    WorkoutTemplate,
)
from fitness_tracker.services.user_settings import UserSettingsService

_EDITABLE_SET_FIELDS = {"reps", "weight", "weight_unit", "is_warmup", "is_completed"}

_logger = logging.getLogger(__name__)


class WorkoutSessionRepository(Protocol):
    """Persistence interface for workout sessions."""

    def create_session(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout_name: str,
        started_at: datetime,
        template_id: UUID | None,
    ) -> WorkoutSession:
        """Create an active session row and return it."""

    def get_session(self, session_id: UUID) -> WorkoutSession | None:
        """Return a session by id, if present."""

    def list_active_sessions(self, user_id: UUID) -> list[WorkoutSession]:
        """Return every active session for a user."""

    def list_finished_sessions(self, user_id: UUID, limit: int) -> list[WorkoutSession]:
        """Return finished sessions, newest first."""

    def finish_session(
        self,
        session_id: UUID,
        ended_at: datetime,
        duration_minutes: int,
        total_volume: float,
    ) -> WorkoutSession:
        """Mark a session finished and return the updated row."""

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session row."""


class ExerciseSetRepository(Protocol):
    """Persistence interface for exercise sets."""

    def create_sets(
        self, user_id: UUID, session_id: UUID, sets: list[NewSet]
    ) -> list[ExerciseSet]:
        """Create set rows and return them."""

    def get_set(self, set_id: UUID) -> ExerciseSet | None:
        """Return a set by id, if present."""

    def list_sets(self, session_id: UUID) -> list[ExerciseSet]:
        """Return a session's sets ordered by set number."""

    def update_set(self, set_id: UUID, changes: dict[str, object]) -> ExerciseSet:
        """Apply field changes to a set and return it."""

    def delete_set(self, set_id: UUID) -> None:
        """Delete a set row."""

    def delete_sets_for_session(self, session_id: UUID) -> None:
        """Delete every set in a session."""

    def max_completed_weight(
        self,
        user_id: UUID,
        exercise_id: str,
        before: datetime | None,
        include_warmups: bool = True,
    ) -> float | None:
        """Return the heaviest completed set weight, optionally before a time."""

    def list_completed_sets(self, user_id: UUID, exercise_id: str) -> list[ExerciseSet]:
        """Return all completed sets for an exercise."""


@dataclass(frozen=True)
class SessionView:
    """An active session with its sets and record flags."""

    session: WorkoutSession
    sets: list[ExerciseSet]
    personal_records: dict[str, float]
    record_set_ids: set[UUID]


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class WorkoutService:
    """Runs sessions through not_started -> active -> finished or cancelled."""

    session_repository: WorkoutSessionRepository
    set_repository: ExerciseSetRepository
    settings_service: UserSettingsService
    count_warmups_for_records: bool = True
    clock: Callable[[], datetime] = field(default=_utcnow)

    def get_active_session(self, user_id: UUID) -> WorkoutSession | None:
        """Return the user's active session, if any."""
        active = self.session_repository.list_active_sessions(user_id)
        if not active:
            return None
        return min(active, key=_start_order)

    def start_session(
        self,
        user_id: UUID,
        workout_name: str,
        template: WorkoutTemplate | None = None,
    ) -> WorkoutSession:
        """Start a session, pre-creating sets from the template if given."""
        name = workout_name.strip() if workout_name else ""
        if not name:
            name = template.name if template else "Workout"
        if self.session_repository.list_active_sessions(user_id):
            raise ConcurrentSessionConflict("A workout session is already active")

        session = self.session_repository.create_session(
            user_id=user_id,
            workout_name=name,
            started_at=self.clock(),
            template_id=template.id if template else None,
        )
        winner = self.get_active_session(user_id)
        if winner is not None and winner.id != session.id:
            _logger.warning(
                "Concurrent start for user %s, rolling back session %s",
                user_id,
                session.id,
            )
            self.session_repository.delete_session(session.id)
            raise ConcurrentSessionConflict("A workout session is already active")

        if template is not None:
            unit = str(self.settings_service.weight_unit(user_id))
            new_sets = [
                NewSet(
                    exercise_id=exercise.exercise_id,
                    exercise_name=exercise.exercise_name,
                    set_number=number,
                    reps=exercise.reps_for_set(number),
                    weight=0.0,
                    weight_unit=unit,
                )
                for exercise in template.exercises
                for number in range(1, exercise.sets + 1)
            ]
            if new_sets:
                self.set_repository.create_sets(user_id, session.id, new_sets)
        _logger.info("Started workout %s for user %s", session.id, user_id)
        return session

    def add_exercise(
        self, user_id: UUID, session_id: UUID, exercise_id: str, exercise_name: str
    ) -> ExerciseSet:
        """Add an exercise to an active session with one empty set."""
        self._require_active(user_id, session_id)
        existing = [
            item
            for item in self.set_repository.list_sets(session_id)
            if item.exercise_id == exercise_id
        ]
        if existing:
            raise InvalidEntryError(f"{exercise_name} is already in this workout")
        return self._create_set(user_id, session_id, exercise_id, exercise_name, 1)

    def add_set(  # noqa: PLR0913
        self,
        user_id: UUID,
        session_id: UUID,
        exercise_id: str,
        exercise_name: str,
        reps: int = DEFAULT_TEMPLATE_REPS,
    ) -> ExerciseSet:
        """Append a set to an exercise in an active session."""
        self._require_active(user_id, session_id)
        numbers = [
            item.set_number
            for item in self.set_repository.list_sets(session_id)
            if item.exercise_id == exercise_id
        ]
        return self._create_set(
            user_id,
            session_id,
            exercise_id,
            exercise_name,
            max(numbers, default=0) + 1,
            reps=reps,
        )

    def update_set(
        self, user_id: UUID, set_id: UUID, changes: dict[str, object]
    ) -> ExerciseSet:
        """Edit weight, reps or completion of a set in place."""
        item = self._get_set(user_id, set_id)
        self._require_active(user_id, item.session_id)
        unknown = set(changes) - _EDITABLE_SET_FIELDS
        if unknown:
            raise InvalidEntryError(f"Cannot edit fields: {', '.join(sorted(unknown))}")
        weight = changes.get("weight")
        if isinstance(weight, int | float) and weight < 0:
            raise InvalidEntryError("Weight cannot be negative")
        reps = changes.get("reps")
        if isinstance(reps, int) and reps < 0:
            raise InvalidEntryError("Reps cannot be negative")
        if not changes:
            return item
        return self.set_repository.update_set(set_id, changes)

    def delete_set(self, user_id: UUID, set_id: UUID) -> None:
        item = self._get_set(user_id, set_id)
        self._require_active(user_id, item.session_id)
        self.set_repository.delete_set(set_id)

    def personal_records(
        self,
        user_id: UUID,
        exercise_ids: Iterable[str],
        before: datetime | None = None,
    ) -> dict[str, float]:
        """Return the best completed weight per exercise, strictly before a time.

        Warmup sets are left out when they do not count toward records.
        """
        records: dict[str, float] = {}
        for exercise_id in dict.fromkeys(exercise_ids):
            best = self.set_repository.max_completed_weight(
                user_id,
                exercise_id,
                before,
                include_warmups=self.count_warmups_for_records,
            )
            records[exercise_id] = best or 0.0
        return records

    def session_view(self, user_id: UUID, session_id: UUID) -> SessionView:
        """Return a session's sets with sets that beat prior records flagged."""
        session = self._get_session(user_id, session_id)
        sets = self.set_repository.list_sets(session_id)
        history = self.personal_records(
            user_id, (item.exercise_id for item in sets), before=session.started_at
        )
        return SessionView(
            session=session,
            sets=sets,
            personal_records=history,
            record_set_ids=flag_records_by_exercise(
                history, sets, count_warmups=self.count_warmups_for_records
            ),
        )

    def finish_session(self, user_id: UUID, session_id: UUID) -> SessionSummary:
        """Finish an active session and report its volume and new records."""
        session = self._require_active(user_id, session_id)
        sets = self.set_repository.list_sets(session_id)
        history = self.personal_records(
            user_id, (item.exercise_id for item in sets), before=session.started_at
        )
        ended_at = self.clock()
        elapsed = (ended_at - session.started_at).total_seconds()
        duration = max(int(elapsed // 60), 0)
        finished = self.session_repository.finish_session(
            session_id,
            ended_at=ended_at,
            duration_minutes=duration,
            total_volume=session_volume(sets),
        )
        summary = SessionSummary(
            session=finished,
            incomplete_sets=sum(1 for item in sets if not item.is_completed),
            new_records=session_record_weights(
                history, sets, count_warmups=self.count_warmups_for_records
            ),
        )
        _logger.info(
            "Finished workout %s for user %s: %s min, %s records",
            session_id,
            user_id,
            duration,
            summary.record_count,
        )
        return summary

    def cancel_session(self, user_id: UUID, session_id: UUID) -> None:
        """Discard an active session along with all of its sets."""
        self._require_active(user_id, session_id)
        self.set_repository.delete_sets_for_session(session_id)
        self.session_repository.delete_session(session_id)
        _logger.info("Cancelled workout %s for user %s", session_id, user_id)

    def list_history(self, user_id: UUID, limit: int = 20) -> list[WorkoutSession]:
        return self.session_repository.list_finished_sessions(user_id, limit)

    def list_sets(self, user_id: UUID, session_id: UUID) -> list[ExerciseSet]:
        self._get_session(user_id, session_id)
        return self.set_repository.list_sets(session_id)

    def exercise_stats(self, user_id: UUID, exercise_id: str) -> ExerciseStats:
        """Return lifetime stats for an exercise from completed sets."""
        sets = self.set_repository.list_completed_sets(user_id, exercise_id)
        return exercise_stats(exercise_id, sets)

    def _create_set(  # noqa: PLR0913
        self,
        user_id: UUID,
        session_id: UUID,
        exercise_id: str,
        exercise_name: str,
        set_number: int,
        reps: int = DEFAULT_TEMPLATE_REPS,
    ) -> ExerciseSet:
        new_set = NewSet(
            exercise_id=exercise_id,
            exercise_name=exercise_name,
            set_number=set_number,
            reps=reps,
            weight=0.0,
            weight_unit=str(self.settings_service.weight_unit(user_id)),
        )
        created = self.set_repository.create_sets(user_id, session_id, [new_set])
        return created[0]

    def _get_session(self, user_id: UUID, session_id: UUID) -> WorkoutSession:
        session = self.session_repository.get_session(session_id)
        if session is None or session.user_id != user_id:
            raise NotFoundError(f"Workout session {session_id} not found")
        return session

    def _get_set(self, user_id: UUID, set_id: UUID) -> ExerciseSet:
        item = self.set_repository.get_set(set_id)
        if item is None or item.user_id != user_id:
            raise NotFoundError(f"Exercise set {set_id} not found")
        return item

    def _require_active(self, user_id: UUID, session_id: UUID) -> WorkoutSession:
        session = self._get_session(user_id, session_id)
        if not session.is_active:
            raise SessionNotActiveError(f"Workout session {session_id} is finished")
        return session


def _start_order(session: WorkoutSession) -> tuple[datetime, str]:
    return session.started_at, str(session.id)
