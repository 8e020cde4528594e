"""Personal record detection for workout sets."""

from collections.abc import Iterable, Mapping
from uuid import UUID

from fitness_tracker.domain.workouts import ExerciseSet


def is_new_record(
    weight: float, is_completed: bool, historical_max: float | None
) -> bool:
    """Return True when a completed set strictly beats the historical max."""
    if not is_completed or weight <= 0:
        return False
    return weight > (historical_max or 0.0)


def _eligible(item: ExerciseSet, count_warmups: bool) -> bool:
    return count_warmups or not item.is_warmup


def detect_personal_records(
    historical_max: float | None,
    sets: Iterable[ExerciseSet],
    *,
    count_warmups: bool = True,
) -> set[UUID]:
    """Return ids of sets whose weight beats the prior best for the exercise.

    Ties are not records. An absent history counts as a best of 0.
    """
    return {
        item.id
        for item in sets
        if _eligible(item, count_warmups)
        and is_new_record(item.weight, item.is_completed, historical_max)
    }


def session_record_weights(
    historical: Mapping[str, float],
    sets: Iterable[ExerciseSet],
    *,
    count_warmups: bool = True,
) -> dict[str, float]:
    """Return the new best weight per exercise that set a record this session."""
    records: dict[str, float] = {}
    for item in sets:
        if not _eligible(item, count_warmups):
            continue
        best = records.get(item.exercise_id, historical.get(item.exercise_id, 0.0))
        if is_new_record(item.weight, item.is_completed, best):
            records[item.exercise_id] = item.weight
    return records


def flag_records_by_exercise(
    historical: Mapping[str, float],
    sets: Iterable[ExerciseSet],
    *,
    count_warmups: bool = True,
) -> set[UUID]:
    """Detect record sets across several exercises at once."""
    grouped: dict[str, list[ExerciseSet]] = {}
    for item in sets:
        grouped.setdefault(item.exercise_id, []).append(item)
    flagged: set[UUID] = set()
    for exercise_id, exercise_sets in grouped.items():
        flagged |= detect_personal_records(
            historical.get(exercise_id),
            exercise_sets,
            count_warmups=count_warmups,
        )
    return flagged
