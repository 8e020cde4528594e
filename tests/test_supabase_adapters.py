"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4

import pytest

from fitness_tracker.adapters.supabase_cardio_repository import (
    SupabaseCardioRepository,
)
from fitness_tracker.adapters.supabase_exercise_set_repository import (
    SupabaseExerciseSetRepository,
)
from fitness_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from fitness_tracker.adapters.supabase_measurement_repository import (
    SupabaseMeasurementRepository,
)
from fitness_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from fitness_tracker.adapters.supabase_template_repository import (
    SupabaseTemplateRepository,
)
from fitness_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from fitness_tracker.adapters.supabase_workout_session_repository import (
    SupabaseWorkoutSessionRepository,
)
from fitness_tracker.domain.meals import MealPortion, MealType
from fitness_tracker.domain.models import BiometricProfile, Goal, Sex
from fitness_tracker.domain.workouts import NewSet, TemplateExercise


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}<", value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}>=", value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_profile_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_data")
    table.queue("select", [{"age": 30, "weight": 80, "height": 180, "sex": "male"}])
    table.queue("upsert", [{"user_id": "x"}])
    user_id = uuid4()

    repository = SupabaseProfileRepository(client)
    row = repository.get_profile_row(user_id)
    repository.save_profile(
        user_id,
        BiometricProfile(
            age=30, weight_kg=80, height_cm=180, sex=Sex.MALE, goal=Goal.GAIN
        ),
    )

    assert row is not None
    assert row["weight"] == 80
    assert table.last_payload["goal"] == "gain"
    assert table.last_payload["user_id"] == str(user_id)


def test_supabase_profile_repository_raises_on_failed_save() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.save_profile(
            uuid4(), BiometricProfile(age=30, weight_kg=80, height_cm=180, sex=Sex.MALE)
        )


def test_supabase_user_settings_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_settings")
    table.queue("select", [{"use_metric_units": False}])
    table.queue("select", [{"timezone": "UTC"}])

    repository = SupabaseUserSettingsRepository(client)

    assert repository.get_use_metric_units(uuid4()) is False
    assert repository.get_timezone(uuid4()) == "UTC"
    assert repository.get_use_metric_units(uuid4()) is None
    repository.set_use_metric_units(uuid4(), True)
    assert table.last_payload["use_metric_units"] is True


def test_supabase_meal_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_entries")
    user_id = uuid4()
    row = {
        "id": str(uuid4()),
        "user_id": str(user_id),
        "date": "2026-03-02",
        "food_name": "Oats",
        "servings": 0.5,
        "calories": 195,
        "protein": 8,
        "fats": 3,
        "carbs": 33,
        "meal_type": "breakfast",
        "created_at": datetime.now(tz=UTC).isoformat(),
    }
    table.queue("insert", [row])
    table.queue("select", [row])

    repository = SupabaseMealRepository(client)
    created = repository.create_meal_entry(
        user_id,
        date(2026, 3, 2),
        "Oats",
        MealPortion(servings=0.5, calories=195, protein_g=8, fats_g=3, carbs_g=33),
        MealType.BREAKFAST,
    )
    listed = repository.list_meal_entries_between(
        user_id, date(2026, 3, 1), date(2026, 3, 8)
    )

    assert created.meal_type is MealType.BREAKFAST
    assert table.last_payload["date"] == "2026-03-02"
    assert listed[0].calories == 195
    assert ("date>=", "2026-03-01") in table.last_filters
    assert ("date<", "2026-03-08") in table.last_filters


def test_supabase_cardio_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("cardio_activities")
    user_id = uuid4()
    table.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "date": "2026-03-02",
                "activity_type": "running",
                "duration_minutes": 30,
                "calories_burned": 343,
                "distance_km": None,
                "avg_heart_rate": None,
                "notes": None,
            }
        ],
    )

    repository = SupabaseCardioRepository(client)
    created = repository.create_activity(
        user_id,
        {
            "date": date(2026, 3, 2),
            "activity_type": "running",
            "duration_minutes": 30,
            "calories_burned": 343,
        },
    )

    assert created.calories_burned == 343
    assert created.distance_km is None
    assert table.last_payload["date"] == "2026-03-02"


def test_supabase_workout_session_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("workout_sessions")
    user_id = uuid4()
    started_at = datetime(2026, 3, 2, 18, 0, tzinfo=UTC)
    row = {
        "id": str(uuid4()),
        "user_id": str(user_id),
        "workout_name": "Push",
        "date": "2026-03-02",
        "started_at": started_at.isoformat(),
        "ended_at": None,
        "is_active": True,
        "template_id": None,
        "duration_minutes": None,
        "total_volume": None,
    }
    table.queue("insert", [row])
    table.queue("select", [row])

    repository = SupabaseWorkoutSessionRepository(client)
    created = repository.create_session(user_id, "Push", started_at, None)
    active = repository.list_active_sessions(user_id)

    assert created.is_active
    assert created.total_volume == 0
    assert active[0].started_at == started_at
    assert ("is_active", True) in table.last_filters
    with pytest.raises(RuntimeError):
        repository.finish_session(created.id, started_at, 30, 100.0)


def test_supabase_exercise_set_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("exercise_sets")
    user_id = uuid4()
    session_id = uuid4()
    table.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "session_id": str(session_id),
                "user_id": str(user_id),
                "exercise_id": "bench",
                "exercise_name": "Bench",
                "set_number": 1,
                "reps": 10,
                "weight": 0,
                "weight_unit": "kg",
                "is_warmup": False,
                "is_completed": False,
                "created_at": None,
            }
        ],
    )
    table.queue("select", [{"weight": 102.5}])

    repository = SupabaseExerciseSetRepository(client)
    created = repository.create_sets(
        user_id,
        session_id,
        [NewSet("bench", "Bench", set_number=1, reps=10, weight=0, weight_unit="kg")],
    )
    cutoff = datetime(2026, 3, 2, tzinfo=UTC)
    best = repository.max_completed_weight(user_id, "bench", cutoff)
    repository.delete_sets_for_session(session_id)

    assert created[0].reps == 10
    assert best == 102.5
    assert ("created_at<", cutoff.isoformat()) in table.last_filters
    assert ("is_completed", True) in table.last_filters
    assert table.actions[-1] == "delete"
    assert repository.max_completed_weight(user_id, "squat", None) is None


def test_supabase_max_weight_can_skip_warmups() -> None:
    client = FakeSupabaseClient()
    table = client.table("exercise_sets")
    table.queue("select", [{"weight": 100}])
    repository = SupabaseExerciseSetRepository(client)

    best = repository.max_completed_weight(
        uuid4(), "bench", None, include_warmups=False
    )

    assert best == 100
    assert ("is_warmup", False) in table.last_filters


def test_supabase_template_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("workout_templates")
    user_id = uuid4()
    table.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "name": "Push",
                "exercises": [
                    {
                        "exercise_id": "bench",
                        "exercise_name": "Bench",
                        "sets": 3,
                        "reps": [10, 8, 6],
                    }
                ],
            }
        ],
    )

    repository = SupabaseTemplateRepository(client)
    template = repository.create_template(
        user_id, "Push", [TemplateExercise("bench", "Bench", reps=[10, 8, 6])]
    )

    assert template.exercises[0].reps_for_set(3) == 6
    assert table.last_payload["exercises"][0]["reps"] == [10, 8, 6]


def test_supabase_measurement_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("measurements")
    user_id = uuid4()
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "type": "Waist",
                "value": "81.5",
                "unit": "cm",
                "created_at": datetime.now(tz=UTC).isoformat(),
            }
        ],
    )

    repository = SupabaseMeasurementRepository(client)
    items = repository.list_measurements(user_id, "Waist")

    assert items[0].value == 81.5
    assert ("type", "Waist") in table.last_filters
