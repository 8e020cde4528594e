"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.cardio import CardioActivity
from fitness_tracker.domain.macros import default_targets
from fitness_tracker.domain.meals import MealEntry, MealPortion, MealType
from fitness_tracker.domain.measurements import Measurement
from fitness_tracker.domain.models import BiometricProfile
from fitness_tracker.domain.workouts import (
    ExerciseSet,
    NewSet,
    TemplateExercise,
    WorkoutSession,
    WorkoutTemplate,
)
from fitness_tracker.services.cardio import CardioRepository, CardioService
from fitness_tracker.services.meals import MealRepository, MealService
from fitness_tracker.services.measurements import (
    MeasurementRepository,
    MeasurementService,
)
from fitness_tracker.services.profiles import ProfileRepository, ProfileService
from fitness_tracker.services.refresh import RefreshCoordinator
from fitness_tracker.services.stats import StatsService
from fitness_tracker.services.templates import TemplateRepository, TemplateService
from fitness_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)
from fitness_tracker.services.workouts import (
    ExerciseSetRepository,
    WorkoutService,
    WorkoutSessionRepository,
)

WORKOUT_START = datetime(2026, 3, 2, 18, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Clock that returns a settable time."""

    now: datetime = WORKOUT_START

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def get_profile_row(self, user_id: UUID) -> dict[str, object] | None:
        return self.rows.get(user_id)

    def save_profile(self, user_id: UUID, profile: BiometricProfile) -> None:
        self.rows[user_id] = {
            "age": profile.age,
            "weight": profile.weight_kg,
            "height": profile.height_cm,
            "sex": str(profile.sex),
            "goal": str(profile.goal),
            "goal_speed": str(profile.goal_speed),
            "calorie_goal_override": profile.calorie_goal_override,
        }


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    metric: dict[UUID, bool] = field(default_factory=dict)
    timezones: dict[UUID, str] = field(default_factory=dict)

    def get_use_metric_units(self, user_id: UUID) -> bool | None:
        return self.metric.get(user_id)

    def set_use_metric_units(self, user_id: UUID, use_metric_units: bool) -> None:
        self.metric[user_id] = use_metric_units

    def get_timezone(self, user_id: UUID) -> str | None:
        return self.timezones.get(user_id)

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        self.timezones[user_id] = timezone


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    entries: dict[UUID, MealEntry] = field(default_factory=dict)

    def create_meal_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        food_name: str,
        portion: MealPortion,
        meal_type: MealType | None,
    ) -> MealEntry:
        entry = MealEntry(
            id=uuid4(),
            user_id=user_id,
            date=day,
            food_name=food_name,
            servings=portion.servings,
            calories=portion.calories,
            protein_g=portion.protein_g,
            fats_g=portion.fats_g,
            carbs_g=portion.carbs_g,
            meal_type=meal_type,
            created_at=datetime.now(tz=UTC),
        )
        self.entries[entry.id] = entry
        return entry

    def add(self, entry: MealEntry) -> None:
        self.entries[entry.id] = entry

    def get_meal_entry(self, meal_id: UUID) -> MealEntry | None:
        return self.entries.get(meal_id)

    def list_meal_entries(self, user_id: UUID, day: date) -> list[MealEntry]:
        return [
            entry
            for entry in reversed(self.entries.values())
            if entry.user_id == user_id and entry.date == day
        ]

    def list_meal_entries_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealEntry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id and start <= entry.date < end
        ]

    def list_recent_meal_entries(self, user_id: UUID, limit: int) -> list[MealEntry]:
        owned = [entry for entry in self.entries.values() if entry.user_id == user_id]
        return list(reversed(owned))[:limit]

    def delete_meal_entry(self, meal_id: UUID) -> None:
        self.entries.pop(meal_id, None)


@dataclass
class InMemoryCardioRepository(CardioRepository):
    """In-memory cardio repository for tests."""

    activities: list[CardioActivity] = field(default_factory=list)

    def create_activity(
        self, user_id: UUID, activity: dict[str, object]
    ) -> CardioActivity:
        created = CardioActivity(id=uuid4(), user_id=user_id, **activity)
        self.activities.append(created)
        return created

    def list_activities(self, user_id: UUID, day: date) -> list[CardioActivity]:
        return [
            item
            for item in self.activities
            if item.user_id == user_id and item.date == day
        ]

    def list_recent_activities(
        self, user_id: UUID, limit: int
    ) -> list[CardioActivity]:
        owned = [item for item in self.activities if item.user_id == user_id]
        return list(reversed(owned))[:limit]


@dataclass
class InMemoryWorkoutSessionRepository(WorkoutSessionRepository):
    """In-memory workout session repository for tests."""

    sessions: dict[UUID, WorkoutSession] = field(default_factory=dict)

    def create_session(
        self,
        user_id: UUID,
        workout_name: str,
        started_at: datetime,
        template_id: UUID | None,
    ) -> WorkoutSession:
        session = WorkoutSession(
            id=uuid4(),
            user_id=user_id,
            workout_name=workout_name,
            date=started_at.date(),
            started_at=started_at,
            is_active=True,
            template_id=template_id,
        )
        self.sessions[session.id] = session
        return session

    def get_session(self, session_id: UUID) -> WorkoutSession | None:
        return self.sessions.get(session_id)

    def list_active_sessions(self, user_id: UUID) -> list[WorkoutSession]:
        return [
            session
            for session in self.sessions.values()
            if session.user_id == user_id and session.is_active
        ]

    def list_finished_sessions(
        self, user_id: UUID, limit: int
    ) -> list[WorkoutSession]:
        finished = [
            session
            for session in self.sessions.values()
            if session.user_id == user_id and not session.is_active
        ]
        finished.sort(key=lambda session: session.started_at, reverse=True)
        return finished[:limit]

    def finish_session(
        self,
        session_id: UUID,
        ended_at: datetime,
        duration_minutes: int,
        total_volume: float,
    ) -> WorkoutSession:
        finished = replace(
            self.sessions[session_id],
            is_active=False,
            ended_at=ended_at,
            duration_minutes=duration_minutes,
            total_volume=total_volume,
        )
        self.sessions[session_id] = finished
        return finished

    def delete_session(self, session_id: UUID) -> None:
        self.sessions.pop(session_id, None)


@dataclass
class InMemoryExerciseSetRepository(ExerciseSetRepository):
    """In-memory exercise set repository for tests.

    New sets are stamped with `clock` so record queries can filter by time.
    """

    sets: dict[UUID, ExerciseSet] = field(default_factory=dict)
    clock: FakeClock = field(default_factory=FakeClock)

    def create_sets(
        self, user_id: UUID, session_id: UUID, sets: list[NewSet]
    ) -> list[ExerciseSet]:
        created = []
        for item in sets:
            exercise_set = ExerciseSet(
                id=uuid4(),
                session_id=session_id,
                user_id=user_id,
                exercise_id=item.exercise_id,
                exercise_name=item.exercise_name,
                set_number=item.set_number,
                reps=item.reps,
                weight=item.weight,
                weight_unit=item.weight_unit,
                is_warmup=item.is_warmup,
                is_completed=item.is_completed,
                created_at=self.clock(),
            )
            self.sets[exercise_set.id] = exercise_set
            created.append(exercise_set)
        return created

    def add(self, item: ExerciseSet) -> None:
        self.sets[item.id] = item

    def get_set(self, set_id: UUID) -> ExerciseSet | None:
        return self.sets.get(set_id)

    def list_sets(self, session_id: UUID) -> list[ExerciseSet]:
        owned = [item for item in self.sets.values() if item.session_id == session_id]
        return sorted(owned, key=lambda item: item.set_number)

    def update_set(self, set_id: UUID, changes: dict[str, object]) -> ExerciseSet:
        updated = replace(self.sets[set_id], **changes)
        self.sets[set_id] = updated
        return updated

    def delete_set(self, set_id: UUID) -> None:
        self.sets.pop(set_id, None)

    def delete_sets_for_session(self, session_id: UUID) -> None:
        for set_id in [
            item.id for item in self.sets.values() if item.session_id == session_id
        ]:
            del self.sets[set_id]

    def max_completed_weight(
        self,
        user_id: UUID,
        exercise_id: str,
        before: datetime | None,
        include_warmups: bool = True,
    ) -> float | None:
        weights = [
            item.weight
            for item in self.list_completed_sets(user_id, exercise_id)
            if (include_warmups or not item.is_warmup)
            and (
                before is None
                or (item.created_at is not None and item.created_at < before)
            )
        ]
        return max(weights, default=None)

    def list_completed_sets(
        self, user_id: UUID, exercise_id: str
    ) -> list[ExerciseSet]:
        return [
            item
            for item in self.sets.values()
            if item.user_id == user_id
            and item.exercise_id == exercise_id
            and item.is_completed
        ]


@dataclass
class InMemoryTemplateRepository(TemplateRepository):
    """In-memory template repository for tests."""

    templates: dict[UUID, WorkoutTemplate] = field(default_factory=dict)

    def create_template(
        self, user_id: UUID, name: str, exercises: list[TemplateExercise]
    ) -> WorkoutTemplate:
        template = WorkoutTemplate(
            id=uuid4(), user_id=user_id, name=name, exercises=list(exercises)
        )
        self.templates[template.id] = template
        return template

    def get_template(self, template_id: UUID) -> WorkoutTemplate | None:
        return self.templates.get(template_id)

    def list_templates(self, user_id: UUID) -> list[WorkoutTemplate]:
        return [t for t in self.templates.values() if t.user_id == user_id]

    def delete_template(self, template_id: UUID) -> None:
        self.templates.pop(template_id, None)


@dataclass
class InMemoryMeasurementRepository(MeasurementRepository):
    """In-memory measurement repository for tests."""

    measurements: list[Measurement] = field(default_factory=list)

    def create_measurement(
        self, user_id: UUID, measurement_type: str, value: float, unit: str
    ) -> Measurement:
        measurement = Measurement(
            id=uuid4(),
            user_id=user_id,
            type=measurement_type,
            value=value,
            unit=unit,
            created_at=datetime.now(tz=UTC),
        )
        self.measurements.append(measurement)
        return measurement

    def get_measurement(self, measurement_id: UUID) -> Measurement | None:
        for item in self.measurements:
            if item.id == measurement_id:
                return item
        return None

    def list_measurements(
        self, user_id: UUID, measurement_type: str | None = None
    ) -> list[Measurement]:
        return [
            item
            for item in reversed(self.measurements)
            if item.user_id == user_id
            and (measurement_type is None or item.type == measurement_type)
        ]

    def delete_measurement(self, measurement_id: UUID) -> None:
        self.measurements = [
            item for item in self.measurements if item.id != measurement_id
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def user_settings_service() -> UserSettingsService:
    return UserSettingsService(InMemoryUserSettingsRepository())


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def set_repository(clock: FakeClock) -> InMemoryExerciseSetRepository:
    return InMemoryExerciseSetRepository(clock=clock)


@pytest.fixture
def session_repository() -> InMemoryWorkoutSessionRepository:
    return InMemoryWorkoutSessionRepository()


@pytest.fixture
def workout_service(
    session_repository: InMemoryWorkoutSessionRepository,
    set_repository: InMemoryExerciseSetRepository,
    user_settings_service: UserSettingsService,
    clock: FakeClock,
) -> WorkoutService:
    return WorkoutService(
        session_repository=session_repository,
        set_repository=set_repository,
        settings_service=user_settings_service,
        clock=clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    user_settings_service: UserSettingsService,
    meal_repository: InMemoryMealRepository,
    workout_service: WorkoutService,
) -> AppContainer:
    profile_service = ProfileService(
        repository=profile_repository,
        energy_config=settings.energy_config(),
        default_targets=default_targets(settings.default_calorie_goal),
    )
    refresh_coordinator = RefreshCoordinator()

    async def close_resources() -> None:
        await refresh_coordinator.cancel_all()

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        user_settings_service=user_settings_service,
        meal_service=MealService(meal_repository, profile_service),
        cardio_service=CardioService(InMemoryCardioRepository(), profile_service),
        stats_service=StatsService(meal_repository),
        workout_service=workout_service,
        template_service=TemplateService(InMemoryTemplateRepository()),
        measurement_service=MeasurementService(
            InMemoryMeasurementRepository(), user_settings_service
        ),
        refresh_coordinator=refresh_coordinator,
        close_resources=close_resources,
    )
