"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

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
from fitness_tracker.config import Settings
from fitness_tracker.domain.macros import default_targets
from fitness_tracker.services.cardio import CardioService
from fitness_tracker.services.meals import MealService
from fitness_tracker.services.measurements import MeasurementService
from fitness_tracker.services.profiles import ProfileService
from fitness_tracker.services.refresh import RefreshCoordinator
from fitness_tracker.services.stats import StatsService
from fitness_tracker.services.templates import TemplateService
from fitness_tracker.services.user_settings import UserSettingsService
from fitness_tracker.services.workouts import WorkoutService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    user_settings_service: UserSettingsService
    meal_service: MealService
    cardio_service: CardioService
    stats_service: StatsService
    workout_service: WorkoutService
    template_service: TemplateService
    measurement_service: MeasurementService
    refresh_coordinator: RefreshCoordinator
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    user_settings_service = UserSettingsService(
        SupabaseUserSettingsRepository(supabase_client)
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        energy_config=resolved_settings.energy_config(),
        default_targets=default_targets(resolved_settings.default_calorie_goal),
    )
    refresh_coordinator = RefreshCoordinator()

    async def close_resources() -> None:
        await refresh_coordinator.cancel_all()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        user_settings_service=user_settings_service,
        meal_service=MealService(meal_repository, profile_service),
        cardio_service=CardioService(
            SupabaseCardioRepository(supabase_client), profile_service
        ),
        stats_service=StatsService(meal_repository),
        workout_service=WorkoutService(
            session_repository=SupabaseWorkoutSessionRepository(supabase_client),
            set_repository=SupabaseExerciseSetRepository(supabase_client),
            settings_service=user_settings_service,
            count_warmups_for_records=resolved_settings.pr_count_warmups,
        ),
        template_service=TemplateService(SupabaseTemplateRepository(supabase_client)),
        measurement_service=MeasurementService(
            SupabaseMeasurementRepository(supabase_client), user_settings_service
        ),
        refresh_coordinator=refresh_coordinator,
        close_resources=close_resources,
    )
