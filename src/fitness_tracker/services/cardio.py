"""Cardio logging service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.aggregation import aggregate_cardio
from fitness_tracker.domain.cardio import CardioActivity
from fitness_tracker.domain.energy import MET_VALUES, estimate_activity_calories
from fitness_tracker.domain.errors import InvalidEntryError
from fitness_tracker.domain.stats import CardioTotals
from fitness_tracker.services.profiles import ProfileService

MANUAL_CALORIES_ACTIVITY = "other"

_logger = logging.getLogger(__name__)


class CardioRepository(Protocol):
    """Persistence interface for cardio activities."""

    def create_activity(self, user_id: UUID, activity: dict[str, object]) -> CardioActivity:
        """Create a cardio activity row and return it."""

    def list_activities(self, user_id: UUID, day: date) -> list[CardioActivity]:
        """Return a user's activities for a date."""

    def list_recent_activities(self, user_id: UUID, limit: int) -> list[CardioActivity]:
        """Return recent activities, newest first."""


@dataclass
class CardioService:
    """Validates cardio entries and snapshots their calorie burn."""

    repository: CardioRepository
    profile_service: ProfileService

    def estimate(  # noqa: PLR0913
        self,
        user_id: UUID,
        activity_type: str,
        duration_minutes: float,
        distance_km: float | None = None,
        avg_heart_rate: float | None = None,
    ) -> int:
        """Estimate calories using the user's weight and age when known."""
        profile = self.profile_service.get_profile(user_id)
        return estimate_activity_calories(
            activity_type,
            duration_minutes,
            weight_kg=profile.weight_kg if profile else None,
            age=profile.age if profile else None,
            distance_km=distance_km,
            avg_heart_rate=avg_heart_rate,
        )

    def log_activity(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        activity_type: str,
        duration_minutes: int,
        distance_km: float | None = None,
        avg_heart_rate: int | None = None,
        notes: str | None = None,
        manual_calories: int | None = None,
    ) -> CardioActivity:
        """Validate and persist a cardio activity with its calorie snapshot."""
        if activity_type not in MET_VALUES:
            raise InvalidEntryError("Please select a cardio activity")
        if duration_minutes <= 0:
            raise InvalidEntryError("Please enter a valid duration")
        if distance_km is not None and distance_km < 0:
            raise InvalidEntryError("Distance cannot be negative")

        if activity_type == MANUAL_CALORIES_ACTIVITY and manual_calories is not None:
            if manual_calories < 0:
                raise InvalidEntryError("Calories cannot be negative")
            calories = manual_calories
        else:
            calories = self.estimate(
                user_id, activity_type, duration_minutes, distance_km, avg_heart_rate
            )

        payload: dict[str, object] = {
            "date": day,
            "activity_type": activity_type,
            "duration_minutes": duration_minutes,
            "calories_burned": calories,
        }
        if distance_km:
            payload["distance_km"] = distance_km
        if avg_heart_rate:
            payload["avg_heart_rate"] = avg_heart_rate
        if notes and notes.strip():
            payload["notes"] = notes.strip()
        activity = self.repository.create_activity(user_id, payload)
        _logger.info(
            "Logged %s for user %s: %s min, %s kcal",
            activity_type,
            user_id,
            duration_minutes,
            calories,
        )
        return activity

    def list_for_day(self, user_id: UUID, day: date) -> list[CardioActivity]:
        return self.repository.list_activities(user_id, day)

    def day_totals(self, user_id: UUID, day: date) -> CardioTotals:
        return aggregate_cardio(self.repository.list_activities(user_id, day))

    def recent(self, user_id: UUID, limit: int = 20) -> list[CardioActivity]:
        return self.repository.list_recent_activities(user_id, limit)
