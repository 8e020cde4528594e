"""Domain models for cardio logging."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class CardioActivity:
    """A logged cardio activity with its calorie snapshot."""

    id: UUID
    user_id: UUID
    date: date
    activity_type: str
    duration_minutes: int
    calories_burned: int
    distance_km: float | None = None
    avg_heart_rate: int | None = None
    notes: str | None = None
