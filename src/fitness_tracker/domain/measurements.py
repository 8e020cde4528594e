"""Domain models for body measurements."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Measurement:
    """A body measurement in the unit it was recorded in."""

    id: UUID
    user_id: UUID
    type: str
    value: float
    unit: str
    created_at: datetime | None = None
