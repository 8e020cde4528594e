"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.units import Unit, weight_unit


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_use_metric_units(self, user_id: UUID) -> bool | None:
        """Return the user's unit preference if set."""

    def set_use_metric_units(self, user_id: UUID, use_metric_units: bool) -> None:
        """Update the user's unit preference."""

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the user's timezone if set."""

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository

    def uses_metric_units(self, user_id: UUID) -> bool:
        """Return the unit preference, metric when unset."""
        value = self.repository.get_use_metric_units(user_id)
        return True if value is None else value

    def set_use_metric_units(self, user_id: UUID, use_metric_units: bool) -> None:
        """Persist a user's unit preference."""
        self.repository.set_use_metric_units(user_id, use_metric_units)

    def weight_unit(self, user_id: UUID) -> Unit:
        return weight_unit(self.uses_metric_units(user_id))

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or UTC if unset."""
        return self.repository.get_timezone(user_id) or "UTC"

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        self.repository.set_timezone(user_id, timezone)
