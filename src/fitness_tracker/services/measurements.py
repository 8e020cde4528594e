"""Body measurement service."""

from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import InvalidEntryError, NotFoundError
from fitness_tracker.domain.measurements import Measurement
from fitness_tracker.domain.units import (
    MEASUREMENT_TYPES,
    Unit,
    convert,
    join_feet_inches,
    measurement_unit,
    parse_unit,
    split_feet_inches,
)
from fitness_tracker.services.user_settings import UserSettingsService

MAX_BODY_FAT_PERCENT = 100.0


class MeasurementRepository(Protocol):
    """Persistence interface for body measurements."""

    def create_measurement(
        self, user_id: UUID, measurement_type: str, value: float, unit: str
    ) -> Measurement:
        """Create a measurement row and return it."""

    def get_measurement(self, measurement_id: UUID) -> Measurement | None:
        """Return a measurement by id."""

    def list_measurements(
        self, user_id: UUID, measurement_type: str | None = None
    ) -> list[Measurement]:
        """Return measurements newest first, optionally for one type."""

    def delete_measurement(self, measurement_id: UUID) -> None:
        """Delete a measurement row."""


@dataclass
class MeasurementService:
    """Records measurements and reads them back in the preferred unit system."""

    repository: MeasurementRepository
    settings_service: UserSettingsService

    def log_measurement(
        self,
        user_id: UUID,
        measurement_type: str,
        value: float,
        unit: str | None = None,
    ) -> Measurement:
        """Store a measurement in the given unit, or the user's default one."""
        if measurement_type not in MEASUREMENT_TYPES:
            raise InvalidEntryError(f"Unknown measurement type: {measurement_type}")
        if value <= 0:
            raise InvalidEntryError("Measurement value must be positive")
        expected = measurement_unit(
            measurement_type, self.settings_service.uses_metric_units(user_id)
        )
        recorded = parse_unit(unit) if unit else expected
        # Raises UnitConversionError when the unit is the wrong dimension.
        convert(value, recorded, expected)
        if recorded is Unit.PERCENT and value > MAX_BODY_FAT_PERCENT:
            raise InvalidEntryError("Body fat cannot exceed 100%")
        return self.repository.create_measurement(
            user_id, measurement_type, value, str(recorded)
        )

    def log_height_feet_inches(
        self, user_id: UUID, feet: int, inches: int
    ) -> Measurement:
        """Store a feet and inches height as decimal feet."""
        total = join_feet_inches(feet, inches)
        if total is None:
            raise InvalidEntryError("Please enter a height")
        return self.repository.create_measurement(user_id, "Height", total, "ft")

    def latest(self, user_id: UUID) -> dict[str, Measurement]:
        """Return the newest measurement per type in the preferred units."""
        latest: dict[str, Measurement] = {}
        for item in self.repository.list_measurements(user_id):
            latest.setdefault(item.type, item)
        use_metric = self.settings_service.uses_metric_units(user_id)
        return {
            key: _to_preferred(item, use_metric) for key, item in latest.items()
        }

    def height_feet_inches(self, user_id: UUID) -> tuple[int, float] | None:
        """Return the newest height as whole feet and inches."""
        heights = self.repository.list_measurements(user_id, "Height")
        if not heights:
            return None
        newest = heights[0]
        return split_feet_inches(convert(newest.value, newest.unit, Unit.CM))

    def history(self, user_id: UUID, measurement_type: str) -> list[Measurement]:
        """Return a type's measurements newest first in the preferred units."""
        use_metric = self.settings_service.uses_metric_units(user_id)
        return [
            _to_preferred(item, use_metric)
            for item in self.repository.list_measurements(user_id, measurement_type)
        ]

    def delete_measurement(self, user_id: UUID, measurement_id: UUID) -> None:
        item = self.repository.get_measurement(measurement_id)
        if item is None or item.user_id != user_id:
            raise NotFoundError(f"Measurement {measurement_id} not found")
        self.repository.delete_measurement(measurement_id)


def _to_preferred(item: Measurement, use_metric: bool) -> Measurement:
    target = measurement_unit(item.type, use_metric)
    if item.unit == target:
        return item
    value = round(convert(item.value, item.unit, target), 2)
    return replace(item, value=value, unit=str(target))
