"""Supabase repository for body measurements."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.measurements import Measurement
from fitness_tracker.services.measurements import MeasurementRepository

_MEASUREMENT_COLUMNS = "id, user_id, type, value, unit, created_at"


@dataclass
class SupabaseMeasurementRepository(MeasurementRepository):
    """Supabase implementation for body measurements."""

    client: Client

    def create_measurement(
        self, user_id: UUID, measurement_type: str, value: float, unit: str
    ) -> Measurement:
        """Create a measurement row and return it."""
        response = (
            self.client.table("measurements")
            .insert(
                {
                    "user_id": str(user_id),
                    "type": measurement_type,
                    "value": value,
                    "unit": unit,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create measurement")
        return _parse_measurement(response.data[0])

    def get_measurement(self, measurement_id: UUID) -> Measurement | None:
        """Return a measurement by id."""
        response = (
            self.client.table("measurements")
            .select(_MEASUREMENT_COLUMNS)
            .eq("id", str(measurement_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_measurement(response.data[0])

    def list_measurements(
        self, user_id: UUID, measurement_type: str | None = None
    ) -> list[Measurement]:
        """Return measurements newest first, optionally for one type."""
        query = (
            self.client.table("measurements")
            .select(_MEASUREMENT_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if measurement_type is not None:
            query = query.eq("type", measurement_type)
        response = query.order("created_at", desc=True).execute()
        return [_parse_measurement(row) for row in response.data or []]

    def delete_measurement(self, measurement_id: UUID) -> None:
        """Delete a measurement row."""
        self.client.table("measurements").delete().eq(
            "id", str(measurement_id)
        ).execute()


def _parse_measurement(row: dict[str, object]) -> Measurement:
    created_at = row.get("created_at")
    return Measurement(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        type=str(row["type"]),
        value=float(row["value"]),
        unit=str(row["unit"]),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )
