"""Measurement and settings endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, HTTPException, Request, status

from fitness_tracker.api.models import (
    HeightPayload,
    MeasurementPayload,
    SettingsPayload,
)

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["body"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/measurements")
async def latest_measurements(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the newest measurement of each type in the preferred units."""
    container = _container(request)
    service = container.measurement_service
    height = service.height_feet_inches(user_id)
    return {
        "measurements": service.latest(user_id),
        "height_feet_inches": (
            {"feet": height[0], "inches": height[1]} if height else None
        ),
    }


@router.get("/measurements/{measurement_type}")
async def measurement_history(
    user_id: UUID, measurement_type: str, request: Request
) -> dict[str, object]:
    container = _container(request)
    return {
        "measurements": container.measurement_service.history(
            user_id, measurement_type
        )
    }


@router.post("/measurements", status_code=status.HTTP_201_CREATED)
async def log_measurement(
    user_id: UUID, payload: MeasurementPayload, request: Request
) -> dict[str, object]:
    container = _container(request)
    measurement = container.measurement_service.log_measurement(
        user_id, payload.type, payload.value, payload.unit
    )
    return {"measurement": measurement}


@router.post("/measurements/height", status_code=status.HTTP_201_CREATED)
async def log_height(
    user_id: UUID, payload: HeightPayload, request: Request
) -> dict[str, object]:
    """Log a height entered as feet and inches."""
    container = _container(request)
    measurement = container.measurement_service.log_height_feet_inches(
        user_id, payload.feet, payload.inches
    )
    return {"measurement": measurement}


@router.delete(
    "/measurements/entry/{measurement_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_measurement(
    user_id: UUID, measurement_id: UUID, request: Request
) -> None:
    container = _container(request)
    container.measurement_service.delete_measurement(user_id, measurement_id)


@router.get("/settings")
async def get_settings(user_id: UUID, request: Request) -> dict[str, object]:
    container = _container(request)
    service = container.user_settings_service
    return {
        "use_metric_units": service.uses_metric_units(user_id),
        "weight_unit": service.weight_unit(user_id),
        "timezone": service.get_timezone(user_id),
    }


@router.put("/settings")
async def update_settings(
    user_id: UUID, payload: SettingsPayload, request: Request
) -> dict[str, object]:
    """Update the unit preference and timezone."""
    container = _container(request)
    service = container.user_settings_service
    if payload.timezone is not None:
        try:
            ZoneInfo(payload.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise HTTPException(
                status_code=422,
                detail=f"Unknown timezone: {payload.timezone}",
            ) from exc
        service.set_timezone(user_id, payload.timezone)
    if payload.use_metric_units is not None:
        service.set_use_metric_units(user_id, payload.use_metric_units)
    return await get_settings(user_id, request)
