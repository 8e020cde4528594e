"""Stateless calculation endpoints."""

from fastapi import APIRouter, HTTPException, Request, status

from fitness_tracker.api.models import CardioEstimatePayload, TargetsPayload
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.energy import (
    CARDIO_ACTIVITIES,
    MET_VALUES,
    estimate_activity_calories,
    hourly_estimate,
    profile_from_row,
)
from fitness_tracker.domain.errors import MissingInputError
from fitness_tracker.domain.macros import nutrition_targets

router = APIRouter(prefix="/calculate", tags=["calculate"])


@router.post("/targets")
async def calculate_targets(
    payload: TargetsPayload, request: Request
) -> dict[str, object]:
    """Return nutrition targets, falling back to defaults on missing inputs."""
    container: AppContainer = request.app.state.container
    profile_service = container.profile_service
    try:
        profile = profile_from_row(payload.model_dump())
    except MissingInputError as exc:
        return {
            "targets": profile_service.default_targets,
            "is_default": True,
            "missing": exc.fields,
        }
    return {
        "targets": nutrition_targets(
            profile, profile_service.energy_config, profile_service.default_targets
        ),
        "is_default": False,
        "missing": [],
    }


@router.post("/cardio")
async def calculate_cardio(payload: CardioEstimatePayload) -> dict[str, object]:
    """Estimate calories burned for an activity."""
    if payload.activity_type not in MET_VALUES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown activity: {payload.activity_type}",
        )
    calories = estimate_activity_calories(
        payload.activity_type,
        payload.duration_minutes,
        weight_kg=payload.weight_kg,
        age=payload.age,
        distance_km=payload.distance_km,
        avg_heart_rate=payload.avg_heart_rate,
    )
    return {
        "calories": calories,
        "per_hour": hourly_estimate(payload.activity_type, payload.weight_kg),
    }


@router.get("/activities")
async def list_activities() -> dict[str, object]:
    """Return the supported cardio activities."""
    return {"activities": list(CARDIO_ACTIVITIES)}
