"""Profile, meal, cardio and stats endpoints."""

from __future__ import annotations

import asyncio
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from fitness_tracker.api.models import (
    CardioPayload,
    CustomMealPayload,
    MealPayload,
    ProfilePayload,
)

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["nutrition"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/profile")
async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's biometric profile, or null before setup."""
    container = _container(request)
    return {"profile": container.profile_service.get_profile(user_id)}


@router.put("/profile")
async def save_profile(
    user_id: UUID, payload: ProfilePayload, request: Request
) -> dict[str, object]:
    """Store the profile and return the targets derived from it."""
    container = _container(request)
    container.profile_service.save_profile(user_id, payload.to_domain())
    return {"targets": container.profile_service.get_targets(user_id)}


@router.get("/targets")
async def get_targets(user_id: UUID, request: Request) -> dict[str, object]:
    container = _container(request)
    return {"targets": container.profile_service.get_targets(user_id)}


@router.get("/meals")
async def list_meals(user_id: UUID, day: date, request: Request) -> dict[str, object]:
    container = _container(request)
    return {"meals": container.meal_service.list_meals(user_id, day)}


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def log_meal(
    user_id: UUID, payload: MealPayload, request: Request
) -> dict[str, object]:
    """Log a food portion by servings or grams."""
    container = _container(request)
    entry = container.meal_service.log_food(
        user_id,
        payload.date,
        payload.food.to_domain(),
        servings=payload.servings,
        grams=payload.grams,
        meal_type=payload.meal_type,
    )
    return {"meal": entry}


@router.post("/meals/custom", status_code=status.HTTP_201_CREATED)
async def log_custom_meal(
    user_id: UUID, payload: CustomMealPayload, request: Request
) -> dict[str, object]:
    container = _container(request)
    entry = container.meal_service.log_custom(
        user_id,
        payload.date,
        payload.name,
        payload.calories,
        protein_g=payload.protein_g,
        fats_g=payload.fats_g,
        carbs_g=payload.carbs_g,
        meal_type=payload.meal_type,
    )
    return {"meal": entry}


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(user_id: UUID, meal_id: UUID, request: Request) -> None:
    container = _container(request)
    container.meal_service.delete_meal(user_id, meal_id)


@router.get("/summary")
async def day_summary(user_id: UUID, day: date, request: Request) -> dict[str, object]:
    """Return consumed totals, goals and progress for a date.

    A newer request for the same user replaces one still loading.
    """
    container = _container(request)

    async def load() -> dict[str, object]:
        summary, cardio = await asyncio.gather(
            asyncio.to_thread(container.meal_service.day_summary, user_id, day),
            asyncio.to_thread(container.cardio_service.day_totals, user_id, day),
        )
        return {"summary": summary, "cardio": cardio}

    return await container.refresh_coordinator.run(user_id, "summary", load)


@router.get("/cardio")
async def list_cardio(user_id: UUID, day: date, request: Request) -> dict[str, object]:
    container = _container(request)
    return {
        "activities": container.cardio_service.list_for_day(user_id, day),
        "totals": container.cardio_service.day_totals(user_id, day),
    }


@router.post("/cardio", status_code=status.HTTP_201_CREATED)
async def log_cardio(
    user_id: UUID, payload: CardioPayload, request: Request
) -> dict[str, object]:
    """Log a cardio activity with its estimated calorie burn."""
    container = _container(request)
    activity = container.cardio_service.log_activity(
        user_id,
        payload.date,
        payload.activity_type,
        payload.duration_minutes,
        distance_km=payload.distance_km,
        avg_heart_rate=payload.avg_heart_rate,
        notes=payload.notes,
        manual_calories=payload.manual_calories,
    )
    return {"activity": activity}


@router.get("/cardio/recent")
async def recent_cardio(
    user_id: UUID, request: Request, limit: int = 20
) -> dict[str, object]:
    """Return the most recent cardio activities across all days."""
    container = _container(request)
    return {"activities": container.cardio_service.recent(user_id, limit)}


@router.get("/stats/{period}")
async def stats(user_id: UUID, period: str, request: Request) -> dict[str, object]:
    """Return today, week or month totals in the user's timezone."""
    container = _container(request)
    timezone_name = container.user_settings_service.get_timezone(user_id)
    loaders = {
        "today": container.stats_service.get_today,
        "week": container.stats_service.get_week,
        "month": container.stats_service.get_month,
    }
    loader = loaders.get(period)
    if loader is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown period: {period}"
        )

    async def load() -> dict[str, object]:
        result = await asyncio.to_thread(loader, user_id, timezone_name)
        return {"period": period, "stats": result}

    return await container.refresh_coordinator.run(user_id, f"stats:{period}", load)


@router.get("/history")
async def history(
    user_id: UUID, request: Request, limit: int = 10
) -> dict[str, object]:
    container = _container(request)
    return {"meals": container.stats_service.get_history(user_id, limit)}
