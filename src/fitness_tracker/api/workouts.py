"""Workout session and template endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from fitness_tracker.api.models import (
    ExercisePayload,
    SetUpdatePayload,
    StartWorkoutPayload,
    TemplatePayload,
)

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["workouts"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/workouts", status_code=status.HTTP_201_CREATED)
async def start_workout(
    user_id: UUID, payload: StartWorkoutPayload, request: Request
) -> dict[str, object]:
    """Start a session, optionally from a saved template."""
    container = _container(request)
    template = None
    if payload.template_id is not None:
        template = container.template_service.get_template(
            user_id, payload.template_id
        )
    session = container.workout_service.start_session(
        user_id, payload.workout_name, template
    )
    return {"session": session}


@router.get("/workouts/active")
async def active_workout(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the active session with its sets, or null."""
    container = _container(request)
    session = container.workout_service.get_active_session(user_id)
    if session is None:
        return {"session": None}
    view = container.workout_service.session_view(user_id, session.id)
    return {
        "session": view.session,
        "sets": view.sets,
        "personal_records": view.personal_records,
        "record_set_ids": sorted(str(set_id) for set_id in view.record_set_ids),
    }


@router.get("/workouts/history")
async def workout_history(
    user_id: UUID, request: Request, limit: int = 20
) -> dict[str, object]:
    container = _container(request)
    return {"sessions": container.workout_service.list_history(user_id, limit)}


@router.get("/workouts/{session_id}/sets")
async def list_sets(
    user_id: UUID, session_id: UUID, request: Request
) -> dict[str, object]:
    container = _container(request)
    return {"sets": container.workout_service.list_sets(user_id, session_id)}


@router.post("/workouts/{session_id}/exercises", status_code=status.HTTP_201_CREATED)
async def add_exercise(
    user_id: UUID, session_id: UUID, payload: ExercisePayload, request: Request
) -> dict[str, object]:
    container = _container(request)
    created = container.workout_service.add_exercise(
        user_id, session_id, payload.exercise_id, payload.exercise_name
    )
    return {"set": created}


@router.post("/workouts/{session_id}/sets", status_code=status.HTTP_201_CREATED)
async def add_set(
    user_id: UUID, session_id: UUID, payload: ExercisePayload, request: Request
) -> dict[str, object]:
    container = _container(request)
    created = container.workout_service.add_set(
        user_id,
        session_id,
        payload.exercise_id,
        payload.exercise_name,
        reps=payload.reps,
    )
    return {"set": created}


@router.patch("/sets/{set_id}")
async def update_set(
    user_id: UUID, set_id: UUID, payload: SetUpdatePayload, request: Request
) -> dict[str, object]:
    container = _container(request)
    updated = container.workout_service.update_set(
        user_id, set_id, payload.model_dump(exclude_none=True)
    )
    return {"set": updated}


@router.delete("/sets/{set_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_set(user_id: UUID, set_id: UUID, request: Request) -> None:
    container = _container(request)
    container.workout_service.delete_set(user_id, set_id)


@router.post("/workouts/{session_id}/finish")
async def finish_workout(
    user_id: UUID, session_id: UUID, request: Request
) -> dict[str, object]:
    """Finish a session and report duration, volume and new records."""
    container = _container(request)
    summary = container.workout_service.finish_session(user_id, session_id)
    return {
        "session": summary.session,
        "incomplete_sets": summary.incomplete_sets,
        "new_records": summary.new_records,
        "record_count": summary.record_count,
    }


@router.post("/workouts/{session_id}/cancel", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_workout(user_id: UUID, session_id: UUID, request: Request) -> None:
    container = _container(request)
    container.workout_service.cancel_session(user_id, session_id)


@router.get("/exercises/{exercise_id}/stats")
async def exercise_stats(
    user_id: UUID, exercise_id: str, request: Request
) -> dict[str, object]:
    container = _container(request)
    return {"stats": container.workout_service.exercise_stats(user_id, exercise_id)}


@router.get("/templates")
async def list_templates(user_id: UUID, request: Request) -> dict[str, object]:
    container = _container(request)
    return {"templates": container.template_service.list_templates(user_id)}


@router.post("/templates", status_code=status.HTTP_201_CREATED)
async def create_template(
    user_id: UUID, payload: TemplatePayload, request: Request
) -> dict[str, object]:
    container = _container(request)
    template = container.template_service.create_template(
        user_id,
        payload.name,
        [exercise.to_domain() for exercise in payload.exercises],
    )
    return {"template": template}


@router.delete("/templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(user_id: UUID, template_id: UUID, request: Request) -> None:
    container = _container(request)
    container.template_service.delete_template(user_id, template_id)
