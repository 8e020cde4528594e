"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fitness_tracker.api.body import router as body_router
from fitness_tracker.api.calculators import router as calculators_router
from fitness_tracker.api.nutrition import router as nutrition_router
from fitness_tracker.api.workouts import router as workouts_router
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.errors import (
    ConcurrentSessionConflict,
    FitnessTrackerError,
    InvalidEntryError,
    MissingInputError,
    NotFoundError,
    SessionNotActiveError,
    SupersededError,
    UnitConversionError,
)

_ERROR_STATUS: dict[type[FitnessTrackerError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConcurrentSessionConflict: status.HTTP_409_CONFLICT,
    SessionNotActiveError: status.HTTP_409_CONFLICT,
    SupersededError: status.HTTP_409_CONFLICT,
    InvalidEntryError: 422,
    MissingInputError: 422,
    UnitConversionError: 422,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting in %s environment", container.settings.environment)
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(nutrition_router)
    app.include_router(workouts_router)
    app.include_router(body_router)
    app.include_router(calculators_router)

    @app.exception_handler(FitnessTrackerError)
    async def domain_error(_request: Request, exc: FitnessTrackerError) -> JSONResponse:
        status_code = _error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Unhandled domain error: %s", exc)
        else:
            logger.info("%s: %s", type(exc).__name__, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_status(exc: FitnessTrackerError) -> int:
    for error_type in type(exc).__mro__:
        code = _ERROR_STATUS.get(error_type)
        if code is not None:
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
