"""Supersedable asynchronous loads."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar
from uuid import UUID

from fitness_tracker.domain.errors import SupersededError

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@dataclass
class RefreshCoordinator:
    """Runs at most one load per (user, view); a newer load cancels the older.

    The cancelled caller receives SupersededError instead of stale data.
    """

    _inflight: dict[tuple[UUID, str], asyncio.Task] = field(
        default_factory=dict, init=False, repr=False
    )

    async def run(
        self, user_id: UUID, view: str, load: Callable[[], Awaitable[T]]
    ) -> T:
        key = (user_id, view)
        previous = self._inflight.get(key)
        if previous is not None and not previous.done():
            _logger.debug("Superseding %s load for user %s", view, user_id)
            previous.cancel()
        task = asyncio.ensure_future(load())
        self._inflight[key] = task
        try:
            return await task
        except asyncio.CancelledError as exc:
            if task.cancelled() and self._inflight.get(key) is not task:
                raise SupersededError(f"{view} load was superseded") from exc
            raise
        finally:
            if self._inflight.get(key) is task:
                del self._inflight[key]

    def pending(self, user_id: UUID, view: str) -> bool:
        task = self._inflight.get((user_id, view))
        return task is not None and not task.done()

    async def cancel_all(self) -> None:
        """Cancel every in-flight load, used on shutdown."""
        tasks = [task for task in self._inflight.values() if not task.done()]
        for task in tasks:
            task.cancel()
        self._inflight.clear()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
