"""Trailing-edge debounce of workspace update emissions."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

import structlog

from workspacetrack.tracker.coordinator import OperationCoordinator

logger = structlog.get_logger()

DEFAULT_DEBOUNCE_SEC = 0.1


class SchedulerState(Enum):
    """Debounce scheduler state."""

    IDLE = "idle"
    PENDING = "pending"


class DebounceScheduler:
    """
    Collapses bursts of update requests into one emission.

    Design:
    - Each ``request_update()`` cancels the sleeping timer task and starts a
      new one, so only the latest request's deadline matters
    - Every request joins the current window and gets a future that resolves
      when that window's emission has finished
    - When the timer fires: drain the coordinator, then emit
    - Once a timer has fired its emission is never cancelled; later
      requests open a new window
    """

    def __init__(
        self,
        coordinator: OperationCoordinator,
        emit: Callable[[], Awaitable[Any]],
        delay: float = DEFAULT_DEBOUNCE_SEC,
    ) -> None:
        self.delay = delay
        self._coordinator = coordinator
        self._emit = emit
        self._timer: asyncio.Task[None] | None = None
        self._waiters: list[asyncio.Future[None]] = []
        # Strong references; the event loop only keeps weak ones
        self._tasks: set[asyncio.Task[None]] = set()
        self._emission_count = 0

    @property
    def state(self) -> SchedulerState:
        if self._timer is not None and not self._timer.done():
            return SchedulerState.PENDING
        return SchedulerState.IDLE

    @property
    def emission_count(self) -> int:
        return self._emission_count

    def request_update(self) -> asyncio.Future[None]:
        """(Re)start the quiescence timer.

        Returns a future resolved after the coalesced emission that covers
        this request has completed.
        """
        loop = asyncio.get_running_loop()

        if self._timer is not None and not self._timer.done():
            self._timer.cancel()

        waiter: asyncio.Future[None] = loop.create_future()
        self._waiters.append(waiter)

        self._timer = loop.create_task(self._debounced_fire())
        self._tasks.add(self._timer)
        self._timer.add_done_callback(self._tasks.discard)
        return waiter

    async def _debounced_fire(self) -> None:
        """Wait out the quiescence window, then run the emission sequence."""
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            return

        # Detach from the timer slot before the first await below, so a
        # request arriving mid-emission starts a fresh window
        waiters, self._waiters = self._waiters, []
        self._timer = None

        try:
            await self._coordinator.drain()
            await self._emit()
            self._emission_count += 1
        except Exception as e:
            logger.error("workspace_update_failed", error=str(e), exc_info=True)
        finally:
            _resolve(waiters)

    def cancel(self) -> None:
        """Cancel a pending timer without emitting.

        Callers waiting on the abandoned window are released.
        """
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
        waiters, self._waiters = self._waiters, []
        _resolve(waiters)


def _resolve(waiters: list[asyncio.Future[None]]) -> None:
    for waiter in waiters:
        if not waiter.done():
            waiter.set_result(None)
