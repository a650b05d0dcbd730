"""Tracking of in-flight path operations with a drain barrier."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

import structlog

logger = structlog.get_logger()


class OperationCoordinator:
    """
    Wait-group for asynchronous add/remove operations.

    Design:
    - ``track()`` launches the operation as a task and registers it as pending
    - A done-callback discards the task on the event loop, so the membership
      test and removal can never interleave
    - ``drain()`` waits for everything pending *at call time*; work tracked
      afterwards is not part of that barrier
    - Operations are never cancelled; failures are logged and swallowed
    """

    def __init__(self) -> None:
        self._pending: set[asyncio.Task[None]] = set()

    def track(self, operation: Awaitable[Any]) -> asyncio.Task[None]:
        """Register ``operation`` as pending and return its settle handle.

        The handle completes (never raises) once the operation has settled
        and been removed from the pending set.
        """
        task = asyncio.create_task(self._settle(operation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _settle(self, operation: Awaitable[Any]) -> None:
        try:
            await operation
        except Exception as e:
            logger.error("tracked_operation_failed", error=str(e), exc_info=True)

    async def drain(self) -> None:
        """Wait until every operation pending right now has settled."""
        pending = set(self._pending)
        if not pending:
            return
        logger.debug("draining_operations", count=len(pending))
        await asyncio.wait(pending)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        """Forget pending handles. The underlying tasks still run to completion."""
        self._pending.clear()
