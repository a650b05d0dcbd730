"""Create/delete/rename notifications and the in-process hub that carries them."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class FileCreateEvent:
    """One or more paths were created."""

    files: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class FileDeleteEvent:
    """One or more paths were deleted."""

    files: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class FileRename:
    old_path: str
    new_path: str


@dataclass(frozen=True, slots=True)
class FileRenameEvent:
    """One or more paths were renamed."""

    files: tuple[FileRename, ...]


WorkspaceEvent = FileCreateEvent | FileDeleteEvent | FileRenameEvent
Listener = Callable[[WorkspaceEvent], Awaitable[None]]


class EventHub:
    """Fan-out of workspace events to async listeners.

    Listener failures are logged and never reach the publisher.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def publish(self, event: WorkspaceEvent) -> None:
        """Deliver ``event`` to every listener and wait for them to finish."""
        listeners = list(self._listeners)
        if not listeners:
            return
        results = await asyncio.gather(
            *(listener(event) for listener in listeners),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.error(
                    "event_listener_failed",
                    event_type=type(event).__name__,
                    error=str(result),
                )
