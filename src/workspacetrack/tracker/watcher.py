"""File watcher using watchfiles for async filesystem monitoring.

Design:
- One recursive ``awatch`` over the workspace root
- Changes inside hardcoded/prunable directories are filtered out
- ``added`` becomes a FileCreateEvent, ``deleted`` a FileDeleteEvent;
  modifications do not change membership and are dropped
- watchfiles has no rename notion, a rename arrives as delete + add
- Events are published without waiting for listeners, so the watch loop
  keeps draining notifications while the tracker debounces
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field
from pathlib import Path

import structlog
from watchfiles import Change, awatch

from workspacetrack.config.models import WatcherConfig
from workspacetrack.core.excludes import should_prune_dir
from workspacetrack.tracker.events import (
    EventHub,
    FileCreateEvent,
    FileDeleteEvent,
    WorkspaceEvent,
)

logger = structlog.get_logger()


def changes_to_events(changes: set[tuple[Change, str]]) -> list[WorkspaceEvent]:
    """Group a watchfiles batch into tracker events, deletions first."""
    created = sorted(path for change, path in changes if change == Change.added)
    deleted = sorted(path for change, path in changes if change == Change.deleted)

    events: list[WorkspaceEvent] = []
    if deleted:
        events.append(FileDeleteEvent(files=tuple(deleted)))
    if created:
        events.append(FileCreateEvent(files=tuple(created)))
    return events


@dataclass
class FileWatcher:
    """Publishes filesystem changes under ``root`` onto an EventHub."""

    root: Path
    hub: EventHub
    config: WatcherConfig = field(default_factory=WatcherConfig)

    _watch_task: asyncio.Task[None] | None = field(default=None, init=False)
    _stop_event: asyncio.Event = field(default_factory=asyncio.Event, init=False)
    _publish_tasks: set[asyncio.Task[None]] = field(default_factory=set, init=False)

    def watch_filter(self, change: Change, path: str) -> bool:
        """watchfiles filter: keep membership changes outside pruned directories."""
        if change == Change.modified:
            return False
        try:
            rel_parts = Path(path).relative_to(self.root).parts
        except ValueError:
            return False
        # A pruned name anywhere in the path, the entry included, drops it
        return not any(
            should_prune_dir(part, respect_prunable_dirs=self.config.respect_prunable_dirs)
            for part in rel_parts
        )

    async def start(self) -> None:
        """Start watching for file changes."""
        if self._watch_task is not None:
            return
        self._stop_event.clear()
        self._watch_task = asyncio.create_task(self._watch_loop())
        logger.info(
            "file_watcher_started",
            root=str(self.root),
            step_ms=self.config.step_ms,
            debounce_ms=self.config.debounce_ms,
        )

    async def stop(self) -> None:
        """Stop watching and wait for in-flight publishes."""
        self._stop_event.set()

        if self._watch_task is not None:
            self._watch_task.cancel()
            with contextlib.suppress(asyncio.CancelledError, asyncio.TimeoutError):
                await asyncio.wait_for(self._watch_task, timeout=2.0)
            self._watch_task = None

        if self._publish_tasks:
            await asyncio.gather(*self._publish_tasks, return_exceptions=True)

        logger.info("file_watcher_stopped")

    async def _watch_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                try:
                    async for changes in awatch(
                        self.root,
                        watch_filter=self.watch_filter,
                        debounce=self.config.debounce_ms,
                        step=self.config.step_ms,
                        stop_event=self._stop_event,
                        ignore_permission_denied=True,
                    ):
                        self._publish_changes(changes)
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    if self._stop_event.is_set():
                        return
                    logger.error("watcher_error", error=str(e))
                    # Brief backoff before retry
                    await asyncio.sleep(1.0)
        except asyncio.CancelledError:
            pass

    def _publish_changes(self, changes: set[tuple[Change, str]]) -> None:
        events = changes_to_events(changes)
        if not events:
            return
        logger.info("changes_detected", count=len(changes))
        for event in events:
            task = asyncio.create_task(self.hub.publish(event))
            self._publish_tasks.add(task)
            task.add_done_callback(self._publish_tasks.discard)
