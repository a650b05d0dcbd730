"""Workspace tracker: keeps the set of workspace paths current and publishes it."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog

from workspacetrack.config.models import TrackerConfig
from workspacetrack.core.errors import TrackerError
from workspacetrack.core.logging import clear_batch_id, set_batch_id
from workspacetrack.tracker.coordinator import OperationCoordinator
from workspacetrack.tracker.debounce import DebounceScheduler
from workspacetrack.tracker.emitter import MessageChannel, SnapshotEmitter
from workspacetrack.tracker.events import (
    EventHub,
    FileCreateEvent,
    FileDeleteEvent,
    FileRenameEvent,
    WorkspaceEvent,
)
from workspacetrack.tracker.listing import list_files
from workspacetrack.tracker.paths import normalize_path, normalize_root
from workspacetrack.tracker.resolver import PathResolver, Probe, stat_probe
from workspacetrack.tracker.tracked_set import TrackedSet

logger = structlog.get_logger()

ListFiles = Callable[..., tuple[list[str], bool]]


@dataclass
class WorkspaceTracker:
    """
    Tracks workspace paths from create/delete/rename events.

    Design:
    - The root is fixed at construction; ``None`` means no workspace and
      turns scanning and emission into no-ops
    - All set mutations run on the event loop between awaits, which is the
      single serialization point
    - Every event handler routes its work through the OperationCoordinator,
      then asks the DebounceScheduler for an update
    - The scheduler drains pending work before the SnapshotEmitter runs
    - Nothing raised while handling an event reaches the event source
    """

    workspace_root: os.PathLike[str] | str | None
    channel: MessageChannel
    hub: EventHub = field(default_factory=EventHub)
    config: TrackerConfig = field(default_factory=TrackerConfig)
    list_files: ListFiles = list_files
    probe: Probe = stat_probe

    _root: str | None = field(init=False)
    _resolver: PathResolver = field(init=False)
    _tracked: TrackedSet = field(default_factory=TrackedSet, init=False)
    _coordinator: OperationCoordinator = field(default_factory=OperationCoordinator, init=False)
    _emitter: SnapshotEmitter = field(init=False)
    _scheduler: DebounceScheduler = field(init=False)
    _unsubscribers: list[Callable[[], None]] = field(default_factory=list, init=False)
    _disposed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self._root = (
            normalize_root(self.workspace_root) if self.workspace_root is not None else None
        )
        self._resolver = PathResolver(self._root, probe=self.probe)
        self._emitter = SnapshotEmitter(self.channel)
        self._scheduler = DebounceScheduler(
            self._coordinator,
            self._workspace_did_update,
            delay=self.config.debounce_seconds,
        )

    @property
    def root(self) -> str | None:
        return self._root

    @property
    def tracked(self) -> TrackedSet:
        return self._tracked

    @property
    def scheduler(self) -> DebounceScheduler:
        return self._scheduler

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def initialize(self) -> None:
        """Seed the set from a bounded listing, then subscribe to live events.

        A failed or truncated listing is logged; listeners are registered
        either way.

        Raises:
            TrackerError: If the tracker has already been disposed.
        """
        if self._disposed:
            raise TrackerError.disposed("initialize")

        if self._root is not None:
            try:
                await self._seed(self._root)
            except Exception as e:
                logger.error("initialize_failed", root=self._root, error=str(e))

        self._register_listeners()

    async def _seed(self, root: str) -> None:
        limit = self.config.initial_scan_limit
        loop = asyncio.get_running_loop()
        files, has_more = await loop.run_in_executor(
            None, lambda: self.list_files(root, recursive=True, limit=limit)
        )

        if has_more:
            logger.warning("listing_truncated", root=root, limit=limit)

        batch_size = self.config.initial_scan_batch_size
        for start in range(0, len(files), batch_size):
            batch = files[start : start + batch_size]
            await asyncio.gather(*(self._add_path(path) for path in batch))

        logger.info("workspace_seeded", root=root, count=len(self._tracked))
        await self._schedule_update()

    def _register_listeners(self) -> None:
        if self._unsubscribers:
            return
        self._unsubscribers.append(self.hub.subscribe(self._on_event))

    async def _on_event(self, event: WorkspaceEvent) -> None:
        if self._disposed:
            return
        set_batch_id()
        try:
            if isinstance(event, FileCreateEvent):
                await self.on_files_created(event)
            elif isinstance(event, FileDeleteEvent):
                await self.on_files_deleted(event)
            elif isinstance(event, FileRenameEvent):
                await self.on_files_renamed(event)
        finally:
            clear_batch_id()

    async def on_files_created(self, event: FileCreateEvent) -> None:
        logger.debug("files_created", count=len(event.files))
        await self._handle_file_operations(
            self._coordinator.track(self._add_path(path)) for path in event.files
        )

    async def on_files_deleted(self, event: FileDeleteEvent) -> None:
        logger.debug("files_deleted", count=len(event.files))
        await self._handle_file_operations(
            self._coordinator.track(self._remove_path(path)) for path in event.files
        )

    async def on_files_renamed(self, event: FileRenameEvent) -> None:
        logger.debug("files_renamed", count=len(event.files))
        # Remove and add are independent operations, not one atomic swap
        await self._handle_file_operations(
            self._coordinator.track(
                asyncio.gather(
                    self._remove_path(rename.old_path),
                    self._add_path(rename.new_path),
                )
            )
            for rename in event.files
        )

    async def _handle_file_operations(self, operations: Iterable[asyncio.Task[None]]) -> None:
        try:
            await asyncio.gather(*operations)
            await self._schedule_update()
        except Exception as e:
            logger.error("file_operations_failed", error=str(e), exc_info=True)

    async def _add_path(self, raw: str) -> None:
        resolved = await self._resolver.resolve(raw)
        if self._disposed:
            return
        self._tracked.add(resolved.key)

    async def _remove_path(self, raw: str) -> None:
        self._tracked.remove(normalize_path(raw, self._root))

    def _schedule_update(self) -> asyncio.Future[None]:
        return self._scheduler.request_update()

    async def _workspace_did_update(self) -> Any:
        if self._disposed:
            return None
        return await self._emitter.emit(self._tracked, self._root)

    def dispose(self) -> None:
        """Cancel pending updates, unsubscribe and clear state. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        self._scheduler.cancel()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self._tracked.clear()
        self._coordinator.clear()
        logger.info("workspace_tracker_disposed", root=self._root)
