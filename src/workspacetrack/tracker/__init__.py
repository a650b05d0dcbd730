"""Workspace path tracking: normalization, coordination, debouncing, emission."""

from workspacetrack.tracker.coordinator import OperationCoordinator
from workspacetrack.tracker.debounce import DebounceScheduler, SchedulerState
from workspacetrack.tracker.emitter import MessageChannel, SnapshotEmitter, WorkspaceUpdate
from workspacetrack.tracker.events import (
    EventHub,
    FileCreateEvent,
    FileDeleteEvent,
    FileRename,
    FileRenameEvent,
    WorkspaceEvent,
)
from workspacetrack.tracker.listing import list_files
from workspacetrack.tracker.paths import normalize_path, relative_entry
from workspacetrack.tracker.resolver import PathResolver, ResolvedPath
from workspacetrack.tracker.tracked_set import TrackedSet
from workspacetrack.tracker.watcher import FileWatcher
from workspacetrack.tracker.workspace import WorkspaceTracker

__all__ = [
    "DebounceScheduler",
    "EventHub",
    "FileCreateEvent",
    "FileDeleteEvent",
    "FileRename",
    "FileRenameEvent",
    "FileWatcher",
    "MessageChannel",
    "OperationCoordinator",
    "PathResolver",
    "ResolvedPath",
    "SchedulerState",
    "SnapshotEmitter",
    "TrackedSet",
    "WorkspaceEvent",
    "WorkspaceTracker",
    "WorkspaceUpdate",
    "list_files",
    "normalize_path",
    "relative_entry",
]
