"""workspacetrack - debounced tracking of the file paths in a workspace."""

from workspacetrack.tracker import (
    EventHub,
    FileCreateEvent,
    FileDeleteEvent,
    FileRename,
    FileRenameEvent,
    FileWatcher,
    WorkspaceTracker,
    WorkspaceUpdate,
)

__version__ = "0.1.0"

__all__ = [
    "EventHub",
    "FileCreateEvent",
    "FileDeleteEvent",
    "FileRename",
    "FileRenameEvent",
    "FileWatcher",
    "WorkspaceTracker",
    "WorkspaceUpdate",
    "__version__",
]
