"""Config module exports."""

from workspacetrack.config.loader import load_config
from workspacetrack.config.models import (
    LoggingConfig,
    LogOutputConfig,
    TrackerConfig,
    WatcherConfig,
    WorkspaceTrackConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "TrackerConfig",
    "WatcherConfig",
    "WorkspaceTrackConfig",
]
