"""Core module exports."""

from workspacetrack.core.errors import (
    ConfigError,
    ErrorCode,
    TrackerError,
    WorkspaceTrackError,
)
from workspacetrack.core.logging import (
    clear_batch_id,
    configure_logging,
    get_batch_id,
    set_batch_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "TrackerError",
    "WorkspaceTrackError",
    # Logging
    "clear_batch_id",
    "configure_logging",
    "get_batch_id",
    "set_batch_id",
]
