"""workspacetrack error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Tracker
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Tracker (3xxx)
    TRACKER_DISPOSED = 3001
    LISTING_FAILED = 3002


@dataclass(frozen=True, slots=True)
class WorkspaceTrackError(Exception):
    """Base error with structured context for log records and CLI output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(WorkspaceTrackError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class TrackerError(WorkspaceTrackError):
    """Workspace tracker errors."""

    @classmethod
    def disposed(cls, operation: str) -> "TrackerError":
        return cls(
            code=ErrorCode.TRACKER_DISPOSED,
            message=f"Cannot {operation}: tracker has been disposed",
            details={"operation": operation},
        )

    @classmethod
    def listing_failed(cls, root: str, reason: str) -> "TrackerError":
        return cls(
            code=ErrorCode.LISTING_FAILED,
            message=f"Failed to list files under {root}: {reason}",
            retryable=True,
            details={"root": root, "reason": reason},
        )

