"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (WORKSPACETRACK__SECTION__KEY)
3. Workspace YAML (<root>/.workspacetrack.yaml)
4. Global YAML (~/.config/workspacetrack/config.yaml)
5. Built-in defaults (this file)

Examples:
    WORKSPACETRACK__LOGGING__LEVEL=DEBUG
    WORKSPACETRACK__TRACKER__DEBOUNCE_MS=250
    WORKSPACETRACK__WATCHER__ENABLED=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        WORKSPACETRACK__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every tracked path.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class TrackerConfig(BaseModel):
    """Workspace tracker configuration.

    Env vars:
        WORKSPACETRACK__TRACKER__DEBOUNCE_MS: Quiescence window before an update is emitted
        WORKSPACETRACK__TRACKER__INITIAL_SCAN_LIMIT: Max entries in the initial listing
        WORKSPACETRACK__TRACKER__INITIAL_SCAN_BATCH_SIZE: Paths resolved concurrently per batch
    """

    debounce_ms: int = Field(
        default=100,
        description="Updates requested within this window are coalesced into one emission.",
    )
    initial_scan_limit: int = Field(
        default=1000,
        description="Cap on entries seeded by the initial listing. "
        "Larger workspaces are truncated with a warning.",
    )
    initial_scan_batch_size: int = Field(
        default=100,
        description="Number of paths probed concurrently while seeding.",
    )

    @field_validator("debounce_ms")
    @classmethod
    def validate_debounce(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"debounce_ms must be >= 0, got {v}")
        return v

    @field_validator("initial_scan_limit", "initial_scan_batch_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}")
        return v

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


class WatcherConfig(BaseModel):
    """Live file watcher configuration.

    Env vars:
        WORKSPACETRACK__WATCHER__ENABLED: Subscribe to filesystem events at all
        WORKSPACETRACK__WATCHER__STEP_MS: watchfiles polling step
        WORKSPACETRACK__WATCHER__DEBOUNCE_MS: watchfiles batching window
    """

    enabled: bool = True
    step_ms: int = Field(
        default=50,
        description="How often watchfiles checks the Rust side for new changes.",
    )
    debounce_ms: int = Field(
        default=50,
        description="watchfiles groups raw notifications arriving within this window.",
    )
    respect_prunable_dirs: bool = Field(
        default=True,
        description="Skip dependency and build output directories (node_modules, .venv, ...).",
    )


class WorkspaceTrackConfig(BaseModel):
    """Root configuration for workspacetrack."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    watcher: WatcherConfig = Field(default_factory=WatcherConfig)
