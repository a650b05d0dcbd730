"""Snapshot emission to the downstream message channel."""

from __future__ import annotations

from typing import Any, Literal, Protocol

import structlog
from pydantic import BaseModel, ConfigDict, Field

from workspacetrack.tracker.paths import relative_entry
from workspacetrack.tracker.tracked_set import TrackedSet

logger = structlog.get_logger()


class MessageChannel(Protocol):
    """Downstream consumer of workspace updates."""

    async def post_message(self, message: dict[str, Any]) -> None: ...


class WorkspaceUpdate(BaseModel):
    """One coalesced update: every tracked path, relative to the root."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: Literal["workspaceUpdated"] = "workspaceUpdated"
    file_paths: list[str] = Field(default_factory=list, alias="filePaths")

    def to_message(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SnapshotEmitter:
    """Reads the tracked set and posts it as a single message.

    Delivery failures are logged and not retried; the next update resends the
    whole snapshot anyway.
    """

    def __init__(self, channel: MessageChannel) -> None:
        self._channel = channel

    async def emit(self, tracked: TrackedSet, root: str | None) -> list[str]:
        if root is None:
            return []

        file_paths = [relative_entry(path, root) for path in tracked.snapshot()]
        update = WorkspaceUpdate(file_paths=file_paths)
        try:
            await self._channel.post_message(update.to_message())
        except Exception as e:
            logger.error("workspace_update_delivery_failed", error=str(e), count=len(file_paths))
        else:
            logger.debug("workspace_update_sent", count=len(file_paths))
        return file_paths
