"""Shared fixtures for tracker tests."""

from __future__ import annotations

from typing import Any

import pytest


class RecordingChannel:
    """Message channel that keeps every posted message."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def post_message(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def last_paths(self) -> list[str]:
        return self.messages[-1]["filePaths"]


class FailingChannel:
    """Message channel whose delivery always fails."""

    def __init__(self) -> None:
        self.attempts = 0

    async def post_message(self, message: dict[str, Any]) -> None:  # noqa: ARG002
        self.attempts += 1
        raise ConnectionError("consumer went away")


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def failing_channel() -> FailingChannel:
    return FailingChannel()

