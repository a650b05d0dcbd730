"""Asynchronous path resolution: normalize, then probe for file or directory."""

from __future__ import annotations

import asyncio
import os
import stat
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

from workspacetrack.tracker.paths import directory_key, normalize_path

logger = structlog.get_logger()

Probe = Callable[[str], Awaitable[os.stat_result]]


async def stat_probe(path: str) -> os.stat_result:
    """Run ``os.stat`` off the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, os.stat, path)


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    """Membership key for one raw path."""

    key: str
    is_directory: bool


class PathResolver:
    """Turns raw watcher paths into canonical membership keys.

    A failed probe (the path vanished before we could stat it, permissions,
    ...) is logged and the path is returned untagged, i.e. treated as a file.
    Callers never see the error.
    """

    def __init__(self, root: str | None, probe: Probe = stat_probe) -> None:
        self._root = root
        self._probe = probe

    @property
    def root(self) -> str | None:
        return self._root

    async def resolve(self, raw: str) -> ResolvedPath:
        normalized = normalize_path(raw, self._root)
        try:
            result = await self._probe(normalized)
        except Exception as e:
            logger.warning("probe_failed", path=normalized, error=str(e))
            return ResolvedPath(key=normalized, is_directory=False)

        if stat.S_ISDIR(result.st_mode):
            return ResolvedPath(key=directory_key(normalized), is_directory=True)
        return ResolvedPath(key=normalized, is_directory=False)
