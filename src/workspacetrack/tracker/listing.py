"""Bounded, breadth-first listing used to seed the tracker."""

from __future__ import annotations

import os
from collections import deque
from pathlib import Path

import structlog

from workspacetrack.core.errors import TrackerError
from workspacetrack.core.excludes import should_prune_dir
from workspacetrack.tracker.paths import normalize_root

logger = structlog.get_logger()

DEFAULT_LIST_LIMIT = 1000


def list_files(
    root: Path | str,
    *,
    recursive: bool = True,
    limit: int = DEFAULT_LIST_LIMIT,
    respect_prunable_dirs: bool = True,
) -> tuple[list[str], bool]:
    """List entries under ``root``, shallowest first.

    Args:
        root: Directory to list
        recursive: Descend into subdirectories
        limit: Maximum entries to return
        respect_prunable_dirs: Skip dependency/build directories

    Returns:
        (paths, has_more). Paths are absolute with forward slashes;
        directories end with ``/``. ``has_more`` is True when the listing
        was cut off at ``limit``.

    Raises:
        TrackerError: If ``root`` cannot be listed.
    """
    base = normalize_root(root)
    if not os.path.isdir(base):
        raise TrackerError.listing_failed(str(root), "not a directory")

    entries: list[str] = []
    queue: deque[str] = deque([base])
    is_root = True

    while queue:
        directory = queue.popleft()
        try:
            with os.scandir(directory) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError as e:
            if is_root:
                raise TrackerError.listing_failed(str(root), str(e)) from e
            logger.debug("listing_dir_skipped", path=directory, error=str(e))
            continue
        is_root = False

        prefix = directory.rstrip("/")
        for child in children:
            try:
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            if is_dir:
                if should_prune_dir(child.name, respect_prunable_dirs=respect_prunable_dirs):
                    continue
                path = f"{prefix}/{child.name}/"
                if recursive:
                    queue.append(path)
            else:
                path = f"{prefix}/{child.name}"

            if len(entries) >= limit:
                return entries, True
            entries.append(path)

    return entries, False
