"""Directory names skipped by the initial listing and the live watcher.

Tier 0 (HARDCODED_DIRS): VCS internals. Never listed, never watched.
Tier 1 (DEFAULT_PRUNABLE_DIRS): dependency, cache and build output directories.
    Skipped unless the caller disables pruning (``respect_prunable_dirs=False``).
"""

from __future__ import annotations

HARDCODED_DIRS: frozenset[str] = frozenset((".git", ".svn", ".hg", ".bzr"))

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # JavaScript
        "node_modules",
        "bower_components",
        ".next",
        ".nuxt",
        # Python
        "venv",
        ".venv",
        "env",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".tox",
        ".nox",
        # Rust / Elixir / Go
        "target",
        "deps",
        "pkg",
        # iOS
        "Pods",
        # Generic build output
        "dist",
        "build",
        "out",
        "bundle",
        "vendor",
        "tmp",
        "temp",
    )
)


def is_hardcoded_dir(dirname: str) -> bool:
    """Check if directory is hardcoded (never traversable, not overridable)."""
    return dirname in HARDCODED_DIRS


def should_prune_dir(dirname: str, *, respect_prunable_dirs: bool = True) -> bool:
    """Check whether a directory name should be skipped during traversal."""
    if is_hardcoded_dir(dirname):
        return True
    return respect_prunable_dirs and dirname in DEFAULT_PRUNABLE_DIRS
