"""Canonical path keys.

A canonical path is absolute, uses forward slashes, has ``.``/``..`` segments
collapsed, and ends with ``/`` iff it names a directory.
"""

from __future__ import annotations

import os


def to_slashes(path: str) -> str:
    """Replace backslash separators with forward slashes."""
    return path.replace("\\", "/")


def normalize_root(root: str | os.PathLike[str]) -> str:
    """Canonical form of a workspace root (absolute, no trailing slash)."""
    return to_slashes(os.path.normpath(os.path.abspath(to_slashes(os.fspath(root)))))


def normalize_path(raw: str | os.PathLike[str], root: str | None) -> str:
    """Normalize ``raw`` into an absolute, slash-separated path.

    Relative input is resolved against ``root`` (or the working directory when
    there is no root). Never fails; the result carries no directory tag.
    """
    candidate = to_slashes(os.fspath(raw))
    if not os.path.isabs(candidate):
        base = root if root is not None else os.getcwd()
        candidate = os.path.join(to_slashes(base), candidate)
    return to_slashes(os.path.normpath(candidate))


def directory_key(path: str) -> str:
    """Tag a normalized path as a directory."""
    return path if path.endswith("/") else path + "/"


def file_key(path: str) -> str:
    """Strip the directory tag from a canonical path."""
    stripped = path.rstrip("/")
    return stripped or "/"


def relative_entry(canonical: str, root: str) -> str:
    """Express a canonical path relative to ``root`` for emission.

    Directories keep their trailing slash (``/ws/sub/`` -> ``sub/``). The root
    itself is the empty string.
    """
    is_directory = canonical.endswith("/") and canonical != "/"
    try:
        relative = to_slashes(os.path.relpath(file_key(canonical), root))
    except ValueError:
        # Different drive than the root on Windows
        relative = file_key(canonical)
    if relative == ".":
        return ""
    return directory_key(relative) if is_directory else relative
