"""The authoritative set of canonical paths.

Not safe for concurrent use on its own: every call must happen on the
tracker's event loop, outside of any ``await``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from workspacetrack.tracker.paths import directory_key, file_key


class TrackedSet:
    """Set of canonical paths with dual-form removal."""

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths: set[str] = set(paths)

    def add(self, path: str) -> None:
        self._paths.add(path)

    def remove(self, path: str) -> None:
        """Evict both the file form and the directory form of ``path``.

        A deleted path can no longer be probed, so its type is unknown here.
        """
        base = file_key(path)
        self._paths.discard(base)
        self._paths.discard(directory_key(base))

    def snapshot(self) -> list[str]:
        """Point-in-time copy, sorted for stable output."""
        return sorted(self._paths)

    def clear(self) -> None:
        self._paths.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())
