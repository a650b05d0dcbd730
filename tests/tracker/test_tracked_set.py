"""Tests for TrackedSet."""

from __future__ import annotations

from workspacetrack.tracker.tracked_set import TrackedSet


class TestTrackedSet:
    """Membership primitives."""

    def test_add_is_idempotent(self) -> None:
        once = TrackedSet()
        once.add("/ws/a.txt")
        twice = TrackedSet()
        twice.add("/ws/a.txt")
        twice.add("/ws/a.txt")

        assert once.snapshot() == twice.snapshot() == ["/ws/a.txt"]

    def test_remove_clears_directory_form(self) -> None:
        tracked = TrackedSet()
        tracked.add("/ws/sub/")

        tracked.remove("/ws/sub")

        assert "/ws/sub" not in tracked
        assert "/ws/sub/" not in tracked

    def test_remove_clears_both_forms_at_once(self) -> None:
        tracked = TrackedSet(["/ws/p", "/ws/p/", "/ws/other"])

        tracked.remove("/ws/p/")

        assert tracked.snapshot() == ["/ws/other"]

    def test_remove_missing_is_noop(self) -> None:
        tracked = TrackedSet(["/ws/a"])

        tracked.remove("/ws/b")

        assert len(tracked) == 1

    def test_snapshot_is_decoupled(self) -> None:
        tracked = TrackedSet(["/ws/a"])
        snapshot = tracked.snapshot()

        tracked.add("/ws/b")
        snapshot.append("/ws/c")

        assert snapshot == ["/ws/a", "/ws/c"]
        assert tracked.snapshot() == ["/ws/a", "/ws/b"]

    def test_iteration_survives_mutation(self) -> None:
        tracked = TrackedSet(["/ws/a", "/ws/b"])

        for path in tracked:
            tracked.remove(path)

        assert len(tracked) == 0

    def test_clear(self) -> None:
        tracked = TrackedSet(["/ws/a", "/ws/b/"])

        tracked.clear()

        assert tracked.snapshot() == []
