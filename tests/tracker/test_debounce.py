"""Tests for DebounceScheduler."""

from __future__ import annotations

import asyncio
import random

import pytest

from workspacetrack.tracker.coordinator import OperationCoordinator
from workspacetrack.tracker.debounce import (
    DEFAULT_DEBOUNCE_SEC,
    DebounceScheduler,
    SchedulerState,
)

DELAY = 0.05


class Recorder:
    """Emission callback that records the value of a counter at emit time."""

    def __init__(self, source: list[int] | None = None) -> None:
        self.calls = 0
        self.seen: list[list[int]] = []
        self._source = source if source is not None else []

    async def __call__(self) -> None:
        self.calls += 1
        self.seen.append(list(self._source))


class TestDebounceDefaults:
    def test_default_window(self) -> None:
        assert DEFAULT_DEBOUNCE_SEC == 0.1

    def test_starts_idle(self) -> None:
        scheduler = DebounceScheduler(OperationCoordinator(), Recorder())

        assert scheduler.state is SchedulerState.IDLE
        assert scheduler.emission_count == 0


class TestCoalescing:
    """Bursts of requests collapse into one emission."""

    @pytest.mark.asyncio
    async def test_burst_produces_single_emission(self) -> None:
        state: list[int] = []
        recorder = Recorder(state)
        scheduler = DebounceScheduler(OperationCoordinator(), recorder, delay=DELAY)

        waiters = []
        for i in range(10):
            state.append(i)
            waiters.append(scheduler.request_update())

        await asyncio.gather(*waiters)

        assert recorder.calls == 1
        assert recorder.seen == [list(range(10))]
        assert scheduler.emission_count == 1

    @pytest.mark.asyncio
    async def test_deadline_follows_last_request(self) -> None:
        """Trailing edge: requests spaced under the window keep pushing it out."""
        recorder = Recorder()
        window = 0.2
        scheduler = DebounceScheduler(OperationCoordinator(), recorder, delay=window)
        loop = asyncio.get_running_loop()

        first = scheduler.request_update()
        for _ in range(4):
            await asyncio.sleep(window / 4)
            assert recorder.calls == 0
            scheduler.request_update()
        last_request_at = loop.time()

        await first

        assert recorder.calls == 1
        assert loop.time() - last_request_at >= window * 0.9

    @pytest.mark.asyncio
    async def test_separate_windows_emit_separately(self) -> None:
        recorder = Recorder()
        scheduler = DebounceScheduler(OperationCoordinator(), recorder, delay=DELAY)

        await scheduler.request_update()
        await scheduler.request_update()

        assert recorder.calls == 2

    @pytest.mark.asyncio
    async def test_state_pending_until_fired(self) -> None:
        scheduler = DebounceScheduler(OperationCoordinator(), Recorder(), delay=DELAY)

        waiter = scheduler.request_update()
        assert scheduler.state is SchedulerState.PENDING

        await waiter
        assert scheduler.state is SchedulerState.IDLE


class TestEmissionSequence:
    """Drain-then-emit ordering and failure handling."""

    @pytest.mark.asyncio
    async def test_emission_waits_for_pending_operations(self) -> None:
        coordinator = OperationCoordinator()
        applied: list[int] = []
        recorder = Recorder(applied)
        scheduler = DebounceScheduler(coordinator, recorder, delay=0.01)

        async def slow_add(i: int) -> None:
            await asyncio.sleep(random.uniform(0.02, 0.08))
            applied.append(i)

        for i in range(8):
            coordinator.track(slow_add(i))

        await scheduler.request_update()

        assert sorted(recorder.seen[0]) == list(range(8))

    @pytest.mark.asyncio
    async def test_request_during_emission_opens_new_window(self) -> None:
        """A running emission is never cancelled by a later request."""
        release = asyncio.Event()
        started = asyncio.Event()
        completed: list[int] = []

        async def emit() -> None:
            started.set()
            await release.wait()
            completed.append(len(completed))

        scheduler = DebounceScheduler(OperationCoordinator(), emit, delay=0.01)

        first = scheduler.request_update()
        await started.wait()
        second = scheduler.request_update()
        release.set()

        await asyncio.gather(first, second)

        assert completed == [0, 1]

    @pytest.mark.asyncio
    async def test_failed_emission_still_releases_waiters(self) -> None:
        async def emit() -> None:
            raise RuntimeError("channel closed")

        scheduler = DebounceScheduler(OperationCoordinator(), emit, delay=0.01)

        await asyncio.wait_for(scheduler.request_update(), timeout=1.0)

        assert scheduler.emission_count == 0
        assert scheduler.state is SchedulerState.IDLE


class TestCancel:
    @pytest.mark.asyncio
    async def test_cancel_prevents_emission_and_releases_waiter(self) -> None:
        recorder = Recorder()
        scheduler = DebounceScheduler(OperationCoordinator(), recorder, delay=DELAY)

        waiter = scheduler.request_update()
        scheduler.cancel()

        await asyncio.wait_for(waiter, timeout=0.5)
        await asyncio.sleep(DELAY * 2)

        assert recorder.calls == 0
        assert scheduler.state is SchedulerState.IDLE

    def test_cancel_when_idle_is_noop(self) -> None:
        scheduler = DebounceScheduler(OperationCoordinator(), Recorder())

        scheduler.cancel()

        assert scheduler.state is SchedulerState.IDLE
