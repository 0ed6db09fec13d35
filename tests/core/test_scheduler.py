"""Tests for the continuation schedulers."""

import asyncio

import pytest

from core.game.scheduler import AsyncioScheduler, ManualScheduler
from core.game.state import Phase


class TestManualScheduler:
    """Tests for the ManualScheduler class."""

    def test_nothing_runs_without_advance(self, scheduler):
        calls = []
        scheduler.schedule(1.0, lambda: calls.append(1), "r", Phase.GATHERING)
        assert calls == []
        assert scheduler.pending_count == 1

    def test_runs_when_due(self, scheduler):
        calls = []
        scheduler.schedule(1.0, lambda: calls.append("a"), "r", Phase.GATHERING)

        assert scheduler.advance(0.5) == 0
        assert scheduler.advance(0.5) == 1
        assert calls == ["a"]
        assert scheduler.now() == pytest.approx(1.0)

    def test_due_order(self, scheduler):
        calls = []
        scheduler.schedule(2.0, lambda: calls.append("late"), "r", Phase.GATHERING)
        scheduler.schedule(1.0, lambda: calls.append("early"), "r", Phase.FLIPPING_DOWN)

        scheduler.advance(5.0)

        assert calls == ["early", "late"]

    def test_chained_continuations_run_in_same_advance(self, scheduler):
        calls = []

        def first():
            calls.append("first")
            scheduler.schedule(1.0, lambda: calls.append("second"), "r", Phase.GATHERING)

        scheduler.schedule(1.0, first, "r", Phase.FLIPPING_DOWN)

        assert scheduler.advance(3.0) == 2
        assert calls == ["first", "second"]

    def test_chained_continuation_not_yet_due(self, scheduler):
        calls = []

        def first():
            scheduler.schedule(5.0, lambda: calls.append("second"), "r", Phase.GATHERING)

        scheduler.schedule(1.0, first, "r", Phase.FLIPPING_DOWN)
        scheduler.advance(2.0)

        assert calls == []
        assert scheduler.pending_count == 1

    def test_cancel(self, scheduler):
        calls = []
        continuation = scheduler.schedule(1.0, lambda: calls.append(1), "r", Phase.GATHERING)
        scheduler.cancel(continuation)
        scheduler.cancel(continuation)

        assert scheduler.advance(2.0) == 0
        assert calls == []
        assert not continuation.pending
        assert scheduler.pending_count == 0

    def test_negative_advance_is_ignored(self, scheduler):
        scheduler.advance(-3.0)
        assert scheduler.now() == 0.0

    def test_run_all(self, scheduler):
        calls = []
        scheduler.schedule(1.1, lambda: calls.append(1), "r", Phase.FLIPPING_DOWN)
        scheduler.schedule(0.3, lambda: calls.append(0), "r", Phase.FLIPPING_DOWN)

        assert scheduler.run_all() == 2
        assert calls == [0, 1]
        assert scheduler.now() == pytest.approx(1.1)

    def test_continuation_runs_once(self, scheduler):
        calls = []
        continuation = scheduler.schedule(0.0, lambda: calls.append(1), "r", Phase.GATHERING)
        continuation.run()
        scheduler.advance(1.0)
        assert calls == [1]


class TestAsyncioScheduler:
    """Tests for the AsyncioScheduler class."""

    @pytest.mark.asyncio
    async def test_fires_on_event_loop(self):
        scheduler = AsyncioScheduler()
        fired = asyncio.Event()
        scheduler.schedule(0.01, fired.set, "r", Phase.GATHERING)

        await asyncio.wait_for(fired.wait(), timeout=1.0)

    @pytest.mark.asyncio
    async def test_cancel_prevents_callback(self):
        scheduler = AsyncioScheduler()
        calls = []
        continuation = scheduler.schedule(0.01, lambda: calls.append(1), "r", Phase.GATHERING)
        scheduler.cancel(continuation)

        await asyncio.sleep(0.05)

        assert calls == []
        assert continuation.cancelled
