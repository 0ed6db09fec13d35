"""Cooperative scheduling of phase continuations."""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable

from core.game.state import Phase


@dataclass(eq=False)
class Continuation:
    """
    A callback scheduled to run once, tagged with the round and phase it belongs to.

    The tag lets the sequencer drop continuations that outlived their round.
    """

    due: float
    callback: Callable[[], None]
    round_id: str
    phase: Phase
    cancelled: bool = False
    fired: bool = False
    handle: Any = field(default=None, repr=False)

    @property
    def pending(self) -> bool:
        """Check if the continuation can still fire."""
        return not (self.cancelled or self.fired)

    def run(self) -> None:
        """Run the callback once, unless cancelled or already run."""
        if not self.pending:
            return
        self.fired = True
        self.callback()


class Scheduler(ABC):
    """Abstract continuation scheduler."""

    @abstractmethod
    def now(self) -> float:
        """Return the scheduler's current time in seconds."""
        ...

    @abstractmethod
    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        round_id: str,
        phase: Phase,
    ) -> Continuation:
        """Schedule ``callback`` to run after ``delay`` seconds."""
        ...

    def cancel(self, continuation: Continuation) -> None:
        """Cancel a continuation; cancelling twice is harmless."""
        continuation.cancelled = True


class ManualScheduler(Scheduler):
    """
    Scheduler driven by an explicit virtual clock.

    Nothing runs until :meth:`advance` moves the clock. Used by tests, the
    REST API (clients report elapsed animation time) and the pygame loop
    (one ``advance(dt)`` per frame).
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, Continuation]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        round_id: str,
        phase: Phase,
    ) -> Continuation:
        continuation = Continuation(
            due=self._now + max(0.0, delay),
            callback=callback,
            round_id=round_id,
            phase=phase,
        )
        heapq.heappush(self._queue, (continuation.due, next(self._counter), continuation))
        return continuation

    def advance(self, dt: float) -> int:
        """
        Move the clock forward and run everything that falls due.

        Continuations scheduled by a callback run in the same call if they
        fall due before the new time.

        Args:
            dt: Seconds to advance (negative values are treated as zero)

        Returns:
            Number of continuations that ran
        """
        return self._advance_to(self._now + max(0.0, dt))

    def _advance_to(self, target: float) -> int:
        ran = 0

        while self._queue and self._queue[0][0] <= target:
            due, _, continuation = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            if continuation.pending:
                continuation.run()
                ran += 1

        self._now = target
        return ran

    def run_all(self) -> int:
        """Run every pending continuation, advancing the clock as needed."""
        ran = 0
        while self.pending_count:
            ran += self._advance_to(max(self._now, self._queue[0][0]))
        return ran

    @property
    def pending_count(self) -> int:
        """Return the number of continuations that can still fire."""
        self._queue = [entry for entry in self._queue if entry[2].pending]
        heapq.heapify(self._queue)
        return len(self._queue)


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop's ``call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        round_id: str,
        phase: Phase,
    ) -> Continuation:
        continuation = Continuation(
            due=self.now() + max(0.0, delay),
            callback=callback,
            round_id=round_id,
            phase=phase,
        )
        continuation.handle = self.loop.call_later(max(0.0, delay), continuation.run)
        return continuation

    def cancel(self, continuation: Continuation) -> None:
        super().cancel(continuation)
        if continuation.handle is not None:
            continuation.handle.cancel()
