"""Single-threaded cooperative executor for deferred builder steps.

Work is queued as zero-argument callbacks with an idle delay. Nothing runs on
its own: the host calls ``run_once``/``run_pending`` whenever it is idle, so at
most one step executes per call and steps never overlap.
"""

from __future__ import annotations

import heapq
import time
from collections.abc import Callable


class ScheduledCall:
    """Handle for one queued callback; ``cancel`` stops it from running."""

    __slots__ = ("when", "seq", "callback", "cancelled")

    def __init__(self, when: float, seq: int, callback: Callable[[], None]) -> None:
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: "ScheduledCall") -> bool:
        return (self.when, self.seq) < (other.when, other.seq)


class IdleExecutor:
    """Run queued callbacks one at a time in due-time order."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._heap: list[ScheduledCall] = []
        self._next_seq = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Queue ``callback`` to run once at least ``delay`` seconds from now."""
        call = ScheduledCall(self._clock() + max(0.0, delay), self._next_seq, callback)
        self._next_seq += 1
        heapq.heappush(self._heap, call)
        return call

    def _drop_cancelled(self) -> None:
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)

    @property
    def pending(self) -> int:
        """Number of queued, non-cancelled callbacks."""
        return sum(1 for call in self._heap if not call.cancelled)

    def next_due(self) -> float | None:
        """Clock time of the earliest queued callback, if any."""
        self._drop_cancelled()
        return self._heap[0].when if self._heap else None

    def run_once(self, wait: bool = False) -> bool:
        """Run the earliest callback if it is due.

        With ``wait`` the executor sleeps until the callback is due instead of
        returning early. Returns whether a callback ran.
        """
        self._drop_cancelled()
        if not self._heap:
            return False
        call = self._heap[0]
        delay = call.when - self._clock()
        if delay > 0:
            if not wait:
                return False
            self._sleep(delay)
        heapq.heappop(self._heap)
        if call.cancelled:
            return False
        call.callback()
        return True

    def run_pending(self) -> int:
        """Run every callback already due when called; returns how many ran.

        Callbacks queued while draining wait for the next idle call.
        """
        limit = self._next_seq
        ran = 0
        while True:
            self._drop_cancelled()
            if not self._heap:
                return ran
            call = self._heap[0]
            if call.seq >= limit or call.when > self._clock():
                return ran
            if self.run_once():
                ran += 1

    def run_until(self, done: Callable[[], bool], timeout: float | None = None) -> bool:
        """Drive queued work, sleeping between steps, until ``done()`` holds.

        Returns ``done()``; stops early when the queue empties or ``timeout``
        seconds elapse.
        """
        deadline = None if timeout is None else self._clock() + timeout
        while not done():
            if self.next_due() is None:
                break
            if deadline is not None and self._clock() >= deadline:
                break
            self.run_once(wait=True)
        return done()


__all__ = ["ScheduledCall", "IdleExecutor"]
