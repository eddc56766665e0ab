"""
Timer scheduling for lesson playback.

The playback engine only needs "call this after N seconds" plus the ability
to cancel. VirtualScheduler provides that over a virtual clock that the
caller moves forward: the Streamlit app advances it by wall-clock time on
each rerun, tests advance it directly. Callbacks run on the caller's thread.
"""

import heapq
import itertools
from typing import Callable, Protocol


class TimerHandle:
    """A scheduled callback that can be cancelled before it fires."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class VirtualScheduler:
    """
    Deterministic scheduler driven by an explicit clock.

    Timers due at the same instant fire in the order they were scheduled.
    Timers scheduled by a callback during `advance_to` fire in the same call
    if they fall due before the target time.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of timers still waiting to fire."""
        return sum(1 for _, _, handle in self._queue if handle.active)

    def next_due(self) -> float | None:
        """Due time of the earliest live timer, if any."""
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def advance(self, seconds: float) -> int:
        """Move the clock forward by `seconds`; returns callbacks fired."""
        return self.advance_to(self.now + seconds)

    def advance_to(self, target: float) -> int:
        """
        Fire every live timer due at or before `target`.

        Returns:
            Number of callbacks fired
        """
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0][0] > target:
                break
            due, _, handle = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            handle.fired = True
            handle.callback()
            fired += 1
        self.now = max(self.now, target)
        return fired

    def _drop_cancelled(self):
        while self._queue and not self._queue[0][2].active:
            heapq.heappop(self._queue)
