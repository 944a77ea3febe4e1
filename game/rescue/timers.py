"""
Cooperative timers driven by game-time
---------------------------------------
A Scheduler accumulates the dt it is given (like the spawn timers of a
fixed-step env) and fires callbacks whose due time has been reached.
Nothing runs on its own thread: callbacks only ever run inside advance().

One Scheduler belongs to one game session. Cancelling it wholesale on
restart or game over guarantees that no callback from an old session
can touch a new one.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Optional, Tuple


class Timer:
    """Handle for a scheduled callback"""

    __slots__ = ("due", "interval", "callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None], interval: Optional[float] = None):
        self.due = due
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    @property
    def periodic(self) -> bool:
        return self.interval is not None

    def cancel(self):
        self.cancelled = True


class Scheduler:
    """Min-heap of timers keyed by due time"""

    def __init__(self):
        self.time = 0.0
        self._heap: List[Tuple[float, int, Timer]] = []
        self._seq = itertools.count()
        self._firing: Optional[Timer] = None

    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        """Run callback once, delay seconds from now"""
        if delay <= 0:
            raise ValueError(f"delay must be positive, got {delay}")
        timer = Timer(self.time + delay, callback)
        self._push(timer)
        return timer

    def call_every(self, interval: float, callback: Callable[[], None]) -> Timer:
        """Run callback every interval seconds until cancelled"""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        timer = Timer(self.time + interval, callback, interval)
        self._push(timer)
        return timer

    def advance(self, dt: float) -> int:
        """Move game-time forward by dt and fire due timers in order.

        While a callback runs, ``time`` equals its due time, so timers it
        schedules are relative to when it was meant to fire. Returns the
        number of callbacks fired.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        target = self.time + dt
        fired = 0
        while self._heap and self._heap[0][0] <= target:
            due, _, timer = heapq.heappop(self._heap)
            if timer.cancelled:
                continue
            self.time = due
            self._firing = timer
            try:
                timer.callback()
            finally:
                self._firing = None
            fired += 1
            if timer.periodic and not timer.cancelled:
                timer.due = due + timer.interval
                self._push(timer)
        self.time = target
        return fired

    def cancel_all(self):
        # The timer currently firing is off the heap; stop it re-arming
        if self._firing is not None:
            self._firing.cancel()
        for _, _, timer in self._heap:
            timer.cancel()
        self._heap.clear()

    @property
    def pending(self) -> int:
        return sum(1 for _, _, t in self._heap if not t.cancelled)

    def _push(self, timer: Timer):
        heapq.heappush(self._heap, (timer.due, next(self._seq), timer))
