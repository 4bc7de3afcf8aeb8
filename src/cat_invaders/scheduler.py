"""
Cooperative timer queue.

Callbacks never run concurrently: :meth:`Scheduler.run_pending` executes every
due callback to completion, in due-time order (ties in scheduling order),
before returning. Delays are minimums; a callback runs on the first
``run_pending`` call at or after its due time.
"""

from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default clock, milliseconds."""
    return time.monotonic() * 1000.0


@dataclass(order=True)
class Timer:
    """
    Fire-once timer
    """

    due: float
    seq: int
    callback: Callable[[], object] = field(compare=False)
    name: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """
    Scheduler class
    """

    def __init__(self, clock: Clock | None = None):
        """
        :param clock: Returns the current time in milliseconds
        :type clock: Callable[[], float] | None
        """
        self.clock = clock or monotonic_ms
        self._queue: list[Timer] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return self.pending()

    def now(self) -> float:
        return self.clock()

    def call_later(
        self, delay_ms: float, callback: Callable[[], object], name: str = ""
    ) -> Timer:
        """
        Schedule ``callback`` to run once, at least ``delay_ms`` from now

        :param delay_ms: Minimum delay in milliseconds
        :type delay_ms: float

        :param callback: Zero-argument callable
        :type callback: Callable[[], object]

        :return: The queued timer
        :rtype: Timer
        """
        timer = Timer(
            due=self.clock() + max(0.0, delay_ms),
            seq=next(self._seq),
            callback=callback,
            name=name,
        )
        heapq.heappush(self._queue, timer)
        return timer

    def pending(self, name: str | None = None) -> int:
        """Number of queued timers, optionally only those called ``name``."""
        return sum(
            1
            for t in self._queue
            if not t.cancelled and (name is None or t.name == name)
        )

    def run_pending(self) -> int:
        """
        Run every timer due at the time of the call

        :return: How many callbacks ran
        :rtype: int
        """
        now = self.clock()
        ran = 0
        while self._queue and self._queue[0].due <= now:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            timer.callback()
            ran += 1
        return ran

    def clear(self) -> None:
        self._queue.clear()
