# -*- coding: utf-8 -*-
"""
协作式定时器队列 (Timer Loop)

All timers fire on the thread that pumps the loop (the OpenCV UI loop),
so callbacks never race with mouse events or rendering.

- call_repeating(): recurring callback, missed ticks are coalesced into one.
- call_later() / call_at(): one-shot delayed callback.
- close(): cancels every pending timer without firing it (teardown).
"""

import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TimerHandle:
    """Cancellable reference to a scheduled callback."""

    def __init__(
        self,
        loop: "TimerLoop",
        deadline: float,
        callback: Callable[[], None],
        interval: Optional[float] = None,
    ) -> None:
        self._loop = loop
        self.deadline = deadline
        self.callback = callback
        self.interval = interval
        self.cancelled = False
        self._fired = False

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    @property
    def active(self) -> bool:
        """True while the timer can still fire."""
        if self.cancelled:
            return False
        return self.repeating or not self._fired

    def cancel(self) -> None:
        """Stop the timer. Cancelling twice is a no-op."""
        if self.cancelled:
            return
        was_live = self.active
        self.cancelled = True
        if was_live:
            self._loop._forget(self)


class TimerLoop:
    """
    单线程定时器循环

    Attributes:
        clock (Callable[[], float]): monotonic time source, injectable for tests.
        closed (bool): True once close() was called.
    """

    clock: Callable[[], float]
    closed: bool
    _queue: List[Tuple[float, int, TimerHandle]]

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self.closed = False
        self._queue = []
        self._counter = itertools.count()
        self._live = 0

    def now(self) -> float:
        return self.clock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once, ``delay`` seconds from now."""
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        return self._schedule(self.now() + delay, callback, None)

    def call_at(self, deadline: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once at ``deadline``; a past deadline fires on the next pass."""
        return self._schedule(deadline, callback, None)

    def call_repeating(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` every ``interval`` seconds until the handle is cancelled."""
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        return self._schedule(self.now() + interval, callback, interval)

    def _schedule(self, deadline: float, callback, interval) -> TimerHandle:
        if self.closed:
            raise RuntimeError("TimerLoop is closed")
        handle = TimerHandle(self, deadline, callback, interval)
        heapq.heappush(self._queue, (deadline, next(self._counter), handle))
        self._live += 1
        return handle

    def _forget(self, handle: TimerHandle) -> None:
        # 堆中的条目在弹出时惰性丢弃
        self._live -= 1

    @property
    def active_timers(self) -> int:
        """Number of timers that may still fire."""
        return self._live

    def next_deadline(self) -> Optional[float]:
        self._drop_cancelled()
        if not self._queue:
            return None
        return self._queue[0][0]

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)

    def run_due(self, now: Optional[float] = None) -> int:
        """
        Fire every timer whose deadline is <= ``now``.

        Timers scheduled by a callback with a deadline still in the past fire
        in the same pass. A repeating timer fires at most once per pass.

        Returns:
            int: number of callbacks invoked.
        """
        if self.closed:
            return 0
        if now is None:
            now = self.now()

        fired = 0
        rescheduled: List[TimerHandle] = []
        try:
            while self._queue and self._queue[0][0] <= now:
                _, _, handle = heapq.heappop(self._queue)
                if handle.cancelled:
                    continue

                if handle.repeating:
                    rescheduled.append(handle)
                else:
                    self._live -= 1

                handle._fired = True
                fired += 1
                handle.callback()
                if self.closed:
                    break
        finally:
            # 回调抛异常时重复定时器也要重新入队
            if not self.closed:
                self._reschedule(rescheduled, now)

        return fired

    def _reschedule(self, handles: List[TimerHandle], now: float) -> None:
        for handle in handles:
            if handle.cancelled:
                continue
            next_deadline = handle.deadline + handle.interval
            if next_deadline <= now:
                next_deadline = now + handle.interval
            handle.deadline = next_deadline
            heapq.heappush(self._queue, (next_deadline, next(self._counter), handle))

    def close(self) -> None:
        """Cancel all pending timers. Pending callbacks never run."""
        if self.closed:
            return
        pending = [h for _, _, h in self._queue if not h.cancelled]
        for handle in pending:
            handle.cancel()
        self._queue.clear()
        self._live = 0
        self.closed = True
        logger.debug("timer loop closed, %d pending timer(s) dropped", len(pending))
