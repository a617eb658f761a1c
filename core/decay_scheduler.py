# -*- coding: utf-8 -*-
"""Decay Scheduler - sweeps expired fade points on a fast recurring timer"""

import logging
from enum import Enum
from typing import Optional

from core.point_store import PointStore
from core.timer_loop import TimerHandle, TimerLoop

logger = logging.getLogger(__name__)


class SchedulerStatus(Enum):
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"


class DecayScheduler:
    """
    Evicts points older than ``fade_duration`` every ``interval`` seconds.

    The status is tracked on its own rather than inferred from the timer
    handle. Invariant: ``_handle is None`` exactly when status is STOPPED.
    """

    def __init__(
        self,
        store: PointStore,
        loop: TimerLoop,
        fade_duration: float = 0.25,
        interval: float = 0.001,
    ) -> None:
        self.store = store
        self.loop = loop
        self.fade_duration = fade_duration
        self.interval = interval
        self.status = SchedulerStatus.STOPPED
        self._handle: Optional[TimerHandle] = None

    @property
    def is_active(self) -> bool:
        return self.status is SchedulerStatus.RUNNING

    def start(self) -> bool:
        """Start sweeping. Returns False if already started."""
        if self.status is not SchedulerStatus.STOPPED:
            return False
        self.status = SchedulerStatus.STARTING
        try:
            self._handle = self.loop.call_repeating(self.interval, self._tick)
        except Exception:
            self.status = SchedulerStatus.STOPPED
            raise
        self.status = SchedulerStatus.RUNNING
        logger.debug("decay started (every %.4fs, fade %.3fs)", self.interval, self.fade_duration)
        return True

    def stop(self) -> bool:
        """Cancel the sweep timer. Returns False if already stopped."""
        if self.status is SchedulerStatus.STOPPED:
            return False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.status = SchedulerStatus.STOPPED
        logger.debug("decay stopped")
        return True

    def toggle(self) -> bool:
        """Flip between running and stopped, returns the new active state"""
        if self.status is SchedulerStatus.STOPPED:
            self.start()
        else:
            self.stop()
        return self.is_active

    def sweep(self) -> None:
        self.store.evict_expired(self.loop.now(), self.fade_duration)

    def _tick(self) -> None:
        self.sweep()
