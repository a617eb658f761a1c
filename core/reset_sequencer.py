# -*- coding: utf-8 -*-
"""
Reset Sequencer - staggered "wipe" of the fade points

Instead of clearing the store at once, the points present when the reset is
triggered are removed one at a time, each after a short delay, in insertion
order. Points scratched while the wipe runs are not part of it.

State machine:
    IDLE -> AWAITING_DELAY -> REMOVING -> AWAITING_DELAY ... -> DONE
    any running state -> CANCELLED (teardown)
An empty snapshot goes straight from IDLE to DONE.
"""

import logging
from enum import Enum
from typing import Callable, Optional, Tuple

from core.fade_point import FadePoint
from core.point_store import PointStore
from core.timer_loop import TimerHandle, TimerLoop

logger = logging.getLogger(__name__)


class ResetPhase(Enum):
    IDLE = "idle"
    AWAITING_DELAY = "awaiting_delay"
    REMOVING = "removing"
    DONE = "done"
    CANCELLED = "cancelled"


class ResetSequencer:
    def __init__(
        self,
        store: PointStore,
        loop: TimerLoop,
        step_delay: float = 0.0075,
        on_step: Optional[Callable[[FadePoint], None]] = None,
        on_resetting_changed: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self.store = store
        self.loop = loop
        self.step_delay = step_delay
        self.on_step = on_step
        self.on_resetting_changed = on_resetting_changed

        self.phase = ResetPhase.IDLE
        self.is_resetting = False
        self.steps_taken = 0
        self._snapshot: Tuple[FadePoint, ...] = ()
        self._index = 0
        self._handle: Optional[TimerHandle] = None
        self._deadline = 0.0

    @property
    def remaining(self) -> int:
        """Snapshot points not yet removed by the running wipe"""
        if not self.is_resetting:
            return 0
        return len(self._snapshot) - self._index

    def start(self) -> bool:
        """
        Begin a staggered reset of the current points.

        Returns:
            bool: False if a reset is already in progress.
        """
        if self.is_resetting:
            logger.debug("reset already running, ignored")
            return False

        self._snapshot = self.store.snapshot()
        self._index = 0
        self.steps_taken = 0
        self._set_resetting(True)
        logger.info("reset started (%d point(s))", len(self._snapshot))

        if not self._snapshot:
            self._finish()
            return True

        self._deadline = self.loop.now()
        self._schedule_next()
        return True

    def cancel(self) -> None:
        """Abandon a running wipe. Remaining points stay and keep decaying."""
        if not self.is_resetting:
            return
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.debug("reset cancelled with %d point(s) left", self.remaining)
        self.phase = ResetPhase.CANCELLED
        self._snapshot = ()
        self._index = 0
        self._set_resetting(False)

    def _schedule_next(self) -> None:
        # 从上一步的截止时间累加，慢帧时积压的步骤在同一轮补齐
        self.phase = ResetPhase.AWAITING_DELAY
        self._deadline += self.step_delay
        self._handle = self.loop.call_at(self._deadline, self._step)

    def _step(self) -> None:
        self._handle = None
        self.phase = ResetPhase.REMOVING
        point = self._snapshot[self._index]
        self.store.remove_by_id(point.id)
        self._index += 1
        self.steps_taken += 1
        if self.on_step is not None:
            self.on_step(point)

        if self._index < len(self._snapshot):
            self._schedule_next()
        else:
            self._finish()

    def _finish(self) -> None:
        self.phase = ResetPhase.DONE
        self._snapshot = ()
        self._index = 0
        self._set_resetting(False)
        logger.info("reset finished after %d step(s)", self.steps_taken)

    def _set_resetting(self, value: bool) -> None:
        self.is_resetting = value
        if self.on_resetting_changed is not None:
            self.on_resetting_changed(value)
