# -*- coding: utf-8 -*-
"""Scratch Session - owns the point store, timers and reset state of one surface"""

import logging
import time
from typing import Callable, Optional, Tuple

from core.decay_scheduler import DecayScheduler
from core.fade_point import FadePoint
from core.point_store import PointStore
from core.reset_sequencer import ResetSequencer
from core.timer_loop import TimerLoop

logger = logging.getLogger(__name__)


class ScratchSession:
    """
    State container passed to the input, control and render components.

    Its lifetime is the surface's: ``activate()`` when the window appears,
    ``close()`` when it goes away. After close every call is a no-op.
    """

    def __init__(
        self,
        fade_duration: float = 0.25,
        decay_interval: float = 0.001,
        reset_step_delay: float = 0.0075,
        decay_active_at_start: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.loop = TimerLoop(clock)
        self.store = PointStore()
        self.decay = DecayScheduler(self.store, self.loop, fade_duration, decay_interval)
        self.reset = ResetSequencer(self.store, self.loop, reset_step_delay)
        self.decay_active_at_start = decay_active_at_start
        self.active = False
        self.closed = False

    @classmethod
    def from_config(cls, cfg, clock: Callable[[], float] = time.monotonic) -> "ScratchSession":
        return cls(
            fade_duration=getattr(cfg, "FADE_DURATION", 0.25),
            decay_interval=getattr(cfg, "DECAY_INTERVAL", 0.001),
            reset_step_delay=getattr(cfg, "RESET_STEP_DELAY", 0.0075),
            decay_active_at_start=getattr(cfg, "DECAY_ACTIVE_AT_START", True),
            clock=clock,
        )

    # ---- lifecycle ----

    def activate(self) -> None:
        """Surface became visible"""
        if self.closed or self.active:
            return
        self.active = True
        if self.decay_active_at_start:
            self.decay.start()

    def pump(self) -> int:
        """Fire due timers; called once per frame from the UI loop"""
        if self.closed:
            return 0
        return self.loop.run_due()

    def close(self) -> None:
        if self.closed:
            return
        self.reset.cancel()
        self.decay.stop()
        self.loop.close()
        self.active = False
        self.closed = True
        logger.debug("session closed with %d point(s) left", len(self.store))

    # ---- actions ----

    def add_point(self, location: Tuple[float, float]) -> Optional[FadePoint]:
        if self.closed:
            return None
        return self.store.append(location, self.loop.now())

    @property
    def decay_active(self) -> bool:
        return self.decay.is_active

    def toggle_decay(self) -> bool:
        if self.closed:
            return False
        active = self.decay.toggle()
        logger.info("decay %s", "on" if active else "off")
        return active

    @property
    def is_resetting(self) -> bool:
        return self.reset.is_resetting

    @property
    def can_reset(self) -> bool:
        """Reset is offered only while points are not decaying on their own"""
        return not self.closed and not self.decay_active and not self.is_resetting

    def request_reset(self) -> bool:
        if not self.can_reset:
            logger.debug("reset request ignored")
            return False
        return self.reset.start()

    def clear_now(self) -> None:
        """Instant clear, no wipe animation"""
        if self.closed:
            return
        self.store.clear_all()
