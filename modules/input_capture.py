# -*- coding: utf-8 -*-
"""Input Capture - turns pointer drags into fade points"""

from enum import Enum
from typing import Callable, Optional, Tuple

import cv2

from core.scratch_session import ScratchSession


class DragPhase(Enum):
    BEGAN = "began"
    MOVED = "moved"
    ENDED = "ended"


class InputCapture:
    """
    Drag gesture with zero minimum distance: the initial press already counts.
    Every BEGAN/MOVED sample appends one point, no debouncing.

    ``intercept`` gets first look at mouse events (the control bar); when it
    returns True the event is consumed and never becomes a point.
    """

    def __init__(
        self,
        session: ScratchSession,
        intercept: Optional[Callable[[int, int, int, int], bool]] = None,
    ) -> None:
        self.session = session
        self.intercept = intercept
        self.dragging = False

    def handle(self, location: Tuple[float, float], phase: DragPhase) -> None:
        if phase is DragPhase.ENDED:
            self.dragging = False
            return
        self.dragging = True
        self.session.add_point(location)

    def on_mouse(self, event: int, x: int, y: int, flags: int, param=None) -> None:
        """cv2.setMouseCallback adapter"""
        if self.intercept is not None and not self.dragging:
            if self.intercept(event, x, y, flags):
                return

        if event == cv2.EVENT_LBUTTONDOWN:
            self.handle((x, y), DragPhase.BEGAN)
        elif event == cv2.EVENT_MOUSEMOVE:
            if not self.dragging:
                return
            if flags & cv2.EVENT_FLAG_LBUTTON:
                self.handle((x, y), DragPhase.MOVED)
            else:
                # button released outside the window, LBUTTONUP never came
                self.handle((x, y), DragPhase.ENDED)
        elif event == cv2.EVENT_LBUTTONUP:
            if self.dragging:
                self.handle((x, y), DragPhase.ENDED)
