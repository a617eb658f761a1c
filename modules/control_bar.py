"""
Top-right control bar: reset button and decay toggle.
Disabled buttons are drawn faded and ignore clicks.
"""
from typing import Callable, List, Tuple

import cv2
import numpy as np

from core.scratch_session import ScratchSession


class IconButton:
    """Round icon button"""

    def __init__(
        self,
        x: int,
        y: int,
        size: int,
        draw_icon: Callable[[np.ndarray, Tuple[int, int], int, Tuple[int, int, int]], None],
        action: Callable[[], None],
        enabled: Callable[[], bool] = lambda: True,
    ):
        self.x = x
        self.y = y
        self.size = size
        self.draw_icon = draw_icon
        self.action = action
        self.enabled = enabled
        self.hovered = False

    @property
    def center(self) -> Tuple[int, int]:
        return self.x + self.size // 2, self.y + self.size // 2

    def contains(self, px: int, py: int) -> bool:
        cx, cy = self.center
        return (px - cx) ** 2 + (py - cy) ** 2 <= (self.size // 2) ** 2

    def render(self, frame: np.ndarray, color: Tuple[int, int, int], opacity: float):
        h, w = frame.shape[:2]
        x0, y0 = max(self.x - 2, 0), max(self.y - 2, 0)
        x1, y1 = min(self.x + self.size + 2, w), min(self.y + self.size + 2, h)
        if x0 >= x1 or y0 >= y1:
            return

        # 只在按钮区域内做混合
        roi = frame[y0:y1, x0:x1]
        overlay = roi.copy()
        cx, cy = self.center
        self.draw_icon(overlay, (cx - x0, cy - y0), self.size // 2, color)
        if self.hovered and self.enabled():
            cv2.circle(overlay, (cx - x0, cy - y0), self.size // 2, color, 1, lineType=cv2.LINE_AA)
        cv2.addWeighted(overlay, opacity, roi, 1 - opacity, 0, roi)


def draw_reset_icon(img: np.ndarray, center: Tuple[int, int], radius: int, color) -> None:
    """Filled disc with a turn-up-left arrow cut out of it"""
    cx, cy = center
    cv2.circle(img, center, radius - 1, color, -1, lineType=cv2.LINE_AA)
    ink = (20, 20, 20)
    r = max(radius // 2, 3)
    cv2.ellipse(img, (cx, cy + r // 2), (r, r), 0, 180, 360, ink, 2, lineType=cv2.LINE_AA)
    tip = (cx - r, cy + r // 2)
    cv2.arrowedLine(img, (cx - r, cy + r // 2 - 1), (tip[0], tip[1] + r // 2 + 1), ink, 2,
                    line_type=cv2.LINE_AA, tipLength=0.6)


def draw_circle_icon(img: np.ndarray, center: Tuple[int, int], radius: int, color) -> None:
    cv2.circle(img, center, radius - 3, color, 2, lineType=cv2.LINE_AA)


def draw_circle_slash_icon(img: np.ndarray, center: Tuple[int, int], radius: int, color) -> None:
    draw_circle_icon(img, center, radius, color)
    cx, cy = center
    d = int((radius - 3) * 0.7)
    cv2.line(img, (cx - d, cy + d), (cx + d, cy - d), color, 2, lineType=cv2.LINE_AA)


class ControlBar:
    """
    Reset button (enabled only while decay is off and no reset runs) and the
    decay toggle, whose icon shows a slashed circle while decay is running.
    """

    def __init__(
        self,
        width: int,
        session: ScratchSession,
        button_size: int = 32,
        spacing: int = 8,
        padding_x: int = 32,
        padding_y: int = 64,
        color: Tuple[int, int, int] = (255, 255, 255),
        disabled_opacity: float = 0.3,
    ):
        self.session = session
        self.color = color
        self.disabled_opacity = disabled_opacity

        toggle_x = width - padding_x - button_size
        reset_x = toggle_x - spacing - button_size

        self.reset_button = IconButton(
            reset_x, padding_y, button_size, draw_reset_icon,
            action=session.request_reset,
            enabled=lambda: session.can_reset,
        )
        self.toggle_button = IconButton(
            toggle_x, padding_y, button_size, self._draw_toggle_icon,
            action=session.toggle_decay,
        )
        self.buttons: List[IconButton] = [self.reset_button, self.toggle_button]

    def _draw_toggle_icon(self, img, center, radius, color):
        if self.session.decay_active:
            draw_circle_slash_icon(img, center, radius, color)
        else:
            draw_circle_icon(img, center, radius, color)

    def handle_mouse(self, event: int, x: int, y: int, flags=0) -> bool:
        """Returns True if the event landed on a button and was consumed"""
        if event == cv2.EVENT_MOUSEMOVE:
            for btn in self.buttons:
                btn.hovered = btn.contains(x, y)
            return False

        if event in (cv2.EVENT_LBUTTONDOWN, cv2.EVENT_LBUTTONUP):
            for btn in self.buttons:
                if btn.contains(x, y):
                    if event == cv2.EVENT_LBUTTONDOWN and btn.enabled():
                        btn.action()
                    return True
        return False

    def render(self, frame: np.ndarray) -> None:
        for btn in self.buttons:
            opacity = 1.0 if btn.enabled() else self.disabled_opacity
            btn.render(frame, self.color, opacity)
