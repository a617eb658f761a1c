# -*- coding: utf-8 -*-
"""Point Store - ordered collection of live fade points"""

import uuid
from typing import Iterator, List, Tuple

from core.fade_point import FadePoint


class PointStore:
    """Insertion-ordered fade points.

    Not thread safe: every mutation is expected to run on the UI loop.
    ``version`` increases on every mutation that changed the contents, so the
    renderer can tell when the mask has to be rebuilt.
    """

    def __init__(self) -> None:
        self._points: List[FadePoint] = []
        self.version = 0

    def append(self, location: Tuple[float, float], now: float) -> FadePoint:
        """Create a point at ``location`` stamped ``now`` and add it at the end"""
        point = FadePoint(location=(float(location[0]), float(location[1])), timestamp=now)
        self._points.append(point)
        self.version += 1
        return point

    def evict_expired(self, now: float, fade_duration: float) -> None:
        """Drop every point older than ``fade_duration`` (strictly greater)"""
        survivors = [p for p in self._points if (now - p.timestamp) <= fade_duration]
        if len(survivors) != len(self._points):
            self._points = survivors
            self.version += 1

    def remove_by_id(self, point_id: uuid.UUID) -> None:
        for i, point in enumerate(self._points):
            if point.id == point_id:
                del self._points[i]
                self.version += 1
                return

    def clear_all(self) -> None:
        if self._points:
            self._points.clear()
            self.version += 1

    def snapshot(self) -> Tuple[FadePoint, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[FadePoint]:
        return iter(tuple(self._points))

    def __contains__(self, point: object) -> bool:
        return any(p is point for p in self._points)
