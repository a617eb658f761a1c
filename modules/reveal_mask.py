# -*- coding: utf-8 -*-
"""Reveal Mask Module - radial-gradient mask built from the live fade points"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from core.fade_point import FadePoint


@dataclass(frozen=True)
class RevealCircle:
    """
    One disc of the mask.

    The disc is clipped at ``clip_radius``; its gradient goes from opaque at
    the center to transparent at ``gradient_radius``.
    """

    center: Tuple[float, float]
    clip_radius: float
    gradient_radius: float


class RevealMaskRenderer:
    """Builds the reveal mask and composites image over cover.

    The i-th point of a snapshot gets gradient radius ``base_radius + i + 1``,
    so later points are drawn marginally wider. Overlaps are merged with a
    per-pixel maximum: union of coverage, never brighter than one disc.
    """

    def __init__(self, base_radius: float = 35) -> None:
        self.base_radius = float(base_radius)
        r = int(math.ceil(self.base_radius))
        ys, xs = np.mgrid[-r:r + 1, -r:r + 1]
        self._reach = r
        self._dist = np.sqrt(xs * xs + ys * ys).astype(np.float32)
        self._inside = self._dist <= self.base_radius

        self._cache_key: Optional[Tuple[int, Tuple[int, int]]] = None
        self._cache_mask: Optional[np.ndarray] = None

    def circles(self, points: Iterable[FadePoint]) -> List[RevealCircle]:
        return [
            RevealCircle(point.location, self.base_radius, self.base_radius + (i + 1))
            for i, point in enumerate(points)
        ]

    def render_mask(self, points: Sequence[FadePoint], size: Tuple[int, int]) -> np.ndarray:
        """Return a float32 (h, w) mask in [0, 1]; 1 = image fully visible"""
        w, h = size
        mask = np.zeros((h, w), dtype=np.float32)
        for circle in self.circles(points):
            self._stamp(mask, circle)
        return mask

    def render_store(self, store, size: Tuple[int, int]) -> np.ndarray:
        """Mask for the store's current contents, rebuilt only after a change"""
        key = (store.version, (int(size[0]), int(size[1])))
        if key != self._cache_key or self._cache_mask is None:
            self._cache_mask = self.render_mask(store.snapshot(), size)
            self._cache_key = key
        return self._cache_mask

    def _stamp(self, mask: np.ndarray, circle: RevealCircle) -> None:
        h, w = mask.shape
        cx = int(round(circle.center[0]))
        cy = int(round(circle.center[1]))
        r = self._reach

        x0, y0 = cx - r, cy - r
        x1, y1 = cx + r + 1, cy + r + 1
        sx0, sy0 = max(x0, 0), max(y0, 0)
        sx1, sy1 = min(x1, w), min(y1, h)
        if sx0 >= sx1 or sy0 >= sy1:
            return  # entirely off-surface

        dist = self._dist[sy0 - y0:sy1 - y0, sx0 - x0:sx1 - x0]
        inside = self._inside[sy0 - y0:sy1 - y0, sx0 - x0:sx1 - x0]
        alpha = np.clip(1.0 - dist / circle.gradient_radius, 0.0, 1.0)
        alpha[~inside] = 0.0

        region = mask[sy0:sy1, sx0:sx1]
        np.maximum(region, alpha, out=region)

    @staticmethod
    def composite(cover: np.ndarray, image: np.ndarray, mask: np.ndarray) -> np.ndarray:
        """Image where the mask is opaque, cover where it is transparent"""
        if cover.shape != image.shape:
            raise ValueError(f"cover {cover.shape} and image {image.shape} differ")
        if mask.shape != image.shape[:2]:
            raise ValueError(f"mask {mask.shape} does not match image {image.shape[:2]}")

        if not mask.any():
            return cover.copy()

        m = cv2.merge([mask] * image.shape[2]) if image.ndim == 3 else mask
        out = image.astype(np.float32) * m + cover.astype(np.float32) * (1.0 - m)
        return np.clip(out + 0.5, 0, 255).astype(np.uint8)
