# -*- coding: utf-8 -*-
"""
刮刮卡图层 (Scratch Layers)

- 隐藏图片：按窗口尺寸等比放大填充并居中裁剪
- 覆盖层：左上到右下的深色渐变
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def fit_fill(image: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
    """Scale ``image`` to cover ``size`` (w, h) keeping aspect, crop the overflow"""
    w, h = size
    ih, iw = image.shape[:2]
    scale = max(w / iw, h / ih)
    new_w = max(w, int(round(iw * scale)))
    new_h = max(h, int(round(ih * scale)))
    interp = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_LINEAR
    resized = cv2.resize(image, (new_w, new_h), interpolation=interp)

    x = (new_w - w) // 2
    y = (new_h - h) // 2
    return resized[y:y + h, x:x + w].copy()


def create_fallback_background(
    width: int,
    height: int,
    grid_size: int = 40,
    line_color: Tuple[int, int, int] = (255, 255, 255),
) -> np.ndarray:
    """
    程序生成的备用背景（找不到图片时使用）

    A warm-to-cool diagonal gradient with a light grid, so the reveal is
    visible against the dark cover.
    """
    xs = np.linspace(0.0, 1.0, width, dtype=np.float32)[None, :]
    ys = np.linspace(0.0, 1.0, height, dtype=np.float32)[:, None]

    bg = np.zeros((height, width, 3), dtype=np.float32)
    bg[..., 0] = 80 + 175 * xs * np.ones_like(ys)        # B
    bg[..., 1] = 60 + 120 * ys * np.ones_like(xs)        # G
    bg[..., 2] = 255 - 140 * ((xs + ys) / 2.0)           # R
    bg = bg.astype(np.uint8)

    for x in range(0, width, grid_size):
        cv2.line(bg, (x, 0), (x, height - 1), line_color, 1)
    for y in range(0, height, grid_size):
        cv2.line(bg, (0, y), (width - 1, y), line_color, 1)
    return bg


def load_background(path: Optional[str], size: Tuple[int, int]) -> np.ndarray:
    """Load the hidden image; falls back to a generated one if it can't be read"""
    w, h = size
    image = None
    if path:
        if Path(path).is_file():
            image = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if image is None:
            logger.warning("background image %r not readable, using generated background", path)

    if image is None:
        return create_fallback_background(w, h)
    return fit_fill(image, size)


def create_cover_layer(
    size: Tuple[int, int],
    start_color: Tuple[int, int, int] = (0, 0, 0),
    end_color: Tuple[int, int, int] = (26, 26, 26),
) -> np.ndarray:
    """Opaque cover: linear gradient from top-left (start) to bottom-right (end)"""
    w, h = size
    xs = np.linspace(0.0, 1.0, w, dtype=np.float32)[None, :]
    ys = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    t = ((xs + ys) / 2.0)[..., None]

    start = np.array(start_color, dtype=np.float32)
    end = np.array(end_color, dtype=np.float32)
    cover = start + (end - start) * t
    return np.clip(cover + 0.5, 0, 255).astype(np.uint8)
