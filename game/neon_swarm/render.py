"""
Offscreen numpy rasterizer for FrameSnapshot (rgb_array render mode)
"""

from typing import Tuple

import numpy as np

from .config import COLORS
from .simulation import FrameSnapshot
from .utils import hex_to_rgb


def _fill_rect(frame: np.ndarray, x: float, y: float, w: float, h: float,
               rgb: Tuple[int, int, int], alpha: float = 1.0):
    """Blend an axis-aligned rectangle into the frame, clipped to its bounds"""
    height, width = frame.shape[:2]
    x0 = max(0, int(np.floor(x)))
    y0 = max(0, int(np.floor(y)))
    x1 = min(width, int(np.ceil(x + w)))
    y1 = min(height, int(np.ceil(y + h)))
    if x0 >= x1 or y0 >= y1:
        return

    if alpha >= 1.0:
        frame[y0:y1, x0:x1] = rgb
        return
    region = frame[y0:y1, x0:x1].astype(np.float32)
    blended = region * (1.0 - alpha) + np.asarray(rgb, dtype=np.float32) * alpha
    frame[y0:y1, x0:x1] = blended.astype(np.uint8)


def rasterize(snapshot: FrameSnapshot, width: int, height: int) -> np.ndarray:
    """Draw a snapshot into an (height, width, 3) uint8 array"""
    frame = np.empty((height, width, 3), dtype=np.uint8)
    frame[:, :] = hex_to_rgb(COLORS["BACKGROUND"])

    for s in snapshot.stars:
        level = int(255 * s.brightness)
        _fill_rect(frame, s.x - s.size / 2, s.y - s.size / 2, s.size, s.size,
                   (level, level, level))

    for e in snapshot.enemies:
        _fill_rect(frame, e.x, e.y, e.width, e.height, hex_to_rgb(e.color))

    for b in snapshot.projectiles:
        _fill_rect(frame, b.x, b.y, b.width, b.height, hex_to_rgb(b.color))

    for p in snapshot.particles:
        _fill_rect(frame, p.x, p.y, p.width, p.height, hex_to_rgb(p.color), alpha=p.alpha)

    if snapshot.player is not None:
        pl = snapshot.player
        _fill_rect(frame, pl.x, pl.y, pl.width, pl.height, hex_to_rgb(pl.color))

    return frame
