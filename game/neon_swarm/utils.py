"""
Utility functions for game mechanics
"""

from __future__ import annotations
from typing import Tuple


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def aabb_collide(a, b) -> bool:
    """Check if two rectangles overlap (touching edges do not count)"""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Convert a '#rrggbb' display token to an RGB tuple"""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a '#rrggbb' color, got {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
