"""Scalar and vector blending helpers used by interpolation."""

import math

from space_replay.entities import Vec2


def lerp(start: float, end: float, t: float) -> float:
    """Return ``start + (end - start) * t``."""
    return start + (end - start) * t


def lerp_vec(start: Vec2, end: Vec2, t: float) -> Vec2:
    """Componentwise :func:`lerp` of two vectors."""
    return Vec2(lerp(start.x, end.x, t), lerp(start.y, end.y, t))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
