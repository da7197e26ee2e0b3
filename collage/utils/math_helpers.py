"""Math helpers — angles and clamping. No engine imports."""

from __future__ import annotations

import math

# Tolerance for singular/degenerate checks and float comparisons.
EPSILON = 1e-9


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp01(value: float) -> float:
    """Clamp into [0, 1]. NaN collapses to 0."""
    if math.isnan(value):
        return 0.0
    return clamp(float(value), 0.0, 1.0)


def degrees(d: float) -> float:
    """Convert degrees to radians."""
    return d * math.pi / 180.0


def turns(t: float) -> float:
    """Convert turns to radians. One turn is a full circle."""
    return 2.0 * math.pi * t


def fmod(value: float, n: int) -> float:
    """Floored modulo for floats: the result takes the sign of ``n``.

    ``fmod(-1.5, 6) == 4.5`` where ``math.fmod`` would give ``-1.5``.
    """
    whole = math.floor(value)
    return (whole % n) + (value - whole)


def wrap_angle(theta: float) -> float:
    """Wrap an angle in radians into [0, 2*pi)."""
    return theta - turns(math.floor(theta / (2.0 * math.pi)))
