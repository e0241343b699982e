"""Curve shaping shared by the attack, decay and release segments."""

from __future__ import annotations

import math

from .state import CURVE_EPSILON


def curve_ratio(k: float) -> float:
    """Map a curve factor in [-1, 1] onto a ratio strictly inside (0, 1)."""

    return -k * (0.5 - CURVE_EPSILON) + 0.5


def curve(x: float, h: float, w: float, k: float) -> float:
    """Monotonic curve from ``(0, 0)`` to ``(w, h)``.

    ``k == 0`` is a straight line.  Otherwise the segment follows
    ``h * (b ** (2x/w) - 1) / (b ** 2 - 1)`` with ``b = 1/r - 1`` and
    ``r = curve_ratio(k)``: positive ``k`` rises slowly then steeply, negative
    ``k`` rises steeply then levels off.  The exponential form is evaluated
    through ``expm1`` so tiny curve factors stay accurate and the end points
    are hit exactly.

    ``x`` is clamped to ``[0, w]``.  ``w`` must be positive; zero-length
    segments are resolved by the caller and never reach this function.
    """

    if not w > 0.0:
        raise ValueError(f"curve width must be positive, got {w!r}")
    if x <= 0.0:
        return 0.0
    if x >= w:
        return h
    if k == 0.0:
        return h / w * x

    r = curve_ratio(k)
    log_base = math.log((1.0 - r) / r)
    if log_base == 0.0:
        return h / w * x
    return h * math.expm1(2.0 * x / w * log_base) / math.expm1(2.0 * log_base)


__all__ = ["curve", "curve_ratio"]
