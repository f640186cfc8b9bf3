"""Angle helpers working in radians on the [0, 2π] circle."""

from __future__ import annotations

import math
from enum import IntEnum

from layout2d.precision import is_zero

TWO_PI = 2 * math.pi

# One degree, the default tolerance for heading comparisons
ONE_DEGREE = math.pi / 180


class AngleOrder(IntEnum):
    """Result of comparing two headings."""

    CLOCKWISE = 1
    COUNTERCLOCKWISE = -1
    EQUAL = 0


def bound_angle(angle: float) -> float:
    """Wrap an angle into [0, 2π]."""
    if angle < 0:
        return TWO_PI + math.fmod(angle, TWO_PI)
    if angle > TWO_PI:
        return math.fmod(angle, TWO_PI)
    return angle


def angle_diff(first: float, second: float) -> float:
    """Signed shortest rotation from ``first`` to ``second``, in (-π, π]."""
    diff = bound_angle(bound_angle(second) - bound_angle(first))
    if diff > math.pi:
        diff -= TWO_PI
    return diff


def diff_normalized(diff: float, threshold: float = ONE_DEGREE) -> AngleOrder:
    """Classify a signed difference as equal or as the larger side."""
    if is_zero(diff, threshold):
        return AngleOrder.EQUAL
    return AngleOrder.CLOCKWISE if diff < 0 else AngleOrder.COUNTERCLOCKWISE


def angles_match(first: float, second: float, threshold: float = ONE_DEGREE) -> AngleOrder:
    """Compare two headings, treating values within ``threshold`` as equal.

    Wrap-around is honoured: 359.5° and 0.2° match at the default threshold.
    """
    diff = bound_angle(first) - bound_angle(second)
    if abs(diff) <= threshold or abs(diff) >= TWO_PI - threshold:
        return AngleOrder.EQUAL
    if 0 < diff < math.pi or diff < -math.pi:
        return AngleOrder.COUNTERCLOCKWISE
    return AngleOrder.CLOCKWISE
