"""Three-point turn classification.

Works on anything exposing ``x`` and ``y`` (Points, vectors, pydantic models),
including coordinates at ±infinity.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Protocol

from layout2d.precision import equals


class XY(Protocol):
    x: float
    y: float


class Orientation(IntEnum):
    COLLINEAR = 0
    CLOCKWISE = 1
    COUNTERCLOCKWISE = 2


def _product(a: float, b: float, precision: int | None) -> float:
    # 0 * inf is NaN; a factor that is zero forces the whole product to zero
    if equals(a, 0, precision) or equals(b, 0, precision):
        return 0.0
    return a * b


def orientation(p1: XY, p2: XY, p3: XY, precision: int | None = None) -> Orientation:
    """Classify the turn p1 → p2 → p3.

    Opposing infinite products leave the cross term undefined (NaN); those
    are reported as clockwise rather than collinear.
    """
    rise_run = _product(p2.y - p1.y, p3.x - p2.x, precision)
    run_rise = _product(p2.x - p1.x, p3.y - p2.y, precision)
    val = rise_run - run_rise
    if equals(val, 0, precision):
        return Orientation.COLLINEAR
    return Orientation.COUNTERCLOCKWISE if val > 0 else Orientation.CLOCKWISE
