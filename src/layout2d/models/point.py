"""2D point with validated coordinates."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from layout2d.models.vector import Components, Vector
from layout2d.precision import equals, valid_number

if TYPE_CHECKING:
    from layout2d.models.segment import Segment


def _format(value: float) -> str:
    if math.isinf(value) or value != int(value):
        return repr(float(value))
    return str(int(value))


class Point(BaseModel):
    """2D point in the XY plane.

    Components may be ±infinity (rays toward infinity are built from points)
    but never NaN. ``add`` and ``minus`` mutate in place; use ``copy()``
    first when the original must survive.
    """

    model_config = ConfigDict(validate_assignment=True)

    x: float
    y: float

    def __init__(self, x: Any = None, y: Any = None, **data: Any) -> None:
        super().__init__(x=x, y=y, **data)

    @model_validator(mode="before")
    @classmethod
    def coerce_pairs(cls, data: Any) -> Any:
        if isinstance(data, (tuple, list)) and len(data) == 2:
            return {"x": data[0], "y": data[1]}
        if not isinstance(data, dict) and hasattr(data, "x") and hasattr(data, "y"):
            return {"x": data.x, "y": data.y}
        return data

    @field_validator("x", "y", mode="before")
    @classmethod
    def finite_or_infinite(cls, v: Any, info) -> Any:
        if not valid_number(v):
            raise ValueError(f"{info.field_name.upper()} component not a number: {v!r}")
        return v

    # ── Arithmetic ────────────────────────────────────────────────────

    def copy(self) -> Point:  # type: ignore[override]
        return Point(self.x, self.y)

    def _translate(self, dx: float, dy: float) -> Point:
        x, y = self.x + dx, self.y + dy
        if not (valid_number(x) and valid_number(y)):
            raise ValueError(f"Translating {self.log_string()} by ({dx!r}, {dy!r}) is not a number")
        self.x, self.y = x, y
        return self

    def add(self, other: Point | Vector) -> Point:
        """Translate by another point or vector (in place)."""
        return self._translate(other.x, other.y)

    def minus(self, other: Point | Vector) -> Point:
        """Translate by the negation of another point or vector (in place)."""
        return self._translate(-other.x, -other.y)

    @property
    def vector(self) -> Vector:
        """This point as a vector from the origin."""
        return Vector.from_form(Components(self.x, self.y))

    # ── Comparison ────────────────────────────────────────────────────

    def equals(self, other: Any, precision: int | None = None) -> bool:
        """Component-wise magnitude-scaled equality."""
        return equals(self.x, other.x, precision) and equals(self.y, other.y, precision)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.equals(other)

    def is_on_segment(self, segment: Segment, precision: int | None = None) -> bool:
        """Check if this point lies on the bounded segment."""
        a, b = segment.a, segment.b
        if (self.x == a.x and self.y == a.y) or (self.x == b.x and self.y == b.y):
            return True
        if not (
            _within(self.x, a.x, b.x, precision) and _within(self.y, a.y, b.y, precision)
        ):
            return False
        return equals(_slope(a, self), _slope(a, b), precision)

    # ── Export ────────────────────────────────────────────────────────

    def log_string(self) -> str:
        return f"({_format(self.x)}, {_format(self.y)})"

    def __str__(self) -> str:
        return self.log_string()


def _within(value: float, bound1: float, bound2: float, precision: int | None) -> bool:
    low, high = min(bound1, bound2), max(bound1, bound2)
    if value < low:
        return equals(value, low, precision)
    if value > high:
        return equals(value, high, precision)
    return True


def _slope(a: Point, b: Point) -> float:
    dx = b.x - a.x
    dy = b.y - a.y
    if dx == 0:
        return math.copysign(math.inf, dy) if dy != 0 else math.nan
    return dy / dx


class Vertex(Point):
    """Point held by a polygon. Frozen, so derived edges and winding stay valid.

    ``copy()`` returns a plain mutable Point.
    """

    model_config = ConfigDict(frozen=True, validate_assignment=True)
