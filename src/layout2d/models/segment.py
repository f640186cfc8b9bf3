"""Bounded line segment between an origin and a target."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from layout2d.models.point import Point
from layout2d.models.vector import Vector
from layout2d.orientation import Orientation, orientation
from layout2d.precision import clamp, equals


def as_point(value: Any) -> Point:
    """Copy a Point, or build one from ``(x, y)`` / ``{"x", "y"}`` / any x-y object."""
    if isinstance(value, Point):
        return value.copy()
    return Point.model_validate(value)


@dataclass
class ClosestPoints:
    """Closest pair between two segments and where each lies along its segment (0 to 1)."""

    a_interp: float
    b_interp: float
    a_close: Point
    b_close: Point


class Segment:
    """Segment from ``a`` to ``b``.

    The target is held either as the endpoint ``b`` or as a Vector from ``a``;
    whichever form was given is kept and the other is derived on read.
    ``vector``, ``magnitude``, ``angle`` and ``slope`` are derived and cannot
    be assigned.
    """

    __slots__ = ("_a", "_target")

    def __init__(self, a: Any, b: Any) -> None:
        try:
            self._a = as_point(a)
        except ValueError as e:
            raise ValueError(f"Vertex 1 not a viable construction point: {a!r}") from e

        if isinstance(b, Vector):
            self._target: Union[Point, Vector] = b.copy()
        elif isinstance(b, Mapping) and "magnitude" in b:
            self._target = Vector(b)
        else:
            try:
                self._target = as_point(b)
            except ValueError as e:
                raise ValueError(f"Vertex 2 not a viable construction point: {b!r}") from e

    # ── Endpoints ─────────────────────────────────────────────────────

    @property
    def a(self) -> Point:
        return self._a

    @a.setter
    def a(self, value: Any) -> None:
        # a vector target is relative to the old origin: pin b down first
        self._target = self.b
        self._a = as_point(value)

    origin = a

    @property
    def b(self) -> Point:
        if isinstance(self._target, Point):
            return self._target
        return self._a.copy().add(self._target)

    @b.setter
    def b(self, value: Any) -> None:
        self._target = as_point(value)

    target = b

    # ── Derived (read-only) ───────────────────────────────────────────

    @property
    def vector(self) -> Vector:
        """Segment as a vector from the origin. Returns a fresh copy."""
        if isinstance(self._target, Vector):
            return self._target.copy()
        return Vector.between(self._a, self._target)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.b.x - self._a.x, self.b.y - self._a.y)

    length = magnitude
    distance = magnitude

    @property
    def angle(self) -> float:
        return self.vector.angle

    @property
    def slope(self) -> float:
        b = self.b
        dx = b.x - self._a.x
        dy = b.y - self._a.y
        if dx == 0:
            return math.copysign(math.inf, dy) if dy != 0 else math.nan
        return dy / dx

    def distance_sqrd(self) -> float:
        """Squared length, cheaper than ``magnitude`` for comparisons."""
        b = self.b
        dx = b.x - self._a.x
        dy = b.y - self._a.y
        return dx * dx + dy * dy

    def midpoint(self) -> Point:
        b = self.b
        return Point(self._a.x + (b.x - self._a.x) / 2, self._a.y + (b.y - self._a.y) / 2)

    # ── Mutation / copies ─────────────────────────────────────────────

    def flip(self) -> Segment:
        """Swap the endpoints in place."""
        if isinstance(self._target, Vector):
            new_origin = self.b
            self._target = self._target.copy().flip()
            self._a = new_origin
        else:
            self._a, self._target = self._target, self._a
        return self

    def copy(self) -> Segment:
        return Segment(self._a, self._target)

    def equals(self, peer: Segment, precision: int | None = None) -> bool:
        return self._a.equals(peer.a, precision) and self.b.equals(peer.b, precision)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    # ── Predicates ────────────────────────────────────────────────────

    def intersects(self, segment: Segment, precision: int | None = None) -> bool:
        """Check if two segments touch or cross, endpoints included."""
        a1, b1 = self._a, self.b
        a2, b2 = segment.a, segment.b
        o1 = orientation(a1, b1, a2, precision)
        o2 = orientation(a1, b1, b2, precision)
        o3 = orientation(a2, b2, a1, precision)
        o4 = orientation(a2, b2, b1, precision)

        if o1 != o2 and o3 != o4:
            return True

        # collinear special cases
        if o1 == Orientation.COLLINEAR and a2.is_on_segment(self, precision):
            return True
        if o2 == Orientation.COLLINEAR and b2.is_on_segment(self, precision):
            return True
        if o3 == Orientation.COLLINEAR and a1.is_on_segment(segment, precision):
            return True
        if o4 == Orientation.COLLINEAR and b1.is_on_segment(segment, precision):
            return True
        return False

    def intersection_point(self, segment: Segment, precision: int | None = None) -> Point | None:
        """Crossing point of two segments.

        Shared endpoints are returned as a copy of the endpoint. Collinear and
        parallel segments return ``None`` even when they overlap.
        """
        a1, b1 = self._a, self.b
        if a1.equals(segment.a, precision) or a1.equals(segment.b, precision):
            return a1.copy()
        if b1.equals(segment.a, precision) or b1.equals(segment.b, precision):
            return b1.copy()

        v = self.vector
        peer = segment.vector
        origins = Vector.between(a1, segment.a)
        cross = v.cross_product(peer)
        cross_origin = origins.cross_product(v)

        if equals(cross, 0, precision):
            return None

        t = origins.cross_product(peer) / cross
        u = cross_origin / cross
        if _on_unit_interval(t, precision) and _on_unit_interval(u, precision):
            return Point(a1.x + v.x * t, a1.y + v.y * t)
        return None

    def direction_to(self, point: Any) -> int:
        """Side of the segment ``point`` lies on: 1 left, -1 right, 0 on the line."""
        cross = self.vector.cross_product(Vector.between(self._a, point))
        if cross > 0:
            return 1
        if cross < 0:
            return -1
        return 0

    # ── Closest points ────────────────────────────────────────────────

    def closest_point_to_point(self, point: Any) -> Point:
        """Point on this segment nearest to ``point``."""
        b = self.b
        dx = b.x - self._a.x
        dy = b.y - self._a.y
        length_sqrd = dx * dx + dy * dy
        if length_sqrd == 0:
            return self._a.copy()
        t = ((point.x - self._a.x) * dx + (point.y - self._a.y) * dy) / length_sqrd
        if t <= 0:
            return self._a.copy()
        if t >= 1:
            return b.copy()
        return Point(self._a.x + dx * t, self._a.y + dy * t)

    def closest_point_to_segment(self, peer: Segment) -> ClosestPoints:
        """Closest points between two segments.

        Follows Ericson, *Real-Time Collision Detection* 5.1.9. Parallel
        segments clamp to an arbitrary (but valid) closest pair.
        """
        p1, p2 = self._a, peer.a
        d1 = Vector.between(p1, self.b)
        d2 = Vector.between(p2, peer.b)
        r = Vector.between(p2, p1)
        a = d1.dot_product(d1)
        e = d2.dot_product(d2)
        f = d2.dot_product(r)

        if equals(a, 0) and equals(e, 0):
            s = t = 0.0
        elif equals(a, 0):
            s = 0.0
            t = clamp(f / e, 0, 1)
        else:
            c = d1.dot_product(r)
            if equals(e, 0):
                t = 0.0
                s = clamp(-c / a, 0, 1)
            else:
                b = d1.dot_product(d2)
                denominator = a * e - b * b
                s = clamp((b * f - c * e) / denominator, 0, 1) if not equals(denominator, 0) else 0.0
                t = (b * s + f) / e
                if t < 0:
                    t = 0.0
                    s = clamp(-c / a, 0, 1)
                elif t > 1:
                    t = 1.0
                    s = clamp((b - c) / a, 0, 1)

        return ClosestPoints(
            a_interp=s,
            b_interp=t,
            a_close=Point(p1.x + d1.x * s, p1.y + d1.y * s),
            b_close=Point(p2.x + d2.x * t, p2.y + d2.y * t),
        )

    # ── Static helpers ────────────────────────────────────────────────

    @staticmethod
    def distance_sqrd_between(a: Any, b: Any) -> float:
        return (b.x - a.x) ** 2 + (b.y - a.y) ** 2

    @staticmethod
    def distance_between(a: Any, b: Any) -> float:
        return math.hypot(b.x - a.x, b.y - a.y)

    # ── Export ────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {"a": self._a.model_dump(), "b": self.b.model_dump()}

    def log_string(self) -> str:
        if isinstance(self._target, Vector):
            return f"{self._a.log_string()} plus {self._target.log_string()}"
        return f"{self._a.log_string()} -> {self._target.log_string()}"

    def __repr__(self) -> str:
        return f"Segment({self.log_string()})"


def _on_unit_interval(value: float, precision: int | None) -> bool:
    return 0 <= value <= 1 or equals(value, 0, precision) or equals(value, 1, precision)
