"""Direction plus magnitude, held in one of two interchangeable forms.

A vector is stored either as ``Components(x, y)`` or as
``Polar(magnitude, angle)``. Reading a field of the other form converts on the
fly without caching. Writing a component switches the vector to component
form, and writing magnitude or angle switches it to polar form. The switch is
computed from the current form first, so no field is silently lost.

The zero vector has no direction. ``Vector(0, 0)`` is rejected, but a polar
vector may shrink to zero magnitude and keep its angle, so it can be
extended again later.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from layout2d.angles import ONE_DEGREE, TWO_PI, angle_diff, bound_angle
from layout2d.precision import equals, is_zero, valid_number


@dataclass(frozen=True)
class Components:
    x: float
    y: float

    def to_polar(self) -> Polar:
        if self.x == 0 and self.y == 0:
            raise ValueError("Angle undefined for a zero-length vector")
        return Polar(math.hypot(self.x, self.y), math.atan2(self.y, self.x))


@dataclass(frozen=True)
class Polar:
    magnitude: float
    angle: float

    def to_components(self) -> Components:
        return Components(
            self.magnitude * math.cos(self.angle),
            self.magnitude * math.sin(self.angle),
        )


Form = Union[Components, Polar]


def _polar(magnitude: float, angle: float) -> Polar:
    """Polar form with a nonnegative magnitude (negative flips the heading)."""
    if magnitude < 0:
        return Polar(-magnitude, bound_angle(angle + math.pi))
    return Polar(magnitude, angle)


class Vector:
    """A 2D vector anchored at the origin.

    >>> Vector(3, 4).magnitude
    5.0
    >>> Vector(magnitude=2, angle=0).x
    2.0
    """

    __slots__ = ("_form",)

    def __init__(
        self,
        x: Any = None,
        y: Any = None,
        *,
        magnitude: Any = None,
        angle: Any = None,
    ) -> None:
        if isinstance(x, Mapping):
            fields = x
            if "magnitude" in fields or "angle" in fields:
                magnitude, angle = fields.get("magnitude"), fields.get("angle")
                x = y = None
            else:
                x, y = fields.get("x"), fields.get("y")

        if magnitude is not None or angle is not None:
            if not valid_number(magnitude):
                raise ValueError(f"Magnitude not a number: {magnitude!r}")
            if not valid_number(angle) or math.isinf(angle):
                raise ValueError(f"Angle not a finite number: {angle!r}")
            self._form: Form = _polar(magnitude, angle)
            return

        if not valid_number(x):
            raise ValueError(f"X component not a number: {x!r}")
        if not valid_number(y):
            raise ValueError(f"Y component not a number: {y!r}")
        if x == 0 and y == 0:
            raise ValueError("Zero vector has no direction; use magnitude/angle form")
        self._form = Components(x, y)

    @classmethod
    def from_form(cls, form: Form) -> Vector:
        """Wrap an existing representation. Zero components are allowed here."""
        vector = cls.__new__(cls)
        vector._form = form
        return vector

    @classmethod
    def between(cls, a: Any, b: Any) -> Vector:
        """Vector from point ``a`` to point ``b``."""
        return cls.from_form(Components(b.x - a.x, b.y - a.y))

    # ── Representation ────────────────────────────────────────────────

    @property
    def form(self) -> Form:
        """The representation currently held."""
        return self._form

    def _components(self) -> Components:
        if isinstance(self._form, Components):
            return self._form
        return self._form.to_components()

    def _to_polar(self) -> Polar:
        if isinstance(self._form, Polar):
            return self._form
        return self._form.to_polar()

    @property
    def x(self) -> float:
        return self._components().x

    @x.setter
    def x(self, value: float) -> None:
        self._form = Components(value, self._components().y)

    @property
    def y(self) -> float:
        return self._components().y

    @y.setter
    def y(self, value: float) -> None:
        self._form = Components(self._components().x, value)

    @property
    def magnitude(self) -> float:
        if isinstance(self._form, Polar):
            return self._form.magnitude
        return math.hypot(self._form.x, self._form.y)

    @magnitude.setter
    def magnitude(self, value: float) -> None:
        self._form = _polar(value, self._to_polar().angle)

    @property
    def angle(self) -> float:
        """Heading in radians. Raises ``ValueError`` for an exact zero vector."""
        return self._to_polar().angle

    @angle.setter
    def angle(self, value: float) -> None:
        self._form = Polar(self.magnitude, value)

    # ── In-place operations (return self) ─────────────────────────────

    def add(self, other: Any) -> Vector:
        c = self._components()
        self._form = Components(c.x + other.x, c.y + other.y)
        return self

    def minus(self, other: Any) -> Vector:
        c = self._components()
        self._form = Components(c.x - other.x, c.y - other.y)
        return self

    def multiply_by(self, factor: float) -> Vector:
        if isinstance(self._form, Polar):
            self._form = _polar(self._form.magnitude * factor, self._form.angle)
        else:
            self._form = Components(self._form.x * factor, self._form.y * factor)
        return self

    def extend_by(self, amount: float) -> Vector:
        """Grow the magnitude by ``amount``, keeping the heading."""
        self.magnitude = self.magnitude + amount
        return self

    def normalize(self) -> Vector:
        self.magnitude = 1
        return self

    def flip(self) -> Vector:
        if isinstance(self._form, Polar):
            self._form = Polar(self._form.magnitude, bound_angle(self._form.angle + math.pi))
        else:
            self._form = Components(-self._form.x, -self._form.y)
        return self

    def copy(self) -> Vector:
        return Vector.from_form(self._form)

    # ── Derived quantities ────────────────────────────────────────────

    def magnitude_sqrd(self) -> float:
        """Squared length, without a square root or a form switch."""
        if isinstance(self._form, Polar):
            return self._form.magnitude * self._form.magnitude
        return self._form.x * self._form.x + self._form.y * self._form.y

    def slope(self) -> float:
        c = self._components()
        if c.x == 0:
            return math.copysign(math.inf, c.y)
        return c.y / c.x

    def quadrant(self) -> int:
        """Quarter of the circle the heading falls in, 1 to 4 counterclockwise from +x."""
        heading = bound_angle(self.angle) % TWO_PI
        return min(int(heading // (math.pi / 2)), 3) + 1

    def dot_product(self, peer: Any) -> float:
        c = self._components()
        return c.x * peer.x + c.y * peer.y

    def cross_product(self, peer: Any) -> float:
        c = self._components()
        return c.x * peer.y - c.y * peer.x

    def projection(self, peer: Vector) -> Vector:
        """Component of this vector along ``peer``, as a vector in peer's direction."""
        scale = self.dot_product(peer) / peer.magnitude_sqrd()
        return Vector.from_form(Components(peer.x * scale, peer.y * scale))

    def normal(self) -> Vector:
        """Clockwise perpendicular of the same magnitude."""
        if isinstance(self._form, Polar):
            return Vector.from_form(
                Polar(self._form.magnitude, bound_angle(self._form.angle - math.pi / 2))
            )
        return Vector.from_form(Components(self._form.y, -self._form.x))

    def reflect(self, normal: Vector, elasticity: float = 1.0, friction: float = 0.0) -> Vector:
        """Bounce off a surface with the given normal.

        The part along ``normal`` is reversed and scaled by ``elasticity``;
        the part along the surface is scaled by ``1 - friction``.
        """
        along = self.projection(normal)
        surface = self.copy().minus(along)
        return surface.multiply_by(1 - friction).minus(along.multiply_by(elasticity))

    def intersects_circle(self, center: Any, radius_sqrd: float) -> bool:
        """Check if this vector, as a segment from the origin, touches a circle."""
        length_sqrd = self.magnitude_sqrd()
        along = self.dot_product(center)
        if along < 0:
            closest = Components(0.0, 0.0)
        elif along > length_sqrd:
            closest = self._components()
        else:
            scale = along / length_sqrd
            c = self._components()
            closest = Components(c.x * scale, c.y * scale)
        dx, dy = center.x - closest.x, center.y - closest.y
        return dx * dx + dy * dy < radius_sqrd

    def is_zero(self, threshold: float = ONE_DEGREE) -> bool:
        return is_zero(self.magnitude_sqrd(), threshold * threshold)

    # ── Comparison / export ───────────────────────────────────────────

    def equals(self, peer: Vector, precision: int | None = None) -> bool:
        if isinstance(self._form, Polar) and isinstance(peer.form, Polar):
            return equals(self.magnitude, peer.magnitude, precision) and equals(
                angle_diff(self.angle, peer.angle), 0, precision
            )
        return equals(self.x, peer.x, precision) and equals(self.y, peer.y, precision)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, float]:
        if isinstance(self._form, Polar):
            return {"magnitude": self._form.magnitude, "angle": self._form.angle}
        return {"x": self._form.x, "y": self._form.y}

    def log_string(self) -> str:
        if isinstance(self._form, Polar):
            return f"[{self._form.magnitude:g} @ {math.degrees(self._form.angle):g}deg]"
        return f"<{self._form.x:g}, {self._form.y:g}>"

    def __repr__(self) -> str:
        return f"Vector({self._form!r})"
