"""Tests for Vector and its two representations."""

import math

import pytest

from layout2d.models.point import Point
from layout2d.models.vector import Components, Polar, Vector


class TestVectorCreate:
    def test_components(self):
        v = Vector(3.5, 7.25)
        assert v.x == 3.5
        assert v.y == 7.25
        assert isinstance(v.form, Components)

    def test_polar(self):
        v = Vector(magnitude=42.0, angle=1.25)
        assert v.magnitude == 42.0
        assert v.angle == 1.25
        assert isinstance(v.form, Polar)

    def test_from_mapping(self):
        assert isinstance(Vector({"magnitude": 1, "angle": 0}).form, Polar)
        assert Vector({"x": 1, "y": 2}).y == 2

    def test_rejects_bad_components(self):
        with pytest.raises(ValueError, match="X component not a number"):
            Vector(math.nan, 1)
        with pytest.raises(ValueError, match="Y component not a number"):
            Vector(1, {"magnitude": 5, "angle": 5})

    def test_rejects_bad_polar(self):
        with pytest.raises(ValueError, match="Magnitude not a number"):
            Vector(magnitude=math.nan, angle=1)
        with pytest.raises(ValueError, match="Angle not a finite number"):
            Vector(magnitude=1, angle="5")

    def test_rejects_zero_components(self):
        with pytest.raises(ValueError, match="Zero vector"):
            Vector(0, 0)

    def test_negative_magnitude_flips(self):
        v = Vector(magnitude=-5, angle=math.pi / 2)
        assert v.magnitude == 5
        assert v.angle == 3 / 2 * math.pi


class TestFormTransitions:
    def test_read_x_keeps_polar(self):
        v = Vector(magnitude=5, angle=0)
        assert v.x == 5
        assert isinstance(v.form, Polar)

    def test_write_x_switches_to_components(self):
        v = Vector(magnitude=5, angle=0)
        v.x = 11
        assert isinstance(v.form, Components)
        assert v.x == 11
        assert v.y == pytest.approx(0)

    def test_write_y_keeps_x(self):
        v = Vector(magnitude=5, angle=math.pi / 2)
        assert v.y == 5
        v.y = 11
        assert v.y == 11
        assert v.x == pytest.approx(0)

    def test_read_angle_keeps_components(self):
        v = Vector(0, 5)
        assert v.angle == math.pi / 2
        assert isinstance(v.form, Components)

    def test_write_angle_switches_to_polar(self):
        v = Vector(0, 5)
        v.angle = 0
        assert isinstance(v.form, Polar)
        assert v.angle == 0
        assert v.magnitude == pytest.approx(5)

    def test_write_magnitude(self):
        v = Vector(5, 0)
        v.magnitude = 10
        assert isinstance(v.form, Polar)
        assert v.magnitude == 10
        assert v.angle == pytest.approx(0)

    def test_negative_magnitude_write(self):
        v = Vector(5, 0)
        v.magnitude = -10
        assert v.magnitude == 10
        assert v.angle == math.pi

    def test_zero_magnitude_remembers_heading(self):
        v = Vector(magnitude=1, angle=math.pi / 2)
        v.magnitude = 0
        v.extend_by(2)
        assert v.x == pytest.approx(0)
        assert v.y == pytest.approx(2)

    def test_zero_components_have_no_angle(self):
        v = Vector(1, 0).minus(Vector(1, 0))
        assert v.magnitude == 0
        with pytest.raises(ValueError, match="zero-length"):
            v.angle


class TestVectorOperations:
    def test_multiply_by(self):
        v = Vector(5, 0)
        assert v.multiply_by(2).magnitude == 10
        assert v.angle == pytest.approx(0)

    def test_extend_by(self):
        v = Vector(5, 0)
        assert v.extend_by(1).magnitude == 6
        assert v.angle == pytest.approx(0)

    def test_add_minus_mutate(self):
        v = Vector(5, 0)
        assert v.add(Vector(1, 0)).x == 6
        assert v.x == 6
        assert v.minus(Vector(2, 0)).x == 4

    def test_slope(self):
        assert Vector(1, 5).slope() == 5
        assert Vector(0, -2).slope() == -math.inf

    def test_flip(self):
        v = Vector(1, 1)
        assert v.flip().x == -1
        assert v.x == -1

    def test_magnitude_sqrd_no_switch(self):
        v = Vector(2, 0)
        assert v.magnitude_sqrd() == 4
        assert isinstance(v.form, Components)

    def test_normalize(self):
        v = Vector(-5, 0)
        assert v.normalize().x == -1
        assert v.angle == pytest.approx(math.pi)
        assert v.magnitude == 1

    def test_normalize_polar(self):
        v = Vector(magnitude=5, angle=math.pi / 2)
        assert v.normalize().x == pytest.approx(0)
        assert v.y == 1

    def test_copy_independent(self):
        v = Vector(1, 2)
        c = v.copy()
        c.flip()
        assert v.x == 1

    def test_quadrants(self):
        assert Vector(1, 0).quadrant() == 1
        assert Vector(magnitude=1, angle=0).quadrant() == 1
        assert Vector(0, 1).quadrant() == 2
        assert Vector(magnitude=1, angle=math.pi / 2).quadrant() == 2
        assert Vector(-1, 0).quadrant() == 3
        assert Vector(magnitude=1, angle=math.pi).quadrant() == 3
        assert Vector(0, -1).quadrant() == 4
        assert Vector(magnitude=1, angle=math.pi * 3 / 2).quadrant() == 4
        assert Vector(magnitude=1, angle=2 * math.pi).quadrant() == 1

    def test_dot_and_cross(self):
        assert Vector(5, 2).dot_product(Vector(3, 4)) == 23
        assert Vector(5, 2).cross_product(Vector(3, 4)) == 14

    def test_projection_keeps_original(self):
        v = Vector(5, 2)
        v.projection(Vector(3, 4))
        assert (v.x, v.y) == (5, 2)

    def test_projection_along_peer(self):
        peer = Vector(3, 8)
        assert Vector(5, 2).projection(peer).angle == pytest.approx(peer.angle)
        assert Vector(magnitude=5, angle=math.pi / 4).projection(peer).angle == pytest.approx(peer.angle)

    def test_normal_is_clockwise(self):
        n = Vector(1, 2).normal()
        assert (n.x, n.y) == (2, -1)

    def test_reflect(self):
        r = Vector(1, -1).reflect(Vector(0, 1))
        assert r.x == pytest.approx(1)
        assert r.y == pytest.approx(1)

    def test_reflect_elasticity_friction(self):
        r = Vector(1, -1).reflect(Vector(0, 1), elasticity=0.5, friction=0.5)
        assert r.x == pytest.approx(0.5)
        assert r.y == pytest.approx(0.5)

    def test_between(self):
        v = Vector.between(Point(1, 1), Point(4, 5))
        assert v.magnitude == 5


class TestVectorEquality:
    def test_components(self):
        a, b = Vector(5, 2), Vector(5, 2)
        assert a.equals(b)
        assert a == b
        assert not a.equals(b.copy().flip())

    def test_polar_across_wrap(self):
        a = Vector(magnitude=5, angle=0)
        b = Vector(magnitude=-5, angle=math.pi)
        assert a.equals(b)
        assert not a.equals(b.copy().flip())
        assert isinstance(a.form, Polar)
        assert isinstance(b.form, Polar)

    def test_mixed_forms(self):
        assert Vector(0, 2).equals(Vector(magnitude=2, angle=math.pi / 2))

    def test_is_zero(self):
        assert Vector(1e-5, 0).is_zero()
        assert not Vector(1, 0).is_zero()


class TestIntersectsCircle:
    def test_hit(self):
        assert Vector(1, 1).intersects_circle(Point(2, 2), 1.5 * 1.5)
        assert Vector(1, 1).intersects_circle(Point(1, 1), 0.5 * 0.5)

    def test_miss(self):
        assert not Vector(2, 2).intersects_circle(Point(3, 3), 0.5 * 0.5)
        assert not Vector(2, 2).intersects_circle(Point(-2, -2), 1)


class TestVectorExport:
    def test_log_string(self):
        assert Vector(1, 1).log_string() == "<1, 1>"
        assert Vector(magnitude=5, angle=math.pi / 2).log_string() == "[5 @ 90deg]"

    def test_to_dict(self):
        assert Vector(1, 2).to_dict() == {"x": 1, "y": 2}
        assert Vector(magnitude=1, angle=0).to_dict() == {"magnitude": 1, "angle": 0}
