"""Tests for Point."""

import math

import pytest

from layout2d.models.point import Point
from layout2d.models.segment import Segment
from layout2d.models.vector import Vector
from layout2d.precision import min_number


class TestPointCreate:
    def test_positional(self):
        p = Point(1, 2)
        assert p.x == 1.0
        assert p.y == 2.0

    def test_keywords(self):
        assert Point(x=1.5, y=-2).y == -2.0

    def test_from_pair_and_dict(self):
        assert Point.model_validate((3, 4)) == Point(3, 4)
        assert Point.model_validate({"x": 3, "y": 4}) == Point(3, 4)

    def test_infinity_allowed(self):
        assert Point(math.inf, -math.inf).x == math.inf

    @pytest.mark.parametrize("bad", [math.nan, "1", None, True])
    def test_rejects_bad_x(self, bad):
        with pytest.raises(ValueError, match="X component not a number"):
            Point(bad, 1)

    def test_rejects_bad_y(self):
        with pytest.raises(ValueError, match="Y component not a number"):
            Point(1, math.nan)


class TestPointArithmetic:
    def test_add_mutates(self):
        p = Point(1, 1)
        result = p.add(Vector(1, 2))
        assert result is p
        assert p == Point(2, 3)

    def test_minus_mutates(self):
        p = Point(1, 1)
        p.minus(Point(1, 0))
        assert p == Point(0, 1)

    def test_add_rejects_nan_result(self):
        p = Point(math.inf, 0)
        with pytest.raises(ValueError, match="not a number"):
            p.add(Point(-math.inf, 0))
        assert p.x == math.inf

    def test_minus_rejects_nan_result(self):
        p = Point(0, math.inf)
        with pytest.raises(ValueError, match="not a number"):
            p.minus(Point(0, math.inf))
        assert p.y == math.inf

    def test_assignment_validated(self):
        p = Point(1, 1)
        with pytest.raises(ValueError):
            p.x = math.nan

    def test_copy_is_independent(self):
        p = Point(1, 1)
        q = p.copy()
        q.add(Vector(1, 1))
        assert p == Point(1, 1)

    def test_vector(self):
        v = Point(3, 4).vector
        assert v.magnitude == 5.0

    def test_origin_vector_has_no_angle(self):
        with pytest.raises(ValueError):
            Point(0, 0).vector.angle


class TestIsOnSegment:
    segment = Segment(Point(0, 0), Point(5, 5))

    def test_on_segment(self):
        assert Point(1, 1).is_on_segment(self.segment)

    def test_off_segment(self):
        assert not Point(6, 6).is_on_segment(self.segment)
        assert not Point(1, 0).is_on_segment(Segment((0.5, 0), (1, 0.5)))
        assert not Point(0.75, 0).is_on_segment(Segment((0.5, 0), (1, 0.5)))

    def test_on_endpoint(self):
        assert Point(5, 5).is_on_segment(self.segment)

    def test_slightly_off_endpoint(self):
        assert not Point(5, 5).add(Vector(0, min_number(10))).is_on_segment(self.segment)
        # within precision
        assert Point(5, 5).add(Vector(0, min_number())).is_on_segment(self.segment)

    def test_slightly_inside(self):
        assert Point(5, 5).add(Vector(-1e-10, -1e-10)).is_on_segment(self.segment)

    def test_vertical_segment(self):
        vertical = Segment((1, 0), (1, 2))
        assert Point(1, 1).is_on_segment(vertical)
        assert not Point(1.1, 1).is_on_segment(vertical)


class TestPointExport:
    def test_log_string(self):
        assert Point(0, 1).log_string() == "(0, 1)"
        assert Point(0.75, -1.5).log_string() == "(0.75, -1.5)"
        assert str(Point(2, 3)) == "(2, 3)"

    def test_model_dump(self):
        assert Point(1, 2).model_dump() == {"x": 1.0, "y": 2.0}
