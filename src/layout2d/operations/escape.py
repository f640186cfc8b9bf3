"""Escape point: the nearest point just outside a polygon."""

from __future__ import annotations

import logging
import math
from typing import Any

from layout2d.angles import TWO_PI, bound_angle
from layout2d.models.point import Point
from layout2d.models.polygon import Polygon
from layout2d.models.segment import Segment, as_point
from layout2d.models.vector import Vector
from layout2d.precision import equals, min_number

logger = logging.getLogger(__name__)

MAX_ESCAPE_ATTEMPTS = 32


def _closest_edge(polygon: Polygon, point: Point) -> tuple[int, Segment, float]:
    """Index of the nearest edge, the segment from ``point`` onto it, and its squared length."""
    best: tuple[int, Segment, float] | None = None
    for i, edge in enumerate(polygon.edges):
        on_edge = edge.closest_point_to_point(point)
        escape = Segment(point, on_edge)
        if point.equals(on_edge):
            return i, escape, 0.0
        dist_sqrd = escape.distance_sqrd()
        if best is None or dist_sqrd < best[2]:
            best = (i, escape, dist_sqrd)
    return best


def _boundary_heading(polygon: Polygon, index: int, on_edge: Point) -> Vector:
    """Outward unit direction at a boundary point of edge ``index``."""
    n = len(polygon.vertices)
    edge = polygon.edges[index]
    if edge.a.equals(on_edge):
        # bisect the exterior angle at the edge's start vertex
        exterior = bound_angle(TWO_PI - polygon.interior_angle_vertex(index))
        back = polygon.edges[(index - 1) % n].vector.flip()
        return Vector(magnitude=1, angle=bound_angle(back.angle + exterior / 2))
    if edge.b.equals(on_edge):
        exterior = bound_angle(TWO_PI - polygon.interior_angle_vertex((index + 1) % n))
        back = edge.vector.flip()
        return Vector(magnitude=1, angle=bound_angle(back.angle + exterior / 2))
    # boundary points are only contained by counterclockwise rings, where the
    # clockwise perpendicular points out
    return edge.vector.normal()


def closest_point_outside_from(polygon: Polygon, point: Any, nudge: float | None = None) -> Point:
    """Move a contained point to the nearest position outside the polygon.

    Args:
        polygon: Polygon to escape from.
        point: Starting position.
        nudge: Distance to step past the boundary. Defaults to the smallest
            increment that still registers at the point's magnitude.

    Returns:
        The point itself when it is not contained, otherwise a new Point
        that is not contained. The step past the boundary starts at ``nudge``
        and doubles while the result still tests as inside, up to
        ``MAX_ESCAPE_ATTEMPTS`` times (logged as a warning when exhausted).
    """
    if not polygon.contains_point(point):
        return point

    p = as_point(point)
    index, escape, dist_sqrd = _closest_edge(polygon, p)
    if nudge is None:
        nudge = min_number(max(abs(p.x), abs(p.y)))

    if equals(dist_sqrd, 0):
        heading = _boundary_heading(polygon, index, escape.b)
        reach = 0.0
        logger.debug("Escaping boundary point %s along edge %d", p.log_string(), index)
    else:
        heading = escape.vector
        reach = heading.magnitude

    # a step within the equality tolerance still tests as inside
    for attempt in range(MAX_ESCAPE_ATTEMPTS):
        heading.magnitude = reach + nudge * 2**attempt
        escaped = p.copy().add(heading)
        if not polygon.contains_point(escaped):
            return escaped
    logger.warning(
        "Escape from %s still inside after %d attempts, distance %g",
        p.log_string(), MAX_ESCAPE_ATTEMPTS, math.sqrt(dist_sqrd),
    )
    return escaped
