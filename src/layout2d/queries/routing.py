"""Detour selection around obstacle vertices."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from layout2d.models.point import Point
from layout2d.models.segment import Segment
from layout2d.models.vector import Vector


def closest_point_around_vertices(
    vertices: Iterable[Any], start: Any, goal_vector: Vector
) -> Point | None:
    """Pick the vertex to route through when going around an obstacle.

    Vertices are split by which side of the straight line from ``start``
    along ``goal_vector`` they fall on. On each side the vertex farthest
    from the line bounds the detour. The side whose detour
    (start → vertex → goal) is shorter wins.

    Args:
        vertices: Obstacle vertices visible from ``start``.
        start: Route origin.
        goal_vector: Vector from ``start`` to the goal.

    Returns:
        The chosen vertex, or None when no vertex lies off the line.
    """
    goal = Point(start.x + goal_vector.x, start.y + goal_vector.y)
    line = Segment(start, goal)

    # side -> (vertex, squared distance from the line)
    farthest: dict[int, tuple[Any, float]] = {}
    for vertex in vertices:
        side = line.direction_to(vertex)
        if side == 0:
            continue
        along = Vector.between(start, vertex).projection(goal_vector)
        off_x = vertex.x - (start.x + along.x)
        off_y = vertex.y - (start.y + along.y)
        off_sqrd = off_x * off_x + off_y * off_y
        if side not in farthest or off_sqrd > farthest[side][1]:
            farthest[side] = (vertex, off_sqrd)

    if not farthest:
        return None

    def detour(vertex: Any) -> float:
        return Segment.distance_between(start, vertex) + Segment.distance_between(vertex, goal)

    return min((v for v, _ in farthest.values()), key=detour)
