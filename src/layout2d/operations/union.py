"""Union of two simple polygons by boundary tracing.

The trace starts on a vertex of one polygon that lies outside the other and
walks forward along its boundary. Whenever the current step crosses the other
polygon, the nearest crossing is emitted and the walk continues along the
other polygon from that edge. The trace ends on returning to the starting
vertex.

Both inputs are expected to share a winding. Holes are neither read nor
produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from layout2d.models.point import Point
from layout2d.models.polygon import Polygon
from layout2d.models.segment import Segment

logger = logging.getLogger(__name__)


class UnionTraceError(RuntimeError):
    """Boundary trace did not return to its starting vertex."""


@dataclass
class _Tracer:
    """Position on one of the two polygons being traced."""

    structure: Polygon
    other: Polygon
    index: int

    @property
    def next_index(self) -> int:
        return (self.index + 1) % len(self.structure.vertices)

    @property
    def vertex(self) -> Point:
        return self.structure.vertices[self.index]

    @property
    def vertex_next(self) -> Point:
        return self.structure.vertices[self.next_index]

    def advance(self) -> None:
        self.index = self.next_index

    def switch(self, index: int) -> None:
        self.structure, self.other = self.other, self.structure
        self.index = index


@dataclass
class _Crossing:
    point: Point | None = None
    edge_index: int = -1
    distance_sqrd: float = float("inf")


@dataclass
class _Builder:
    vertices: list[Point] = field(default_factory=list)

    @property
    def last(self) -> Point:
        return self.vertices[-1]


def _first_outside(polygon: Polygon, peer: Polygon) -> int | None:
    for i, vertex in enumerate(polygon.vertices):
        if not peer.contains_point(vertex):
            return i
    return None


def _nearest_crossing(tracer: _Tracer, step: Segment, origin: Point) -> _Crossing | None:
    """Nearest point where ``step`` meets the other polygon, excluding ``origin``.

    Returns None when the step touches nothing; a crossing with no point when
    every touch is at ``origin`` itself.
    """
    hits = [i for i, edge in enumerate(tracer.other.edges) if edge.intersects(step)]
    if not hits:
        return None

    nearest = _Crossing()
    for i in hits:
        other_edge = tracer.other.edges[i]
        point = other_edge.intersection_point(step)
        if point is None:
            # collinear overlap: continue toward the end of the other edge
            point = other_edge.b
        if point.equals(origin):
            continue
        dist_sqrd = Segment.distance_sqrd_between(point, origin)
        if dist_sqrd < nearest.distance_sqrd:
            nearest = _Crossing(point, i, dist_sqrd)
    return nearest


def trace_union(polygon: Polygon, peer: Polygon) -> Polygon:
    """Merge two overlapping polygons into one outline.

    Neither input is modified. When one polygon lies strictly inside the
    other the result is a copy of the outer one. Disjoint polygons give a
    copy of ``polygon``; callers that need to know should check
    ``polygon.overlaps(peer)`` first.

    Raises:
        UnionTraceError: If the trace fails to close within
            ``4 * (len(polygon) + len(peer)) + 8`` steps.
        ValueError: If the traced outline is not a valid polygon.
    """
    if not polygon.overlaps(peer):
        # no edges touch, so one vertex decides nesting
        if peer.contains_point(polygon.vertices[0]):
            logger.debug("Union with an enclosing polygon, returning second operand")
            return peer.copy()
        logger.debug("Union of non-overlapping polygons, returning first operand")
        return polygon.copy()

    start = _first_outside(polygon, peer)
    if start is not None:
        tracer = _Tracer(polygon, peer, start)
    else:
        # polygon lies entirely within peer
        start = _first_outside(peer, polygon)
        if start is None:
            logger.debug("Union of coincident polygons, returning first operand")
            return polygon.copy()
        tracer = _Tracer(peer, polygon, start)

    builder = _Builder([tracer.vertex])
    starting_vertex = builder.last
    max_steps = 4 * (len(polygon.vertices) + len(peer.vertices)) + 8

    for _ in range(max_steps):
        vertex_next = tracer.vertex_next

        # a crossing can land exactly on the next vertex
        if builder.last.equals(vertex_next):
            tracer.advance()
            continue

        step = Segment(builder.last, vertex_next)
        crossing = _nearest_crossing(tracer, step, builder.last)

        if crossing is None or crossing.point is None:
            tracer.advance()
            builder.vertices.append(tracer.vertex)
        else:
            builder.vertices.append(crossing.point)
            logger.debug("Union crossing at %s, switching outline", crossing.point.log_string())
            tracer.switch(crossing.edge_index)

        # identity check: the start vertex object itself must come round again
        if builder.last is starting_vertex:
            break
    else:
        raise UnionTraceError(
            f"Union trace did not close after {max_steps} steps: "
            f"{polygon.log_string()} with {peer.log_string()}"
        )

    builder.vertices.pop()
    return Polygon([v.copy() for v in builder.vertices])
