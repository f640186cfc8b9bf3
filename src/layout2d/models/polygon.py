"""Simple polygon: an immutable, validated ring of vertices.

Everything derived from the vertices (edges, winding, circumcircle,
concavity, area and perimeter) is computed once at construction. Operations
that would change the shape (``reverse``, ``union``, ``extrude_vertices``)
return a new Polygon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from layout2d.angles import TWO_PI, bound_angle
from layout2d.models.point import Point, Vertex
from layout2d.models.segment import Segment, as_point
from layout2d.models.vector import Vector
from layout2d.precision import equals
from layout2d.validators.ring import ring_edges, scan_ring, winding_sum


@dataclass
class Pierce:
    """Nearest crossing of a segment through a polygon boundary."""

    point: Point
    edge_index: int
    distance_sqrd: float


class Polygon(BaseModel):
    """Closed, simple, non-self-intersecting ring of at least 3 vertices.

    Construction rejects intersecting edges, backtracking neighbours,
    a closing edge collinear with the first edge, and rings with no area.
    A vertex in the middle of a straight run is removed silently.

    Edge ``i`` runs from ``vertices[i]`` to ``vertices[(i + 1) % n]``.
    Vertices are frozen ``Vertex`` points; copy one before moving it.
    """

    model_config = ConfigDict(frozen=True)

    vertices: tuple[Point, ...] = Field(description="Boundary ring, first vertex not repeated")
    holes: tuple[Polygon, ...] = Field(
        default=(), description="Hole outlines, carried but not interpreted"
    )

    _edges: tuple[Segment, ...] = PrivateAttr(default=())
    _clockwise: bool = PrivateAttr(default=False)
    _circumcenter: Point | None = PrivateAttr(default=None)
    _circumradius: float = PrivateAttr(default=0.0)
    _interior_angles: tuple[float, ...] = PrivateAttr(default=())
    _area: float = PrivateAttr(default=0.0)
    _perimeter: float = PrivateAttr(default=0.0)

    def __init__(self, vertices: Any = None, holes: Any = None, **data: Any) -> None:
        super().__init__(vertices=vertices, holes=() if holes is None else holes, **data)

    @model_validator(mode="before")
    @classmethod
    def bare_vertex_list(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            return {"vertices": data}
        return data

    @field_validator("vertices", mode="before")
    @classmethod
    def simple_ring(cls, v: Any) -> tuple[Point, ...]:
        if isinstance(v, (str, bytes)) or not hasattr(v, "__iter__"):
            raise ValueError(f"vertices not a sequence: {v!r}")
        points = []
        for i, vertex in enumerate(v):
            try:
                points.append(as_point(vertex))
            except ValueError as e:
                raise ValueError(f"vertex {i} invalid: {e}") from e

        scan = scan_ring(points)
        if scan.errors:
            raise ValueError(scan.errors[0].message)
        return tuple(Vertex(p.x, p.y) for p in scan.vertices)

    def model_post_init(self, __context: Any) -> None:
        vertices = self.vertices
        n = len(vertices)
        self._edges = tuple(ring_edges(list(vertices)))
        self._clockwise = winding_sum(list(vertices)) > 0

        cx = sum(v.x for v in vertices) / n
        cy = sum(v.y for v in vertices) / n
        self._circumcenter = Point(cx, cy)
        self._circumradius = math.sqrt(
            max(Segment.distance_sqrd_between(self._circumcenter, v) for v in vertices)
        )
        self._interior_angles = tuple(self._interior_angle(i) for i in range(n))

        shoelace = sum(
            vertices[i].x * vertices[(i + 1) % n].y - vertices[(i + 1) % n].x * vertices[i].y
            for i in range(n)
        )
        self._area = abs(shoelace) / 2.0
        self._perimeter = sum(edge.magnitude for edge in self._edges)

    # ── Derived properties ────────────────────────────────────────────

    @property
    def edges(self) -> tuple[Segment, ...]:
        return self._edges

    @property
    def clockwise(self) -> bool:
        return self._clockwise

    @property
    def counterclockwise(self) -> bool:
        return not self._clockwise

    @property
    def circumcenter(self) -> Point:
        """Vertex centroid (a copy)."""
        return self._circumcenter.copy()

    @property
    def circumradius(self) -> float:
        """Distance from the circumcenter to the farthest vertex."""
        return self._circumradius

    @property
    def area(self) -> float:
        return self._area

    @property
    def perimeter(self) -> float:
        return self._perimeter

    def convex(self) -> bool:
        return not self.concave()

    def concave(self) -> bool:
        return any(angle > math.pi for angle in self._interior_angles)

    def _vertex_index(self, vertex: int | Point) -> int:
        if isinstance(vertex, int):
            return vertex % len(self.vertices)
        for i, v in enumerate(self.vertices):
            if v is vertex:
                return i
        for i, v in enumerate(self.vertices):
            if v.equals(vertex):
                return i
        raise ValueError(f"{vertex.log_string()} is not a vertex of this polygon")

    def _interior_angle(self, i: int) -> float:
        n = len(self.vertices)
        vertex = self.vertices[i]
        to_prev = Vector.between(vertex, self.vertices[(i - 1) % n])
        to_next = Vector.between(vertex, self.vertices[(i + 1) % n])
        d_angle = to_prev.angle - to_next.angle
        return bound_angle(TWO_PI - d_angle) if self._clockwise else bound_angle(d_angle)

    def interior_angle_vertex(self, vertex: int | Point) -> float:
        """Interior angle in radians at a vertex, given by index or by Point."""
        return self._interior_angles[self._vertex_index(vertex)]

    # ── Containment ───────────────────────────────────────────────────

    def contains_point(self, point: Any, precision: int | None = None) -> bool:
        """Check if a point is inside the polygon.

        Uses ray-casting parity toward +x infinity. A point on an edge or
        vertex counts as inside for counterclockwise polygons and outside for
        clockwise ones; the same flip applies to the parity result.
        """
        p = as_point(point)
        ray = Segment(p, Point(math.inf, p.y))
        count = 0
        for edge in self._edges:
            if p.is_on_segment(edge, precision):
                return self.counterclockwise
            if edge.intersects(ray, precision):
                a, b = edge.a, edge.b
                # a vertex on the ray counts once: at the upper end of a non-horizontal edge
                if not equals(p.y, min(a.y, b.y), precision) or (
                    equals(p.y, max(a.y, b.y), precision) and not equals(a.y, b.y, precision)
                ):
                    count += 1
        if count % 2 == 1:
            return self.counterclockwise
        return self.clockwise

    def contains(self, peer: Polygon) -> bool:
        """Check if every vertex of ``peer`` is contained."""
        return all(self.contains_point(v) for v in peer.vertices)

    def overlaps(self, peer: Polygon) -> bool:
        """Check if any edges touch. Shared edges and shared vertices count."""
        reach = self._circumradius + peer.circumradius
        if Segment.distance_sqrd_between(self._circumcenter, peer.circumcenter) >= reach * reach:
            return False
        return any(edge.intersects(peer_edge) for edge in self._edges for peer_edge in peer.edges)

    def pierce(self, segment: Segment) -> Pierce | None:
        """Boundary crossing of ``segment`` nearest to its origin, or None."""
        nearest: Pierce | None = None
        for i, edge in enumerate(self._edges):
            crossing = segment.intersection_point(edge)
            if crossing is None:
                continue
            dist_sqrd = Segment.distance_sqrd_between(segment.a, crossing)
            if nearest is None or dist_sqrd < nearest.distance_sqrd:
                nearest = Pierce(point=crossing, edge_index=i, distance_sqrd=dist_sqrd)
        return nearest

    # ── Shape operations ──────────────────────────────────────────────

    def reverse(self) -> Polygon:
        """New polygon with the opposite winding and the same first vertex."""
        first, *rest = self.vertices
        return Polygon([first, *reversed(rest)], holes=self.holes)

    def union(self, peer: Polygon) -> Polygon:
        """Merge with an overlapping polygon. See ``operations.union.trace_union``."""
        from layout2d.operations.union import trace_union

        return trace_union(self, peer)

    def closest_point_outside_from(self, point: Any, nudge: float | None = None) -> Point:
        """Nearest point outside the polygon. See ``operations.escape``."""
        from layout2d.operations.escape import closest_point_outside_from

        return closest_point_outside_from(self, point, nudge)

    def extrude_vertices(self, amount: float) -> Polygon:
        """Push every vertex ``amount`` along its exterior angle bisector.

        An approximation of padding (positive) or shrinking (negative) the
        outline.
        """
        if equals(amount, 0):
            return self.copy()
        n = len(self.vertices)
        extruded = []
        for i, current in enumerate(self.vertices):
            to_prev = Vector.between(current, self.vertices[(i - 1) % n]).normalize()
            to_next = Vector.between(current, self.vertices[(i + 1) % n]).normalize()
            angle = math.acos(max(-1.0, min(1.0, to_prev.dot_product(to_next))))
            if to_prev.cross_product(to_next) <= 0:
                angle = TWO_PI - angle
            heading = to_prev.angle + angle / 2
            extruded.append(
                Point(current.x + amount * math.cos(heading), current.y + amount * math.sin(heading))
            )
        return Polygon(extruded)

    # ── Comparison / export ───────────────────────────────────────────

    def copy(self) -> Polygon:  # type: ignore[override]
        return Polygon([v.copy() for v in self.vertices], holes=self.holes)

    def equals(self, peer: Polygon, precision: int | None = None) -> bool:
        """Vertex-by-vertex comparison, same starting vertex required."""
        if len(self.vertices) != len(peer.vertices):
            return False
        return all(v.equals(pv, precision) for v, pv in zip(self.vertices, peer.vertices))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def log_string(self) -> str:
        return " ".join(v.log_string() for v in self.vertices)

    def __str__(self) -> str:
        return self.log_string()
