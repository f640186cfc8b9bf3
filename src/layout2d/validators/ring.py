"""Simple-ring validation for polygon boundaries.

Checks a closed vertex ring for the problems that make it unusable as a
polygon boundary (self-intersection, backtracking, degenerate winding) and
for the one problem it can repair on its own: a vertex sitting in the middle
of a straight run.

``scan_ring`` never raises. It reports every issue so a caller such as an
editor can list them; ``Polygon`` raises on the first error instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from layout2d.models.point import Point
from layout2d.models.segment import Segment
from layout2d.orientation import Orientation, orientation
from layout2d.precision import equals

logger = logging.getLogger(__name__)


@dataclass
class RingIssue:
    """A single ring problem."""

    severity: str  # "error" | "repair"
    code: str
    message: str
    edges: tuple[int, ...] = ()


@dataclass
class RingScan:
    """Outcome of scanning a ring: the repaired vertices plus every issue found."""

    vertices: list[Point]
    issues: list[RingIssue] = field(default_factory=list)
    clockwise: bool | None = None

    @property
    def errors(self) -> list[RingIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def repairs(self) -> list[RingIssue]:
        return [i for i in self.issues if i.severity == "repair"]

    @property
    def ok(self) -> bool:
        return not self.errors


def ring_edges(vertices: list[Point]) -> list[Segment]:
    """Edges of a closed ring; edge ``i`` runs from vertex ``i`` to vertex ``i + 1``."""
    n = len(vertices)
    return [Segment(vertices[i], vertices[(i + 1) % n]) for i in range(n)]


def winding_sum(vertices: list[Point]) -> float:
    """Sum of (x2 - x1)(y2 + y1) over the ring. Positive means clockwise."""
    n = len(vertices)
    total = 0.0
    for i in range(n):
        a, b = vertices[i], vertices[(i + 1) % n]
        total += (b.x - a.x) * (b.y + a.y)
    return total


def scan_ring(vertices: list[Point], precision: int | None = None) -> RingScan:
    """Validate a closed ring and collapse straight-run vertices.

    Args:
        vertices: Ring vertices in order, without repeating the first one.
        precision: Digit budget for the equality tests (default: current).

    Returns:
        A RingScan. ``vertices`` has redundant vertices removed; ``clockwise``
        is set only when the ring has no errors.
    """
    scan = RingScan(vertices=list(vertices))
    n = len(vertices)

    if n < 3:
        scan.issues.append(
            RingIssue("error", "too_few_vertices", f"3 vertices required to make a polygon: {n}")
        )
        return scan

    for i in range(n):
        j = (i + 1) % n
        if vertices[i].equals(vertices[j], precision):
            scan.issues.append(
                RingIssue(
                    "error",
                    "duplicate_vertex",
                    f"adjacent vertices overlap: {vertices[i].log_string()} at {i} and {j}",
                    (i, j),
                )
            )
    if scan.errors:
        return scan

    edges = ring_edges(vertices)
    excess: list[int] = []
    for ia in range(n - 1):
        edge_a = edges[ia]
        for ib in range(ia + 1, n):
            edge_b = edges[ib]
            pair = f"{edge_a.log_string()} with {edge_b.log_string()}"

            if ib == ia + 1:
                # neighbours always touch; only their free endpoints matter
                if orientation(edge_a.a, edge_a.b, edge_b.b, precision) == Orientation.COLLINEAR:
                    if edge_a.vector.dot_product(edge_b.vector) > 0:
                        excess.append(ib)
                        scan.issues.append(
                            RingIssue(
                                "repair",
                                "straight_run",
                                f"removed vertex {edge_b.a.log_string()} between {pair}",
                                (ia, ib),
                            )
                        )
                    else:
                        scan.issues.append(
                            RingIssue(
                                "error",
                                "neighbors_collinear",
                                f"edge neighbors collinear: {pair}",
                                (ia, ib),
                            )
                        )
            elif ia == 0 and ib == n - 1:
                if orientation(edge_b.a, edge_b.b, edge_a.b, precision) == Orientation.COLLINEAR:
                    scan.issues.append(
                        RingIssue(
                            "error",
                            "closing_collinear",
                            f"closing edge collinear: {pair}",
                            (ia, ib),
                        )
                    )
            elif edge_a.intersects(edge_b, precision):
                scan.issues.append(
                    RingIssue("error", "edges_intersect", f"edges intersect: {pair}", (ia, ib))
                )

    if excess:
        scan.vertices = [v for i, v in enumerate(vertices) if i not in excess]
        logger.debug("Collapsed %d straight-run vertices", len(excess))
        if len(scan.vertices) < 3:
            scan.issues.append(
                RingIssue(
                    "error",
                    "too_few_vertices",
                    f"3 vertices required to make a polygon: {len(scan.vertices)}",
                )
            )

    if scan.errors:
        return scan

    total = winding_sum(scan.vertices)
    if equals(total, 0, precision):
        scan.issues.append(RingIssue("error", "collinear_vertices", "vertices are collinear"))
    else:
        scan.clockwise = total > 0
    return scan
