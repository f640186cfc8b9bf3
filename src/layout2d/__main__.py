"""layout2d CLI.

Usage:
    python -m layout2d <command> <polygon.json> [args] [options]

Polygon files hold either a bare vertex list (``[[0, 0], [1, 0], [1, 1]]``
or ``[{"x": 0, "y": 0}, ...]``) or an object with a ``vertices`` key.
Every command prints one JSON object with an ``ok`` key and exits 1 on
invalid input.
"""
from __future__ import annotations

import json
from contextlib import nullcontext
from pathlib import Path
from typing import Optional

import typer

from layout2d.models.point import Point
from layout2d.models.polygon import Polygon
from layout2d.operations.union import UnionTraceError
from layout2d.precision import PrecisionSettings, equals_precision, global_equals_precision
from layout2d.validators.ring import scan_ring

app = typer.Typer(
    name="layout2d",
    help="layout2d — 2D polygon checks and operations from JSON files.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> None:
    _output({"ok": False, "error": message})
    raise typer.Exit(1)


def _read_json(path: Path):
    if not path.exists():
        _fail(f"File not found: {path}")
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON in {path}: {e}")


def _raw_vertices(data) -> list:
    if isinstance(data, dict):
        data = data.get("vertices", [])
    return data if isinstance(data, list) else []


def _load_polygon(path: Path) -> Polygon:
    """Load and validate a polygon file."""
    data = _read_json(path)
    try:
        return Polygon.model_validate(data)
    except ValueError as e:
        _fail(f"Invalid polygon in {path}: {e}")


def _precision(precision: Optional[int]):
    """Scoped precision override, or a no-op when none was given."""
    if precision is None:
        return nullcontext()
    try:
        PrecisionSettings(digits=precision)
    except ValueError:
        _fail(f"Invalid precision: {precision}")
    return equals_precision(precision)


def _describe(polygon: Polygon) -> dict:
    return {
        "vertices": [v.model_dump() for v in polygon.vertices],
        "clockwise": polygon.clockwise,
        "convex": polygon.convex(),
        "area": polygon.area,
        "perimeter": polygon.perimeter,
        "circumcenter": polygon.circumcenter.model_dump(),
        "circumradius": polygon.circumradius,
    }


PRECISION_OPTION = typer.Option(
    None, "--precision", "-p", help="Significant digits for equality tests"
)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def version() -> None:
    """Show version."""
    from layout2d import __version__

    _output({"ok": True, "version": __version__})


@app.command()
def inspect(
    file: Path = typer.Argument(..., help="Polygon JSON file"),
    precision: Optional[int] = PRECISION_OPTION,
):
    """Validate a vertex ring and report every issue plus derived properties."""
    data = _read_json(file)
    try:
        points = [Point.model_validate(v) for v in _raw_vertices(data)]
    except ValueError as e:
        _fail(f"Invalid vertex in {file}: {e}")

    with _precision(precision):
        scan = scan_ring(points)
        result = {
            "ok": scan.ok,
            "precision": global_equals_precision(),
            "issues": [
                {"severity": i.severity, "code": i.code, "message": i.message, "edges": list(i.edges)}
                for i in scan.issues
            ],
        }
        if scan.ok:
            result["polygon"] = _describe(Polygon(scan.vertices))
    _output(result)
    if not scan.ok:
        raise typer.Exit(1)


@app.command()
def contains(
    file: Path = typer.Argument(..., help="Polygon JSON file"),
    x: float = typer.Argument(..., help="Point X"),
    y: float = typer.Argument(..., help="Point Y"),
    precision: Optional[int] = PRECISION_OPTION,
):
    """Check if a point is inside the polygon (boundary counts for counterclockwise rings)."""
    with _precision(precision):
        polygon = _load_polygon(file)
        inside = polygon.contains_point(Point(x, y))
    _output({"ok": True, "point": {"x": x, "y": y}, "contains": inside})


@app.command()
def overlaps(
    first: Path = typer.Argument(..., help="First polygon JSON file"),
    second: Path = typer.Argument(..., help="Second polygon JSON file"),
    precision: Optional[int] = PRECISION_OPTION,
):
    """Check if two polygons touch or overlap."""
    with _precision(precision):
        a = _load_polygon(first)
        b = _load_polygon(second)
        result = a.overlaps(b)
    _output({"ok": True, "overlaps": result})


@app.command()
def union(
    first: Path = typer.Argument(..., help="First polygon JSON file"),
    second: Path = typer.Argument(..., help="Second polygon JSON file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write result polygon here"),
    precision: Optional[int] = PRECISION_OPTION,
):
    """Merge two overlapping polygons into one outline."""
    with _precision(precision):
        a = _load_polygon(first)
        b = _load_polygon(second)
        overlapping = a.overlaps(b)
        try:
            merged = a.union(b)
        except (UnionTraceError, ValueError) as e:
            _fail(f"Union failed: {e}")

    vertices = [v.model_dump() for v in merged.vertices]
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps({"vertices": vertices}, indent=2))
    _output({
        "ok": True,
        "overlapping": overlapping,
        "vertices": vertices,
        "output": str(output) if output is not None else None,
    })


@app.command()
def escape(
    file: Path = typer.Argument(..., help="Polygon JSON file"),
    x: float = typer.Argument(..., help="Point X"),
    y: float = typer.Argument(..., help="Point Y"),
    nudge: Optional[float] = typer.Option(None, "--nudge", "-n", help="Distance to step past the edge"),
    precision: Optional[int] = PRECISION_OPTION,
):
    """Find the nearest point just outside the polygon."""
    with _precision(precision):
        polygon = _load_polygon(file)
        start = Point(x, y)
        inside = polygon.contains_point(start)
        escaped = polygon.closest_point_outside_from(start, nudge)
    _output({
        "ok": True,
        "inside": inside,
        "point": escaped.model_dump(),
    })


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
