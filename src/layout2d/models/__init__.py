"""Geometry models."""

from layout2d.models.point import Point, Vertex
from layout2d.models.vector import Components, Polar, Vector
from layout2d.models.segment import ClosestPoints, Segment
from layout2d.models.polygon import Pierce, Polygon

__all__ = [
    "Point",
    "Vertex",
    "Vector",
    "Components",
    "Polar",
    "Segment",
    "ClosestPoints",
    "Polygon",
    "Pierce",
]
