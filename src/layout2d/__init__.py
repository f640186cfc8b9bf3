"""layout2d — precision-aware 2D geometry for layout and visibility reasoning."""

__version__ = "0.1.0"

from layout2d.models import Point, Polygon, Segment, Vector
from layout2d.operations.union import UnionTraceError
from layout2d.orientation import Orientation, orientation
from layout2d.precision import (
    equals,
    equals_precision,
    global_equals_precision,
    min_number,
    set_global_equals_precision,
)

__all__ = [
    "__version__",
    "Point",
    "Vector",
    "Segment",
    "Polygon",
    "UnionTraceError",
    "Orientation",
    "orientation",
    "equals",
    "equals_precision",
    "global_equals_precision",
    "min_number",
    "set_global_equals_precision",
]
