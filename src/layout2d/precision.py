"""Magnitude-scaled floating point equality.

Floats keep a fixed number of significant digits, so the tolerance used to
compare two values shrinks as their integer part grows. ``equals`` measures
the difference against ``10 ** -(precision - magnitude_order(value))`` where
``precision`` is a digit budget (16 by default, the full double mantissa).

The default budget is process state held in a ``ContextVar``. Prefer the
``equals_precision`` context manager over ``set_global_equals_precision``
when overriding it, so the previous value is always restored.
"""

from __future__ import annotations

import math
import numbers
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from pydantic import BaseModel, Field, ValidationError

DEFAULT_EQUALS_PRECISION = 16


class PrecisionSettings(BaseModel):
    """Validated digit budget used by ``equals`` and ``min_number``."""

    digits: int = Field(
        default=DEFAULT_EQUALS_PRECISION,
        ge=1,
        le=308,
        strict=True,
        description="Significant decimal digits trusted in a float",
    )


_equals_precision: ContextVar[int] = ContextVar(
    "layout2d_equals_precision", default=DEFAULT_EQUALS_PRECISION
)


def _validated(precision: object) -> int:
    try:
        return PrecisionSettings(digits=precision).digits
    except ValidationError as e:
        raise ValueError(f"Invalid equals precision: {precision!r}") from e


def global_equals_precision() -> int:
    """Current default digit budget."""
    return _equals_precision.get()


def set_global_equals_precision(precision: int) -> None:
    """Replace the default digit budget.

    There is no automatic scoping: callers that override the default must put
    the previous value back (see ``equals_precision``).
    """
    _equals_precision.set(_validated(precision))


@contextmanager
def equals_precision(precision: int) -> Iterator[int]:
    """Temporarily override the default digit budget."""
    token = _equals_precision.set(_validated(precision))
    try:
        yield precision
    finally:
        _equals_precision.reset(token)


def valid_number(value: object) -> bool:
    """True for real numbers (infinities included) that are not NaN or bool."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


def magnitude_order(value: float) -> float:
    """Number of digits left of the decimal point, at least 1.

    >>> magnitude_order(123456789.1234)
    9
    >>> magnitude_order(1e-16)
    1
    """
    if math.isinf(value):
        return math.inf
    return len(str(int(abs(value))))


def _resolve(precision: int | None) -> int:
    return global_equals_precision() if precision is None else precision


def equals(x: object, y: object, precision: int | None = None) -> bool:
    """Compare two numbers within a tolerance scaled to their magnitude."""
    if not valid_number(x) or not valid_number(y):
        return False
    if math.isinf(x) or math.isinf(y):
        # inf - inf is NaN; infinities only match themselves
        return x == y
    digits = _resolve(precision) - magnitude_order(max(abs(x), abs(y)))
    return abs(y - x) < 10.0 ** -digits


def min_number(scale_reference: float = 0, precision: int | None = None) -> float:
    """Smallest increment still distinguishable next to ``scale_reference``."""
    return 10.0 ** -(_resolve(precision) - magnitude_order(scale_reference))


def is_zero(value: float, threshold: float = 0.0001) -> bool:
    """Absolute-threshold zero test, for angles and unit quantities."""
    return abs(value) <= threshold


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
