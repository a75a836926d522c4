"""
Decimal utilities for catalog-level money values.

Same to_decimal() as calculator.decimal_math, but lives in rules/ to avoid
circular imports (rules -> calculator -> rules).

Uses only stdlib 'decimal' - no dependencies on calculator package.
"""

from decimal import Decimal
from typing import Union

Numeric = Union[int, float, str, Decimal]

ZERO = Decimal("0")


def to_decimal(value: Numeric) -> Decimal:
    """Convert a numeric value to Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_float(value: Decimal) -> float:
    return float(value)
