"""
Decimal Math Utilities for WOTC Credit Calculations.

Credit amounts are regulated currency values reported on Form 5884, so
every credit computation goes through Decimal instead of float.

- Float: 6000 * 0.4 + 0.1 + 0.2 drifts in the last digit
- Decimal: exact to the cent, rounded once at the end
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)

# Type alias for values that can be converted to Decimal
Numeric = Union[int, float, str, Decimal]

MONEY_PLACES = Decimal("0.01")  # Round to pennies

ZERO = Decimal("0")


def to_decimal(value: Optional[Numeric], default: Numeric = ZERO) -> Decimal:
    """
    Convert a numeric value to Decimal.

    ``None``, unparseable strings and non-finite values (NaN, infinity)
    resolve to ``default`` so that partially filled payroll records never
    abort a credit computation.

    Examples:
        >>> to_decimal(100.50)
        Decimal('100.5')
        >>> to_decimal(None)
        Decimal('0')
        >>> to_decimal(float("nan"))
        Decimal('0')
    """
    if value is None:
        return to_decimal(default)
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, bool):
        d = Decimal(int(value))
    elif isinstance(value, float):
        # str() first to keep the short repr, not the binary expansion
        d = Decimal(str(value))
    else:
        try:
            d = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            logger.warning(f"Could not convert {value!r} to Decimal, using {default}")
            return to_decimal(default)
    if not d.is_finite():
        logger.warning(f"Non-finite value {value!r}, using {default}")
        return to_decimal(default)
    return d


def money(value: Numeric) -> Decimal:
    """
    Round to pennies, half away from zero.

    Examples:
        >>> money(100.995)
        Decimal('101.00')
        >>> money(100.994)
        Decimal('100.99')
    """
    return to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def multiply(a: Numeric, b: Numeric) -> Decimal:
    """Multiply two values with Decimal precision."""
    return to_decimal(a) * to_decimal(b)


def add(*values: Numeric) -> Decimal:
    """
    Add multiple values with Decimal precision.

    Examples:
        >>> add(4000, 5000.50)
        Decimal('9000.5')
    """
    result = ZERO
    for v in values:
        result += to_decimal(v)
    return result


def min_decimal(*values: Numeric) -> Decimal:
    """Find minimum of values with Decimal precision."""
    return min(to_decimal(v) for v in values)


def non_negative(value: Numeric) -> Decimal:
    """
    Clamp value at zero.

    Examples:
        >>> non_negative(-250)
        Decimal('0')
    """
    d = to_decimal(value)
    return d if d > ZERO else ZERO


def capped_wages(wages: Numeric, cap: Numeric) -> Decimal:
    """
    Portion of wages that counts toward the credit.

    Examples:
        >>> capped_wages(7000, 6000)
        Decimal('6000')
        >>> capped_wages(-10, 6000)
        Decimal('0')
    """
    return min_decimal(non_negative(wages), cap)


def to_float(value: Decimal) -> float:
    """
    Convert Decimal back to float for API responses.

    Use only at the serialization boundary.
    """
    return float(value)
