"""
Coercion helpers for search options and row limits.
Search options arrive from query strings, so numbers may come in as text.
Values that cannot be bound raise InvalidBindValueError, which is a StoreError.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Union

from lightbnb.utils.exceptions import InvalidBindValueError

Number = Union[int, float]

MINOR_UNITS_PER_MAJOR = 100


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        return Decimal(int(value))

    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidBindValueError(f"Expected a numeric value, got {value!r}")

    if not number.is_finite():
        raise InvalidBindValueError(f"Expected a finite numeric value, got {value!r}")
    return number


def _narrow(number: Decimal) -> Number:
    if number == number.to_integral_value():
        return int(number)
    return float(number)


def to_number(value: Any) -> Number:
    """
    Coerce a value to a number.

    Integral values come back as ``int`` so they bind cleanly against
    integer columns; anything else comes back as ``float``.

    Raises:
        InvalidBindValueError: If the value cannot be read as a finite number
    """
    return _narrow(_to_decimal(value))


def to_minor_units(value: Any) -> Number:
    """
    Convert a price in major currency units (dollars) to minor units (cents).

    The multiplication happens on ``Decimal`` so ``0.29`` becomes ``29``
    rather than ``28.999999999999996``.
    """
    return _narrow(_to_decimal(value) * MINOR_UNITS_PER_MAJOR)


def to_limit(value: Any) -> int:
    """
    Validate a row limit.

    Integral values (``5``, ``"5"``, ``5.0``) bind unchanged; fractional or
    negative limits are rejected rather than rounded.

    Raises:
        InvalidBindValueError: If the value is not a non-negative integer
    """
    number = to_number(value)
    if not isinstance(number, int) or number < 0:
        raise InvalidBindValueError(f"Expected a non-negative whole number for LIMIT, got {value!r}")
    return number
