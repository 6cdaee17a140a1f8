"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout. Floats are only
produced at the Supabase/JSON boundary through `to_float`.
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Returns Decimal("0") for None or unparseable input.
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Via str to keep 9.99 as 9.99
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_decimal(value: Union[Number, None]) -> Decimal:
    """
    Strict variant of `to_decimal`.

    Raises:
        ValueError: value is None, not numeric, or not finite
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a monetary value: {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Not a monetary value: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a monetary value: {value!r}")
    return result


def round_money(value: Number) -> Decimal:
    """Round monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Number, currency: str = "USD") -> str:
    """Format monetary value for display, e.g. `$40.00`."""
    formatted = f"{round_money(value):,.2f}"
    if currency == "USD":
        return f"${formatted}"
    return f"{formatted} {currency}"


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization or the Supabase API.

    Use only at boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def add(a: Number, b: Number) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)
