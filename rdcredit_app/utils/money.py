"""
Money utilities for currency arithmetic.

All amounts are carried as Decimal. Rounding is round-half-even and is
applied once at the end of a stage, never per field:

- QRE totals are rounded to cents.
- Federal credit amounts are rounded to whole dollars.
"""

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any, Union

from ..errors import ErrorKind, ValidationError

CENT = Decimal("0.01")
WHOLE_DOLLAR = Decimal("1")

# One quadrillion dollars; keeps every stage within 28-digit Decimal precision
MAX_AMOUNT = Decimal("1e15")

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    """
    Convert a number to Decimal without binary float artifacts.

    Floats go through str() so 0.65 becomes Decimal("0.65") rather than
    Decimal(0.65000000000000002220...).
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def parse_amount(value: Any, field: str) -> Decimal:
    """
    Coerce one monetary input to a finite, non-negative Decimal.

    Numeric strings are accepted with surrounding whitespace. Booleans,
    NaN, infinities and amounts above MAX_AMOUNT are NON_NUMERIC.

    Raises:
        ValidationError: MISSING_FIELD, NON_NUMERIC or NEGATIVE_VALUE
    """
    if value is None:
        raise ValidationError(
            ErrorKind.MISSING_FIELD,
            f"{field} is required",
            field=field,
        )

    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValidationError(
            ErrorKind.NON_NUMERIC,
            f"{field} must be a number",
            field=field,
            context={"value": repr(value)},
        )

    try:
        amount = to_decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, ValueError):
        raise ValidationError(
            ErrorKind.NON_NUMERIC,
            f"{field} must be a number",
            field=field,
            context={"value": repr(value)},
        ) from None

    if not amount.is_finite():
        raise ValidationError(
            ErrorKind.NON_NUMERIC,
            f"{field} must be a finite number",
            field=field,
            context={"value": repr(value)},
        )

    if amount < 0:
        raise ValidationError(
            ErrorKind.NEGATIVE_VALUE,
            f"{field} cannot be negative",
            field=field,
            context={"value": str(amount)},
        )

    if amount > MAX_AMOUNT:
        raise ValidationError(
            ErrorKind.NON_NUMERIC,
            f"{field} is out of range",
            field=field,
            context={"value": str(amount), "reason": "out_of_range", "max": str(MAX_AMOUNT)},
        )

    return amount


def round_cents(amount: Decimal) -> Decimal:
    """Round to cents, half-even."""
    return amount.quantize(CENT, rounding=ROUND_HALF_EVEN)


def round_whole(amount: Decimal) -> Decimal:
    """Round to whole currency units, half-even."""
    return amount.quantize(WHOLE_DOLLAR, rounding=ROUND_HALF_EVEN)


def format_currency(amount: Number) -> str:
    """
    Format an amount as whole US dollars for display.

    Examples:
        >>> format_currency(Decimal("1234.56"))
        '$1,235'
        >>> format_currency(-1234.56)
        '-$1,235'
    """
    value = round_whole(to_decimal(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"
