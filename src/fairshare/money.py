from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from fairshare.errors import ValidationError

CENT = Decimal("0.01")
EPSILON = CENT
ZERO = Decimal("0.00")

MoneyLike = Union[Decimal, int, float, str]


def to_decimal(value: MoneyLike) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValidationError(f"Invalid amount: {value!r}")
    elif isinstance(value, (int, float)):
        # through str() so 0.1 stays 0.1, not its binary expansion
        result = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", ".")
        try:
            result = Decimal(text)
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid amount: {value!r}") from exc

    if not result.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    return result


def round2(value: MoneyLike) -> Decimal:
    """Round to cents, half away from zero."""
    try:
        return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid amount: {value!r}") from exc


def is_zero(value: MoneyLike) -> bool:
    return abs(to_decimal(value)) < EPSILON


def format_money(value: MoneyLike, symbol: str = "Rs.") -> str:
    return f"{symbol}{round2(value):.2f}"
