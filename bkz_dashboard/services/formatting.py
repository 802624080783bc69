"""Number formatting for raw on-chain integer amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Optional


PLACEHOLDER = "—"

# uint256 tops out at 78 digits; anything longer is not an on-chain amount.
MAX_RAW_DIGITS = 78
MAX_DECIMALS = 255
_PRECISION = 100
_FRACTION = Decimal("0.001")


def parse_integral(raw: Any, max_digits: int = MAX_RAW_DIGITS) -> Optional[Decimal]:
    """
    Parse an integer that may arrive as int, float or string ("6", "6.0", 6.0, "1e3").

    Returns None for anything non-numeric, non-integral, non-finite or longer
    than ``max_digits``.
    """
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not text:
        return None
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
        if not value.is_finite():
            return None
        if value != 0 and value.adjusted() >= max_digits:
            return None
        if value != value.to_integral_value():
            return None
        return value


def to_units(raw: Any, decimals: int, *, allow_zero: bool = False) -> Optional[Decimal]:
    """
    Return ``raw / 10**decimals`` as an exact Decimal.

    None is returned when ``raw`` is missing, non-numeric, or zero (zero is
    normally an extraction miss rather than a real value, unless
    ``allow_zero`` is set).
    """
    if not 0 <= decimals <= MAX_DECIMALS:
        return None
    value = parse_integral(raw)
    if value is None:
        return None
    if value == 0 and not allow_zero:
        return None
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return value.scaleb(-decimals)


def format_number(value: Decimal) -> str:
    """Group thousands with commas and keep at most three fraction digits."""
    if not value.is_finite():
        return PLACEHOLDER
    with localcontext() as ctx:
        ctx.prec = max(_PRECISION, value.adjusted() + 10)
        try:
            text = f"{value.quantize(_FRACTION, rounding=ROUND_HALF_UP):,.3f}"
        except InvalidOperation:
            return PLACEHOLDER
    text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_amount(raw: Any, decimals: int, *, allow_zero: bool = False) -> str:
    value = to_units(raw, decimals, allow_zero=allow_zero)
    if value is None:
        return PLACEHOLDER
    return format_number(value)
