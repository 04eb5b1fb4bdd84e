"""Decimal parsing and rounding for money and percentages.

All monetary math runs on Decimal. Floats are converted through str() so
0.0725 stays 0.0725 instead of its binary approximation.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONEY_QUANT = Decimal("0.01")
RATE_QUANT = Decimal("0.001")


def parse_decimal(value: Any) -> Decimal:
    """
    Parse user input as a Decimal, defaulting to 0.

    Accepts Decimal, int, float and numeric strings (surrounding whitespace
    allowed). Anything else, including None, blank text, booleans, NaN and
    infinities, yields exactly 0. Never raises.
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not result.is_finite():
        return ZERO
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return value.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def fraction_to_percentage(rate: Decimal) -> str:
    """Convert a fractional rate (0.0725) to a 3-place percentage string ("7.250")."""
    return str((rate * HUNDRED).quantize(RATE_QUANT, rounding=ROUND_HALF_UP))
