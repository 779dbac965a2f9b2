"""
Pricing utilities — markup application in integer minor currency units.
Version: 1.0.0
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple, Union

from catalog_hub.core.constants.pricing import MINOR_UNITS_PER_MAJOR

Number = Union[Decimal, float, int, str]


def to_decimal(value: Number) -> Decimal:
    # str() first so floats like 0.4 don't drag binary noise into the math
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def apply_markup(cost: Number, markup: Number) -> Tuple[int, Decimal]:
    """
    Return (amount_in_minor_units, retail_price) for cost * (1 + markup).

    Halves round away from zero, never to even:
    12.345 at 0.40 -> 17.283 -> 1728.
    """
    retail = to_decimal(cost) * (Decimal(1) + to_decimal(markup))
    minor = (retail * MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(minor), retail


def format_markup_percent(markup: float) -> str:
    """0.4 -> '40%'"""
    percent = (to_decimal(markup) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{percent}%"
