"""Currency rounding helpers"""

from decimal import Decimal, ROUND_HALF_UP

_CENT = Decimal("0.01")


def round_currency(value: float) -> float:
    """Round to 2 decimal places, halves away from zero (1.125 -> 1.13)"""
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))
