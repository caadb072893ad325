from decimal import Decimal, ROUND_HALF_UP
from typing import Any

CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Convert a price-like value to Decimal without going through float repr"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def present(value: Any) -> float:
    """Round to cents for output. Sums are kept in full precision until here."""
    return float(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))
