"""
Decimal Utilities
app/scoring/utils.py

Rounding helpers shared by the appraisal score calculators.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

TWO_PLACES = Decimal("0.01")


def round2(value: Union[float, int]) -> Decimal:
    """
    Round to 2 decimal places, half away from zero.

    The float is converted at its exact binary value, so 1.005 (stored just
    below 1.005) rounds down, as a fixed-point display formatter would.

    Examples:
        >>> round2(100 * 3 / 100)
        Decimal('3.00')
        >>> round2(1.005)
        Decimal('1.00')
    """
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def points_or_zero(value: Optional[float]) -> float:
    """Treat an absent point value as zero."""
    return value if value is not None else 0
