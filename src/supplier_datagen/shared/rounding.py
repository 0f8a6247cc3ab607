"""Fixed-point rounding of float results."""

import math
from decimal import ROUND_HALF_UP, Decimal

# Floats at or above 2**52 have no fractional part left to round
_INTEGRAL_FLOAT = 2.0**52


def round_half_up(value: float, digits: int) -> float:
    """
    Round to ``digits`` decimals, ties away from zero.

    The exact binary value of ``value`` is rounded, so a float stored just
    below a tie (1.0005 is 1.000499...) rounds down while an exact tie
    (0.0625) rounds up. Non-finite values are returned unchanged.
    """
    if not math.isfinite(value) or abs(value) >= _INTEGRAL_FLOAT:
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
