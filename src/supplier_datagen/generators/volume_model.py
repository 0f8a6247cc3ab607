"""
Monthly volume bounds for synthetic transaction generation.

Each calendar month gets an independently randomized upper bound on the
number of units a single transaction may carry. Bounds are keyed by the
lowercase three-letter month abbreviation.
"""

import math
import random

from ..shared.rounding import round_half_up

MONTH_ABBREVIATIONS = (
    "jan",
    "feb",
    "mar",
    "apr",
    "may",
    "jun",
    "jul",
    "aug",
    "sep",
    "oct",
    "nov",
    "dec",
)

DEFAULT_MIN_UNITS = 1.0
DEFAULT_MAX_UNITS = 15.0
DEFAULT_PRECISION = 1
DEFAULT_FALLBACK_UNITS = 6


def month_abbreviation(month: int) -> str:
    """Return the lowercase abbreviation for a month number (1-12)."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return MONTH_ABBREVIATIONS[month - 1]


def units_max_for(
    bounds: dict[str, float],
    month: int,
    fallback: int = DEFAULT_FALLBACK_UNITS,
) -> int:
    """
    Integer units bound for a month.

    The month's entry is floored. A missing or zero entry, or one that floors
    below 1, yields ``fallback``.
    """
    value = bounds.get(month_abbreviation(month))
    if not value or math.isnan(value):
        return fallback
    units_max = math.floor(value)
    return units_max if units_max >= 1 else fallback


class MonthlyVolumeModel:
    """
    Draws a randomized units bound for each calendar month.

    Draws are uniform over ``[min_units, max_units)`` and independent
    between months.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        """
        Initialize the volume model.

        Args:
            seed: Random seed for reproducible bounds (ignored when rng is given)
            rng: Random source to draw from
        """
        self._rng = rng if rng is not None else random.Random(seed)

    def generate(
        self,
        min_units: float = DEFAULT_MIN_UNITS,
        max_units: float = DEFAULT_MAX_UNITS,
        precision: int = DEFAULT_PRECISION,
    ) -> dict[str, float]:
        """
        Generate randomized units bounds for all twelve months.

        Args:
            min_units: Lowest possible bound
            max_units: Upper end of the draw range
            precision: Decimal digits each bound is rounded to

        Returns:
            Mapping of month abbreviation to bound, in calendar order

        Raises:
            ValueError: If min_units exceeds max_units or precision is negative
        """
        if min_units > max_units:
            raise ValueError(
                f"min_units ({min_units}) cannot exceed max_units ({max_units})"
            )
        if precision < 0:
            raise ValueError("precision must be >= 0")

        bounds: dict[str, float] = {}
        for abbr in MONTH_ABBREVIATIONS:
            draw = self._rng.random() * (max_units - min_units) + min_units
            bounds[abbr] = round_half_up(draw, precision)
        return bounds
