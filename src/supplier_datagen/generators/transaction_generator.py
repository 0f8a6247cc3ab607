"""
Monthly purchase-transaction synthesis.

Produces one batch of transaction records for a single (year, month): each
record is assigned a product and a calendar day by cycling on its index,
a random branch and a random unit count, and positional reference keys.
"""

import calendar
import math
import random
from collections.abc import Mapping, Sequence
from datetime import date

from ..shared.id_generator import invoice_reference_generator, primary_key_generator
from ..shared.models import TransactionRecord
from ..shared.rounding import round_half_up
from ..sourcedata.branches import BRANCH_CODES

VALUE_DECIMALS = 3


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month of the proleptic Gregorian calendar."""
    return calendar.monthrange(year, month)[1]


def compute_value(units: int, unit_price: float | None) -> float:
    """Units times unit price rounded to three decimals; NaN without a price."""
    if unit_price is None or math.isnan(unit_price):
        return math.nan
    return round_half_up(units * unit_price, VALUE_DECIMALS)


class TransactionSynthesizer:
    """
    Synthesizes purchase transactions for one supplier month at a time.

    Products and days are assigned deterministically from the record index;
    branch and units are drawn from the injected random source.
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: random.Random | None = None,
        branches: Sequence[str] = BRANCH_CODES,
    ):
        """
        Initialize the synthesizer.

        Args:
            seed: Random seed for reproducible output (ignored when rng is given)
            rng: Random source for branch and units draws
            branches: Branch codes to pick from
        """
        if not branches:
            raise ValueError("branches cannot be empty")
        self._rng = rng if rng is not None else random.Random(seed)
        self.branches = tuple(branches)

    def synthesize(
        self,
        record_count: int,
        year: int,
        month: int,
        units_max: int,
        product_ids: Sequence[str],
        catalog_size: int,
        price_catalog: Mapping[str, float],
        supplier_id: str,
    ) -> list[TransactionRecord]:
        """
        Generate the transaction records for one month.

        Args:
            record_count: Number of records to produce
            year: Target year
            month: Target month (1-12)
            units_max: Inclusive upper bound for the units draw
            product_ids: Ordered product identifiers to cycle through
            catalog_size: Number of products to cycle over
            price_catalog: Unit price per product identifier
            supplier_id: Supplier identifier stamped on every record

        Returns:
            Exactly ``record_count`` records in index order

        Raises:
            ValueError: If month is out of range, or records are requested
                from an empty catalog
        """
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        if record_count <= 0:
            return []
        if catalog_size < 1 or not product_ids:
            raise ValueError("Cannot synthesize transactions from an empty catalog")

        num_days = days_in_month(year, month)
        units_max = max(1, int(units_max))

        records: list[TransactionRecord] = []
        for i in range(record_count):
            product_id = product_ids[i % catalog_size]
            units = self._rng.randint(1, units_max)
            index = i + 1

            records.append(
                TransactionRecord(
                    txn_date=date(year, month, (i % num_days) + 1),
                    supplier=supplier_id,
                    branch=self._rng.choice(self.branches),
                    product=product_id,
                    units=units,
                    value=compute_value(units, price_catalog.get(product_id)),
                    primary_key=primary_key_generator.generate(
                        supplier_id, month, year, index
                    ),
                    invoice_reference=invoice_reference_generator.generate(
                        supplier_id, month, year, index
                    ),
                )
            )

        return records
