"""
Unit tests for monthly transaction synthesis.

Covers product and date cycling, unit bounds, value computation, branch
selection and the positional reference keys.
"""

import math
import random
from datetime import date

import pytest

_hyp = pytest.importorskip("hypothesis")
from hypothesis import given, settings
from hypothesis import strategies as st

from supplier_datagen.generators.transaction_generator import (
    TransactionSynthesizer,
    compute_value,
    days_in_month,
)
from supplier_datagen.shared.rounding import round_half_up
from supplier_datagen.sourcedata.branches import BRANCH_CODES


def synthesize(synth, catalog, year=2024, month=1, units_max=10, supplier="SUP1", count=None):
    product_ids = list(catalog)
    return synth.synthesize(
        len(product_ids) if count is None else count,
        year,
        month,
        units_max,
        product_ids,
        len(product_ids),
        catalog,
        supplier,
    )


class TestDaysInMonth:
    @pytest.mark.parametrize(
        "year, month, expected",
        [(2024, 2, 29), (2023, 2, 28), (1900, 2, 28), (2000, 2, 29), (2024, 4, 30), (2024, 12, 31)],
    )
    def test_gregorian_month_lengths(self, year, month, expected):
        assert days_in_month(year, month) == expected


class TestComputeValue:
    def test_rounds_to_three_decimals(self):
        assert compute_value(3, 0.3333) == 1.0
        assert compute_value(7, 1.23456) == 8.642

    def test_exact_ties_round_up(self):
        assert compute_value(1, 0.0625) == 0.063
        assert compute_value(3, 0.0625) == 0.188

    def test_values_stored_below_a_tie_round_down(self):
        # 1.0005 is held as 1.000499999...
        assert compute_value(1, 1.0005) == 1.0

    def test_missing_price_is_nan(self):
        assert math.isnan(compute_value(4, None))

    def test_nan_price_is_nan(self):
        assert math.isnan(compute_value(4, math.nan))


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, digits, expected",
        [(0.0625, 3, 0.063), (-0.0625, 3, -0.063), (2.25, 1, 2.3), (2.5, 0, 3.0), (7.0, 1, 7.0)],
    )
    def test_ties_away_from_zero(self, value, digits, expected):
        assert round_half_up(value, digits) == expected

    def test_non_finite_passthrough(self):
        assert round_half_up(math.inf, 3) == math.inf
        assert math.isnan(round_half_up(math.nan, 3))


class TestTransactionSynthesizer:
    def test_one_record_per_product(self, rng, sample_catalog):
        records = synthesize(TransactionSynthesizer(rng=rng), sample_catalog)

        assert len(records) == 2
        assert [r.product for r in records] == ["P1", "P2"]

    def test_constant_fields(self, rng, sample_catalog):
        for record in synthesize(TransactionSynthesizer(rng=rng), sample_catalog):
            assert record.supplier == "SUP1"
            assert record.invoice_status == "Paid"
            assert record.transaction_type == "Purchase"
            assert record.currency == "AUD"
            assert record.external_reference == ""
            assert record.interface_date == ""
            assert record.agreement_id == ""
            assert record.advised_earnings == ""
            assert record.order_reference == ""
            assert record.delivery_reference == ""

    def test_reference_keys_are_positional(self, rng, sample_catalog):
        records = synthesize(TransactionSynthesizer(rng=rng), sample_catalog, month=1)

        assert [r.primary_key for r in records] == [
            "SUP1-PRI-01-2024-1",
            "SUP1-PRI-01-2024-2",
        ]
        assert [r.invoice_reference for r in records] == [
            "SUP1-INV-01-2024-1",
            "SUP1-INV-01-2024-2",
        ]

    def test_month_is_zero_padded_in_keys(self, rng, sample_catalog):
        records = synthesize(TransactionSynthesizer(rng=rng), sample_catalog, month=11)
        assert records[0].primary_key == "SUP1-PRI-11-2024-1"

    def test_dates_cycle_within_the_month(self, rng, large_catalog):
        records = synthesize(TransactionSynthesizer(rng=rng), large_catalog, month=1)

        assert len(records) == 35
        assert records[0].txn_date == date(2024, 1, 1)
        assert records[30].txn_date == date(2024, 1, 31)
        # Index 31 wraps back to the first day of the month
        assert records[31].txn_date == date(2024, 1, 1)
        assert records[34].txn_date == date(2024, 1, 4)

    def test_dates_cycle_in_february_of_leap_year(self, rng, large_catalog):
        records = synthesize(TransactionSynthesizer(rng=rng), large_catalog, month=2)

        assert records[28].txn_date == date(2024, 2, 29)
        assert records[29].txn_date == date(2024, 2, 1)

    def test_products_cycle_when_count_exceeds_catalog(self, rng, sample_catalog):
        records = synthesize(TransactionSynthesizer(rng=rng), sample_catalog, count=5)
        assert [r.product for r in records] == ["P1", "P2", "P1", "P2", "P1"]
        assert records[4].primary_key == "SUP1-PRI-01-2024-5"

    def test_zero_records(self, rng, sample_catalog):
        assert synthesize(TransactionSynthesizer(rng=rng), sample_catalog, count=0) == []

    def test_empty_catalog_with_records_requested_raises(self, rng):
        synth = TransactionSynthesizer(rng=rng)
        with pytest.raises(ValueError, match="empty catalog"):
            synth.synthesize(3, 2024, 1, 5, [], 0, {}, "SUP1")

    def test_invalid_month_raises(self, rng, sample_catalog):
        with pytest.raises(ValueError, match="Month"):
            synthesize(TransactionSynthesizer(rng=rng), sample_catalog, month=13)

    def test_units_bound_of_one(self, rng, large_catalog):
        records = synthesize(TransactionSynthesizer(rng=rng), large_catalog, units_max=1)
        assert {r.units for r in records} == {1}

    def test_units_bound_below_one_is_treated_as_one(self, rng, sample_catalog):
        records = synthesize(TransactionSynthesizer(rng=rng), sample_catalog, units_max=0)
        assert {r.units for r in records} == {1}

    def test_branches_come_from_branch_list(self, rng, large_catalog):
        records = synthesize(TransactionSynthesizer(rng=rng), large_catalog)
        assert all(r.branch in BRANCH_CODES for r in records)

    def test_custom_branches(self, rng, sample_catalog):
        synth = TransactionSynthesizer(rng=rng, branches=["ONLY"])
        assert {r.branch for r in synthesize(synth, sample_catalog)} == {"ONLY"}

    def test_empty_branches_rejected(self):
        with pytest.raises(ValueError):
            TransactionSynthesizer(branches=[])

    def test_product_missing_from_catalog_gives_nan_value(self, rng):
        synth = TransactionSynthesizer(rng=rng)
        records = synth.synthesize(2, 2024, 3, 5, ["P1", "GHOST"], 2, {"P1": 2.0}, "S")

        assert records[0].value == records[0].units * 2.0
        assert math.isnan(records[1].value)

    def test_same_seed_reproduces_batch(self, sample_catalog):
        first = synthesize(TransactionSynthesizer(seed=3), sample_catalog)
        second = synthesize(TransactionSynthesizer(seed=3), sample_catalog)
        assert first == second

    def test_branch_list_has_56_unique_codes(self):
        assert len(BRANCH_CODES) == 56
        assert len(set(BRANCH_CODES)) == 56

    @settings(max_examples=50, deadline=None)
    @given(
        prices=st.lists(
            st.floats(min_value=0.0, max_value=10_000.0, allow_nan=False),
            min_size=1,
            max_size=40,
        ),
        units_max=st.integers(min_value=1, max_value=15),
        month=st.integers(min_value=1, max_value=12),
        seed=st.integers(min_value=0, max_value=10_000),
    )
    def test_units_and_value_properties(self, prices, units_max, month, seed):
        catalog = {f"P{i}": price for i, price in enumerate(prices)}
        synth = TransactionSynthesizer(rng=random.Random(seed))
        records = synthesize(synth, catalog, year=2023, month=month, units_max=units_max)

        assert len(records) == len(catalog)
        for record in records:
            assert isinstance(record.units, int)
            assert 1 <= record.units <= units_max
            exact = record.units * catalog[record.product]
            assert abs(record.value - exact) <= 0.0005 + 1e-9 * exact
            assert record.value == round(record.value, 3)
            assert record.txn_date.month == month
