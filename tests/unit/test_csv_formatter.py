"""Unit tests for the consolidated CSV formatter."""

import math
from datetime import date

import pytest

from supplier_datagen.services.writers import CSVFormatter, format_transactions_csv
from supplier_datagen.services.writers.csv_writer import render_cell
from supplier_datagen.shared.models import TRANSACTION_COLUMNS, TransactionRecord

EXPECTED_HEADER = (
    "Date,Supplier,Branch,Invoice status,Product,Transaction Type,Units,Value,"
    "Currency,External Reference,Interface Date,Primary Key,Agreement ID,"
    "Advised Earnings,Order Reference,Delivery Reference,Invoice Reference"
)


def make_record(**overrides) -> TransactionRecord:
    fields = {
        "txn_date": date(2024, 1, 5),
        "supplier": "SUP1",
        "branch": "ALB",
        "product": "P1",
        "units": 3,
        "value": 30.0,
        "primary_key": "SUP1-PRI-01-2024-5",
        "invoice_reference": "SUP1-INV-01-2024-5",
    }
    fields.update(overrides)
    return TransactionRecord(**fields)


class TestRenderCell:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, ""),
            (False, ""),
            ("", ""),
            (0, ""),
            (0.0, ""),
            (math.nan, ""),
            (30.0, "30"),
            (16.5, "16.5"),
            (8.642, "8.642"),
            (7, "7"),
            ("Paid", "Paid"),
        ],
    )
    def test_render(self, value, expected):
        assert render_cell(value) == expected

    def test_date_is_day_first(self):
        assert render_cell(date(2024, 2, 9)) == "09/02/2024"


class TestCSVFormatter:
    def test_header_matches_column_layout(self):
        assert CSVFormatter().header() == EXPECTED_HEADER
        assert len(TRANSACTION_COLUMNS) == 17

    def test_header_only_for_no_records(self):
        assert CSVFormatter().format([]) == EXPECTED_HEADER

    def test_row_quotes_every_field(self):
        row = CSVFormatter().format_row(make_record())

        assert row == (
            '"05/01/2024","SUP1","ALB","Paid","P1","Purchase","3","30","AUD",'
            '"","","SUP1-PRI-01-2024-5","","","","","SUP1-INV-01-2024-5"'
        )

    def test_row_has_seventeen_fields(self):
        row = CSVFormatter().format_row(make_record(value=16.5))
        fields = row.split(",")

        assert len(fields) == 17
        assert all(f.startswith('"') and f.endswith('"') for f in fields)

    def test_nan_value_renders_empty(self):
        row = CSVFormatter().format_row(make_record(value=math.nan))
        assert row.split(",")[7] == '""'

    def test_zero_value_renders_empty(self):
        row = CSVFormatter().format_row(make_record(value=0.0))
        assert row.split(",")[7] == '""'

    def test_no_trailing_newline(self):
        text = CSVFormatter().format([make_record(), make_record(product="P2")])

        assert not text.endswith("\n")
        assert text.count("\n") == 2

    def test_values_are_not_escaped(self):
        row = CSVFormatter().format_row(make_record(product='A"B'))
        assert '"A"B"' in row

    def test_dict_rows_are_accepted(self):
        row = CSVFormatter(columns=["Product", "Units"]).format_row({"Product": "X", "Units": 2})
        assert row == '"X","2"'

    def test_custom_delimiter(self):
        formatter = CSVFormatter(columns=["A", "B"], delimiter=";")

        assert formatter.header() == "A;B"
        assert formatter.format_row({"A": "1", "B": "2"}) == '"1";"2"'

    def test_empty_columns_rejected(self):
        with pytest.raises(ValueError):
            CSVFormatter(columns=[])

    def test_rows_split_back_into_fields(self):
        records = [make_record(), make_record(product="P2", units=1, value=5.5)]
        lines = format_transactions_csv(records).split("\n")

        assert lines[0].split(",") == TRANSACTION_COLUMNS
        parsed = [
            dict(zip(TRANSACTION_COLUMNS, (f.strip('"') for f in line.split(","))))
            for line in lines[1:]
        ]
        assert parsed[1]["Product"] == "P2"
        assert parsed[1]["Value"] == "5.5"
        assert parsed[1]["Units"] == "1"

    def test_write_creates_file(self, tmp_path):
        output = tmp_path / "nested" / "out.csv"

        count = CSVFormatter().write([make_record()], output)

        assert count == 1
        content = output.read_text(encoding="utf-8")
        assert content.startswith(EXPECTED_HEADER + "\n")
        assert content.endswith('"SUP1-INV-01-2024-5"')
