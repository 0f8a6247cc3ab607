"""
CSV serialization of transaction records.

The consolidated transactions file uses a fixed 17-column layout. The header
row is the bare column names; every data field is wrapped in double quotes.
Field text is not escaped, so values containing quotes or commas produce
rows that do not re-split cleanly. Downstream consumers of the file rely on
this exact layout.
"""

import logging
import math
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from ...shared.models import TRANSACTION_COLUMNS, TransactionRecord

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"
VALUE_DECIMALS = 3


def render_cell(value) -> str:
    """
    Render one field as text.

    None, empty strings, zero, NaN and False render as an empty string.
    Dates use DD/MM/YYYY; whole floats drop their fractional part.
    """
    if value is None or value is False:
        return ""
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, float):
        if math.isnan(value) or value == 0:
            return ""
        if value.is_integer():
            return str(int(value))
        return f"{value:.{VALUE_DECIMALS}f}".rstrip("0").rstrip(".")
    if isinstance(value, int) and value == 0:
        return ""
    return str(value)


class CSVFormatter:
    """
    Formats transaction records into the consolidated CSV text.

    Attributes:
        columns: Output column order
        delimiter: Field separator
        lineterminator: Row separator (no trailing terminator is written)
    """

    def __init__(
        self,
        columns: list[str] | None = None,
        delimiter: str = ",",
        lineterminator: str = "\n",
    ):
        """
        Initialize the formatter.

        Args:
            columns: Column order (default: the transaction schema)
            delimiter: Field separator (default: ",")
            lineterminator: Row separator (default: "\\n")

        Raises:
            ValueError: If columns is empty
        """
        self.columns = list(columns) if columns is not None else list(TRANSACTION_COLUMNS)
        if not self.columns:
            raise ValueError("columns cannot be empty")
        self.delimiter = delimiter
        self.lineterminator = lineterminator

    def header(self) -> str:
        """Header row: the column names joined by the delimiter."""
        return self.delimiter.join(self.columns)

    def format_row(self, record: TransactionRecord | dict) -> str:
        """Quote every field of one record in column order."""
        row = record.to_row() if isinstance(record, TransactionRecord) else record
        return self.delimiter.join(
            f'"{render_cell(row.get(column))}"' for column in self.columns
        )

    def format(self, records: Iterable[TransactionRecord | dict]) -> str:
        """
        Serialize records into CSV text.

        Args:
            records: Records in output order

        Returns:
            Header plus one line per record, joined without a trailing newline
        """
        lines = [self.header()]
        lines.extend(self.format_row(record) for record in records)
        return self.lineterminator.join(lines)

    def write(
        self,
        records: Iterable[TransactionRecord | dict],
        output_path: Path,
        encoding: str = "utf-8",
    ) -> int:
        """
        Write records to a CSV file.

        Args:
            records: Records in output order
            output_path: Destination file; parent directories are created
            encoding: File encoding (default: utf-8)

        Returns:
            Number of records written

        Raises:
            OSError: If the file cannot be written
        """
        records = list(records)
        output_path = Path(output_path)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(self.format(records), encoding=encoding)
        except OSError as e:
            logger.error(f"Failed to write CSV to {output_path}: {e}")
            raise

        logger.info(f"Wrote {len(records):,} records to {output_path}")
        return len(records)


def format_transactions_csv(records: Iterable[TransactionRecord | dict]) -> str:
    """Serialize records with the default transaction layout."""
    return CSVFormatter().format(records)
