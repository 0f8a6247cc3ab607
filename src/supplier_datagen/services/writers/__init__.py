"""
Output format writers.

This module provides the CSV formatter used for the consolidated
transactions file.
"""

from supplier_datagen.services.writers.csv_writer import (
    CSVFormatter,
    format_transactions_csv,
)

__all__ = [
    "CSVFormatter",
    "format_transactions_csv",
]
