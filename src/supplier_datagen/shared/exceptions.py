"""
Custom exceptions for the supplier transaction data generator.

This module contains specialized exception classes for handling the error
conditions raised while loading a price catalog and validating the inputs
handed to a generation run.
"""

from typing import Any


class SupplierDataGenException(Exception):
    """Base exception for all supplier data generator errors."""

    pass


class CatalogLoadError(SupplierDataGenException):
    """Exception raised when a price catalog cannot be loaded."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        original_error: Exception | None = None,
    ):
        self.source = source
        self.original_error = original_error

        if source:
            message = f"Error loading price catalog '{source}': {message}"

        if original_error:
            message = f"{message} (Original error: {original_error})"

        super().__init__(message)


class MissingColumnsError(CatalogLoadError):
    """Exception raised when the catalog header lacks required columns."""

    def __init__(
        self,
        missing_columns: list[str],
        actual_columns: list[str] | None = None,
        source: str | None = None,
    ):
        self.missing_columns = missing_columns
        self.actual_columns = actual_columns or []

        message = f"CSV is missing required columns: {', '.join(missing_columns)}"

        super().__init__(message, source)


class EmptyCatalogError(CatalogLoadError):
    """Exception raised when no usable price rows were found."""

    def __init__(
        self,
        message: str = "CSV must contain 'ProductID' and 'Price' columns with valid data.",
        source: str | None = None,
    ):
        super().__init__(message, source)


class CatalogParsingError(CatalogLoadError):
    """Exception raised when CSV parsing fails."""

    def __init__(
        self,
        message: str = "CSV parsing failed",
        source: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, source, original_error)


class CatalogValidationError(CatalogLoadError):
    """Exception raised when a catalog row fails validation."""

    def __init__(
        self,
        message: str,
        row_number: int | None = None,
        column_name: str | None = None,
        invalid_value: Any | None = None,
        source: str | None = None,
    ):
        self.row_number = row_number
        self.column_name = column_name
        self.invalid_value = invalid_value

        error_parts = [message]

        if row_number is not None:
            error_parts.append(f"Row: {row_number}")

        if column_name:
            error_parts.append(f"Column: {column_name}")

        if invalid_value is not None:
            error_parts.append(f"Value: {invalid_value!r}")

        super().__init__(" | ".join(error_parts), source)


class InvalidPriceError(CatalogValidationError):
    """Exception raised when a price cell is not numeric and strict parsing is on."""

    def __init__(
        self,
        product_id: str,
        invalid_value: Any,
        row_number: int | None = None,
        source: str | None = None,
    ):
        self.product_id = product_id

        super().__init__(
            f"Price for product '{product_id}' is not numeric",
            row_number=row_number,
            column_name="Price",
            invalid_value=invalid_value,
            source=source,
        )


class InvalidInputError(SupplierDataGenException):
    """Exception raised when a generation request is missing or malformed."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
