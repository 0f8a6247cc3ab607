"""
Price catalog loading for the supplier data generator.

Reads an uploaded supplier catalog (CSV with ``ProductID`` and ``Price``
columns) into a mapping from product identifier to unit price. Parsing is
done with pandas with every cell kept as text so product codes keep their
leading zeros; prices are converted afterwards according to the configured
catalog policies.
"""

import io
import logging
import math
from dataclasses import dataclass, field

import pandas as pd

from ..config.models import CatalogConfig
from .exceptions import (
    CatalogParsingError,
    CatalogValidationError,
    EmptyCatalogError,
    InvalidPriceError,
    MissingColumnsError,
)
from .models import PRICE_COLUMN, PRODUCT_ID_COLUMN, REQUIRED_CATALOG_COLUMNS, PriceEntry

logger = logging.getLogger(__name__)

DEFAULT_ENCODINGS = ["utf-8-sig", "latin-1"]


@dataclass
class CatalogLoadResult:
    """Result of parsing a price catalog."""

    prices: dict[str, float]
    rows_read: int
    rows_skipped: int
    duplicate_products: list[str] = field(default_factory=list)
    non_numeric_prices: list[str] = field(default_factory=list)


def _is_blank(cell) -> bool:
    """True for cells that are missing or empty after stripping."""
    if cell is None or pd.isna(cell):
        return True
    return str(cell).strip() == ""


def _truncate_to(width: int):
    """Bad-line handler that drops fields beyond the header width."""

    def handler(bad_line: list[str]) -> list[str]:
        return bad_line[:width]

    return handler


def parse_price(raw: str) -> float:
    """
    Convert a price cell to a float.

    Returns NaN when the text is not a number.
    """
    try:
        return float(str(raw).strip())
    except ValueError:
        return math.nan


class PriceCatalogLoader:
    """
    Loads supplier price catalogs from raw CSV bytes.

    The loader enforces the header contract (``ProductID`` and ``Price`` must
    both be present), applies the incomplete-row and non-numeric-price
    policies from :class:`CatalogConfig`, and refuses to return an empty
    catalog.
    """

    def __init__(
        self,
        config: CatalogConfig | None = None,
        encodings: list[str] | None = None,
    ):
        self.config = config or CatalogConfig()
        self.encodings = encodings or list(DEFAULT_ENCODINGS)

    def _read_csv_with_encoding(self, data: bytes, source: str | None) -> pd.DataFrame:
        """
        Read CSV bytes, trying each configured encoding in turn.

        Cells are mapped by header position; fields beyond the header width
        (trailing delimiters included) are dropped.

        Raises:
            EmptyCatalogError: If the input has no header at all
            CatalogParsingError: If the text cannot be tokenized
        """
        last_error: Exception | None = None
        for encoding in self.encodings:
            try:
                header = pd.read_csv(
                    io.BytesIO(data), encoding=encoding, nrows=0, engine="python"
                )
                df = pd.read_csv(
                    io.BytesIO(data),
                    encoding=encoding,
                    engine="python",
                    index_col=False,  # Trailing delimiters must not become an index
                    on_bad_lines=_truncate_to(len(header.columns)),
                    skipinitialspace=True,
                    na_filter=False,  # Don't convert empty strings to NaN
                    dtype=str,
                )
                df.columns = [str(col).strip() for col in df.columns]
                logger.debug(f"Read catalog with encoding {encoding}")
                return df
            except (UnicodeDecodeError, UnicodeError) as e:
                last_error = e
                continue
            except pd.errors.EmptyDataError:
                raise EmptyCatalogError(source=source)
            except pd.errors.ParserError as e:
                raise CatalogParsingError(str(e), source=source, original_error=e)

        raise CatalogParsingError(
            f"Unable to decode catalog with encodings: {', '.join(self.encodings)}",
            source=source,
            original_error=last_error,
        )

    @staticmethod
    def _validate_schema(df: pd.DataFrame, source: str | None) -> None:
        """Raise MissingColumnsError when a required header is absent."""
        actual = list(df.columns)
        missing = [col for col in REQUIRED_CATALOG_COLUMNS if col not in actual]
        if missing:
            raise MissingColumnsError(missing, actual_columns=actual, source=source)

    def load(self, data: bytes, source: str | None = None) -> CatalogLoadResult:
        """
        Parse catalog bytes and report what was read.

        Args:
            data: Raw CSV bytes
            source: Optional name of the upload, used in error messages

        Returns:
            CatalogLoadResult with the price mapping and row statistics

        Raises:
            MissingColumnsError: If ``ProductID`` or ``Price`` is not in the header
            EmptyCatalogError: If no row yields a usable price entry
            CatalogValidationError: If an incomplete row is found and
                ``skip_incomplete_rows`` is off
            InvalidPriceError: If a price is not numeric and
                ``allow_non_numeric_price`` is off
        """
        df = self._read_csv_with_encoding(data, source)
        self._validate_schema(df, source)

        prices: dict[str, float] = {}
        duplicates: list[str] = []
        non_numeric: list[str] = []
        skipped = 0

        rows = df[[PRODUCT_ID_COLUMN, PRICE_COLUMN]].itertuples(index=False, name=None)
        for row_number, (product_cell, price_cell) in enumerate(rows, start=1):
            if _is_blank(product_cell) or _is_blank(price_cell):
                if not self.config.skip_incomplete_rows:
                    blank_column = (
                        PRODUCT_ID_COLUMN if _is_blank(product_cell) else PRICE_COLUMN
                    )
                    raise CatalogValidationError(
                        "Row is missing a required value",
                        row_number=row_number,
                        column_name=blank_column,
                        source=source,
                    )
                skipped += 1
                continue

            entry = PriceEntry(
                product_id=str(product_cell).strip(), price=parse_price(price_cell)
            )

            if math.isnan(entry.price):
                if not self.config.allow_non_numeric_price:
                    raise InvalidPriceError(
                        entry.product_id,
                        price_cell,
                        row_number=row_number,
                        source=source,
                    )
                non_numeric.append(entry.product_id)

            if entry.product_id in prices:
                duplicates.append(entry.product_id)
            prices[entry.product_id] = entry.price

        if not prices:
            raise EmptyCatalogError(source=source)

        if skipped:
            logger.info(f"Skipped {skipped} incomplete catalog rows")
        if non_numeric:
            logger.warning(
                f"{len(non_numeric)} products have non-numeric prices: "
                f"{', '.join(non_numeric[:10])}"
            )

        return CatalogLoadResult(
            prices=prices,
            rows_read=len(df),
            rows_skipped=skipped,
            duplicate_products=duplicates,
            non_numeric_prices=non_numeric,
        )

    def parse(self, data: bytes, source: str | None = None) -> dict[str, float]:
        """Parse catalog bytes into a ``{product_id: price}`` mapping."""
        return self.load(data, source).prices


def load_price_catalog(
    data: bytes, config: CatalogConfig | None = None, source: str | None = None
) -> dict[str, float]:
    """Convenience wrapper around :meth:`PriceCatalogLoader.parse`."""
    return PriceCatalogLoader(config).parse(data, source)
