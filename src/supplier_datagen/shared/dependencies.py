"""
FastAPI dependencies and request validation for the supplier data generator.

This module holds the process-wide configuration used by the web layer and
the helpers that check an upload request before a generation run starts.
"""

import logging
from pathlib import Path

from fastapi import Depends

from ..config.models import GeneratorConfig, UploadConfig
from ..config.settings import load_config_with_fallback
from ..generators.pipeline import GenerationPipeline
from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)

MIN_YEAR = 1
MAX_YEAR = 9999


# ================================
# CONFIGURATION DEPENDENCIES
# ================================

_config: GeneratorConfig | None = None


async def get_config() -> GeneratorConfig:
    """Get the current generator configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config_with_fallback()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration so the next request reloads it."""
    global _config
    _config = None


async def get_pipeline(
    config: GeneratorConfig = Depends(get_config),
) -> GenerationPipeline:
    """A fresh pipeline per request; runs never share state."""
    return GenerationPipeline(config)


# ================================
# VALIDATION HELPERS
# ================================


def validate_upload(
    filename: str | None,
    content_type: str | None,
    size: int,
    upload_config: UploadConfig,
) -> None:
    """
    Check that an uploaded file looks like an acceptable CSV catalog.

    Raises:
        InvalidInputError: If the file is missing, not a CSV, or too large
    """
    if not filename:
        raise InvalidInputError("Please upload a valid CSV file.", field="productPrices")

    extension = Path(filename).suffix.lower()
    mimetype_ok = "csv" in (content_type or "").lower()
    if extension not in upload_config.allowed_extensions or not mimetype_ok:
        raise InvalidInputError("Only CSV files are allowed!", field="productPrices")

    if size > upload_config.max_file_size_bytes:
        limit_mb = upload_config.max_file_size_bytes / (1024 * 1024)
        raise InvalidInputError(
            f"File too large. Maximum upload size is {limit_mb:g} MB.",
            field="productPrices",
        )


def validate_supplier_id(supplier_id: str | None) -> str:
    """Return the stripped supplier id, rejecting blanks."""
    if supplier_id is None or not supplier_id.strip():
        raise InvalidInputError(
            "Supplier ID and Specified Year are required.", field="supplierId"
        )
    return supplier_id.strip()


def parse_year(raw_year: str | int | None) -> int:
    """
    Parse the requested year.

    Raises:
        InvalidInputError: If the value is missing, not an integer, or outside
            the supported calendar range
    """
    if raw_year is None or (isinstance(raw_year, str) and not raw_year.strip()):
        raise InvalidInputError(
            "Supplier ID and Specified Year are required.", field="specifiedYear"
        )

    try:
        year = int(str(raw_year).strip())
    except ValueError:
        raise InvalidInputError(
            f"Specified Year must be a whole number, got '{raw_year}'.",
            field="specifiedYear",
        )

    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidInputError(
            f"Specified Year must be between {MIN_YEAR} and {MAX_YEAR}.",
            field="specifiedYear",
        )
    return year
