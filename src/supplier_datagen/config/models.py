"""
Configuration models for the supplier transaction data generator.

These models define the structure and validation for the config.json file.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class VolumeConfig(BaseModel):
    """Configuration for the per-month volume bounds."""

    min_units: float = Field(
        1.0, gt=0.0, description="Lower bound of the monthly units draw"
    )
    max_units: float = Field(
        15.0, gt=0.0, description="Upper bound (exclusive) of the monthly units draw"
    )
    precision: int = Field(
        1, ge=0, le=6, description="Decimal digits kept on each monthly bound"
    )
    fallback_units: int = Field(
        6,
        ge=1,
        description="Bound used when a month has no usable volume entry",
    )

    @model_validator(mode="after")
    def validate_unit_range(self) -> "VolumeConfig":
        """Ensure the draw range is not inverted."""
        if self.min_units > self.max_units:
            raise ValueError(
                f"min_units ({self.min_units}) cannot exceed max_units ({self.max_units})"
            )
        return self


class CatalogConfig(BaseModel):
    """Policies applied while parsing an uploaded price catalog."""

    skip_incomplete_rows: bool = Field(
        True,
        description="Silently skip rows with an empty ProductID or Price cell",
    )
    allow_non_numeric_price: bool = Field(
        True,
        description=(
            "Keep rows whose Price is not numeric (value becomes NaN). "
            "Set to false to reject them."
        ),
    )


class UploadConfig(BaseModel):
    """Configuration for accepted catalog uploads."""

    max_file_size_bytes: int = Field(
        DEFAULT_MAX_UPLOAD_BYTES, gt=0, description="Maximum upload size in bytes"
    )
    allowed_extensions: list[str] = Field(
        default_factory=lambda: [".csv"],
        min_length=1,
        description="Accepted file extensions",
    )

    @field_validator("allowed_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lowercase extensions and make sure each starts with a dot."""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                raise ValueError("File extension cannot be empty")
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized


class LoggingConfig(BaseModel):
    """Configuration for application logging."""

    level: str = Field("INFO", description="Root log level")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate that the level is one the logging module knows."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


class GeneratorConfig(BaseModel):
    """Main configuration model for the supplier data generator."""

    seed: int | None = Field(
        None,
        ge=0,
        le=2**32 - 1,
        description="Random seed for reproducible output. None draws from system entropy.",
    )
    volume: VolumeConfig = Field(
        default_factory=VolumeConfig, description="Monthly volume bound settings"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog parsing policies"
    )
    upload: UploadConfig = Field(
        default_factory=UploadConfig, description="Upload acceptance rules"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_file(cls, file_path: str | Path) -> "GeneratorConfig":
        """
        Load configuration from a JSON file.

        Args:
            file_path: Path to the configuration JSON file

        Returns:
            GeneratorConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the JSON is invalid or doesn't match the schema
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            with path.open("r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

        return cls(**data)

    def to_file(self, file_path: str | Path) -> None:
        """
        Save configuration to a JSON file.

        Args:
            file_path: Path where to save the configuration file
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w") as f:
            json.dump(self.model_dump(), f, indent=2)
