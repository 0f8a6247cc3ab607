"""
Pytest configuration and fixtures for supplier data generator tests.

Provides common test fixtures, sample catalogs, and seeded random sources.
"""

import random
import sys
from pathlib import Path

import pytest

# Ensure src/ is on sys.path for local test runs without installation
_SRC = Path(__file__).resolve().parents[1] / "src"
if _SRC.exists() and str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from supplier_datagen.config.models import GeneratorConfig  # noqa: E402

_ENV_VARS = (
    "SUPPLIER_DATAGEN_CONFIG_FILE",
    "SUPPLIER_DATAGEN_SEED",
    "SUPPLIER_DATAGEN_MIN_UNITS",
    "SUPPLIER_DATAGEN_MAX_UNITS",
    "SUPPLIER_DATAGEN_PRECISION",
    "SUPPLIER_DATAGEN_MAX_UPLOAD_BYTES",
    "SUPPLIER_DATAGEN_STRICT_PRICES",
    "SUPPLIER_DATAGEN_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate tests from host configuration files and env vars."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible draws."""
    return random.Random(42)


@pytest.fixture
def sample_catalog() -> dict[str, float]:
    """Two-product catalog used by the concrete scenarios."""
    return {"P1": 10.00, "P2": 5.50}


@pytest.fixture
def sample_catalog_csv() -> bytes:
    """Catalog CSV with an extra column and columns out of order."""
    return (
        b"Description,Price,ProductID\n"
        b"Widget,10.00,P1\n"
        b"Gadget,5.50,P2\n"
        b"Gizmo,2.25,P3\n"
    )


@pytest.fixture
def large_catalog() -> dict[str, float]:
    """Catalog with more products than any month has days."""
    return {f"SKU{i:03d}": round(1.0 + i * 0.75, 2) for i in range(35)}


@pytest.fixture
def seeded_config() -> GeneratorConfig:
    """Default configuration with a fixed seed."""
    return GeneratorConfig(seed=1234)


@pytest.fixture
def sample_config_data() -> dict:
    """Sample configuration data for testing."""
    return {
        "seed": 7,
        "volume": {"min_units": 2.0, "max_units": 9.0, "precision": 2},
        "catalog": {"skip_incomplete_rows": True, "allow_non_numeric_price": False},
        "upload": {"max_file_size_bytes": 1024, "allowed_extensions": ["csv"]},
        "logging": {"level": "debug"},
    }
