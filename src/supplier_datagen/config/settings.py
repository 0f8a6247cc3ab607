"""
Configuration loading and management for the supplier data generator.

This module provides utilities for loading, validating, and managing
configuration settings.
"""

import logging
import os
from pathlib import Path

from .models import GeneratorConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "SUPPLIER_DATAGEN_CONFIG_FILE"

# Environment variable -> dotted config field
ENV_VARS = {
    "SUPPLIER_DATAGEN_SEED": "seed",
    "SUPPLIER_DATAGEN_MIN_UNITS": "volume.min_units",
    "SUPPLIER_DATAGEN_MAX_UNITS": "volume.max_units",
    "SUPPLIER_DATAGEN_PRECISION": "volume.precision",
    "SUPPLIER_DATAGEN_MAX_UPLOAD_BYTES": "upload.max_file_size_bytes",
    "SUPPLIER_DATAGEN_STRICT_PRICES": "catalog.allow_non_numeric_price",
    "SUPPLIER_DATAGEN_LOG_LEVEL": "logging.level",
}

_TRUTHY = {"1", "true", "yes", "on"}


def load_config(
    config_path: str | Path | None = None, config_name: str = "config.json"
) -> GeneratorConfig:
    """
    Load configuration from file with path resolution.

    Args:
        config_path: Explicit path to config file or directory containing config
        config_name: Name of config file (default: "config.json")

    Returns:
        GeneratorConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If no configuration file is found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        search_paths = [
            Path.cwd() / config_name,
            Path.cwd() / "config" / config_name,
        ]

        for path in search_paths:
            if path.exists():
                config_path = path
                break
        else:
            raise FileNotFoundError(
                f"Configuration file '{config_name}' not found in any of: "
                f"{[str(p) for p in search_paths]}"
            )

    config_path = Path(config_path)

    # If path is a directory, look for config file inside it
    if config_path.is_dir():
        config_path = config_path / config_name

    return GeneratorConfig.from_file(config_path)


def get_config_from_env() -> GeneratorConfig | None:
    """
    Try to load configuration from environment variables.

    Returns:
        GeneratorConfig if any environment variables are set, None otherwise

    Raises:
        ValueError: If an environment variable holds an invalid value
    """
    config_file_env = os.getenv(CONFIG_FILE_ENV)
    if config_file_env:
        return load_config(config_file_env)

    env_values = {key: os.getenv(key) for key in ENV_VARS}
    if not any(env_values.values()):
        return None

    config_data: dict = {}
    try:
        for env_name, dotted in ENV_VARS.items():
            raw = env_values[env_name]
            if raw is None or raw == "":
                continue

            if env_name == "SUPPLIER_DATAGEN_STRICT_PRICES":
                # Strict mode is the inverse of allowing non-numeric prices
                value: object = raw.strip().lower() not in _TRUTHY
            elif dotted in ("volume.min_units", "volume.max_units"):
                value = float(raw)
            elif dotted == "logging.level":
                value = raw
            else:
                value = int(raw)

            section, _, field = dotted.rpartition(".")
            if section:
                config_data.setdefault(section, {})[field] = value
            else:
                config_data[field] = value

        return GeneratorConfig(**config_data)

    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid environment variable configuration: {e}")


def load_config_with_fallback(config_path: str | Path | None = None) -> GeneratorConfig:
    """
    Load configuration with fallback to environment variables and defaults.

    Priority order:
    1. Explicit config file path
    2. Environment variable SUPPLIER_DATAGEN_CONFIG_FILE
    3. Individual environment variables
    4. Default locations (config.json, config/config.json)
    5. Built-in defaults

    Args:
        config_path: Optional explicit path to config file

    Returns:
        GeneratorConfig: Loaded configuration
    """
    if config_path:
        try:
            return load_config(config_path)
        except FileNotFoundError:
            logger.warning(f"Config file {config_path} not found, trying fallbacks")

    try:
        env_config = get_config_from_env()
        if env_config:
            return env_config
    except (ValueError, FileNotFoundError) as e:
        logger.warning(f"Ignoring environment configuration: {e}")

    try:
        return load_config()
    except FileNotFoundError:
        pass

    logger.info("No configuration found, using defaults")
    return GeneratorConfig()
