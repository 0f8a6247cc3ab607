"""Shared models, loaders, and utilities for the supplier data generator."""

from supplier_datagen.shared.catalog_loader import PriceCatalogLoader, load_price_catalog

__all__ = ["PriceCatalogLoader", "load_price_catalog"]
