"""
Year-long generation pipeline for one supplier.

Runs the volume model once, synthesizes one batch of transactions per
calendar month from the supplier's price catalog, and formats the whole
year into a single consolidated CSV.
"""

import random
import time
from collections.abc import Mapping
from dataclasses import dataclass, field

from ..config.models import GeneratorConfig
from ..services.writers.csv_writer import CSVFormatter
from ..shared import metrics
from ..shared.catalog_loader import PriceCatalogLoader
from ..shared.exceptions import EmptyCatalogError, SupplierDataGenException
from ..shared.logging_utils import get_structured_logger
from ..shared.models import TransactionRecord
from .transaction_generator import TransactionSynthesizer
from .volume_model import MonthlyVolumeModel, units_max_for

logger = get_structured_logger(__name__)

MONTHS_PER_YEAR = 12


def build_filename(supplier_id: str, year: int, generation_id: int) -> str:
    """Suggested download name for a consolidated run."""
    return (
        f"consolidated_{supplier_id}_{year}"
        f"_generated_transactions_with_prices_{generation_id}.csv"
    )


@dataclass
class GenerationResult:
    """Output of one generation run."""

    csv_text: str
    filename: str
    generation_id: int
    record_count: int
    unit_bounds: dict[str, float] = field(default_factory=dict)
    records: list[TransactionRecord] = field(default_factory=list, repr=False)


class GenerationPipeline:
    """
    Orchestrates catalog parsing, volume modeling, synthesis and formatting.

    A single random source is shared by the volume model and the
    synthesizer. When ``rng`` is not given it is seeded from
    ``config.seed`` (or system entropy when no seed is configured).
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        rng: random.Random | None = None,
        formatter: CSVFormatter | None = None,
        clock=time.time,
    ):
        self.config = config or GeneratorConfig()
        self._rng = rng if rng is not None else random.Random(self.config.seed)
        self.volume_model = MonthlyVolumeModel(rng=self._rng)
        self.synthesizer = TransactionSynthesizer(rng=self._rng)
        self.formatter = formatter or CSVFormatter()
        self.catalog_loader = PriceCatalogLoader(self.config.catalog)
        self._clock = clock

    def _new_generation_id(self) -> int:
        """Run identifier: epoch milliseconds."""
        return int(self._clock() * 1000)

    def generate_records(
        self,
        price_catalog: Mapping[str, float],
        supplier_id: str,
        year: int,
        unit_bounds: dict[str, float],
    ) -> list[TransactionRecord]:
        """Synthesize all twelve months, in calendar order."""
        product_ids = list(price_catalog.keys())
        total_products = len(product_ids)
        records_per_month = total_products

        consolidated: list[TransactionRecord] = []
        for month in range(1, MONTHS_PER_YEAR + 1):
            units_max = units_max_for(
                unit_bounds, month, fallback=self.config.volume.fallback_units
            )
            consolidated.extend(
                self.synthesizer.synthesize(
                    records_per_month,
                    year,
                    month,
                    units_max,
                    product_ids,
                    total_products,
                    price_catalog,
                    supplier_id,
                )
            )
        return consolidated

    def run(
        self,
        price_catalog: Mapping[str, float],
        supplier_id: str,
        year: int,
    ) -> GenerationResult:
        """
        Generate a year of transactions for one supplier.

        Args:
            price_catalog: Unit price per product identifier
            supplier_id: Supplier identifier stamped on every record
            year: Target year

        Returns:
            GenerationResult holding the CSV text and suggested filename

        Raises:
            EmptyCatalogError: If the catalog has no products
        """
        if not price_catalog:
            metrics.record_generation_failure(EmptyCatalogError.__name__)
            raise EmptyCatalogError()

        start_time = time.perf_counter()
        generation_id = self._new_generation_id()
        logger.set_correlation_id(str(generation_id))

        try:
            total_products = len(price_catalog)
            metrics.catalog_products.observe(total_products)
            logger.info(
                "Starting generation",
                supplier_id=supplier_id,
                year=year,
                total_products=total_products,
                records_per_month=total_products,
            )

            volume = self.config.volume
            unit_bounds = self.volume_model.generate(
                volume.min_units, volume.max_units, volume.precision
            )
            logger.info("Randomized units_per_month values", **unit_bounds)

            records = self.generate_records(price_catalog, supplier_id, year, unit_bounds)
            csv_text = self.formatter.format(records)
            filename = build_filename(supplier_id, year, generation_id)

            duration = time.perf_counter() - start_time
            metrics.record_generation_success(len(records), duration)
            logger.info(
                "Consolidated data generated",
                filename=filename,
                record_count=len(records),
                duration_seconds=round(duration, 3),
            )

            return GenerationResult(
                csv_text=csv_text,
                filename=filename,
                generation_id=generation_id,
                record_count=len(records),
                unit_bounds=unit_bounds,
                records=records,
            )
        finally:
            logger.clear_correlation_id()

    def generate_from_upload(
        self,
        data: bytes,
        supplier_id: str,
        year: int,
        source: str | None = None,
    ) -> GenerationResult:
        """
        Parse an uploaded catalog and run the pipeline on it.

        Raises:
            CatalogLoadError: If the catalog cannot be parsed
        """
        try:
            price_catalog = self.catalog_loader.parse(data, source)
        except SupplierDataGenException as e:
            metrics.record_generation_failure(type(e).__name__)
            logger.error("Catalog rejected", source=source, error=str(e))
            raise

        return self.run(price_catalog, supplier_id, year)
