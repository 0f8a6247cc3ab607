"""
Command-line entry point for the supplier data generator.

Usage:
    supplier-datagen generate prices.csv --supplier SUP1 --year 2024
    supplier-datagen generate prices.csv --supplier SUP1 --year 2024 --output out/
    supplier-datagen generate prices.csv --supplier SUP1 --year 2024 --seed 42
    supplier-datagen serve --port 8080
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .config.settings import load_config_with_fallback
from .generators.pipeline import GenerationPipeline
from .shared.dependencies import parse_year, validate_supplier_id
from .shared.exceptions import SupplierDataGenException
from .shared.logging_config import configure_structured_logging

logger = logging.getLogger(__name__)


def resolve_output_path(output: str | None, filename: str) -> Path:
    """
    Decide where the consolidated file goes.

    No output means the suggested filename in the working directory; an
    existing directory (or a path ending in a separator) receives the
    suggested filename; anything else is used as the file path.
    """
    if not output:
        return Path.cwd() / filename
    path = Path(output)
    if path.is_dir() or output.endswith(("/", os.sep)):
        return path / filename
    return path


def cmd_generate(args: argparse.Namespace) -> int:
    """Run the pipeline on a local catalog file."""
    config = load_config_with_fallback(args.config)
    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    configure_structured_logging(level=args.log_level or config.logging.level)

    catalog_path = Path(args.catalog)
    try:
        data = catalog_path.read_bytes()
    except OSError as e:
        print(f"Error: cannot read {catalog_path}: {e}", file=sys.stderr)
        return 1

    try:
        supplier_id = validate_supplier_id(args.supplier)
        year = parse_year(args.year)
        pipeline = GenerationPipeline(config)
        result = pipeline.generate_from_upload(
            data, supplier_id, year, source=catalog_path.name
        )
    except SupplierDataGenException as e:
        print(f"Error during generation: {e}", file=sys.stderr)
        return 1

    output_path = resolve_output_path(args.output, result.filename)
    try:
        pipeline.formatter.write(result.records, output_path)
    except OSError as e:
        print(f"Error: cannot write {output_path}: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {result.record_count:,} transactions to {output_path}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP application."""
    from .main import run_dev_server

    run_dev_server(host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="supplier-datagen",
        description="Generate a year of synthetic supplier purchase transactions",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", help="Generate a consolidated transactions CSV from a price catalog"
    )
    generate.add_argument("catalog", help="CSV file with ProductID and Price columns")
    generate.add_argument("--supplier", required=True, help="Supplier identifier")
    generate.add_argument("--year", required=True, help="Target year")
    generate.add_argument(
        "--output", "-o", help="Output file or directory (default: working directory)"
    )
    generate.add_argument("--seed", type=int, help="Random seed for reproducible output")
    generate.add_argument("--config", help="Path to a config.json file")
    generate.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )
    generate.set_defaults(func=cmd_generate)

    serve = subparsers.add_parser("serve", help="Run the web application")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=int(os.getenv("PORT", "8080")))
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
