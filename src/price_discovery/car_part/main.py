"""CLI entry point for car-part.com price discovery.

Usage:
    # Pricing for one vehicle + part:
    python -m src.price_discovery.car_part.main \
        --year 2015 --make Honda --model Accord --part "Engine"

    # Show the catalog variants for an ambiguous query:
    python -m src.price_discovery.car_part.main \
        --year 2015 --make Honda --model Accord --part "Engine" --list-variants

    # Batch check: JSON list of {"item_id", "name", "vehicleInfo": {...}}
    python -m src.price_discovery.car_part.main --batch data/items.json \
        --output data/processed/price_check.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ...common.logging import setup_logging
from ...common.models import VehiclePartQuery
from ..common.config import Config
from .batch import BatchItem, run_batch_price_check
from .scraper import CarPartScraper

logger = logging.getLogger(__name__)


def _write_output(data: dict, output_path: str | None) -> None:
    text = json.dumps(data, ensure_ascii=False, indent=2)
    if output_path:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        Path(output_path).write_text(text, encoding="utf-8")
        logger.info("Output written to %s", output_path)
    else:
        print(text)


def _load_batch_items(path: str) -> list[BatchItem]:
    """Read batch items from a JSON list of objects.

    Raises:
        OSError: When the file cannot be read.
        ValueError: When the file is not a JSON list of objects.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list) or not all(isinstance(e, dict) for e in raw):
        raise ValueError(f"{path}: expected a JSON list of item objects")
    return [
        BatchItem(
            item_id=str(entry.get("item_id") or entry.get("id") or index),
            vehicle_info=entry.get("vehicleInfo") or entry.get("vehicle_info") or {},
            name=entry.get("name") or entry.get("itemName") or "",
        )
        for index, entry in enumerate(raw)
    ]


def _build_query(args: argparse.Namespace, config: Config) -> VehiclePartQuery:
    return VehiclePartQuery(
        year=args.year,
        make=args.make,
        model=args.model,
        part=args.part,
        variant_value=args.variant,
        postal_code=args.postal_code or config.default_postal_code,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="car-part.com Price Discovery")
    parser.add_argument("--year", type=str, help="Vehicle year (e.g., 2015)")
    parser.add_argument("--make", type=str, help="Vehicle make (e.g., Honda)")
    parser.add_argument("--model", type=str, help="Vehicle model (e.g., Accord)")
    parser.add_argument("--part", type=str, help="Part name (e.g., 'Engine')")
    parser.add_argument(
        "--variant",
        type=str,
        help="Catalog variant token; resolved automatically when omitted",
    )
    parser.add_argument(
        "--postal-code",
        type=str,
        help="Search postal code (default from config)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--list-variants",
        action="store_true",
        help="List catalog variants instead of scraping prices",
    )
    mode.add_argument(
        "--batch",
        type=str,
        help="Path to JSON list of items to price in sequence",
    )
    parser.add_argument("--output", type=str, help="Output JSON file path")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    config = Config()

    with CarPartScraper(config) as scraper:
        if args.batch:
            try:
                items = _load_batch_items(args.batch)
            except (OSError, ValueError) as exc:
                parser.error(f"cannot load batch file: {exc}")
            report = run_batch_price_check(scraper, items)
            _write_output(report.to_dict(), args.output)
            return 1 if report.errors else 0

        if not all((args.year, args.make, args.model, args.part)):
            parser.error("--year, --make, --model and --part are required")

        try:
            query = _build_query(args, config)
        except ValidationError as exc:
            parser.error(str(exc))

        if args.list_variants:
            variants = scraper.list_variants(query)
            _write_output(variants.to_dict(), args.output)
            return 0 if variants.success else 1

        result = scraper.scrape_pricing(query)
        _write_output(result.to_dict(), args.output)
        return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
