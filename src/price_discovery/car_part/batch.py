"""Batch price check across many stored items.

Items are processed one at a time with a fixed pause after each scraped
item, on top of the per-page pause inside every scrape. Results are handed
to a caller-supplied sink; this module never writes storage itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from pydantic import ValidationError

from ...common.models import VehiclePartQuery
from ..common.rate_limiter import RateLimiter
from .models import ScrapeResult
from .scraper import CarPartScraper

logger = logging.getLogger(__name__)

REQUIRED_VEHICLE_FIELDS = ("year", "make", "model", "part")

ResultSink = Callable[[str, ScrapeResult], None]


@dataclass
class BatchItem:
    """A stored item with the vehicle info needed to price it."""

    item_id: str
    vehicle_info: dict = field(default_factory=dict)
    name: str = ""

    def to_query(
        self, default_postal_code: str | None = None
    ) -> VehiclePartQuery | None:
        """Build the catalog query, or None when vehicle info is incomplete."""
        info = self.vehicle_info or {}
        if not all(info.get(key) for key in REQUIRED_VEHICLE_FIELDS):
            return None
        kwargs = {key: info[key] for key in REQUIRED_VEHICLE_FIELDS}
        kwargs["variant_value"] = info.get("variantValue") or info.get("variant_value")
        postal_code = (
            info.get("postalCode") or info.get("postal_code") or default_postal_code
        )
        if postal_code:
            kwargs["postal_code"] = postal_code
        try:
            return VehiclePartQuery(**kwargs)
        except ValidationError:
            logger.debug("Invalid vehicle info for %s", self.item_id, exc_info=True)
            return None


@dataclass
class BatchReport:
    """Outcome counts for one batch run."""

    updated: int = 0
    empty: int = 0
    errors: int = 0
    skipped: int = 0
    results: dict[str, ScrapeResult] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "updated": self.updated,
            "empty": self.empty,
            "errors": self.errors,
            "skipped": self.skipped,
            "results": {k: v.to_dict() for k, v in self.results.items()},
        }


def run_batch_price_check(
    scraper: CarPartScraper,
    items: Iterable[BatchItem],
    sink: ResultSink | None = None,
    rate_limiter: RateLimiter | None = None,
) -> BatchReport:
    """Scrape pricing for each item in turn.

    Items missing year/make/model/part are skipped without a pause. A
    result counts as updated only when it carries listings; a failed
    scrape or a sink that raises counts as an error.
    """
    limiter = rate_limiter or RateLimiter(scraper.config.item_delay_seconds)
    report = BatchReport()
    items = list(items)

    logger.info("Starting price check for %d items", len(items))

    for item in items:
        query = item.to_query(scraper.config.default_postal_code)
        if query is None:
            logger.debug("Skipping %s: incomplete vehicle info", item.item_id)
            report.skipped += 1
            continue

        result = scraper.scrape_pricing(query)
        report.results[item.item_id] = result

        if not result.success:
            logger.error(
                "Error checking price for %s: %s",
                item.name or item.item_id,
                result.error,
            )
            report.errors += 1
        elif not result.metrics or result.metrics.total_listings == 0:
            report.empty += 1
        else:
            try:
                if sink is not None:
                    sink(item.item_id, result)
                report.updated += 1
            except Exception:
                logger.exception("Failed to record price for %s", item.item_id)
                report.errors += 1

        limiter.wait()

    logger.info(
        "Price check completed: %d updated, %d empty, %d errors, %d skipped",
        report.updated, report.empty, report.errors, report.skipped,
    )
    return report
