"""car-part.com pricing scraper.

Runs the full price-discovery flow for one vehicle+part query:

    resolve variant -> page 1 -> detect page count -> plan sample pages
    -> fetch sample pages one at a time (fixed pause before each)
    -> fold listings -> aggregate -> ScrapeResult

Only a page-1 failure fails the call. Failed sample pages are logged and
skipped, and a scrape that parses no listings still succeeds with
zero-valued metrics and a "No listings found" message.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Iterable, Iterator

from ...common.models import VehiclePartQuery
from ..common.config import Config
from ..common.rate_limiter import RateLimiter
from .aggregator import aggregate
from .exceptions import NO_LISTINGS_FOUND, NetworkError
from .fetcher import SearchPageFetcher
from .models import (
    Listing,
    PageFetchResult,
    ScrapeResult,
    VariantListResult,
)
from .planner import plan_pages
from .variants import VariantResolver, VariantSelectionStrategy

logger = logging.getLogger(__name__)


def collect_listings(pages: Iterable[PageFetchResult]) -> list[Listing]:
    """Fold fetched pages, in order, into one listing sequence."""
    return reduce(lambda acc, page: acc + page.listings, pages, [])


class CarPartScraper:
    """Price discovery against the car-part.com recycled parts catalog.

    Usage:
        with CarPartScraper() as scraper:
            result = scraper.scrape_pricing(
                VehiclePartQuery(year="2015", make="Honda", model="Accord", part="Engine")
            )
            if result.success:
                print(result.metrics.to_dict())
    """

    def __init__(
        self,
        config: Config | None = None,
        fetcher: SearchPageFetcher | None = None,
        strategy: VariantSelectionStrategy | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self.config = config or Config()
        self._fetcher = fetcher or SearchPageFetcher(self.config)
        self._resolver = VariantResolver(self._fetcher, strategy)
        self._rate_limiter = rate_limiter or RateLimiter(
            self.config.page_delay_seconds
        )

    def scrape_pricing(self, query: VehiclePartQuery) -> ScrapeResult:
        """Scrape and summarize catalog pricing for one query.

        Never raises: every failure is returned as ScrapeResult(success=False).
        """
        try:
            return self._scrape(query)
        except Exception as exc:
            logger.exception("Unexpected error scraping %s", _describe(query))
            return ScrapeResult(success=False, error=str(exc) or "Unknown error")

    def _scrape(self, query: VehiclePartQuery) -> ScrapeResult:
        logger.info("Fetching car-part pricing for %s", _describe(query))

        try:
            resolution = self._resolver.resolve(query)
        except NetworkError as exc:
            logger.error("Initial search failed for %s: %s", _describe(query), exc)
            return ScrapeResult(success=False, error=str(exc))

        page1 = resolution.page1
        total_pages = max(page1.detected_total_pages, 1)
        logger.info(
            "Detected %d total pages; page 1 has %d listings",
            total_pages, len(page1.listings),
        )

        bound_query = (
            query.with_variant(resolution.variant_value)
            if resolution.variant_value
            else query
        )
        planned = plan_pages(total_pages)
        if planned:
            logger.info("Fetching additional pages: %s", ", ".join(map(str, planned)))

        pages = [page1, *self._fetch_additional(bound_query, planned)]
        listings = collect_listings(pages)
        metrics = aggregate(listings, total_pages)

        result = ScrapeResult(
            success=True,
            metrics=metrics,
            variant_value=resolution.variant_value,
            pages_fetched=[page.page_number for page in pages],
        )
        if metrics.total_listings == 0:
            logger.warning("No listings found for %s", _describe(query))
            result.error = NO_LISTINGS_FOUND
            return result

        logger.info(
            "Pricing for %s: avg=$%.2f min=$%.2f max=$%.2f (%d listings, %d/%d pages)",
            _describe(query),
            metrics.avg_price,
            metrics.min_price,
            metrics.max_price,
            metrics.total_listings,
            len(pages),
            total_pages,
        )
        return result

    def _fetch_additional(
        self, query: VehiclePartQuery, page_numbers: list[int]
    ) -> Iterator[PageFetchResult]:
        """Fetch planned pages sequentially, pausing before each one."""
        for page_number in page_numbers:
            self._rate_limiter.wait()
            try:
                page = self._fetcher.fetch(query, page_number)
            except NetworkError as exc:
                logger.warning("Failed to fetch page %d: %s", page_number, exc)
                continue
            logger.info("Page %d: fetched %d listings", page_number, len(page.listings))
            yield page

    def list_variants(self, query: VehiclePartQuery) -> VariantListResult:
        """List the catalog variants offered for a query. Never raises."""
        try:
            variants = self._resolver.list_variants(query)
        except Exception as exc:
            logger.error("Error checking variants for %s: %s", _describe(query), exc)
            return VariantListResult(success=False, error=str(exc) or "Unknown error")
        return VariantListResult(success=True, variants=variants)

    def close(self) -> None:
        self._fetcher.close()

    def __enter__(self) -> CarPartScraper:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _describe(query: VehiclePartQuery) -> str:
    return f"{query.year} {query.make_model} / {query.part}"
