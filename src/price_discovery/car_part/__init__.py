"""car-part.com price discovery - variant resolution, page sampling, pricing metrics."""

from .aggregator import aggregate
from .batch import BatchItem, BatchReport, run_batch_price_check
from .exceptions import NO_LISTINGS_FOUND, CarPartError, NetworkError
from .fetcher import SearchPageFetcher, build_form_data, detect_total_pages
from .models import (
    Listing,
    PageFetchResult,
    PricingResult,
    ScrapeResult,
    VariantListResult,
    VariantResolution,
)
from .parser import parse_listings
from .planner import plan_pages
from .scraper import CarPartScraper, collect_listings
from .variants import (
    FirstVariantStrategy,
    VariantResolver,
    VariantSelectionStrategy,
    extract_variants,
)

__all__ = [
    "aggregate",
    "BatchItem",
    "BatchReport",
    "run_batch_price_check",
    "NO_LISTINGS_FOUND",
    "CarPartError",
    "NetworkError",
    "SearchPageFetcher",
    "build_form_data",
    "detect_total_pages",
    "Listing",
    "PageFetchResult",
    "PricingResult",
    "ScrapeResult",
    "VariantListResult",
    "VariantResolution",
    "parse_listings",
    "plan_pages",
    "CarPartScraper",
    "collect_listings",
    "FirstVariantStrategy",
    "VariantResolver",
    "VariantSelectionStrategy",
    "extract_variants",
]
