"""Data models for car-part.com price discovery."""

from __future__ import annotations

from dataclasses import dataclass, field

from ...common.models import VariantOption


@dataclass
class Listing:
    """One priced result row from the catalog.

    Maps to the API contract: { title, price, source, location, grade }
    """

    title: str
    price: float  # USD, two decimals
    source: str  # dealer / yard name
    location: str = ""  # "City, ST" or empty
    grade: str = ""  # A | B | C | D | empty

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "price": self.price,
            "source": self.source,
            "location": self.location,
            "grade": self.grade,
        }


@dataclass
class PageFetchResult:
    """Raw markup, detected page count and parsed listings for one page."""

    raw_markup: str
    detected_total_pages: int
    listings: list[Listing] = field(default_factory=list)
    page_number: int = 1


@dataclass
class PricingResult:
    """Summary statistics over a sampled subset of catalog pages.

    A sample-based estimate: total_listings counts listings from fetched
    pages only, never the full catalog.
    """

    avg_price: float
    min_price: float
    max_price: float
    std_dev: float
    total_listings: int
    total_pages: int

    def to_dict(self) -> dict:
        return {
            "avgPrice": self.avg_price,
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "stdDev": self.std_dev,
            "totalListings": self.total_listings,
            "totalPages": self.total_pages,
        }


@dataclass
class VariantResolution:
    """Outcome of variant resolution: the bound variant and its page 1."""

    variant_value: str | None
    page1: PageFetchResult


@dataclass
class ScrapeResult:
    """Result of one scrape_pricing call."""

    success: bool
    metrics: PricingResult | None = None
    error: str | None = None
    variant_value: str | None = None
    pages_fetched: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "error": self.error,
            "variantValue": self.variant_value,
            "pagesFetched": list(self.pages_fetched),
        }


@dataclass
class VariantListResult:
    """Result of one list_variants call."""

    success: bool
    variants: list[VariantOption] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "variants": [v.model_dump() for v in self.variants],
            "error": self.error,
        }
