"""Reduce parsed listings into pricing statistics."""

from __future__ import annotations

import logging
import statistics
from typing import Iterable

from .models import Listing, PricingResult

logger = logging.getLogger(__name__)


def _cents(value: float) -> float:
    return round(value, 2)


def aggregate(listings: Iterable[Listing], total_pages: int) -> PricingResult:
    """Compute mean, min, max and population std-dev over priced listings.

    Listings without a positive price are ignored. With nothing left every
    monetary field is zero; total_pages is passed through either way.
    """
    prices = [listing.price for listing in listings if listing.price > 0]

    if not prices:
        return PricingResult(
            avg_price=0.0,
            min_price=0.0,
            max_price=0.0,
            std_dev=0.0,
            total_listings=0,
            total_pages=total_pages,
        )

    result = PricingResult(
        avg_price=_cents(statistics.fmean(prices)),
        min_price=_cents(min(prices)),
        max_price=_cents(max(prices)),
        std_dev=_cents(statistics.pstdev(prices)),
        total_listings=len(prices),
        total_pages=total_pages,
    )
    logger.debug(
        "Aggregated %d prices: avg=%.2f min=%.2f max=%.2f std=%.2f",
        result.total_listings,
        result.avg_price,
        result.min_price,
        result.max_price,
        result.std_dev,
    )
    return result
