"""Variant detection and resolution for ambiguous catalog queries.

When a year/make/model/part search matches several catalog sub-variants
(engine size, trim, ...), car-part.com answers with a page of radio buttons
named ``dummyVar`` instead of results. The resolver picks one through a
VariantSelectionStrategy and re-issues the search with it bound.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

from ...common.models import VariantOption, VehiclePartQuery
from .fetcher import SearchPageFetcher, detect_total_pages
from .models import PageFetchResult, VariantResolution
from .parser import make_soup, parse_listings

logger = logging.getLogger(__name__)

VARIANT_INPUT_SELECTOR = "input[type='radio'][name='dummyVar']"


class VariantSelectionStrategy(ABC):
    """Policy choosing which offered variant to bind."""

    @abstractmethod
    def select(
        self, options: list[VariantOption], query: VehiclePartQuery
    ) -> str | None:
        """Return the variant value to bind, or None to keep the unbound page."""
        ...


class FirstVariantStrategy(VariantSelectionStrategy):
    """Bind the first option the catalog offers."""

    def select(
        self, options: list[VariantOption], query: VehiclePartQuery
    ) -> str | None:
        return options[0].value if options else None


# === Label extraction ===

def _label_from_trailing_text(control: Tag, soup: BeautifulSoup) -> str:
    """Text right after the control, up to the next tag: <input>Label<br>."""
    sibling = control.next_sibling
    if type(sibling) is NavigableString:
        return str(sibling).strip()
    return ""


def _label_from_label_element(control: Tag, soup: BeautifulSoup) -> str:
    control_id = control.get("id")
    if not control_id:
        return ""
    label = soup.find("label", attrs={"for": control_id})
    return label.get_text(strip=True) if label else ""


def _label_from_value(control: Tag, soup: BeautifulSoup) -> str:
    return (control.get("value") or "").strip()


LABEL_STRATEGIES: list[Callable[[Tag, BeautifulSoup], str]] = [
    _label_from_trailing_text,
    _label_from_label_element,
    _label_from_value,
]


def extract_variants(markup: str | BeautifulSoup) -> list[VariantOption]:
    """Read the variant radio controls from a search response, in page order."""
    soup = markup if isinstance(markup, BeautifulSoup) else make_soup(markup)

    options: list[VariantOption] = []
    for control in soup.select(VARIANT_INPUT_SELECTOR):
        value = (control.get("value") or "").strip()
        if not value:
            continue
        label = ""
        for strategy in LABEL_STRATEGIES:
            label = strategy(control, soup)
            if label:
                break
        options.append(VariantOption(label=label, value=value))
    return options


class VariantResolver:
    """Resolves the catalog variant for a query and returns its page 1.

    Usage:
        resolver = VariantResolver(SearchPageFetcher())
        resolution = resolver.resolve(query)
        resolution.variant_value, resolution.page1.listings
    """

    def __init__(
        self,
        fetcher: SearchPageFetcher,
        strategy: VariantSelectionStrategy | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._strategy = strategy or FirstVariantStrategy()

    def resolve(self, query: VehiclePartQuery) -> VariantResolution:
        """Fetch page 1, binding a variant when the catalog asks for one.

        Raises:
            NetworkError: When either page-1 request fails.
        """
        if query.variant_value:
            page1 = self._fetcher.fetch(query, 1)
            return VariantResolution(variant_value=query.variant_value, page1=page1)

        markup = self._fetcher.fetch_markup(query, 1)
        soup = make_soup(markup)
        options = extract_variants(soup)

        if options:
            chosen = self._strategy.select(options, query)
            if chosen:
                logger.info(
                    "Query has %d variants; using %s", len(options), chosen
                )
                page1 = self._fetcher.fetch(query.with_variant(chosen), 1)
                return VariantResolution(variant_value=chosen, page1=page1)
            logger.info("Variant strategy declined %d options", len(options))
        else:
            logger.debug("No variant controls found; query is unambiguous")

        page1 = PageFetchResult(
            raw_markup=markup,
            detected_total_pages=detect_total_pages(soup),
            listings=parse_listings(soup),
            page_number=1,
        )
        return VariantResolution(variant_value=None, page1=page1)

    def list_variants(self, query: VehiclePartQuery) -> list[VariantOption]:
        """Return every variant offered for the unbound query.

        Raises:
            NetworkError: When the request fails.
        """
        unbound = query.model_copy(update={"variant_value": None})
        markup = self._fetcher.fetch_markup(unbound, 1)
        variants = extract_variants(markup)
        logger.info(
            "Found %d variants for %s %s %s",
            len(variants), query.year, query.make_model, query.part,
        )
        return variants
