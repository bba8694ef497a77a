"""car-part.com search page fetcher.

car-part.com has no JSON API: every search is a form POST to search.cgi
returning an HTML results page. The host serves a broken certificate chain,
so TLS verification is disabled for that host only.

The total page count is not exposed in a stable place, so it is detected
by an ordered list of strategies, each returning a page count or None.
"""

from __future__ import annotations

import logging
import re
from typing import Callable
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from ...common.models import VehiclePartQuery
from ..common.config import Config
from ..common.http_client import HTTPClient
from .exceptions import NetworkError
from .models import PageFetchResult
from .parser import make_soup, parse_listings

logger = logging.getLogger(__name__)

UNBOUND_INTERCHANGE = "None"
UNBOUND_DATE2 = "Ending Year"
SEARCH_MODE = "int"

_PAGE_OF_RE = re.compile(r"Page\s*\d+\s*of\s*(\d+)", re.IGNORECASE)
_USER_PAGE_RE = re.compile(r"userPage=(\d+)")


def build_form_data(
    query: VehiclePartQuery,
    page_number: int = 1,
    config: Config | None = None,
) -> dict[str, str]:
    """Build the search.cgi form payload for one page of a query."""
    config = config or Config()
    variant = query.variant_value

    data = {
        "userDate": query.year,
        "userModel": query.make_model,
        "userPart": query.part,
        "userLocation": config.location_scope,
        "userPreference": "price",
        "userZip": query.postal_code,
        "userPage": str(page_number),
        "userInterchange": variant or UNBOUND_INTERCHANGE,
        "userDate2": query.year if variant else UNBOUND_DATE2,
        "userSearch": SEARCH_MODE,
    }
    if variant:
        data["dbModel"] = config.db_model
        data["vinSearch"] = ""
        data["dummyVar"] = variant
    return data


# === Page count detection ===

def _pages_from_page_of_text(soup: BeautifulSoup) -> int | None:
    """'Page 1 of 12' anywhere in the body text."""
    body = soup.body or soup
    match = _PAGE_OF_RE.search(body.get_text(" "))
    return int(match.group(1)) if match else None


def _pages_from_user_page_links(soup: BeautifulSoup) -> int | None:
    """Highest userPage=N found in link targets."""
    pages = [
        int(m.group(1))
        for a in soup.find_all("a", href=True)
        if (m := _USER_PAGE_RE.search(a["href"]))
    ]
    best = max(pages, default=1)
    return best if best > 1 else None


def _pages_from_numbered_links(soup: BeautifulSoup) -> int | None:
    """Highest plain-integer link text pointing at search.cgi."""
    pages = []
    for a in soup.find_all("a", href=True):
        text = a.get_text(strip=True)
        if text.isdigit() and "search.cgi" in a["href"]:
            pages.append(int(text))
    best = max(pages, default=1)
    return best if best > 1 else None


PAGE_COUNT_STRATEGIES: list[Callable[[BeautifulSoup], int | None]] = [
    _pages_from_page_of_text,
    _pages_from_user_page_links,
    _pages_from_numbered_links,
]


def detect_total_pages(markup: str | BeautifulSoup) -> int:
    """Detect the total result page count, defaulting to 1."""
    soup = markup if isinstance(markup, BeautifulSoup) else make_soup(markup)
    for strategy in PAGE_COUNT_STRATEGIES:
        pages = strategy(soup)
        if pages:
            logger.debug("Page count %d via %s", pages, strategy.__name__)
            return pages
    return 1


class SearchPageFetcher:
    """Fetches one page of a car-part.com search.

    Usage:
        fetcher = SearchPageFetcher()
        page = fetcher.fetch(query, page_number=1)
        print(page.detected_total_pages, len(page.listings))
    """

    def __init__(
        self,
        config: Config | None = None,
        client: HTTPClient | None = None,
    ) -> None:
        self.config = config or Config()
        search_host = urlparse(self.config.search_url).hostname or ""
        self._client = client or HTTPClient(
            self.config, insecure_hosts=(search_host,)
        )

    def fetch_markup(self, query: VehiclePartQuery, page_number: int = 1) -> str:
        """POST the search form and return the raw HTML body.

        Raises:
            NetworkError: On timeout, transport failure, HTTP error status,
                or an empty response body.
        """
        data = build_form_data(query, page_number, self.config)
        cache_key = (
            f"carpart_{query.year}_{query.make_model}_{query.part}"
            f"_{query.variant_value or 'unbound'}_p{page_number}"
        )
        try:
            resp = self._client.post_form(
                self.config.search_url, data, cache_key=cache_key
            )
        except requests.Timeout as exc:
            raise NetworkError(page_number, f"timed out: {exc}") from exc
        except requests.RequestException as exc:
            raise NetworkError(page_number, f"request failed: {exc}") from exc

        if not resp.text or not resp.text.strip():
            raise NetworkError(page_number, "No response from car-part.com")
        return resp.text

    def fetch(self, query: VehiclePartQuery, page_number: int = 1) -> PageFetchResult:
        """Fetch, page-count and parse one result page."""
        markup = self.fetch_markup(query, page_number)
        soup = make_soup(markup)
        return PageFetchResult(
            raw_markup=markup,
            detected_total_pages=detect_total_pages(soup),
            listings=parse_listings(soup),
            page_number=page_number,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> SearchPageFetcher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
