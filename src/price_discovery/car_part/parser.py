"""car-part.com search result parser.

Result pages are plain HTML tables with no stable class names, so rows are
recognised by shape: at least five cells, a title in the first cell and a
dollar amount somewhere in the row. Rows that do not fit are dropped.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup
from bs4.element import Tag

from .models import Listing

logger = logging.getLogger(__name__)

MIN_CELLS = 5
UNKNOWN_DEALER = "Unknown Dealer"

_PRICE_RE = re.compile(r"\$(\d+(?:,\d{3})*(?:\.\d{2})?)")
_LOCATION_RE = re.compile(r"([A-Za-z\s]+),\s*([A-Z]{2})")
_GRADE_RE = re.compile(r"^[A-D]$")


def make_soup(markup: str) -> BeautifulSoup:
    """Parse markup with the lxml backend."""
    return BeautifulSoup(markup or "", "lxml")


def parse_price(text: str) -> float | None:
    """Extract a dollar amount from cell text.

    "$1,234.56" -> 1234.56. Returns None when no amount is present.
    """
    match = _PRICE_RE.search(text or "")
    if not match:
        return None
    return float(match.group(1).replace(",", ""))


def parse_listings(markup: str | BeautifulSoup) -> list[Listing]:
    """Extract priced listings from one result page. Never raises."""
    soup = markup if isinstance(markup, BeautifulSoup) else make_soup(markup)

    listings: list[Listing] = []
    for row in soup.select("table tr"):
        try:
            listing = _parse_row(row)
        except Exception:
            logger.debug("Failed to parse result row", exc_info=True)
            continue
        if listing:
            listings.append(listing)

    logger.debug("Parsed %d listings", len(listings))
    return listings


def _parse_row(row: Tag) -> Listing | None:
    """Parse a single result row. Returns None for layout/header rows."""
    # Direct cells only; nested tables are visited as their own rows
    cells = row.find_all("td", recursive=False)
    if len(cells) < MIN_CELLS:
        return None

    texts = [cell.get_text(" ", strip=True) for cell in cells]

    title = texts[0]
    if not title or "description" in title.lower():
        return None

    price = _extract_price(texts)
    if not price:
        return None

    return Listing(
        title=title,
        price=price,
        source=_extract_source(cells),
        location=_extract_location(texts),
        grade=_extract_grade(texts),
    )


def _extract_price(texts: list[str]) -> float | None:
    # Later cells win: the price column sits after the description columns
    price = None
    for text in texts:
        if "$" not in text:
            continue
        parsed = parse_price(text)
        if parsed is not None:
            price = parsed
    return price


def _extract_location(texts: list[str]) -> str:
    location = ""
    for text in texts:
        match = _LOCATION_RE.search(text)
        if match:
            location = f"{match.group(1).strip()}, {match.group(2)}"
    return location


def _extract_source(cells: list[Tag]) -> str:
    for cell in cells:
        link = cell.find("a")
        if link is not None:
            return link.get_text(" ", strip=True) or UNKNOWN_DEALER
    return UNKNOWN_DEALER


def _extract_grade(texts: list[str]) -> str:
    grade = ""
    for text in texts:
        if _GRADE_RE.match(text):
            grade = text
    return grade
