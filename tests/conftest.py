"""Shared test fixtures for the price discovery engine."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.models import VehiclePartQuery
from src.price_discovery.common.config import Config
from src.price_discovery.common.rate_limiter import RateLimiter


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return PROJECT_ROOT / "tests" / "fixtures"


@pytest.fixture
def config() -> Config:
    """Config with no pacing and no HTML cache."""
    return Config(
        page_delay_seconds=0,
        item_delay_seconds=0,
        raw_html_cache_dir="",
    )


@pytest.fixture
def sample_query() -> VehiclePartQuery:
    return VehiclePartQuery(
        year="2015",
        make="Honda",
        model="Accord",
        part="Engine",
        postal_code="60018",
    )


class FakeCatalogClient:
    """Stands in for HTTPClient; answers each POST through a responder.

    The responder receives the form data and returns HTML, or an exception
    instance to raise.
    """

    def __init__(self, responder):
        self._responder = responder
        self.calls: list[dict] = []
        self.closed = False

    def post_form(self, url, data, headers=None, cache_key=None):
        self.calls.append(dict(data))
        outcome = self._responder(data)
        if isinstance(outcome, BaseException):
            raise outcome
        resp = MagicMock()
        resp.text = outcome
        return resp

    def close(self):
        self.closed = True

    @property
    def pages_requested(self) -> list[int]:
        return [int(call["userPage"]) for call in self.calls]


@pytest.fixture
def fake_client():
    """Factory: fake_client(responder) -> FakeCatalogClient."""
    return FakeCatalogClient


class RecordingSleep:
    """Sleep replacement that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def recording_limiter(recording_sleep) -> RateLimiter:
    """One-second RateLimiter whose pauses are recorded, not slept."""
    return RateLimiter(1.0, sleep=recording_sleep)


def _listing_row(price: float, index: int) -> str:
    return (
        "<tr>"
        f"<td>2015 Honda Accord Engine 2.4L, stock {index}</td>"
        "<td>B</td>"
        f"<td>STK{index:04d}</td>"
        f"<td>${price:,.2f}</td>"
        f'<td><a href="https://dealer.example/{index}">Yard {index}</a></td>'
        "<td>Chicago, IL</td>"
        "</tr>"
    )


def build_results_page(prices, total_pages: int | None = None) -> str:
    """Render a minimal car-part.com results page."""
    pager = f"<p>Page 1 of {total_pages}</p>" if total_pages else ""
    header = (
        "<tr><td>Description</td><td>Grade</td><td>Stock#</td>"
        "<td>Price</td><td>Dealer</td><td>Location</td></tr>"
    )
    rows = "".join(_listing_row(price, i) for i, price in enumerate(prices))
    return f"<html><body>{pager}<table>{header}{rows}</table></body></html>"


@pytest.fixture
def results_page():
    """Factory: results_page(prices, total_pages=None) -> HTML."""
    return build_results_page
