"""Configuration management for the price discovery scrapers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ...common.config import PROJECT_ROOT, settings

_CAR_PART = settings.car_part


@dataclass
class Config:
    """Scraper configuration, defaulting from settings.yaml and the environment."""

    # Catalog endpoint
    search_url: str = _CAR_PART.search_url
    location_scope: str = _CAR_PART.location_scope
    db_model: str = _CAR_PART.db_model
    default_postal_code: str = _CAR_PART.default_postal_code

    # HTTP
    request_timeout: float = _CAR_PART.request_timeout
    user_agent: str = _CAR_PART.user_agent
    rotate_user_agent: bool = _CAR_PART.rotate_user_agent

    # Pacing
    page_delay_seconds: float = _CAR_PART.page_delay_seconds
    item_delay_seconds: float = _CAR_PART.item_delay_seconds

    # Optional raw HTML audit cache; disabled when empty
    raw_html_cache_dir: str = field(
        default_factory=lambda: os.getenv(
            "RAW_HTML_CACHE_DIR", settings.raw_html_cache_dir or ""
        )
    )

    def __post_init__(self) -> None:
        """Load overrides from environment."""
        if url := os.getenv("CARPART_SEARCH_URL"):
            self.search_url = url
        if timeout := os.getenv("REQUEST_TIMEOUT"):
            self.request_timeout = float(timeout)
        if delay := os.getenv("CARPART_PAGE_DELAY"):
            self.page_delay_seconds = float(delay)
        if delay := os.getenv("CARPART_ITEM_DELAY"):
            self.item_delay_seconds = float(delay)
        if zip_code := os.getenv("CARPART_POSTAL_CODE"):
            self.default_postal_code = zip_code
        if ua := os.getenv("CARPART_USER_AGENT"):
            self.user_agent = ua

    @property
    def raw_html_cache_abs_dir(self) -> Path | None:
        """Resolve raw HTML cache dir relative to project root."""
        if not self.raw_html_cache_dir:
            return None
        p = Path(self.raw_html_cache_dir)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p
