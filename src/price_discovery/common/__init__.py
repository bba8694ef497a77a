"""Common utilities shared across the price discovery scrapers."""

from .config import Config
from .http_client import HTTPClient
from .rate_limiter import RateLimiter

__all__ = ["Config", "HTTPClient", "RateLimiter"]
