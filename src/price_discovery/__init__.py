"""
Price Discovery Engine

Modules:
- car_part: car-part.com recycled-parts catalog scraper and pricing metrics
- common: Shared utilities (config, HTTP client, rate limiting)
"""

__version__ = "0.1.0"
