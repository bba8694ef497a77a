"""Custom exceptions for the car-part.com scraper."""

# Message attached to a successful scrape that parsed no priced listings.
NO_LISTINGS_FOUND = "No listings found"


class CarPartError(Exception):
    """Base exception for car-part scraper errors."""
    pass


class NetworkError(CarPartError):
    """A single catalog page could not be fetched (timeout, transport, empty body)."""

    def __init__(self, page_number: int, message: str) -> None:
        self.page_number = page_number
        super().__init__(f"Page {page_number}: {message}")
