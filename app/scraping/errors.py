"""
Exception types raised by the price scraping pipeline.
"""

from __future__ import annotations


class PriceScrapingError(Exception):
    """
    Base error for price scraping failures.
    """


class InvalidURLError(PriceScrapingError, ValueError):
    """
    Raised when a URL is not a parseable absolute URL.
    """

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid absolute URL: {url!r}")
        self.url = url


class FetchError(PriceScrapingError):
    """
    Raised when a product page cannot be retrieved.
    """

    def __init__(self, url: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"Failed to fetch {url}: {message}")
        self.url = url
        self.status_code = status_code
