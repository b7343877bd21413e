"""
app/domain/price_scraping.py

Domain models for the scrape-and-cache pipeline.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from urllib.parse import urlparse

from app.scraping.errors import InvalidURLError

NOT_FOUND_PRICE = "0"


def domain_from_url(url: str) -> str:
    """
    Return the hostname of an absolute URL with a leading ``www.`` removed.

    Raises InvalidURLError when the value has no scheme or host.
    """

    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
    except (AttributeError, ValueError) as exc:
        raise InvalidURLError(str(url)) from exc

    if not parsed.scheme or not hostname:
        raise InvalidURLError(url)
    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ScrapeRecord:
    """
    One persisted scrape attempt.

    ``is_cached`` is not stored; it is set per response when the record
    was served from the cache store.
    """

    url: str
    domain: str
    price: str
    success: bool
    last_updated: int
    id: int | None = None
    is_cached: bool = False

    def as_cached(self) -> "ScrapeRecord":
        return replace(self, is_cached=True)

    def to_response(self) -> dict[str, object]:
        return {
            "url": self.url,
            "domain": self.domain,
            "price": self.price,
            "success": self.success,
            "lastUpdated": self.last_updated,
            "isCached": self.is_cached,
        }


@dataclass(frozen=True)
class ScrapeOutcome:
    """
    Tagged result for one URL slot of a batch: either a record or an error.
    """

    url: str
    record: ScrapeRecord | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    def to_response(self) -> dict[str, object]:
        if self.record is not None:
            return self.record.to_response()
        return {
            "url": self.url,
            "domain": None,
            "price": NOT_FOUND_PRICE,
            "success": False,
            "lastUpdated": None,
            "isCached": False,
            "error": self.error,
        }


@dataclass(frozen=True)
class PriceMetrics:
    """
    Best/worst/average over the positive prices of a batch.
    """

    best_price: str
    worst_price: str
    average_price: str

    def to_response(self) -> dict[str, str]:
        return {
            "bestPrice": self.best_price,
            "worstPrice": self.worst_price,
            "averagePrice": self.average_price,
        }


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of a batch scrape, in input URL order.
    """

    outcomes: list[ScrapeOutcome] = field(default_factory=list)
    metrics: PriceMetrics | None = None

    @property
    def records(self) -> list[ScrapeRecord]:
        return [outcome.record for outcome in self.outcomes if outcome.record is not None]
