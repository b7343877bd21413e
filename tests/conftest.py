"""
Shared fixtures for price scraping tests.

No test touches the network: fetchers are stubs keyed by URL and the
clock is a settable millisecond counter.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from app.scraping.config.models import PriceScrapingSettings
from app.scraping.errors import FetchError
from app.scraping.orchestrator import ScrapeOrchestrator
from app.scraping.parsing import PriceExtractor
from app.scraping.storage import SQLAlchemyScrapeRecordStore

START_MILLIS = 1_700_000_000_000


class StubFetcher:
    """
    Returns canned HTML per URL; URLs mapped to an exception raise it.
    """

    def __init__(self, pages: dict[str, str | Exception] | None = None) -> None:
        self.pages: dict[str, str | Exception] = dict(pages or {})
        self.calls: list[str] = []
        self.before_fetch: Callable[[str], None] | None = None
        self.closed = False

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.before_fetch is not None:
            self.before_fetch(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchError(url, "404 Client Error", status_code=404)
        if isinstance(page, Exception):
            raise page
        return page

    def close(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, start: int = START_MILLIS) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance_minutes(self, minutes: float) -> None:
        self.now += int(minutes * 60_000)


def price_page(*prices: str) -> str:
    spans = "".join(f'<span class="product-price">{price}</span>' for price in prices)
    return f"<html><body><h1>Widget</h1>{spans}</body></html>"


@pytest.fixture()
def store() -> SQLAlchemyScrapeRecordStore:
    """Fresh in-memory store per test."""
    created = SQLAlchemyScrapeRecordStore(database_url="sqlite://")
    yield created
    created.dispose()


@pytest.fixture()
def fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def orchestrator(
    store: SQLAlchemyScrapeRecordStore,
    fetcher: StubFetcher,
    clock: FakeClock,
) -> ScrapeOrchestrator:
    return ScrapeOrchestrator(
        store=store,
        fetcher=fetcher,
        extractor=PriceExtractor(),
        clock=clock,
    )


@pytest.fixture()
def settings(tmp_path) -> PriceScrapingSettings:
    return PriceScrapingSettings(
        database_url="sqlite://",
        timeout_seconds=5.0,
        user_agent="PriceScraperTest/1.0",
        default_cache_expiry_minutes=60.0,
        overrides_path=str(tmp_path / "missing_overrides.json"),
        export_filename="export.csv",
    )
