"""
app/services/price_scraping_service.py

Service wiring for batch price scraping.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from app.domain.price_scraping import BatchResult
from app.scraping.config import (
    PriceScrapingSettings,
    get_price_scraping_settings,
    load_domain_overrides,
)
from app.scraping.engine import BatchAggregator
from app.scraping.fetcher import PageFetcher
from app.scraping.orchestrator import ScrapeOrchestrator, expiry_window_millis
from app.scraping.parsing import PriceExtractor
from app.scraping.storage import SQLAlchemyScrapeRecordStore, ScrapeRecordStore


class PricesNotFoundError(LookupError):
    """
    Raised when a batch produced no positive numeric price.
    """


class PriceScrapingService:
    """
    Owns the record store and runs scrape batches against it.
    """

    def __init__(
        self,
        *,
        settings: PriceScrapingSettings | None = None,
        store: ScrapeRecordStore | None = None,
        fetcher: PageFetcher | None = None,
        extractor: PriceExtractor | None = None,
    ) -> None:
        self._settings = settings or get_price_scraping_settings()
        self.store = store or SQLAlchemyScrapeRecordStore(database_url=self._settings.database_url)
        self._fetcher = fetcher or PageFetcher(
            timeout_seconds=self._settings.timeout_seconds,
            user_agent=self._settings.user_agent,
        )
        if extractor is None:
            extractor = PriceExtractor(
                load_domain_overrides(config_path=self._settings.overrides_path)
            )
        self._aggregator = BatchAggregator(
            orchestrator=ScrapeOrchestrator(
                store=self.store,
                fetcher=self._fetcher,
                extractor=extractor,
            )
        )

    @property
    def default_cache_expiry_minutes(self) -> float:
        return self._settings.default_cache_expiry_minutes

    async def scrape(
        self,
        urls: Sequence[str],
        cache_expiry_minutes: float | None = None,
    ) -> BatchResult:
        """
        Scrape ``urls`` and return a result that always carries metrics.

        Raises ValueError for a negative or non-finite expiry and
        PricesNotFoundError when no URL produced a positive price.
        """

        expiry = self.default_cache_expiry_minutes if cache_expiry_minutes is None else cache_expiry_minutes
        expiry_window_millis(expiry)
        result = await self._aggregator.run_batch(list(urls), expiry)
        if not result.outcomes or result.metrics is None:
            raise PricesNotFoundError("Price(s) not found")
        return result

    def close(self) -> None:
        self._fetcher.close()


@lru_cache(maxsize=1)
def get_price_scraping_service() -> PriceScrapingService:
    """
    Build and cache the process-wide price scraping service.
    """

    return PriceScrapingService()
