"""
Per-URL scrape orchestration: cache lookup, fetch, extract, persist.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable

from app.domain.price_scraping import (
    NOT_FOUND_PRICE,
    ScrapeRecord,
    domain_from_url,
    now_millis,
)
from app.scraping.fetcher import PageFetcher
from app.scraping.logging_utils import log_event
from app.scraping.parsing import PriceExtractor
from app.scraping.storage import ScrapeRecordStore

logger = logging.getLogger(__name__)

MILLIS_PER_MINUTE = 60 * 1000


def expiry_window_millis(cache_expiry_minutes: float) -> int:
    if not math.isfinite(cache_expiry_minutes) or cache_expiry_minutes < 0:
        raise ValueError(f"Cache expiry must be finite and non-negative, got {cache_expiry_minutes!r}")
    return int(cache_expiry_minutes * MILLIS_PER_MINUTE)


class ScrapeOrchestrator:
    """
    Resolve one URL to a ScrapeRecord, preferring a fresh cached row.

    Failed attempts are stored like successful ones, so a broken target is
    served from the cache until the expiry window passes.
    """

    def __init__(
        self,
        *,
        store: ScrapeRecordStore,
        fetcher: PageFetcher,
        extractor: PriceExtractor,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self._extractor = extractor
        self._clock = clock

    async def scrape(self, url: str, cache_expiry_minutes: float) -> ScrapeRecord:
        """
        Return the price record for ``url``.

        Raises InvalidURLError before touching the cache when ``url`` is not
        an absolute URL. Fetch and parse failures never propagate.
        """

        domain = domain_from_url(url)
        max_age_millis = expiry_window_millis(cache_expiry_minutes)

        cached = self._store.lookup_fresh(url, max_age_millis, now_millis=self._clock())
        if cached is not None:
            log_event(logger, logging.DEBUG, "cache_hit", url=url, record_id=cached.id)
            return cached.as_cached()

        price = NOT_FOUND_PRICE
        success = True
        try:
            html_content = await asyncio.to_thread(self._fetcher.fetch, url)
            price = self._extractor.extract(html_content, domain)
            log_event(logger, logging.INFO, "page_fetched", url=url, domain=domain, price=price)
        except Exception as exc:
            success = False
            log_event(
                logger,
                logging.ERROR,
                "page_scrape_failed",
                url=url,
                domain=domain,
                error=str(exc),
            )
            # A sibling request for the same URL may have stored a row meanwhile.
            cached = self._store.lookup_fresh(url, max_age_millis, now_millis=self._clock())
            if cached is not None:
                log_event(logger, logging.INFO, "cache_fallback_hit", url=url, record_id=cached.id)
                return cached.as_cached()
            price = NOT_FOUND_PRICE

        stored = self._store.append(
            ScrapeRecord(
                url=url,
                domain=domain,
                price=price,
                success=success,
                last_updated=self._clock(),
            )
        )
        log_event(
            logger,
            logging.DEBUG,
            "scrape_record_stored",
            url=url,
            record_id=stored.id,
            success=success,
        )
        return stored
