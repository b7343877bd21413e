"""
Batch price scraping engine.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from app.domain.price_scraping import BatchResult, PriceMetrics, ScrapeOutcome, ScrapeRecord
from app.scraping.logging_utils import log_event
from app.scraping.orchestrator import ScrapeOrchestrator

logger = logging.getLogger(__name__)


class BatchAggregator:
    """
    Scrapes a set of URLs concurrently and summarises their prices.
    """

    def __init__(self, *, orchestrator: ScrapeOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def run_batch(
        self,
        urls: Sequence[str],
        cache_expiry_minutes: float,
    ) -> BatchResult:
        results = await asyncio.gather(
            *(self._orchestrator.scrape(url, cache_expiry_minutes) for url in urls),
            return_exceptions=True,
        )

        outcomes: list[ScrapeOutcome] = []
        for url, result in zip(urls, results):
            if isinstance(result, ScrapeRecord):
                outcomes.append(ScrapeOutcome(url=url, record=result))
                continue
            if not isinstance(result, Exception):
                # CancelledError and other BaseExceptions are not slot failures.
                raise result
            outcomes.append(ScrapeOutcome(url=url, error=str(result)))
            log_event(
                logger,
                logging.WARNING,
                "batch_slot_failed",
                url=url,
                error_type=type(result).__name__,
                error=str(result),
            )

        metrics = compute_metrics(
            [outcome.record.price for outcome in outcomes if outcome.record is not None]
        )
        log_event(
            logger,
            logging.INFO,
            "batch_completed",
            urls=len(urls),
            failed=sum(1 for outcome in outcomes if not outcome.ok),
            cached=sum(1 for outcome in outcomes if outcome.record is not None and outcome.record.is_cached),
            priced=metrics is not None,
        )
        return BatchResult(outcomes=outcomes, metrics=metrics)


def parse_positive_price(price: str) -> float | None:
    try:
        value = float(price)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def format_price(value: float) -> str:
    """
    Render a price the shortest way: 10.0 -> "10", 12.5 -> "12.5".
    """

    if value.is_integer():
        return str(int(value))
    return repr(value)


def compute_metrics(prices: Sequence[str]) -> PriceMetrics | None:
    """
    Return best/worst/average over the positive numeric prices, or None.
    """

    numeric = [value for value in (parse_positive_price(price) for price in prices) if value is not None]
    if not numeric:
        return None

    mean = Decimal(repr(sum(numeric) / len(numeric)))
    return PriceMetrics(
        best_price=format_price(min(numeric)),
        worst_price=format_price(max(numeric)),
        average_price=str(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
    )
