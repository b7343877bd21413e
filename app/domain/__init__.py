"""
app/domain package marker.
"""

from app.domain.price_scraping import (
    BatchResult,
    PriceMetrics,
    ScrapeOutcome,
    ScrapeRecord,
    domain_from_url,
)

__all__ = [
    "BatchResult",
    "PriceMetrics",
    "ScrapeOutcome",
    "ScrapeRecord",
    "domain_from_url",
]
