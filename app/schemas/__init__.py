"""
app/schemas package marker.
"""

from app.schemas.price_scraping import (
    ErrorResponse,
    PriceEntryResponse,
    PriceMetricsResponse,
    ScrapeRequest,
    ScrapeResponse,
)

__all__ = [
    "ErrorResponse",
    "PriceEntryResponse",
    "PriceMetricsResponse",
    "ScrapeRequest",
    "ScrapeResponse",
]
