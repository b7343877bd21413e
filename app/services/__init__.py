"""
app/services package marker.
"""

from app.services.export_service import ExportEmptyError, ScrapeExportService, get_export_service
from app.services.price_scraping_service import (
    PriceScrapingService,
    PricesNotFoundError,
    get_price_scraping_service,
)

__all__ = [
    "ExportEmptyError",
    "PriceScrapingService",
    "PricesNotFoundError",
    "ScrapeExportService",
    "get_export_service",
    "get_price_scraping_service",
]
