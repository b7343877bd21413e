"""
app/services/export_service.py

Tabular export of every stored scrape record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fastapi import Depends

from app.scraping.storage import ScrapeRecordStore
from app.services.price_scraping_service import PriceScrapingService, get_price_scraping_service

EXPORT_FIELDS: list[str] = ["ID", "URL", "DOMAIN", "PRICE", "SUCCESS", "LAST_UPDATED"]


class ExportEmptyError(LookupError):
    """
    Raised when there are no records to export.
    """


@dataclass
class ExportResult:
    """
    Flat rows ready for CSV serialisation, keyed by ``fields``.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    fields: list[str] = field(default_factory=lambda: list(EXPORT_FIELDS))


class ScrapeExportService:
    """
    Reads the full record table for download.
    """

    def __init__(self, store: ScrapeRecordStore) -> None:
        self._store = store

    def export(self) -> ExportResult:
        records = self._store.all()
        if not records:
            raise ExportEmptyError("No data found")

        rows = [
            {
                "ID": record.id,
                "URL": record.url,
                "DOMAIN": record.domain,
                "PRICE": record.price,
                "SUCCESS": 1 if record.success else 0,
                "LAST_UPDATED": record.last_updated,
            }
            for record in records
        ]
        return ExportResult(rows=rows)


def get_export_service(
    scraping_service: PriceScrapingService = Depends(get_price_scraping_service),
) -> ScrapeExportService:
    return ScrapeExportService(scraping_service.store)
