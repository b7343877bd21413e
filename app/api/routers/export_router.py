"""
app/api/routers/export_router.py

CSV export of every stored scrape record.

GET /export

Responses
---------
200 → StreamingResponse, Content-Type: text/csv
      Content-Disposition: attachment; filename=<PRICE_SCRAPER_EXPORT_FILENAME>
404 → no records stored yet
500 → export failed
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from app.scraping.config import get_price_scraping_settings
from app.services.export_service import (
    ExportEmptyError,
    ExportResult,
    ScrapeExportService,
    get_export_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["export"])


def _to_csv_streaming(result: ExportResult, filename: str) -> StreamingResponse:
    """Stream *result* as a UTF-8 CSV file download."""

    def _generate() -> Iterator[str]:
        buf = io.StringIO()
        writer = csv.DictWriter(
            buf,
            fieldnames=result.fields,
            extrasaction="ignore",
            restval="",
            lineterminator="\r\n",
        )
        writer.writeheader()
        yield buf.getvalue()

        for row in result.rows:
            buf.seek(0)
            buf.truncate(0)
            writer.writerow(row)
            yield buf.getvalue()

    return StreamingResponse(
        content=_generate(),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Row-Count": str(len(result.rows)),
        },
    )


@router.get("/export", summary="Export stored scrape records as CSV")
def export_records(
    service: ScrapeExportService = Depends(get_export_service),
) -> StreamingResponse:
    try:
        result = service.export()
    except ExportEmptyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Scrape record export failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while exporting data",
        ) from exc

    logger.info("Exported %d scrape records", len(result.rows))
    return _to_csv_streaming(result, get_price_scraping_settings().export_filename)
