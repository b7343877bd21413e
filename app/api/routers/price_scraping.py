"""
app/api/routers/price_scraping.py

Price scraping endpoints.

GET  /scrape?url=<u1>[,<u2>,...]&cacheExpiryMinutes=<n>
POST /scrape  {"urls": [...], "cacheExpiryMinutes": <n>}

Both return per-URL prices in request order plus best/worst/average
metrics. 400 for a missing URL list, 404 when no URL yielded a positive
price, 500 for anything unexpected.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas.price_scraping import ErrorResponse, ScrapeRequest, ScrapeResponse
from app.services.price_scraping_service import (
    PriceScrapingService,
    PricesNotFoundError,
    get_price_scraping_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["price-scraping"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def split_url_param(raw: str | None) -> list[str]:
    """
    Split a comma-separated ``url`` query value, dropping blank entries.
    """

    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


async def _scrape(
    service: PriceScrapingService,
    urls: Sequence[str],
    cache_expiry_minutes: float | None,
) -> ScrapeResponse:
    try:
        result = await service.scrape(urls, cache_expiry_minutes)
    except PricesNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Price scrape failed urls=%r", list(urls))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while scraping",
        ) from exc

    return ScrapeResponse.from_batch(result)


@router.get("/scrape", response_model=ScrapeResponse, responses=_ERROR_RESPONSES)
async def scrape_prices(
    url: str | None = Query(default=None, description="One or more comma-separated product URLs."),
    cache_expiry_minutes: float | None = Query(
        default=None,
        ge=0,
        allow_inf_nan=False,
        alias="cacheExpiryMinutes",
        description="Freshness window for cached results, in minutes.",
    ),
    service: PriceScrapingService = Depends(get_price_scraping_service),
) -> ScrapeResponse:
    """
    Scrape the comma-separated ``url`` list.
    """

    urls = split_url_param(url)
    if not urls:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing URL parameter")
    return await _scrape(service, urls, cache_expiry_minutes)


@router.post("/scrape", response_model=ScrapeResponse, responses=_ERROR_RESPONSES)
async def scrape_prices_batch(
    payload: ScrapeRequest,
    service: PriceScrapingService = Depends(get_price_scraping_service),
) -> ScrapeResponse:
    """
    Scrape the ``urls`` list from the JSON body.
    """

    if payload.urls is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing urls in request body",
        )
    return await _scrape(service, payload.urls, payload.cache_expiry_minutes)
