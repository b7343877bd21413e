"""
app/schemas/price_scraping.py

Request and response schemas for the price scraping endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from app.domain.price_scraping import BatchResult


class ScrapeRequest(BaseModel):
    """
    POST /scrape body.
    """

    model_config = ConfigDict(populate_by_name=True)

    urls: list[str] | None = None
    cache_expiry_minutes: float | None = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        alias="cacheExpiryMinutes",
        description="Freshness window for cached results, in minutes.",
    )


class PriceEntryResponse(BaseModel):
    """
    One URL slot of a scrape response.
    """

    url: str
    domain: str | None
    price: str
    success: bool
    lastUpdated: int | None
    isCached: bool
    error: str | None = None

    @model_serializer(mode="wrap")
    def _omit_empty_error(self, handler):
        # Only failed slots carry an error message.
        data = handler(self)
        if data.get("error") is None:
            data.pop("error", None)
        return data


class PriceMetricsResponse(BaseModel):
    bestPrice: str
    worstPrice: str
    averagePrice: str


class ScrapeResponse(BaseModel):
    """
    Per-URL prices in request order plus aggregate metrics.
    """

    prices: list[PriceEntryResponse] = Field(default_factory=list)
    metrics: PriceMetricsResponse

    @classmethod
    def from_batch(cls, result: BatchResult) -> "ScrapeResponse":
        if result.metrics is None:
            raise ValueError("Scrape response requires metrics.")
        return cls(
            prices=[PriceEntryResponse(**outcome.to_response()) for outcome in result.outcomes],
            metrics=PriceMetricsResponse(**result.metrics.to_response()),
        )


class ErrorResponse(BaseModel):
    error: str
