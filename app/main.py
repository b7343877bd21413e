from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    from app.scraping.config import load_env_files

    load_env_files()
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Build the scraping service (and its record store) on boot; release it on exit."""
    from app.services.price_scraping_service import get_price_scraping_service

    service = get_price_scraping_service()
    logging.getLogger(__name__).info(
        "Price scraping service ready (default cache expiry %s minutes)",
        service.default_cache_expiry_minutes,
    )
    try:
        yield
    finally:
        service.close()
        logging.getLogger(__name__).info("Price scraping service shut down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title="Price Scraper API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.error_handlers import setup_error_handlers
    from app.api.routers import export_router, price_scraping_router

    setup_error_handlers(application)
    application.include_router(price_scraping_router)
    application.include_router(export_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
