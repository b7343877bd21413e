"""
Config helpers for price scraping.
"""

from app.scraping.config.loader import (
    get_price_scraping_settings,
    load_domain_overrides,
    load_env_files,
)
from app.scraping.config.models import DomainOverride, PriceScrapingSettings

__all__ = [
    "DomainOverride",
    "PriceScrapingSettings",
    "get_price_scraping_settings",
    "load_domain_overrides",
    "load_env_files",
]
