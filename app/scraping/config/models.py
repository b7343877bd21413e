"""
Scraping configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DomainOverride:
    """
    Hand-tuned price selector for one hostname.
    """

    domain: str
    selector: str
    decimal_separator: str | None = None


@dataclass(frozen=True)
class PriceScrapingSettings:
    """
    Runtime settings for price scraping.
    """

    database_url: str
    timeout_seconds: float
    user_agent: str
    default_cache_expiry_minutes: float
    overrides_path: str
    export_filename: str
