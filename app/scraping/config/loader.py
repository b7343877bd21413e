"""
Environment + JSON config loader for price scraping.
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path

from app.scraping.config.models import DomainOverride, PriceScrapingSettings

logger = logging.getLogger(__name__)

ENV_FILENAMES = (".env", ".env.local")


def load_env_files() -> list[Path]:
    """
    Load KEY=VALUE pairs from `.env` and `.env.local` in the project root.

    Variables already in the process environment win. Returns the files read.
    """

    loaded: list[Path] = []
    for filename in ENV_FILENAMES:
        env_path = _project_root() / filename
        if not env_path.is_file():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if line.startswith("export "):
                line = line[len("export "):].lstrip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            if key:
                os.environ.setdefault(key, value.strip().strip("\"").strip("'"))
        loaded.append(env_path)
    return loaded


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _resolve_config_path(raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (_project_root() / candidate).resolve()


@lru_cache(maxsize=1)
def get_price_scraping_settings() -> PriceScrapingSettings:
    """
    Return cached scraper settings from environment variables.
    """

    load_env_files()
    overrides_path = _get_str_env(
        "PRICE_SCRAPER_OVERRIDES_PATH",
        "app/scraping/config/domain_overrides.json",
    )
    return PriceScrapingSettings(
        database_url=_get_str_env("PRICE_SCRAPER_DATABASE_URL", "sqlite://"),
        timeout_seconds=max(
            1.0,
            _get_float_env("PRICE_SCRAPER_TIMEOUT_SECONDS", 15.0),
        ),
        user_agent=_get_str_env(
            "PRICE_SCRAPER_USER_AGENT",
            "PriceScraperBot/1.0 (+https://example.com/bot)",
        ),
        default_cache_expiry_minutes=max(
            0.0,
            _get_float_env("PRICE_SCRAPER_DEFAULT_CACHE_EXPIRY_MINUTES", 60.0),
        ),
        overrides_path=str(_resolve_config_path(overrides_path)),
        export_filename=_get_str_env("PRICE_SCRAPER_EXPORT_FILENAME", "export.csv"),
    )


def load_domain_overrides(*, config_path: str) -> list[DomainOverride]:
    """
    Load per-domain price selectors from a JSON file.

    A missing file yields no overrides; malformed entries are skipped.
    """

    path = _resolve_config_path(config_path)
    if not path.exists():
        logger.info("No domain override file at %s", path)
        return []

    raw_data = json.loads(path.read_text(encoding="utf-8"))
    entries = raw_data.get("overrides", []) if isinstance(raw_data, dict) else []
    if not isinstance(entries, list):
        raise ValueError("Invalid override config: 'overrides' must be a list.")

    parsed: list[DomainOverride] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue

        domain = _normalize_domain(entry.get("domain"))
        selector = _optional_str(entry.get("selector"))
        if not domain or not selector:
            continue

        parsed.append(
            DomainOverride(
                domain=domain,
                selector=selector,
                decimal_separator=_optional_separator(entry.get("decimal_separator")),
            )
        )

    return parsed


def _normalize_domain(value: object) -> str | None:
    domain = _optional_str(value)
    if domain is None:
        return None
    domain = domain.lower()
    if domain.startswith("www."):
        domain = domain[len("www."):]
    return domain or None


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _optional_separator(value: object) -> str | None:
    # Separators are single characters such as "," or "."; whitespace is not stripped.
    if not isinstance(value, str) or not value:
        return None
    return value
