"""
Run one price scraping batch from the CLI.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import math
import sys

from app.schemas.price_scraping import ScrapeResponse
from app.services.price_scraping_service import PriceScrapingService, PricesNotFoundError


def _expiry_minutes(raw: str) -> float:
    value = float(raw)
    if not math.isfinite(value) or value < 0:
        raise argparse.ArgumentTypeError(f"expected a finite non-negative number, got {raw!r}")
    return value


def main() -> int:
    parser = argparse.ArgumentParser(description="Scrape prices for one or more product URLs.")
    parser.add_argument("urls", nargs="+", help="Product page URLs.")
    parser.add_argument(
        "--cache-expiry-minutes",
        dest="cache_expiry_minutes",
        type=_expiry_minutes,
        default=None,
        help="Freshness window for cached results (defaults to the configured value).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log scraping events to stderr.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    service = PriceScrapingService()
    try:
        result = asyncio.run(service.scrape(args.urls, args.cache_expiry_minutes))
    except PricesNotFoundError as exc:
        print(json.dumps({"error": str(exc)}), file=sys.stderr)
        return 1
    finally:
        service.close()

    payload = ScrapeResponse.from_batch(result).model_dump()
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
