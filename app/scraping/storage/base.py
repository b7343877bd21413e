"""
Storage layer interface for scrape records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.price_scraping import ScrapeRecord


class ScrapeRecordStore(ABC):
    """
    Append-only, time-windowed store of scrape attempts keyed by URL.
    """

    @abstractmethod
    def lookup_fresh(
        self,
        url: str,
        max_age_millis: int,
        *,
        now_millis: int | None = None,
    ) -> ScrapeRecord | None:
        """
        Return the last-written record for ``url`` newer than ``now - max_age_millis``.
        """

    @abstractmethod
    def append(self, record: ScrapeRecord) -> ScrapeRecord:
        """
        Insert ``record`` and return it with its assigned identity.
        """

    @abstractmethod
    def all(self) -> list[ScrapeRecord]:
        """
        Return every stored record.
        """
