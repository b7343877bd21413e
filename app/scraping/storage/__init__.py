"""
Storage layer exports.
"""

from app.scraping.storage.base import ScrapeRecordStore
from app.scraping.storage.sqlalchemy_storage import SQLAlchemyScrapeRecordStore

__all__ = ["SQLAlchemyScrapeRecordStore", "ScrapeRecordStore"]
