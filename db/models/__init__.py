"""
Model package exports.

Import all SQLAlchemy models here so metadata registration works without
extra imports.
"""

from db.models.scrape_record import ScrapeRecordRow

__all__ = ["ScrapeRecordRow"]
