"""
HTML parsing layer exports.
"""

from app.scraping.parsing.price_extractor import PriceExtractor, SoupDocument

__all__ = ["PriceExtractor", "SoupDocument"]
