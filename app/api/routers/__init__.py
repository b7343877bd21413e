"""
app/api/routers package marker.
"""

from app.api.routers.export_router import router as export_router
from app.api.routers.price_scraping import router as price_scraping_router

__all__ = [
    "export_router",
    "price_scraping_router",
]
