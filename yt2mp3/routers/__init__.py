"""
API Routers

FastAPI routers organized by domain.
"""

from yt2mp3.routers.health import router as health_router
from yt2mp3.routers.media import router as media_router

__all__ = [
    "health_router",
    "media_router",
]
