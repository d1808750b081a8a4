"""API routers package."""

from coach.api.routers.links import router as links_router
from coach.api.routers.context import router as context_router

__all__ = [
    "links_router",
    "context_router",
]
