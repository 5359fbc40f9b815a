"""API routes package."""

from replica.routes.qso_routes import router as qso_router
from replica.routes.update_routes import router as update_router

__all__ = ["qso_router", "update_router"]
