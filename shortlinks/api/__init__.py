"""API package for the Short Links Service."""

from .routes import health_router, urls_router

__all__ = ["health_router", "urls_router"]
