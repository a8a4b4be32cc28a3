"""API v1 endpoints."""

from app.api.v1.endpoints import health, seasons, trips

__all__ = ["health", "seasons", "trips"]
