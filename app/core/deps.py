"""FastAPI dependencies for the trip endpoints.

This module provides injectable dependencies for:
- The plan orchestrator (AI generator with rule-based fallback)
- The venue directory client, bound to the process-wide venue cache
- The trip service wiring both to a database session
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.trip.services.orchestrator import TripPlanOrchestrator
from app.domains.trip.services.trip_service import TripService
from app.domains.trip.tools.venues import VenueDirectoryClient
from app.infra.database import get_db


def get_orchestrator() -> TripPlanOrchestrator:
    """Orchestrator backed by the configured completion provider."""
    return TripPlanOrchestrator()


def get_venue_client(request: Request) -> VenueDirectoryClient | None:
    """Venue client using the cache created at startup, if any."""
    cache = getattr(request.app.state, "venue_cache", None)
    if cache is None:
        return None
    return VenueDirectoryClient(cache=cache)


def get_trip_service(
    session: Annotated[AsyncSession, Depends(get_db)],
    orchestrator: Annotated[TripPlanOrchestrator, Depends(get_orchestrator)],
    venues: Annotated[VenueDirectoryClient | None, Depends(get_venue_client)],
) -> TripService:
    """Dependency for getting TripService."""
    return TripService(session, orchestrator=orchestrator, venues=venues)
