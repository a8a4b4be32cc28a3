"""API v1 main router - aggregates all domain routers."""

from fastapi import APIRouter

from app.api.v1.endpoints import health, seasons, trips

api_router = APIRouter()

# Include health check endpoint
api_router.include_router(
    health.router,
    tags=["Health"],
)

# Include trip plan endpoints
api_router.include_router(
    trips.router,
    prefix="/trips",
    tags=["Trips"],
)

# Include season lookup endpoints
api_router.include_router(
    seasons.router,
    prefix="/seasons",
    tags=["Seasons"],
)
