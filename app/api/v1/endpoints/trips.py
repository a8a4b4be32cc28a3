"""Trip plan API endpoints."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_trip_service
from app.core.exceptions import BadRequestError, GenerationFailedError
from app.domains.trip.schemas import (
    TripCreateRequest,
    TripCreateResponse,
    TripRecordResponse,
)
from app.domains.trip.services.trip_service import TripService

logger = logging.getLogger(__name__)

router = APIRouter()

TripServiceDep = Annotated[TripService, Depends(get_trip_service)]


@router.post(
    "",
    response_model=TripCreateResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Generate a trip plan",
    description="""
    Generate a personalized day-by-day plan from traveller preferences.

    The AI curator is tried once; if it is unavailable, slow or returns an
    unusable plan, a rule-based plan is returned instead (`source`).
    The plan is stored when possible and can then be shared for 7 days
    via `shareableId`.
    """,
)
async def create_trip(
    request: TripCreateRequest,
    service: TripServiceDep,
) -> TripCreateResponse:
    """Generate and store a new trip plan."""
    try:
        return await service.create_trip(request.preferences)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Trip generation endpoint error: {e}")
        raise GenerationFailedError() from e


@router.get(
    "/share/{shareable_id}",
    response_model=TripRecordResponse,
    summary="Get a shared trip plan",
    responses={
        404: {"description": "No plan with this share id"},
        410: {"description": "Share link has expired"},
    },
)
async def get_shared_trip(
    shareable_id: str,
    service: TripServiceDep,
) -> TripRecordResponse:
    """Resolve a share link; expired links answer 410 Gone."""
    return await service.get_shared_trip(shareable_id)


@router.get(
    "/{trip_id}",
    response_model=TripRecordResponse,
    summary="Get a trip plan by id",
    responses={
        400: {"description": "Malformed trip id"},
        404: {"description": "No plan with this id"},
    },
)
async def get_trip(
    trip_id: str,
    service: TripServiceDep,
) -> TripRecordResponse:
    """Stored plan by id. Expiration only applies to share links."""
    try:
        parsed_id = UUID(trip_id)
    except ValueError:
        raise BadRequestError("Invalid trip id") from None
    return await service.get_trip(parsed_id)
