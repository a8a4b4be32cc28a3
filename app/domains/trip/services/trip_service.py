"""Services for the Trip domain - Business logic layer."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import TripExpiredError, TripNotFoundError
from app.domains.trip.models import TripPlanRecord
from app.domains.trip.repository import LookupStatus, TripPlanRepository, as_utc
from app.domains.trip.schemas import (
    TripCreateResponse,
    TripMetadata,
    TripPreferences,
    TripRecordResponse,
)
from app.domains.trip.seasons import resolve_season
from app.domains.trip.services.orchestrator import TripPlanOrchestrator
from app.domains.trip.tools.venues import VenueDirectoryClient

logger = logging.getLogger(__name__)


class TripService:
    """Service for trip plan generation, storage and sharing.

    Generation never fails. Storage happens only once a complete plan
    exists and is best-effort: a storage error is logged and the plan is
    returned without share identifiers.
    """

    def __init__(
        self,
        session: AsyncSession,
        orchestrator: TripPlanOrchestrator | None = None,
        venues: VenueDirectoryClient | None = None,
    ) -> None:
        self.session = session
        self.repository = TripPlanRepository(session)
        self.orchestrator = orchestrator or TripPlanOrchestrator()
        self.venues = venues

    # ==================== Generation ====================

    async def create_trip(
        self,
        preferences: TripPreferences,
        now: datetime | None = None,
    ) -> TripCreateResponse:
        """
        Generate and store a plan.

        Args:
            preferences: Validated traveller preferences
            now: Request instant; defaults to the current UTC time

        Returns:
            The plan, its identifiers when stored, and response metadata
        """
        generated_at = as_utc(now) if now else datetime.now(timezone.utc)
        start_date = preferences.resolved_start_date(today=generated_at.date())
        season = resolve_season(start_date)

        logger.info(
            f"Generating {preferences.days}-day plan starting {start_date} ({season.value})"
        )
        outcome = await self.orchestrator.generate_trip_plan(preferences, season, start_date)

        response = TripCreateResponse(
            plan=outcome.plan,
            preferences=preferences,
            generated_at=generated_at,
            source=outcome.source,
            metadata=await self._build_metadata(),
        )

        try:
            record = await self.repository.create_plan(outcome.plan, preferences, now=generated_at)
        except Exception:
            logger.exception("Failed to store generated trip plan")
            try:
                await self.repository.rollback()
            except Exception as e:
                logger.error(f"Rollback after failed store also failed: {e}")
            return response

        response.id = record.id
        response.shareable_id = record.shareable_id
        response.expires_at = as_utc(record.expires_at)
        return response

    async def _build_metadata(self) -> TripMetadata:
        """Venue counts for the response; zeros when the directory is unavailable."""
        if self.venues is None:
            return TripMetadata()
        try:
            companies, guides = await self.venues.count_available()
        except Exception as e:
            logger.warning(f"Venue counts unavailable: {e}")
            return TripMetadata()
        return TripMetadata(companies_available=companies, guides_available=guides)

    # ==================== Lookup ====================

    async def get_trip(self, trip_id: UUID) -> TripRecordResponse:
        """Stored plan by primary id, whether or not its share link expired."""
        record = await self.repository.get_by_id(trip_id)
        if record is None:
            raise TripNotFoundError()
        return self._to_response(record)

    async def get_shared_trip(
        self,
        shareable_id: str,
        now: datetime | None = None,
    ) -> TripRecordResponse:
        """Stored plan by share id; expired links raise TripExpiredError."""
        lookup = await self.repository.get_by_shareable_id(shareable_id, now=now)

        if lookup.status == LookupStatus.NOT_FOUND:
            raise TripNotFoundError()
        if lookup.status == LookupStatus.EXPIRED:
            raise TripExpiredError(ttl_days=self.repository.ttl_days)

        return self._to_response(lookup.record)

    @staticmethod
    def _to_response(record: TripPlanRecord) -> TripRecordResponse:
        return TripRecordResponse(
            id=record.id,
            shareable_id=record.shareable_id,
            plan=record.plan,
            preferences=record.preferences,
            created_at=as_utc(record.created_at),
            expires_at=as_utc(record.expires_at),
        )
