"""Repository for the Trip domain - insert and lookup of stored plans."""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.domains.shared.repository import GenericRepository
from app.domains.trip.models import TripPlanRecord
from app.domains.trip.schemas import TripPlan, TripPreferences

logger = logging.getLogger(__name__)


class LookupStatus(str, enum.Enum):
    """Outcome of resolving a share link."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"


@dataclass(frozen=True)
class SharedLookup:
    status: LookupStatus
    record: TripPlanRecord | None = None


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TripPlanRepository(GenericRepository[TripPlanRecord, TripPlan]):
    """Repository for stored trip plans.

    Expiry is evaluated at read time against a caller-supplied clock; no
    background job removes expired rows.
    """

    def __init__(self, session: AsyncSession, ttl_days: int | None = None) -> None:
        super().__init__(TripPlanRecord, session)
        self.ttl_days = ttl_days if ttl_days is not None else settings.SHARE_LINK_TTL_DAYS

    async def create_plan(
        self,
        plan: TripPlan,
        preferences: TripPreferences,
        now: datetime | None = None,
    ) -> TripPlanRecord:
        """Insert a plan with fresh identifiers and a share-link expiry.

        Args:
            plan: Validated plan to store
            preferences: Preferences the plan was generated from
            now: Creation instant; defaults to the current UTC time

        Returns:
            The committed record
        """
        created_at = as_utc(now) if now else datetime.now(timezone.utc)
        record = await self.create(
            {
                "id": uuid4(),
                "shareable_id": uuid4().hex,
                "plan": plan.to_json_dict(),
                "preferences": preferences.model_dump(mode="json", by_alias=True),
                "created_at": created_at,
                "expires_at": created_at + timedelta(days=self.ttl_days),
            }
        )
        await self.commit()
        logger.info(f"Stored trip plan {record.id} (share id {record.shareable_id})")
        return record

    async def get_by_id(self, id: UUID) -> TripPlanRecord | None:
        """Look up a plan by primary key. Expiry is not checked."""
        return await self.find_one(TripPlanRecord.id == id)

    async def get_by_shareable_id(
        self,
        shareable_id: str,
        now: datetime | None = None,
    ) -> SharedLookup:
        """Resolve a share link.

        A read strictly before ``expires_at`` succeeds; a read at or after
        it reports the record as expired.
        """
        record = await self.find_one(TripPlanRecord.shareable_id == shareable_id)
        if record is None:
            return SharedLookup(LookupStatus.NOT_FOUND)

        current = as_utc(now) if now else datetime.now(timezone.utc)
        if current >= as_utc(record.expires_at):
            return SharedLookup(LookupStatus.EXPIRED, record)

        return SharedLookup(LookupStatus.FOUND, record)
