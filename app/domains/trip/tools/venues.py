"""Venue directory client.

Fetches local companies (tour operators, guides, restaurants...) from the
configured directory service. Results only feed supplementary response
metadata, so every failure degrades to an empty list.
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from app.core.config import settings
from app.domains.trip.tools.base import BaseAsyncAPIClient, ToolError
from app.infra.cache import TTLCache

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200

TRIP_PLANNING_CATEGORIES = ("experiences", "accommodation", "dining")
GUIDE_CATEGORY = "guides"


class Venue(BaseModel):
    """A company listed in the directory; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    slug: str | None = None
    category: str | None = None
    verified: bool = False


class VenueDirectoryClient(BaseAsyncAPIClient):
    """Cached reader for the venue directory."""

    def __init__(
        self,
        cache: TTLCache,
        base_url: str | None = None,
        cache_ttl: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            base_url=base_url if base_url is not None else settings.VENUE_DIRECTORY_URL,
            transport=transport,
        )
        self.cache = cache
        self.cache_ttl = cache_ttl or settings.VENUE_CACHE_TTL_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    @staticmethod
    def _cache_key(params: dict[str, Any]) -> str:
        parts = [f"{k}={params[k]}" for k in sorted(params)]
        return "venues:" + "&".join(parts)

    async def fetch_venues(
        self,
        category: str | None = None,
        verified: bool | None = None,
        limit: int | None = None,
        search: str | None = None,
    ) -> list[Venue]:
        """
        Fetch venues matching the filters.

        Returns:
            Venues from cache or the directory; empty on any failure
        """
        if not self.is_configured:
            return []

        params: dict[str, Any] = {}
        if category:
            params["category"] = category
        if verified is not None:
            params["verified"] = str(verified).lower()
        if limit:
            params["limit"] = min(limit, MAX_PAGE_SIZE)
        if search:
            params["search"] = search

        key = self._cache_key(params)
        cached = await self._read_cache(key)
        if cached is not None:
            return cached

        try:
            if self._client is None:
                async with self:
                    payload = await self.get("/companies", params=params)
            else:
                payload = await self.get("/companies", params=params)

            if not isinstance(payload, dict) or not payload.get("success"):
                logger.warning(f"Venue directory returned an unsuccessful payload for {params}")
                return []

            venues = [Venue.model_validate(item) for item in payload.get("data") or []]

        except (ToolError, ValidationError, ValueError) as e:
            logger.warning(f"Venue directory lookup failed: {e}")
            return []

        await self._write_cache(key, venues)
        return venues

    async def _read_cache(self, key: str) -> list[Venue] | None:
        """Cached venues for a key; an unreachable or corrupt cache is a miss."""
        try:
            cached = await self.cache.get(key)
            if cached is None:
                return None
            return [Venue.model_validate(item) for item in cached]
        except Exception as e:
            logger.warning(f"Venue cache read failed for {key}: {e}")
            return None

    async def _write_cache(self, key: str, venues: list[Venue]) -> None:
        try:
            await self.cache.set(
                key,
                [venue.model_dump() for venue in venues],
                ttl=self.cache_ttl,
            )
        except Exception as e:
            logger.warning(f"Venue cache write failed for {key}: {e}")

    async def fetch_by_category(self, category: str) -> list[Venue]:
        return await self.fetch_venues(category=category, limit=MAX_PAGE_SIZE)

    async def fetch_trip_planning_venues(self) -> dict[str, list[Venue]]:
        """Experiences, accommodation and dining venues, fetched concurrently."""
        if not self.is_configured:
            return {category: [] for category in TRIP_PLANNING_CATEGORIES}

        async with self:
            results = await asyncio.gather(
                *(self.fetch_by_category(c) for c in TRIP_PLANNING_CATEGORIES)
            )
        return dict(zip(TRIP_PLANNING_CATEGORIES, results))

    async def count_available(self) -> tuple[int, int]:
        """
        Counts shown in trip response metadata.

        Returns:
            Tuple of (companies_available, guides_available)
        """
        if not self.is_configured:
            return 0, 0

        # One shared HTTP client for all four category lookups
        async with self:
            results = await asyncio.gather(
                *(self.fetch_by_category(c) for c in (*TRIP_PLANNING_CATEGORIES, GUIDE_CATEGORY))
            )
        *companies, guides = results
        return sum(len(venues) for venues in companies), len(guides)
