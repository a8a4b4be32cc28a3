"""
Tests for the cached venue directory client.
"""

import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.domains.trip.tools.venues import VenueDirectoryClient
from app.infra.cache import InMemoryTTLCache

BASE_URL = "https://directory.example.test/functions/v1"


class UnreachableCache:
    """Cache whose every call fails like a dropped Redis connection."""

    async def get(self, key):
        raise RedisConnectionError("redis down")

    async def set(self, key, value, ttl=None):
        raise RedisConnectionError("redis down")

    async def delete(self, key):
        raise RedisConnectionError("redis down")

    async def clear(self):
        raise RedisConnectionError("redis down")


def directory_transport(calls: list, status_code: int = 200, payload: dict | None = None):
    """httpx transport answering /companies with one venue per category."""

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if payload is not None or status_code != 200:
            return httpx.Response(status_code, json=payload or {})
        category = request.url.params.get("category", "all")
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": [
                    {"id": f"{category}-1", "name": f"{category} one", "category": category, "rating": 4.5},
                    {"id": f"{category}-2", "name": f"{category} two", "category": category},
                ],
                "pagination": {"total": 2, "limit": 200, "offset": 0, "hasMore": False},
            },
        )

    return httpx.MockTransport(handler)


class TestVenueDirectoryClient:
    @pytest.mark.asyncio
    async def test_unconfigured_returns_empty_without_requests(self):
        calls = []
        client = VenueDirectoryClient(
            cache=InMemoryTTLCache(), base_url="", transport=directory_transport(calls)
        )

        assert await client.fetch_venues(category="dining") == []
        assert await client.count_available() == (0, 0)
        assert calls == []

    @pytest.mark.asyncio
    async def test_fetch_parses_and_caches(self):
        calls = []
        cache = InMemoryTTLCache()
        client = VenueDirectoryClient(cache=cache, base_url=BASE_URL, transport=directory_transport(calls))

        first = await client.fetch_by_category("dining")
        second = await client.fetch_by_category("dining")

        assert [v.id for v in first] == ["dining-1", "dining-2"]
        assert second == first
        assert len(calls) == 1
        assert calls[0].url.params["limit"] == "200"

    @pytest.mark.asyncio
    async def test_limit_is_capped(self):
        calls = []
        client = VenueDirectoryClient(
            cache=InMemoryTTLCache(), base_url=BASE_URL, transport=directory_transport(calls)
        )

        await client.fetch_venues(limit=1000, verified=True)

        assert calls[0].url.params["limit"] == "200"
        assert calls[0].url.params["verified"] == "true"

    @pytest.mark.asyncio
    async def test_server_error_returns_empty_and_is_not_cached(self):
        calls = []
        cache = InMemoryTTLCache()
        client = VenueDirectoryClient(
            cache=cache, base_url=BASE_URL, transport=directory_transport(calls, status_code=503)
        )

        assert await client.fetch_by_category("experiences") == []
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_unsuccessful_payload_returns_empty(self):
        client = VenueDirectoryClient(
            cache=InMemoryTTLCache(),
            base_url=BASE_URL,
            transport=directory_transport([], payload={"success": False, "data": []}),
        )

        assert await client.fetch_by_category("experiences") == []

    @pytest.mark.asyncio
    async def test_count_available(self):
        calls = []
        client = VenueDirectoryClient(
            cache=InMemoryTTLCache(), base_url=BASE_URL, transport=directory_transport(calls)
        )

        companies, guides = await client.count_available()

        assert companies == 6
        assert guides == 2
        assert len(calls) == 4

    @pytest.mark.asyncio
    async def test_trip_planning_venues_by_category(self):
        client = VenueDirectoryClient(
            cache=InMemoryTTLCache(), base_url=BASE_URL, transport=directory_transport([])
        )

        venues = await client.fetch_trip_planning_venues()

        assert set(venues) == {"experiences", "accommodation", "dining"}
        assert venues["accommodation"][0].name == "accommodation one"

    @pytest.mark.asyncio
    async def test_unreachable_cache_falls_through_to_directory(self):
        calls = []
        client = VenueDirectoryClient(
            cache=UnreachableCache(), base_url=BASE_URL, transport=directory_transport(calls)
        )

        venues = await client.fetch_by_category("dining")
        companies, guides = await client.count_available()

        assert [v.id for v in venues] == ["dining-1", "dining-2"]
        assert (companies, guides) == (6, 2)
        assert len(calls) == 5

    @pytest.mark.asyncio
    async def test_unreachable_cache_and_directory_count_zero(self):
        client = VenueDirectoryClient(
            cache=UnreachableCache(),
            base_url=BASE_URL,
            transport=directory_transport([], status_code=503),
        )

        assert await client.count_available() == (0, 0)

    @pytest.mark.asyncio
    async def test_corrupt_cache_entry_is_a_miss(self):
        calls = []
        cache = InMemoryTTLCache()
        await cache.set("venues:category=dining&limit=200", [{"unexpected": True}])
        client = VenueDirectoryClient(cache=cache, base_url=BASE_URL, transport=directory_transport(calls))

        venues = await client.fetch_by_category("dining")

        assert len(venues) == 2
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self):
        calls = []
        client = VenueDirectoryClient(
            cache=InMemoryTTLCache(), base_url=BASE_URL, transport=directory_transport(calls, status_code=404)
        )

        assert await client.fetch_by_category("dining") == []
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_server_error_is_retried(self):
        calls = []
        client = VenueDirectoryClient(
            cache=InMemoryTTLCache(), base_url=BASE_URL, transport=directory_transport(calls, status_code=503)
        )

        assert await client.fetch_by_category("dining") == []
        assert len(calls) == 2
