"""
API tests for the trip endpoints.

The app runs with its lifespan against a SQLite file; the AI generator is
replaced so no network calls are made.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import httpx
import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.deps import get_orchestrator, get_venue_client
from app.domains.trip.services.ai_generator import AIPlanGenerator
from app.domains.trip.services.orchestrator import TripPlanOrchestrator
from app.domains.trip.tools.venues import VenueDirectoryClient
from app.infra.database import DatabaseManager, get_db
from app.main import app

VALID_BODY = {
    "preferences": {
        "days": 3,
        "budget": "medium",
        "interests": ["aurora", "dining"],
        "transport": "car",
        "difficulty": "moderate",
        "startDate": "2026-02-01",
        "groupSize": 2,
    }
}


def offline_orchestrator() -> TripPlanOrchestrator:
    generator = AsyncMock()
    generator.generate.return_value = None
    return TripPlanOrchestrator(ai_generator=generator)


@pytest.fixture
def test_db(tmp_path):
    return DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")


@pytest.fixture
def client(test_db):
    """TestClient with the database and AI generator swapped out."""

    async def override_get_db():
        async with test_db.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_orchestrator] = offline_orchestrator

    with patch("app.main.init_db", test_db.init), patch("app.main.close_db", test_db.close):
        with TestClient(app) as test_client:
            yield test_client

    app.dependency_overrides.clear()


class TestCreateTrip:
    def test_end_to_end_february_example(self, client):
        response = client.post("/api/v1/trips", json=VALID_BODY)

        assert response.status_code == 201
        data = response.json()
        plan = data["plan"]
        assert [d["date"] for d in plan["days"]] == ["2026-02-01", "2026-02-02", "2026-02-03"]
        assert [d["day"] for d in plan["days"]] == [1, 2, 3]
        assert all("aurora" in d for d in plan["days"])
        assert plan["totalCost"] == sum(
            a["cost"] for d in plan["days"] for a in d["activities"]
        )
        assert data["source"] == "rule_based"
        assert data["preferences"]["startDate"] == "2026-02-01"
        assert data["id"] and data["shareableId"]
        assert data["metadata"] == {"companiesAvailable": 0, "guidesAvailable": 0}
        generated = datetime.fromisoformat(data["generatedAt"])
        expires = datetime.fromisoformat(data["expiresAt"])
        assert expires - generated == timedelta(days=7)

    def test_summer_plan_has_no_aurora(self, client):
        body = {"preferences": {**VALID_BODY["preferences"], "startDate": "2026-07-01"}}

        response = client.post("/api/v1/trips", json=body)

        assert response.status_code == 201
        assert all("aurora" not in d for d in response.json()["plan"]["days"])

    def test_too_many_days_rejected(self, client):
        body = {"preferences": {**VALID_BODY["preferences"], "days": 15}}

        with patch.object(TripPlanOrchestrator, "generate_trip_plan") as generate:
            response = client.post("/api/v1/trips", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Days must be between 1 and 14"}
        generate.assert_not_called()

    def test_empty_interests_rejected(self, client):
        body = {"preferences": {**VALID_BODY["preferences"], "days": 2, "interests": []}}

        response = client.post("/api/v1/trips", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "At least one interest must be selected"

    def test_missing_preferences_rejected(self, client):
        response = client.post("/api/v1/trips", json={})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_start_date_past_calendar_end_rejected(self, client):
        body = {"preferences": {**VALID_BODY["preferences"], "startDate": "9999-12-30"}}

        with patch.object(TripPlanOrchestrator, "generate_trip_plan") as generate:
            response = client.post("/api/v1/trips", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Start date is too far in the future"}
        generate.assert_not_called()

    def test_unreachable_venue_cache_still_counts_from_directory(self, client):
        class UnreachableCache:
            async def get(self, key):
                raise RedisConnectionError("redis down")

            async def set(self, key, value, ttl=None):
                raise RedisConnectionError("redis down")

        def directory(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "data": [{"id": "v1", "name": "Venue"}]})

        app.dependency_overrides[get_venue_client] = lambda: VenueDirectoryClient(
            cache=UnreachableCache(),
            base_url="https://directory.example.test",
            transport=httpx.MockTransport(directory),
        )

        response = client.post("/api/v1/trips", json=VALID_BODY)

        assert response.status_code == 201
        assert response.json()["metadata"] == {"companiesAvailable": 3, "guidesAvailable": 1}

    def test_venue_failure_does_not_block_plan(self, client):
        venues = AsyncMock()
        venues.count_available.side_effect = RedisConnectionError("redis down")
        app.dependency_overrides[get_venue_client] = lambda: venues

        response = client.post("/api/v1/trips", json=VALID_BODY)

        assert response.status_code == 201
        body = response.json()
        assert len(body["plan"]["days"]) == 3
        assert body["shareableId"]
        assert body["metadata"] == {"companiesAvailable": 0, "guidesAvailable": 0}

    def test_storage_failure_still_returns_plan(self, client):
        with patch(
            "app.domains.trip.services.trip_service.TripPlanRepository.create_plan",
            AsyncMock(side_effect=RuntimeError("db gone")),
        ):
            response = client.post("/api/v1/trips", json=VALID_BODY)

        assert response.status_code == 201
        body = response.json()
        assert len(body["plan"]["days"]) == 3
        assert "id" not in body
        assert "shareableId" not in body
        assert "expiresAt" not in body

    def test_unexpected_failure_is_500(self, client):
        with patch(
            "app.domains.trip.services.trip_service.TripService.create_trip",
            AsyncMock(side_effect=RuntimeError("boom")),
        ):
            response = client.post("/api/v1/trips", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to generate trip plan"}

    def test_ai_plan_is_returned_when_valid(self, client, make_plan_json, fake_provider):
        provider = fake_provider(text=make_plan_json())
        app.dependency_overrides[get_orchestrator] = lambda: TripPlanOrchestrator(
            ai_generator=AIPlanGenerator(provider=provider)
        )

        response = client.post("/api/v1/trips", json=VALID_BODY)

        assert response.status_code == 201
        assert response.json()["source"] == "ai"
        assert response.json()["plan"]["summary"] == "Three arctic days"


class TestGetTrip:
    def test_round_trip_by_id(self, client):
        created = client.post("/api/v1/trips", json=VALID_BODY).json()

        response = client.get(f"/api/v1/trips/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["shareableId"] == created["shareableId"]
        assert data["plan"] == created["plan"]
        assert set(data) == {"success", "id", "shareableId", "plan", "preferences", "createdAt", "expiresAt"}

    def test_unknown_id_is_404(self, client):
        response = client.get(f"/api/v1/trips/{uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Trip plan not found"}

    def test_malformed_id_is_400(self, client):
        response = client.get("/api/v1/trips/not-a-uuid")

        assert response.status_code == 400


class TestSharedTrip:
    def test_shared_link_resolves(self, client):
        created = client.post("/api/v1/trips", json=VALID_BODY).json()

        response = client.get(f"/api/v1/trips/share/{created['shareableId']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_unknown_share_id_is_404(self, client):
        assert client.get("/api/v1/trips/share/nope").status_code == 404

    def test_expired_share_link_is_410_but_id_lookup_still_works(self, client):
        created = client.post("/api/v1/trips", json=VALID_BODY).json()
        later = datetime.now(timezone.utc) + timedelta(days=8)

        with patch("app.domains.trip.repository.datetime") as mock_datetime:
            mock_datetime.now.return_value = later
            shared = client.get(f"/api/v1/trips/share/{created['shareableId']}")
            by_id = client.get(f"/api/v1/trips/{created['id']}")

        assert shared.status_code == 410
        assert shared.json() == {"success": False, "error": "Shared link has expired (7 days)"}
        assert by_id.status_code == 200


class TestSeasonsAndHealth:
    def test_current_season_for_date(self, client):
        response = client.get("/api/v1/seasons/current", params={"date": "2026-01-15"})

        assert response.status_code == 200
        data = response.json()
        assert data["season"] == "polar-night"
        assert data["name"] == "Polar Night"
        assert data["nextTransitionDate"] == "2026-02-01"
        assert data["nextSeason"] == "winter"

    def test_root_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_api_health_checks_database(self, client):
        with patch("app.api.v1.endpoints.health.db_manager") as manager:
            manager.health_check = AsyncMock(return_value=True)
            response = client.get("/api/v1/health")

        assert response.json() == {"status": "healthy", "database": "ok"}


def test_other_routes_keep_default_validation_status(test_db):
    with patch("app.main.init_db", test_db.init), patch("app.main.close_db", test_db.close):
        with TestClient(app) as test_client:
            response = test_client.get("/api/v1/seasons/current", params={"date": "not-a-date"})
    assert response.status_code == 422
