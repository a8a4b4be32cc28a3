"""
Shared fixtures for the test suite.

Database tests run against a throwaway SQLite file through aiosqlite, so
no PostgreSQL server is needed.
"""

import json
from datetime import date, timedelta

import pytest
import pytest_asyncio

from app.domains.trip.schemas import TripPreferences
from app.domains.trip.telemetry import UsageRecord
from app.domains.trip.tools.completion import CompletionResult
from app.infra.database import DatabaseManager


@pytest.fixture
def make_preferences():
    """Factory for TripPreferences with sensible defaults."""

    def _make(**overrides) -> TripPreferences:
        data = {
            "days": 3,
            "budget": "medium",
            "interests": ["aurora", "dining"],
            "transport": "car",
            "difficulty": "moderate",
            "startDate": "2026-02-01",
            "groupSize": 2,
        }
        data.update(overrides)
        return TripPreferences.model_validate(data)

    return _make


@pytest.fixture
def make_plan_json():
    """Factory for a well-formed AI reply covering ``days`` days."""

    def _make(days: int = 3, start: date = date(2026, 2, 1), cost: int = 450) -> str:
        day_entries = []
        for index in range(days):
            day_entries.append(
                {
                    "day": index + 1,
                    "date": (start + timedelta(days=index)).isoformat(),
                    "theme": f"Arctic day {index + 1}",
                    "activities": [
                        {
                            "time": "10:00",
                            "title": "Polaria",
                            "description": "Arctic aquarium with bearded seals",
                            "location": "Hjalmar Johansens gate 12",
                            "cost": cost,
                            "duration": "2 hours",
                            "bookingRequired": False,
                        }
                    ],
                    "dining": {"lunch": "Mathallen", "dinner": "Skirri"},
                    "aurora": {
                        "probability": 70,
                        "bestTime": "22:30",
                        "location": "Ersfjordbotn",
                    },
                }
            )
        return json.dumps(
            {
                "summary": "Three arctic days",
                "days": day_entries,
                "totalCost": cost * days,
                "safetyNotes": ["Dress in layers"],
                "packingList": ["Wool socks"],
                "recommendations": ["Book tours early"],
            }
        )

    return _make


class FakeCompletionProvider:
    """Completion provider returning canned text, or raising."""

    def __init__(self, text: str = "", error: Exception | None = None, usage: UsageRecord | None = None):
        self.text = text
        self.error = error
        self.usage = usage
        self.calls: list[dict] = []

    async def complete(self, system_instruction, user_instruction, max_output_tokens, temperature):
        self.calls.append(
            {
                "system": system_instruction,
                "user": user_instruction,
                "max_output_tokens": max_output_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return CompletionResult(text=self.text, usage=self.usage)


@pytest.fixture
def fake_provider():
    return FakeCompletionProvider


@pytest_asyncio.fixture
async def db_manager(tmp_path):
    """Database manager over a fresh SQLite file with tables created."""
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'trips.db'}")
    await manager.init()
    yield manager
    await manager.close()


@pytest_asyncio.fixture
async def db_session(db_manager):
    async with db_manager.session() as session:
        yield session
