"""
Tests for the plan orchestrator's fallback behaviour.
"""

import asyncio
from datetime import date
from unittest.mock import AsyncMock

import pytest

from app.core.config import settings
from app.domains.trip.schemas import PlanSource, Season
from app.domains.trip.services.ai_generator import AIPlanGenerator
from app.domains.trip.services.orchestrator import (
    TripPlanOrchestrator,
    generate_trip_plan,
)

START = date(2026, 2, 1)


def assert_structurally_valid(plan, days):
    assert len(plan.days) == days
    assert [d.day for d in plan.days] == list(range(1, days + 1))
    assert plan.total_cost == sum(a.cost for d in plan.days for a in d.activities)


class TestOrchestrator:
    @pytest.mark.asyncio
    async def test_uses_ai_plan_when_available(self, make_preferences, make_plan_json, fake_provider):
        orchestrator = TripPlanOrchestrator(
            ai_generator=AIPlanGenerator(provider=fake_provider(text=make_plan_json()))
        )

        outcome = await orchestrator.generate_trip_plan(make_preferences(), Season.WINTER, START)

        assert outcome.source == PlanSource.AI
        assert outcome.plan.summary == "Three arctic days"

    @pytest.mark.asyncio
    async def test_falls_back_when_generator_raises(self, make_preferences):
        generator = AsyncMock()
        generator.generate.side_effect = RuntimeError("connection reset")
        orchestrator = TripPlanOrchestrator(ai_generator=generator)

        outcome = await orchestrator.generate_trip_plan(make_preferences(), Season.WINTER, START)

        assert outcome.source == PlanSource.RULE_BASED
        assert_structurally_valid(outcome.plan, 3)

    @pytest.mark.asyncio
    async def test_falls_back_on_invalid_json(self, make_preferences, fake_provider):
        orchestrator = TripPlanOrchestrator(
            ai_generator=AIPlanGenerator(provider=fake_provider(text="{not json"))
        )

        outcome = await orchestrator.generate_trip_plan(make_preferences(), Season.WINTER, START)

        assert outcome.source == PlanSource.RULE_BASED
        assert_structurally_valid(outcome.plan, 3)

    @pytest.mark.asyncio
    async def test_falls_back_on_timeout(self, make_preferences):
        async def slow_generate(*args, **kwargs):
            await asyncio.sleep(10)

        generator = AsyncMock()
        generator.generate.side_effect = slow_generate
        orchestrator = TripPlanOrchestrator(ai_generator=generator, timeout_seconds=0.05)

        outcome = await orchestrator.generate_trip_plan(make_preferences(days=2), Season.SUMMER, START)

        assert outcome.source == PlanSource.RULE_BASED
        assert_structurally_valid(outcome.plan, 2)

    @pytest.mark.asyncio
    async def test_falls_back_when_generator_returns_none(self, make_preferences):
        generator = AsyncMock()
        generator.generate.return_value = None
        orchestrator = TripPlanOrchestrator(ai_generator=generator)

        outcome = await orchestrator.generate_trip_plan(make_preferences(), Season.POLAR_NIGHT, START)

        assert outcome.source == PlanSource.RULE_BASED
        generator.generate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, make_preferences):
        started = asyncio.Event()

        async def hanging_generate(*args, **kwargs):
            started.set()
            await asyncio.sleep(10)

        generator = AsyncMock()
        generator.generate.side_effect = hanging_generate
        orchestrator = TripPlanOrchestrator(ai_generator=generator, timeout_seconds=30)

        task = asyncio.create_task(
            orchestrator.generate_trip_plan(make_preferences(), Season.WINTER, START)
        )
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_missing_credential_end_to_end(self, make_preferences, monkeypatch):
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
        plan = await generate_trip_plan(make_preferences(), Season.WINTER, START)

        assert [d.date for d in plan.days] == ["2026-02-01", "2026-02-02", "2026-02-03"]
        assert all(d.aurora is not None for d in plan.days)
        assert plan.total_cost == sum(a.cost for d in plan.days for a in d.activities)
