"""
Tripplan Backend - Plan Orchestrator
Chooses between AI and rule-based generation.

Exactly one AI attempt is made, bounded by a timeout. Any failure, empty
result or timeout falls back to the deterministic generator, so callers
always receive a plan.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

from app.core.config import settings
from app.domains.trip.schemas import PlanSource, Season, TripPlan, TripPreferences
from app.domains.trip.services.ai_generator import AIPlanGenerator
from app.domains.trip.services.rule_based import generate_rule_based

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOutcome:
    plan: TripPlan
    source: PlanSource


class TripPlanOrchestrator:
    """Runs the AI generator with a rule-based safety net."""

    def __init__(
        self,
        ai_generator: AIPlanGenerator | None = None,
        timeout_seconds: float | None = None,
    ):
        self.ai_generator = ai_generator or AIPlanGenerator()
        self.timeout_seconds = timeout_seconds or settings.GENERATION_TIMEOUT_SECONDS

    async def generate_trip_plan(
        self,
        preferences: TripPreferences,
        season: Season,
        start_date: date,
    ) -> GenerationOutcome:
        """
        Produce a plan for the given preferences.

        Args:
            preferences: Validated traveller preferences
            season: Season resolved from ``start_date``
            start_date: Calendar date of day 1

        Returns:
            GenerationOutcome holding the plan and which generator made it
        """
        try:
            plan = await asyncio.wait_for(
                self.ai_generator.generate(preferences, season, start_date),
                timeout=self.timeout_seconds,
            )
            if plan is not None:
                logger.info("Trip plan generated by AI curator")
                return GenerationOutcome(plan=plan, source=PlanSource.AI)
            logger.info("AI curator returned no usable plan, using rule-based generation")
        except asyncio.TimeoutError:
            logger.warning(
                f"AI generation exceeded {self.timeout_seconds}s, using rule-based generation"
            )
        except Exception as e:
            logger.error(f"AI generation failed: {e}")

        plan = generate_rule_based(preferences, season, start_date)
        return GenerationOutcome(plan=plan, source=PlanSource.RULE_BASED)


async def generate_trip_plan(
    preferences: TripPreferences,
    season: Season,
    start_date: date,
) -> TripPlan:
    """Convenience wrapper returning only the plan."""
    outcome = await TripPlanOrchestrator().generate_trip_plan(preferences, season, start_date)
    return outcome.plan
