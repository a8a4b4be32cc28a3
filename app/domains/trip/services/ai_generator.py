"""
Tripplan Backend - AI Plan Generator
Builds the curator prompt, calls the completion provider once and decodes
the reply into a TripPlan.

Decoding is all-or-nothing: the reply must be a JSON document that matches
the plan schema exactly and agrees with the request (day count, dates,
total cost). Anything else yields None so the caller can fall back.
"""

import json
import logging
import re
from datetime import date, timedelta

from pydantic import ValidationError

from app.core.config import settings
from app.domains.trip.catalog import (
    PilarType,
    get_pilars_by_weight,
    rank_interest_themes,
    themes_for_interests,
)
from app.domains.trip.schemas import (
    BUDGET_METADATA,
    DIFFICULTY_METADATA,
    TRANSPORT_METADATA,
    Season,
    TripPlan,
    TripPreferences,
)
from app.domains.trip.seasons import get_season_config
from app.domains.trip.telemetry import (
    LoggingUsageObserver,
    UsageObserver,
    UsageRecord,
)
from app.domains.trip.tools.completion import (
    CompletionProvider,
    CompletionUnavailableError,
    OpenAICompletionProvider,
)

logger = logging.getLogger(__name__)


# ============ Prompt Templates ============


PLAN_JSON_SCHEMA = """{
  "summary": "Brief overview of the trip",
  "days": [
    {
      "day": 1,
      "date": "YYYY-MM-DD",
      "theme": "Day theme",
      "activities": [
        {
          "time": "HH:MM",
          "title": "Activity name",
          "description": "Detailed description",
          "location": "Address or location",
          "cost": 0,
          "duration": "X hours/minutes",
          "bookingRequired": true/false
        }
      ],
      "dining": {
        "lunch": "Restaurant or spot name",
        "dinner": "Restaurant or spot name"
      },
      "aurora": {
        "probability": 0-100,
        "bestTime": "HH:MM",
        "location": "Viewing location"
      }
    }
  ],
  "totalCost": 0,
  "safetyNotes": ["note1", "note2"],
  "packingList": ["item1", "item2"],
  "recommendations": ["rec1", "rec2"]
}"""

PLAN_REQUIREMENTS = [
    "Include travel time and logistical details between locations",
    "Provide specific opening hours and booking information",
    "Balance indoor/outdoor activities based on weather",
    "Suggest restaurants with local cuisine",
    "Include Northern Lights information if winter/polar night",
    "Respect budget constraints throughout",
    "Optimize routes based on transportation mode",
    "Include practical safety notes and packing recommendations",
    "Weave in Tromsø's unique character and local experiences",
]


def build_system_prompt(preferences: TripPreferences, season: Season) -> str:
    """Role, seasonal context and the exact JSON contract for the curator."""
    season_config = get_season_config(season)
    interest_themes = themes_for_interests([i.value for i in preferences.interests])
    featured = "\n".join(
        f"- {pilar.name}: {pilar.description} (priority {pilar.weight}/10)"
        for pilar in get_pilars_by_weight(PilarType.FEATURED)
    )
    themes = ", ".join(t.name for t in get_pilars_by_weight(PilarType.ESSENTIAL))
    focus = ", ".join(
        f"{theme.name} (weight {weight:.1f})" for theme, weight in rank_interest_themes(interest_themes)
    ) or "a balanced mix"
    daylight = "no direct sunlight" if season == Season.POLAR_NIGHT else "long daylight hours"
    if season == Season.SUMMER:
        daylight = "midnight sun"

    language = "Norwegian" if preferences.language != "en" else "English"

    return f"""You are an expert local guide and AI trip curator for {settings.DESTINATION_NAME}. Your role is to create personalized, detailed itineraries that showcase the best of {settings.DESTINATION_NAME} while respecting user preferences and constraints.

You have deep knowledge of:
- {settings.DESTINATION_NAME}'s seasonal characteristics and weather patterns
- Local attractions, restaurants, and activities
- Logistical considerations (travel times, opening hours, booking requirements)
- Budget optimization strategies
- Safety and practical considerations for Arctic travel

SEASON CONTEXT:
- Season: {season_config.name} ({season_config.description})
- Weather: {season_config.weather_info}
- Daylight: {daylight}
- Seasonal highlights: {", ".join(season_config.highlights)}

FEATURED PILARS (include at least 2, higher priority first):
{featured}

ESSENTIAL THEMES TO WEAVE IN: {themes}
Traveller focus: {focus}

Write all free-text fields in {language}. All costs are whole numbers in {settings.CURRENCY}.

IMPORTANT: You must respond with VALID JSON ONLY. No markdown, no explanations, no text before or after the JSON. The response must be parseable as JSON.

The JSON structure must match this exact format:
{PLAN_JSON_SCHEMA}"""


def build_user_message(preferences: TripPreferences, start_date: date) -> str:
    """Trip details, preferences and structural requirements."""
    budget = BUDGET_METADATA[preferences.budget]["amount"]
    pace = DIFFICULTY_METADATA[preferences.difficulty]["pace"]
    transport = TRANSPORT_METADATA[preferences.transport]["description"]
    interests = ", ".join(i.value for i in preferences.interests)
    requirements = "\n".join(
        f"{index}. {requirement}"
        for index, requirement in enumerate(PLAN_REQUIREMENTS, start=1)
    )

    return f"""Please create a detailed {preferences.days}-day itinerary for {settings.DESTINATION_NAME} with the following preferences:

TRIP DETAILS:
- Duration: {preferences.days} days
- Start date: {start_date.isoformat()}
- Group size: {preferences.group_size} person(s)

USER PREFERENCES:
- Budget: {budget}
- Pace: {pace}
- Transport: {transport}
- Interests: {interests}

REQUIREMENTS:
{requirements}

Return exactly {preferences.days} days numbered 1 to {preferences.days}, one calendar day apart starting {start_date.isoformat()}, and set totalCost to the sum of all activity costs.

Create a realistic, bookable itinerary that will be memorable and practical."""


# ============ Response Decoding ============


FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


def extract_json_payload(text: str) -> str:
    """Strip a surrounding markdown code fence, if any."""
    match = FENCED_BLOCK.search(text)
    if match:
        return match.group(1)
    return text.strip()


def parse_trip_plan(text: str) -> TripPlan | None:
    """
    Decode completion text into a TripPlan.

    The payload must be valid JSON and match the plan schema in strict
    mode: no coercion of strings to numbers, no missing required fields.

    Returns:
        TripPlan, or None when the text cannot be decoded
    """
    payload = extract_json_payload(text)
    if not payload:
        logger.warning("Empty completion payload")
        return None

    try:
        json.loads(payload)
    except json.JSONDecodeError as e:
        logger.warning(f"Completion is not valid JSON: {e}")
        return None

    try:
        return TripPlan.model_validate_json(payload, strict=True)
    except ValidationError as e:
        logger.warning(f"Completion does not match plan schema: {e.error_count()} errors")
        return None


def plan_violations(
    plan: TripPlan,
    preferences: TripPreferences,
    start_date: date,
) -> list[str]:
    """
    Request-consistency checks for a decoded plan.

    Returns:
        Human-readable violations; empty when the plan is acceptable
    """
    violations: list[str] = []

    if len(plan.days) != preferences.days:
        violations.append(f"expected {preferences.days} days, got {len(plan.days)}")

    # Dates are only checked for requested days; extra days are already a violation
    for index, day in enumerate(plan.days[: preferences.days], start=1):
        if day.day != index:
            violations.append(f"day at position {index} is numbered {day.day}")
        expected_date = (start_date + timedelta(days=index - 1)).isoformat()
        if day.date != expected_date:
            violations.append(f"day {index} dated {day.date}, expected {expected_date}")

    computed = plan.compute_total_cost()
    if plan.total_cost != computed:
        violations.append(f"totalCost {plan.total_cost} != activity sum {computed}")

    return violations


# ============ Clamping ============


SUMMARY_MAX = 1000
THEME_MAX = 100
TITLE_MAX = 150
DESCRIPTION_MAX = 600
LOCATION_MAX = 200
TIME_MAX = 20
DURATION_MAX = 50
DINING_MAX = 150
AURORA_TEXT_MAX = 100
LIST_ITEM_MAX = 300
ACTIVITIES_PER_DAY_MAX = 12
LIST_LENGTH_MAX = 30


def _clip(value: str | None, limit: int) -> str | None:
    if value is None or len(value) <= limit:
        return value
    return value[:limit]


def clamp_trip_plan(plan: TripPlan) -> TripPlan:
    """
    Truncate oversized model-produced text and lists.

    Shrinking a day's activity list would break the total cost, so the
    total is recomputed after trimming.
    """
    days = []
    for day in plan.days:
        activities = [
            activity.model_copy(
                update={
                    "time": _clip(activity.time, TIME_MAX),
                    "title": _clip(activity.title, TITLE_MAX),
                    "description": _clip(activity.description, DESCRIPTION_MAX),
                    "location": _clip(activity.location, LOCATION_MAX),
                    "duration": (
                        _clip(activity.duration, DURATION_MAX)
                        if isinstance(activity.duration, str)
                        else activity.duration
                    ),
                }
            )
            for activity in day.activities[:ACTIVITIES_PER_DAY_MAX]
        ]
        dining = day.dining.model_copy(
            update={
                "lunch": _clip(day.dining.lunch, DINING_MAX),
                "dinner": _clip(day.dining.dinner, DINING_MAX),
            }
        )
        aurora = None
        if day.aurora is not None:
            aurora = day.aurora.model_copy(
                update={
                    "best_time": _clip(day.aurora.best_time, AURORA_TEXT_MAX),
                    "location": _clip(day.aurora.location, AURORA_TEXT_MAX),
                }
            )
        days.append(
            day.model_copy(
                update={
                    "theme": _clip(day.theme, THEME_MAX),
                    "activities": activities,
                    "dining": dining,
                    "aurora": aurora,
                }
            )
        )

    clamped = plan.model_copy(
        update={
            "summary": _clip(plan.summary, SUMMARY_MAX),
            "days": days,
            "safety_notes": [_clip(n, LIST_ITEM_MAX) for n in plan.safety_notes[:LIST_LENGTH_MAX]],
            "packing_list": [_clip(n, LIST_ITEM_MAX) for n in plan.packing_list[:LIST_LENGTH_MAX]],
            "recommendations": [
                _clip(n, LIST_ITEM_MAX) for n in plan.recommendations[:LIST_LENGTH_MAX]
            ],
        }
    )
    return clamped.model_copy(update={"total_cost": clamped.compute_total_cost()})


# ============ Generator ============


class AIPlanGenerator:
    """Single-attempt plan generation through a completion provider."""

    def __init__(
        self,
        provider: CompletionProvider | None = None,
        observer: UsageObserver | None = None,
        max_output_tokens: int | None = None,
        temperature: float | None = None,
    ):
        self.provider = provider or OpenAICompletionProvider()
        self.observer = observer or LoggingUsageObserver()
        self.max_output_tokens = max_output_tokens or settings.OPENAI_MAX_TOKENS
        self.temperature = settings.OPENAI_TEMPERATURE if temperature is None else temperature

    def _report_usage(self, usage: UsageRecord | None) -> None:
        if usage is None:
            return
        try:
            self.observer.record(usage)
        except Exception as e:
            logger.warning(f"Usage observer failed: {e}")

    async def generate(
        self,
        preferences: TripPreferences,
        season: Season,
        start_date: date,
    ) -> TripPlan | None:
        """
        Generate a plan with one completion call.

        Args:
            preferences: Validated traveller preferences
            season: Season resolved from the start date
            start_date: Calendar date of day 1

        Returns:
            A validated TripPlan, or None when the provider is unavailable
            or its reply cannot be accepted
        """
        system_instruction = build_system_prompt(preferences, season)
        user_instruction = build_user_message(preferences, start_date)

        try:
            result = await self.provider.complete(
                system_instruction,
                user_instruction,
                max_output_tokens=self.max_output_tokens,
                temperature=self.temperature,
            )
        except CompletionUnavailableError as e:
            logger.info(f"AI generation skipped: {e.message}")
            return None
        except Exception as e:
            logger.error(f"Completion provider call failed: {e}")
            return None

        self._report_usage(result.usage)

        if not result.text:
            logger.warning("Empty response from completion provider")
            return None

        plan = parse_trip_plan(result.text)
        if plan is None:
            return None

        violations = plan_violations(plan, preferences, start_date)
        if violations:
            logger.warning(f"AI plan rejected: {'; '.join(violations)}")
            return None

        logger.info(f"AI plan accepted: {len(plan.days)} days, total_cost={plan.total_cost}")
        return clamp_trip_plan(plan)
