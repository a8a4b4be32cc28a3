"""Pydantic schemas for the Trip domain.

Wire names are camelCase (``totalCost``, ``safetyNotes``...) so plans read
back from storage or produced by the language model share one shape.
"""

from datetime import date as date_type, datetime
from enum import Enum
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============ Enums ============


class Season(str, Enum):
    """Travel-context season derived from the trip start date."""

    SUMMER = "summer"
    WINTER = "winter"
    POLAR_NIGHT = "polar-night"


class BudgetLevel(str, Enum):
    """Spending tier selected by the traveller."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TransportMode(str, Enum):
    """Whether the group travels with its own car."""

    CAR = "car"
    NO_CAR = "no-car"


class DifficultyLevel(str, Enum):
    """Physical intensity, drives the pace of each day."""

    EASY = "easy"
    MODERATE = "moderate"
    ACTIVE = "active"


class Interest(str, Enum):
    """Interests a traveller can select."""

    AURORA = "aurora"
    DINING = "dining"
    SNOWMOBILE = "snowmobile"
    HUSKY = "husky"
    REINDEER = "reindeer"
    FISHING = "fishing"
    CULTURE = "culture"
    NATURE = "nature"
    PHOTOGRAPHY = "photography"
    WHALE_WATCHING = "whale-watching"
    HIKING = "hiking"
    WELLNESS = "wellness"
    SHOPPING = "shopping"
    SKIING = "skiing"


class PlanSource(str, Enum):
    """Which generator produced a plan."""

    AI = "ai"
    RULE_BASED = "rule_based"


# ============ Display Metadata ============


BUDGET_METADATA: dict[BudgetLevel, dict[str, str]] = {
    BudgetLevel.LOW: {"label": "Budget", "amount": "800 NOK/day", "description": "Budget-friendly"},
    BudgetLevel.MEDIUM: {"label": "Moderate", "amount": "1500 NOK/day", "description": "Balanced"},
    BudgetLevel.HIGH: {"label": "Premium", "amount": "3000+ NOK/day", "description": "Premium experiences"},
}

DIFFICULTY_METADATA: dict[DifficultyLevel, dict[str, str]] = {
    DifficultyLevel.EASY: {"label": "Easy", "pace": "relaxed", "description": "Relaxed pace, minimal physical activity"},
    DifficultyLevel.MODERATE: {"label": "Moderate", "pace": "moderate", "description": "Balanced between activity and rest"},
    DifficultyLevel.ACTIVE: {"label": "Active", "pace": "active", "description": "Fast pace, lots of physical activity"},
}

TRANSPORT_METADATA: dict[TransportMode, dict[str, str]] = {
    TransportMode.CAR: {"label": "With car", "description": "Own car"},
    TransportMode.NO_CAR: {"label": "Without car", "description": "No car (public transport & tours)"},
}

INTEREST_METADATA: dict[Interest, dict[str, str]] = {
    Interest.AURORA: {"label": "Aurora", "description": "Northern lights viewing"},
    Interest.DINING: {"label": "Dining", "description": "Local cuisine"},
    Interest.SNOWMOBILE: {"label": "Snowmobile", "description": "Snowmobile tours"},
    Interest.HUSKY: {"label": "Dog sledding", "description": "Husky sledding"},
    Interest.REINDEER: {"label": "Reindeer", "description": "Reindeer experiences"},
    Interest.FISHING: {"label": "Fishing", "description": "Fishing trips"},
    Interest.CULTURE: {"label": "Culture", "description": "Cultural activities"},
    Interest.NATURE: {"label": "Nature", "description": "Nature exploration"},
    Interest.PHOTOGRAPHY: {"label": "Photography", "description": "Photography tours"},
    Interest.WHALE_WATCHING: {"label": "Whale watching", "description": "Whale watching"},
    Interest.HIKING: {"label": "Hiking", "description": "Hiking trails"},
    Interest.WELLNESS: {"label": "Wellness", "description": "Spa & relaxation"},
    Interest.SHOPPING: {"label": "Shopping", "description": "Local shopping"},
    Interest.SKIING: {"label": "Skiing", "description": "Skiing activities"},
}


# ============ Preferences ============


MIN_TRIP_DAYS = 1
MAX_TRIP_DAYS = 14


class TripPreferences(CamelModel):
    """Traveller input; immutable once submitted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    days: int = Field(..., ge=MIN_TRIP_DAYS, le=MAX_TRIP_DAYS)
    budget: BudgetLevel
    interests: list[Interest] = Field(..., min_length=1)
    transport: TransportMode
    difficulty: DifficultyLevel
    language: Literal["no", "en"] | None = None
    start_date: date_type | None = None
    group_size: int = Field(default=2, ge=1)

    @field_validator("interests")
    @classmethod
    def dedupe_interests(cls, v: list[Interest]) -> list[Interest]:
        """Drop repeated interests, keeping first-seen order."""
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def check_last_day_in_calendar(self) -> "TripPreferences":
        if self.start_date and (date_type.max - self.start_date).days < self.days - 1:
            raise ValueError("Start date is too far in the future")
        return self

    def resolved_start_date(self, today: date_type | None = None) -> date_type:
        """Start date, defaulting to today when none was given."""
        return self.start_date or today or date_type.today()

    def has_interest(self, interest: Interest) -> bool:
        return interest in self.interests


# ============ Plan ============


class PlanModel(CamelModel):
    """Plan parts reject unknown keys, so a model reply with a foreign shape fails decoding."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class Activity(PlanModel):
    """A single entry within a day, in chronological order."""

    time: str
    title: str
    description: str
    location: str
    cost: int = Field(..., ge=0)
    duration: str | int
    booking_required: bool


class DiningInfo(PlanModel):
    """Lunch and dinner venue names for a day."""

    lunch: str | None = None
    dinner: str | None = None


class AuroraInfo(PlanModel):
    """Northern lights forecast for an evening."""

    probability: int = Field(..., ge=0, le=100)
    best_time: str
    location: str


class DayPlan(PlanModel):
    """One day of the itinerary."""

    day: int = Field(..., ge=1)
    date: str
    theme: str
    activities: list[Activity]
    dining: DiningInfo
    aurora: AuroraInfo | None = None

    @property
    def day_cost(self) -> int:
        return sum(activity.cost for activity in self.activities)


class TripPlan(PlanModel):
    """Complete itinerary returned to the caller."""

    summary: str
    days: list[DayPlan] = Field(..., min_length=1)
    total_cost: int = Field(..., ge=0)
    safety_notes: list[str]
    packing_list: list[str]
    recommendations: list[str]

    def compute_total_cost(self) -> int:
        """Arithmetic sum of every activity cost across all days."""
        return sum(day.day_cost for day in self.days)

    def to_json_dict(self) -> dict:
        """Serialize with wire names, omitting absent aurora records."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============ API Schemas ============


class TripCreateRequest(CamelModel):
    """Body of ``POST /trips``."""

    preferences: TripPreferences


class TripMetadata(CamelModel):
    """Supplementary counts shown alongside a generated plan."""

    companies_available: int = 0
    guides_available: int = 0


class TripCreateResponse(CamelModel):
    """Generated plan plus its persistence identifiers.

    The identifiers are absent when the plan could not be stored.
    """

    plan: TripPlan
    preferences: TripPreferences
    generated_at: datetime
    id: UUID | None = None
    shareable_id: str | None = None
    expires_at: datetime | None = None
    source: PlanSource
    metadata: TripMetadata = Field(default_factory=TripMetadata)


class TripRecordResponse(CamelModel):
    """Persisted trip plan as returned by the lookup endpoints."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    success: bool = True
    id: UUID
    shareable_id: str
    plan: dict
    preferences: dict
    created_at: datetime
    expires_at: datetime


class SeasonResponse(CamelModel):
    """Resolved season for a date with its display metadata."""

    date: date_type
    season: Season
    name: str
    description: str
    highlights: list[str]
    weather_info: str
    next_transition_date: date_type
    next_season: Season
