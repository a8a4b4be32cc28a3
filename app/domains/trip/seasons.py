"""Season resolution and static season metadata.

Seasons are a pure function of the calendar month. March, April,
September and October have no season of their own and resolve to winter.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from app.domains.trip.schemas import Season


@dataclass(frozen=True)
class SeasonConfig:
    """Display metadata used for prompt and context construction."""

    season: Season
    name: str
    name_no: str
    start_month: int
    end_month: int
    description: str
    highlights: list[str] = field(default_factory=list)
    weather_info: str = ""


SEASONS: dict[Season, SeasonConfig] = {
    Season.SUMMER: SeasonConfig(
        season=Season.SUMMER,
        name="Summer",
        name_no="Sommer",
        start_month=5,
        end_month=8,
        description="Midnight sun season with 24-hour daylight",
        highlights=[
            "Midnight sun",
            "Hiking and nature walks",
            "Fjord cruises",
            "Wildlife watching",
            "Outdoor cafes",
        ],
        weather_info="Average 8-15°C, long days with midnight sun from May-July",
    ),
    Season.WINTER: SeasonConfig(
        season=Season.WINTER,
        name="Winter",
        name_no="Vinter",
        start_month=12,
        end_month=2,
        description="Winter wonderland with Northern Lights",
        highlights=[
            "Northern Lights viewing",
            "Dog sledding",
            "Snowmobile tours",
            "Cross-country skiing",
            "Winter festivals",
        ],
        weather_info="Average -4 to 0°C, snowy conditions, Northern Lights season",
    ),
    Season.POLAR_NIGHT: SeasonConfig(
        season=Season.POLAR_NIGHT,
        name="Polar Night",
        name_no="Mørketid",
        start_month=11,
        end_month=1,
        description="Magical twilight period without direct sunlight",
        highlights=[
            "Blue hour photography",
            "Northern Lights (peak season)",
            "Cozy cafes and restaurants",
            "Cultural experiences",
            "Christmas markets",
        ],
        weather_info="Average -5 to 2°C, no direct sunlight but beautiful twilight",
    ),
}

AURORA_SEASONS = frozenset({Season.WINTER, Season.POLAR_NIGHT})


def resolve_season(value: date | datetime) -> Season:
    """Map a calendar date to its travel season.

    Args:
        value: Any date; only the month is considered

    Returns:
        The season for that month
    """
    month = value.month

    if 5 <= month <= 8:
        return Season.SUMMER

    if month in (11, 1):
        return Season.POLAR_NIGHT

    if month in (12, 2):
        return Season.WINTER

    # Shoulder months (March, April, September, October)
    return Season.WINTER


def is_aurora_season(season: Season) -> bool:
    """Whether evenings in this season are dark enough for aurora viewing."""
    return season in AURORA_SEASONS


def next_season_transition(value: date | datetime) -> tuple[date, Season]:
    """First day of the next month whose season differs from ``value``'s."""
    current = resolve_season(value)
    year, month = value.year, value.month
    for _ in range(12):
        month += 1
        if month > 12:
            year, month = year + 1, 1
        candidate = date(year, month, 1)
        season = resolve_season(candidate)
        if season != current:
            return candidate, season
    # Unreachable with the fixed month mapping
    raise ValueError("season mapping has no transitions")


def get_season_config(season: Season) -> SeasonConfig:
    return SEASONS[season]


def get_all_seasons() -> list[SeasonConfig]:
    return list(SEASONS.values())
