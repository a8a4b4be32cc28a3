"""Season lookup endpoints."""

from datetime import date

from fastapi import APIRouter, Query

from app.domains.trip.schemas import SeasonResponse
from app.domains.trip.seasons import (
    get_season_config,
    next_season_transition,
    resolve_season,
)

router = APIRouter()


@router.get(
    "/current",
    response_model=SeasonResponse,
    summary="Season for a date",
)
async def get_current_season(
    on: date | None = Query(
        default=None,
        alias="date",
        description="Date to resolve (YYYY-MM-DD); defaults to today",
    ),
) -> SeasonResponse:
    """Resolve the travel season for a date along with its next transition."""
    target = on or date.today()
    season = resolve_season(target)
    config = get_season_config(season)
    transition_date, next_season = next_season_transition(target)

    return SeasonResponse(
        date=target,
        season=season,
        name=config.name,
        description=config.description,
        highlights=list(config.highlights),
        weather_info=config.weather_info,
        next_transition_date=transition_date,
        next_season=next_season,
    )
