"""
Tripplan Backend - Rule-Based Plan Generator
Deterministic itinerary synthesis used when the AI curator is unavailable.

Content comes from small fixed tables keyed on season; no network access,
no randomness. Every well-formed TripPreferences produces a plan.
"""

import logging
from datetime import date, timedelta

from app.domains.trip.schemas import (
    Activity,
    AuroraInfo,
    DayPlan,
    DiningInfo,
    Interest,
    Season,
    TransportMode,
    TripPlan,
    TripPreferences,
)
from app.domains.trip.seasons import get_season_config, is_aurora_season

logger = logging.getLogger(__name__)


# ============ Content Tables ============


WELCOME_ACTIVITY = Activity(
    time="10:00",
    title="Fjellheisen Cable Car",
    description="Start med panoramautsikt over Tromsø fra 421 meter over havet",
    location="Fjellheisen, Solliveien 12",
    cost=200,
    duration="1.5 timer",
    booking_required=False,
)

AFTERNOON_ACTIVITIES: dict[Season, Activity] = {
    Season.SUMMER: Activity(
        time="14:30",
        title="Fjord Cruise",
        description="Opplev midnattsol fra fjorden med mulighet for havørn og hval",
        location="Prostneset Havn",
        cost=800,
        duration="3 timer",
        booking_required=True,
    ),
    Season.WINTER: Activity(
        time="14:30",
        title="Ishavskatedralen Visit",
        description="Besøk den ikoniske Arktiske Katedralen",
        location="Tromsdalen",
        cost=100,
        duration="1 time",
        booking_required=False,
    ),
}

AURORA_CHASE_ACTIVITY = Activity(
    time="21:00",
    title="Northern Lights Chase",
    description="Profesjonell guide tar deg til beste spots for nordlys",
    location="Henting fra hotell",
    cost=1200,
    duration="4-6 timer",
    booking_required=True,
)

AURORA_ESTIMATE = AuroraInfo(
    probability=65,
    best_time="22:00",
    location="Utenfor byen (mørk himmel)",
)

LUNCH_VENUE = "Fiskekompaniet"
DINNER_VENUE = "Emma's Drømmekjøkken"

RECOMMENDATIONS = [
    "Book nordlys-turer minst 2-3 dager i forveien",
    "Sjekk værmelding daglig - arktisk vær kan endre seg raskt",
    "Last ned offline kart for Tromsø-området",
    "Ta med kontanter - ikke alle steder tar kort",
]


# ============ Generator ============


def generate_rule_based(
    preferences: TripPreferences,
    season: Season,
    start_date: date,
) -> TripPlan:
    """
    Build a complete plan from fixed content tables.

    Args:
        preferences: Validated traveller preferences
        season: Season resolved from the start date
        start_date: Calendar date of day 1

    Returns:
        TripPlan with exactly ``preferences.days`` days and a total cost
        equal to the sum of all activity costs
    """
    days = [
        _build_day(day_number, start_date + timedelta(days=day_number - 1), season)
        for day_number in range(1, preferences.days + 1)
    ]

    total_cost = 0
    for day in days:
        total_cost += day.day_cost

    plan = TripPlan(
        summary=_build_summary(preferences, season),
        days=days,
        total_cost=total_cost,
        safety_notes=build_safety_notes(season, preferences),
        packing_list=build_packing_list(season, preferences),
        recommendations=list(RECOMMENDATIONS),
    )

    logger.info(
        f"Rule-based plan built: {preferences.days} days, season={season.value}, "
        f"total_cost={total_cost}"
    )
    return plan


def _build_day(day_number: int, day_date: date, season: Season) -> DayPlan:
    """Assemble one day; list order is chronological order."""
    activities: list[Activity] = []
    is_first_day = day_number == 1

    # Morning (10:00-12:00)
    if is_first_day:
        activities.append(WELCOME_ACTIVITY.model_copy())

    # Afternoon (14:30-17:00)
    afternoon = AFTERNOON_ACTIVITIES.get(season, AFTERNOON_ACTIVITIES[Season.WINTER])
    activities.append(afternoon.model_copy())

    # Evening
    aurora: AuroraInfo | None = None
    if is_aurora_season(season):
        activities.append(AURORA_CHASE_ACTIVITY.model_copy())
        aurora = AURORA_ESTIMATE.model_copy()

    return DayPlan(
        day=day_number,
        date=day_date.isoformat(),
        theme="Velkommen til Tromsø" if is_first_day else f"Dag {day_number}",
        activities=activities,
        dining=DiningInfo(lunch=LUNCH_VENUE, dinner=DINNER_VENUE),
        aurora=aurora,
    )


def _build_summary(preferences: TripPreferences, season: Season) -> str:
    season_name = get_season_config(season).name_no.lower()
    interests = ", ".join(i.value for i in preferences.interests[:3])
    return (
        f"Din {preferences.days}-dagers {season_name}-opplevelse i Tromsø "
        f"kombinerer {interests} med lokal kultur og naturopplevelser."
    )


def build_safety_notes(season: Season, preferences: TripPreferences) -> list[str]:
    """Season- and transport-specific safety advice."""
    notes = [
        "Ha alltid med fulladet telefon",
        "Del reiserute med noen du stoler på",
    ]

    if is_aurora_season(season):
        notes.extend([
            "Kle deg i lag - temperaturen kan variere",
            "Pass på glatte veier og fortau",
            "Mørketid: bruk refleks og lykt når du går ute",
            "Sjekk værvarsling før utendørsaktiviteter",
        ])

    if season == Season.SUMMER:
        notes.extend([
            "Midnattsol: bruk solbriller og solkrem",
            "Myggspray anbefales for fotturer",
            "Ha med varme klær selv om det er sommer",
        ])

    if preferences.transport == TransportMode.CAR:
        notes.extend([
            "Vinterdekk er påkrevd november-april",
            "Kjør forsiktig i arktiske forhold",
        ])

    return notes


def build_packing_list(season: Season, preferences: TripPreferences) -> list[str]:
    """Packing items keyed on season and selected interests."""
    items = [
        "Pass og ID",
        "Bankkort og litt kontanter",
        "Telefon og lader",
        "Kamera",
    ]

    if is_aurora_season(season):
        items.extend([
            "Varm vinterjakke",
            "Vintersko med godt grep",
            "Votter, lue, skjerf",
            "Termisk undertøy",
            "Varme sokker",
            "Solbriller (snørefleks)",
        ])

    if season == Season.SUMMER:
        items.extend([
            "Vindtett jakke",
            "Gode tursko",
            "Solbriller og solkrem",
            "Myggspray",
            "Lette og varme klær (lag på lag)",
        ])

    if preferences.has_interest(Interest.PHOTOGRAPHY):
        items.extend(["Tripod for kamera", "Ekstra batterier (kulde tapper batterier)"])

    if preferences.has_interest(Interest.HIKING):
        items.extend(["Tursko", "Sekk", "Matboks og drikkeflaske"])

    return items
