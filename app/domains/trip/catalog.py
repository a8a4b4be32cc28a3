"""Featured landmarks and essential themes ("pilars") for Tromsø.

Each pilar carries an importance weight that biases which content the
curator prompt emphasises. The registry is static and only feeds prompt
construction.
"""

from dataclasses import dataclass
from enum import Enum


class PilarType(str, Enum):
    FEATURED = "featured"
    ESSENTIAL = "essential"


@dataclass(frozen=True)
class PilarConfig:
    id: str
    type: PilarType
    name: str
    description: str
    weight: int


FEATURED_PILARS: dict[str, PilarConfig] = {
    "fjellheisen": PilarConfig(
        id="fjellheisen",
        type=PilarType.FEATURED,
        name="Fjellheisen Cable Car",
        description="Iconic cable car with panoramic city and fjord views",
        weight=10,
    ),
    "ishavskatedralen": PilarConfig(
        id="ishavskatedralen",
        type=PilarType.FEATURED,
        name="Arctic Cathedral",
        description="Iconic modern church and architectural landmark",
        weight=9,
    ),
    "polarmuseet": PilarConfig(
        id="polarmuseet",
        type=PilarType.FEATURED,
        name="Polar Museum",
        description="Arctic hunting and expedition history",
        weight=8,
    ),
    "fjordcruise": PilarConfig(
        id="fjordcruise",
        type=PilarType.FEATURED,
        name="Fjord Cruise",
        description="Explore Arctic fjords and wildlife",
        weight=8,
    ),
    "arctic-cathedral": PilarConfig(
        id="arctic-cathedral",
        type=PilarType.FEATURED,
        name="Arctic Cathedral",
        description="Midnight sun concerts and Northern Lights backdrop",
        weight=9,
    ),
}

ESSENTIAL_THEMES: dict[str, PilarConfig] = {
    "nature": PilarConfig(
        id="nature",
        type=PilarType.ESSENTIAL,
        name="Nature & Wilderness",
        description="Arctic nature, mountains, and fjords",
        weight=10,
    ),
    "culture": PilarConfig(
        id="culture",
        type=PilarType.ESSENTIAL,
        name="Culture & Arts",
        description="Museums, galleries, and cultural institutions",
        weight=7,
    ),
    "science": PilarConfig(
        id="science",
        type=PilarType.ESSENTIAL,
        name="Science & Research",
        description="Arctic science, UiT campus, research institutions",
        weight=6,
    ),
    "arctic-wilderness": PilarConfig(
        id="arctic-wilderness",
        type=PilarType.ESSENTIAL,
        name="Arctic Wilderness",
        description="Dog sledding, snowmobile, wilderness experiences",
        weight=9,
    ),
    "sami-heritage": PilarConfig(
        id="sami-heritage",
        type=PilarType.ESSENTIAL,
        name="Sami Heritage",
        description="Indigenous Sami culture and traditions",
        weight=8,
    ),
    "northern-lights": PilarConfig(
        id="northern-lights",
        type=PilarType.ESSENTIAL,
        name="Northern Lights",
        description="Aurora viewing, photography, and tours",
        weight=10,
    ),
}

MAX_POI_WEIGHT = 10.0
MAX_COUNTED_THEMES = 3


def get_all_pilars() -> list[PilarConfig]:
    """Featured pilars followed by essential themes."""
    return [*FEATURED_PILARS.values(), *ESSENTIAL_THEMES.values()]


def get_pilars_by_type(pilar_type: PilarType) -> list[PilarConfig]:
    if pilar_type == PilarType.FEATURED:
        return list(FEATURED_PILARS.values())
    return list(ESSENTIAL_THEMES.values())


def get_pilars_by_weight(pilar_type: PilarType) -> list[PilarConfig]:
    """Pilars of one type, heaviest first; ties keep registry order."""
    return sorted(get_pilars_by_type(pilar_type), key=lambda p: -p.weight)


def calculate_poi_weight(
    featured_pilar: str | None = None,
    essential_themes: list[str] | None = None,
) -> float:
    """Importance weight for a point of interest.

    Base weight 1, plus the featured pilar's weight, plus half the weight
    of at most three essential themes. Unknown ids are ignored and the
    result is capped at 10.
    """
    weight = 1.0

    if featured_pilar and featured_pilar in FEATURED_PILARS:
        weight += FEATURED_PILARS[featured_pilar].weight

    for theme in (essential_themes or [])[:MAX_COUNTED_THEMES]:
        if theme in ESSENTIAL_THEMES:
            weight += ESSENTIAL_THEMES[theme].weight * 0.5

    return min(weight, MAX_POI_WEIGHT)


# Interests (by value) that map onto an essential theme
INTEREST_THEMES: dict[str, str] = {
    "aurora": "northern-lights",
    "photography": "northern-lights",
    "culture": "culture",
    "nature": "nature",
    "hiking": "nature",
    "whale-watching": "nature",
    "fishing": "nature",
    "husky": "arctic-wilderness",
    "snowmobile": "arctic-wilderness",
    "skiing": "arctic-wilderness",
    "reindeer": "sami-heritage",
}


def themes_for_interests(interests: list[str]) -> list[str]:
    """Essential theme ids matching the given interests, first-seen order."""
    themes = [INTEREST_THEMES[i] for i in interests if i in INTEREST_THEMES]
    return list(dict.fromkeys(themes))


def rank_interest_themes(essential_themes: list[str]) -> list[tuple[PilarConfig, float]]:
    """Known themes with the POI weight each adds on its own, heaviest first.

    Ties keep the given order.
    """
    ranked = [
        (ESSENTIAL_THEMES[theme], calculate_poi_weight(essential_themes=[theme]))
        for theme in essential_themes
        if theme in ESSENTIAL_THEMES
    ]
    return sorted(ranked, key=lambda item: -item[1])
