from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from src.normalize.rules import coerce_text

DEFAULT_CATEGORY = "multi_activity"
DEFAULT_REGION = "austin_metro"

CATEGORY_MAP: Mapping[str, str] = MappingProxyType(
    {
        "General / Day Camp": "multi_activity",
        "STEM / Tech": "academic_stem",
        "Arts / Music": "arts_music",
        "Theatre / Dance / Performing Arts": "performing_arts",
        "Sports / Fitness": "sports",
        "Outdoor / Nature": "nature_outdoor",
        "Faith-Based": "faith_vbs",
        "Overnight": "overnight",
        "Academic / Writing": "academic_writing",
        "Special Needs / Inclusive": "special_needs",
        "Specialty": "specialty",
    }
)

# Checked in order; the first region with a matching place name wins.
REGION_GAZETTEER: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "hill_country",
        (
            "marble falls",
            "hill country",
            "la grange",
            "rocksprings",
            "bastrop",
            "lockhart",
            "dripping springs",
            "bee cave",
            "bandera",
            "kerrville",
            "blanco",
            "barksdale",
        ),
    ),
    (
        "north_suburbs",
        ("round rock", "georgetown", "cedar park", "pflugerville", "leander", "hutto"),
    ),
    ("south_suburbs", ("buda", "kyle", "san marcos", "wimberley", "sunset valley")),
    ("austin_metro", ("lakeway", "west lake", "westlake")),
)

_BOTH_DAY_AND_OVERNIGHT_MARKERS = ("overnight option", "& overnight")


def classify_category(source_category: Any) -> str:
    text = coerce_text(source_category)
    if text is None:
        return DEFAULT_CATEGORY
    return CATEGORY_MAP.get(text.strip(), DEFAULT_CATEGORY)


def classify_region(city_area: Any) -> str:
    lowered = (coerce_text(city_area) or "").lower()
    for region, places in REGION_GAZETTEER:
        if any(place in lowered for place in places):
            return region
    return DEFAULT_REGION


def classify_camp_type(category: str, notes: Any) -> str:
    if category == "overnight":
        return "overnight"
    lowered = (coerce_text(notes) or "").lower()
    if any(marker in lowered for marker in _BOTH_DAY_AND_OVERNIGHT_MARKERS):
        return "both"
    return "day"
