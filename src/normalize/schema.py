from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal, Optional

CampCategory = Literal[
    "academic_stem",
    "arts_music",
    "performing_arts",
    "sports",
    "nature_outdoor",
    "faith_vbs",
    "overnight",
    "academic_writing",
    "special_needs",
    "specialty",
    "multi_activity",
]
CampRegion = Literal[
    "austin_metro",
    "austin_church_vbs",
    "north_suburbs",
    "south_suburbs",
    "hill_country",
]
CampType = Literal["day", "overnight", "both"]
RegistrationStatus = Literal["open", "opens_soon", "waitlist", "closed", "unknown"]

CAMP_CATEGORIES: tuple[str, ...] = CampCategory.__args__
CAMP_REGIONS: tuple[str, ...] = CampRegion.__args__
CAMP_TYPES: tuple[str, ...] = CampType.__args__
REGISTRATION_STATUSES: tuple[str, ...] = RegistrationStatus.__args__

# Spreadsheet column labels consumed from each raw row.
COL_NAME = "Camp Name"
COL_CATEGORY = "Category"
COL_AGES = "Ages"
COL_PRICE = "Price ($/wk or noted)"
COL_CITY_AREA = "City/Area"
COL_LOCATION = "Location / Address"
COL_REGISTRATION = "Registration Status"
COL_NOTES = "Discounts / Notes"
COL_WEBSITE = "Website"

RAW_COLUMNS = [
    COL_NAME,
    COL_CATEGORY,
    COL_AGES,
    COL_PRICE,
    COL_CITY_AREA,
    COL_LOCATION,
    COL_REGISTRATION,
    COL_NOTES,
    COL_WEBSITE,
]

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri")


@dataclass(frozen=True, slots=True)
class StructuredCamp:
    """Canonical normalized camp record produced by the conversion pipeline."""

    id: int
    name: str
    slug: str
    category: CampCategory
    description: Optional[str]
    ages_min: int
    ages_max: int
    duration: str
    days_of_week: tuple[str, ...]
    location_name: Optional[str]
    address: Optional[str]
    city: str
    state: str
    price_min: Optional[int]
    price_max: Optional[int]
    price_note: str
    camp_type: CampType
    schedule_type: str
    region: CampRegion
    website: Optional[str]
    registration_status: RegistrationStatus
    registration_opens_date: Optional[str]
    fills_fast: bool
    notes: Optional[str]
    tags: tuple[str, ...]
    is_active: bool

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["days_of_week"] = list(self.days_of_week)
        payload["tags"] = list(self.tags)
        return payload


CAMP_COLUMNS = list(StructuredCamp.__dataclass_fields__)
