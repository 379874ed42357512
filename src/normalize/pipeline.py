from __future__ import annotations

import concurrent.futures
import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from src.normalize.ages import parse_ages
from src.normalize.classify import classify_camp_type, classify_category, classify_region
from src.normalize.config import NormalizeConfig
from src.normalize.names import clean_name, derive_city, format_website, is_duplicate, slugify
from src.normalize.prices import parse_prices
from src.normalize.registration import match_status, parse_opens_date
from src.normalize.rules import RULE_FALLBACK, coerce_text
from src.normalize.schema import (
    COL_AGES,
    COL_CATEGORY,
    COL_CITY_AREA,
    COL_LOCATION,
    COL_NAME,
    COL_NOTES,
    COL_PRICE,
    COL_REGISTRATION,
    COL_WEBSITE,
    WEEKDAYS,
    StructuredCamp,
)
from src.normalize.tags import derive_tags

logger = logging.getLogger(__name__)

UNASSIGNED_ID = 0


@dataclass(frozen=True, slots=True)
class FallbackHit:
    """A field whose raw text matched none of its rules."""

    field: str
    raw_text: str


@dataclass(frozen=True, slots=True)
class RowResult:
    camp: StructuredCamp
    fallbacks: tuple[FallbackHit, ...] = ()


def _optional_text(value: Any) -> str | None:
    text = coerce_text(value)
    if text is None or not text.strip():
        return None
    return text


def normalize_row(row: Mapping[str, Any], config: NormalizeConfig | None = None) -> RowResult | None:
    """Normalize one raw spreadsheet row; duplicate cross-references return None.

    The returned camp carries a placeholder id until `assign_ids` runs.
    """

    resolved = config or NormalizeConfig.baseline()
    raw_name = row.get(COL_NAME)
    if is_duplicate(raw_name):
        return None

    name = clean_name(raw_name)
    source_category = row.get(COL_CATEGORY)
    category = classify_category(source_category)
    ages = parse_ages(row.get(COL_AGES))
    prices = parse_prices(row.get(COL_PRICE))
    raw_status = row.get(COL_REGISTRATION)
    status = match_status(raw_status)
    notes = row.get(COL_NOTES)
    location = _optional_text(row.get(COL_LOCATION))

    fallbacks: list[FallbackHit] = []
    if ages.rule == RULE_FALLBACK:
        fallbacks.append(FallbackHit("ages", coerce_text(row.get(COL_AGES)) or ""))
    if prices.rule == RULE_FALLBACK:
        fallbacks.append(FallbackHit("price", coerce_text(row.get(COL_PRICE)) or ""))
    if status.rule == RULE_FALLBACK:
        fallbacks.append(FallbackHit("registration_status", coerce_text(raw_status) or ""))

    camp = StructuredCamp(
        id=UNASSIGNED_ID,
        name=name,
        slug=slugify(name),
        category=category,
        description=None,
        ages_min=ages.min,
        ages_max=ages.max,
        duration="1 week",
        days_of_week=WEEKDAYS,
        location_name=location,
        address=location,
        city=derive_city(row.get(COL_CITY_AREA), default_city=resolved.default_city),
        state=resolved.state,
        price_min=prices.min,
        price_max=prices.max,
        price_note=prices.note,
        camp_type=classify_camp_type(category, notes),
        schedule_type="full_day",
        region=classify_region(row.get(COL_CITY_AREA)),
        website=format_website(row.get(COL_WEBSITE)),
        registration_status=status.value,
        registration_opens_date=parse_opens_date(
            raw_status,
            planning_year=resolved.planning_year,
            placeholder_day=resolved.feb_placeholder_day,
        ),
        fills_fast=False,
        notes=coerce_text(notes) or None,
        tags=derive_tags(source_category, raw_name, notes),
        is_active=True,
    )
    return RowResult(camp=camp, fallbacks=tuple(fallbacks))


def assign_ids(results: Iterable[RowResult | None]) -> list[RowResult]:
    """Number surviving rows 1..N in input order; dropped rows consume no id."""

    assigned: list[RowResult] = []
    for result in results:
        if result is None:
            continue
        camp = dataclasses.replace(result.camp, id=len(assigned) + 1)
        assigned.append(dataclasses.replace(result, camp=camp))
    return assigned


def normalize_with_results(
    rows: Sequence[Mapping[str, Any]],
    *,
    config: NormalizeConfig | None = None,
    concurrency: int = 1,
) -> list[RowResult]:
    resolved = config or NormalizeConfig.baseline()
    if concurrency > 1 and len(rows) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=concurrency) as executor:
            mapped = list(executor.map(lambda row: normalize_row(row, resolved), rows))
    else:
        mapped = [normalize_row(row, resolved) for row in rows]

    results = assign_ids(mapped)
    logger.debug(
        "Normalized %d of %d rows (%d duplicates skipped).",
        len(results),
        len(rows),
        len(rows) - len(results),
    )
    return results


def normalize(
    rows: Sequence[Mapping[str, Any]],
    *,
    config: NormalizeConfig | None = None,
    concurrency: int = 1,
) -> list[StructuredCamp]:
    return [result.camp for result in normalize_with_results(rows, config=config, concurrency=concurrency)]
