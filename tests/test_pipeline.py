from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from src.normalize.config import NormalizeConfig
from src.normalize.pipeline import assign_ids, normalize, normalize_row, normalize_with_results
from src.normalize.schema import CAMP_COLUMNS

FIXTURE_PATH = Path(__file__).resolve().parent / "resources" / "raw_camp_sample.json"


def _fixture_rows() -> list[dict]:
    return json.loads(FIXTURE_PATH.read_text(encoding="utf-8"))["2026 Camps"]


def test_duplicate_rows_are_dropped_without_consuming_ids() -> None:
    rows = [
        {"Camp Name": "Camp Longhorn", "Category": "Overnight"},
        {"Camp Name": "Camp Longhorn (see General)", "Category": "General / Day Camp"},
        {"Camp Name": "Camp Fun", "Category": "General / Day Camp"},
    ]

    camps = normalize(rows)

    assert [camp.id for camp in camps] == [1, 2]
    assert [camp.name for camp in camps] == ["Camp Longhorn", "Camp Fun"]


def test_fixture_converts_to_expected_records() -> None:
    camps = normalize(_fixture_rows(), config=NormalizeConfig(planning_year=2026))

    assert [camp.id for camp in camps] == [1, 2, 3, 4]
    longhorn, ninjas, zilker, mystery = camps

    assert longhorn.slug == "camp-longhorn"
    assert longhorn.category == "overnight"
    assert longhorn.camp_type == "overnight"
    assert (longhorn.ages_min, longhorn.ages_max) == (7, 17)
    assert (longhorn.price_min, longhorn.price_max, longhorn.price_note) == (2400, 4595, "per week")
    assert longhorn.region == "hill_country"
    assert longhorn.city == "Burnet"
    assert longhorn.registration_status == "waitlist"
    assert longhorn.website == "https://camplonghorn.com"
    assert longhorn.tags == ("sibling discount", "swimming", "overnight", "sleepaway")

    assert ninjas.category == "academic_stem"
    assert (ninjas.ages_min, ninjas.ages_max) == (5, 8)
    assert (ninjas.price_min, ninjas.price_max) == (195, 250)
    assert ninjas.region == "north_suburbs"
    assert ninjas.registration_status == "opens_soon"
    assert ninjas.registration_opens_date == "2026-02-28"
    assert ninjas.tags == ("scholarships", "STEM", "coding", "robotics")
    assert ninjas.location_name == ninjas.address == "201 University Oaks Blvd"

    assert zilker.category == "performing_arts"
    assert (zilker.ages_min, zilker.ages_max) == (8, 17)
    assert (zilker.price_min, zilker.price_max, zilker.price_note) == (0, 0, "FREE")
    assert zilker.registration_opens_date == "2026-02-15"
    assert zilker.city == "Austin"
    assert zilker.tags == ("arts", "music", "theater")

    assert mystery.category == "multi_activity"
    assert (mystery.ages_min, mystery.ages_max) == (5, 17)
    assert (mystery.price_min, mystery.price_max) == (None, None)
    assert mystery.price_note == "Ask at front desk"
    assert mystery.registration_status == "unknown"
    assert mystery.website is None
    assert mystery.notes is None
    assert mystery.location_name is None


def test_record_defaults_and_configured_location_fields() -> None:
    result = normalize_row(
        {"Camp Name": "Camp Fun"},
        NormalizeConfig(planning_year=2027, default_city="Round Rock", state="TX"),
    )

    assert result is not None
    camp = result.camp
    assert camp.id == 0
    assert camp.city == "Round Rock"
    assert camp.state == "TX"
    assert camp.days_of_week == ("Mon", "Tue", "Wed", "Thu", "Fri")
    assert camp.duration == "1 week"
    assert camp.schedule_type == "full_day"
    assert camp.description is None
    assert camp.fills_fast is False
    assert camp.is_active is True
    assert (camp.ages_min, camp.ages_max) == (5, 12)
    assert camp.price_note == "Contact for pricing"
    assert result.fallbacks == ()


def test_normalize_row_returns_none_for_duplicates() -> None:
    assert normalize_row({"Camp Name": "Camp Fun - see Faith"}) is None


def test_normalize_is_total_for_missing_and_nan_cells() -> None:
    rows = [{}, {"Camp Name": float("nan"), "Ages": float("nan"), "Price ($/wk or noted)": pd.NA}]

    camps = normalize(rows)

    assert [camp.id for camp in camps] == [1, 2]
    assert all(camp.name == "" and camp.slug == "" for camp in camps)


def test_fallback_hits_are_reported_per_field() -> None:
    results = normalize_with_results(_fixture_rows())

    mystery = results[-1]
    assert [hit.field for hit in mystery.fallbacks] == ["ages", "price", "registration_status"]
    assert mystery.fallbacks[0].raw_text == "Varies"
    assert all(result.fallbacks == () for result in results[:-1])


def test_concurrent_mapping_preserves_input_order_and_ids() -> None:
    rows = [
        {"Camp Name": f"Camp {index}" if index % 3 else f"Camp {index} (see General)"}
        for index in range(1, 40)
    ]

    sequential = normalize(rows)
    concurrent = normalize(rows, concurrency=4)

    assert sequential == concurrent
    assert [camp.id for camp in concurrent] == list(range(1, len(concurrent) + 1))


def test_assign_ids_numbers_only_surviving_rows() -> None:
    first = normalize_row({"Camp Name": "A"})
    second = normalize_row({"Camp Name": "B"})

    assigned = assign_ids([first, None, None, second])

    assert [(result.camp.id, result.camp.name) for result in assigned] == [(1, "A"), (2, "B")]


def test_to_dict_covers_every_column() -> None:
    camp = normalize([{"Camp Name": "Camp Fun", "Discounts / Notes": "Pool days"}])[0]

    payload = camp.to_dict()

    assert list(payload) == CAMP_COLUMNS
    assert payload["tags"] == ["swimming"]
    assert payload["days_of_week"] == ["Mon", "Tue", "Wed", "Thu", "Fri"]


def test_notes_pass_through_unless_empty() -> None:
    camps = normalize(
        [
            {"Camp Name": "Blank Notes", "Discounts / Notes": ""},
            {"Camp Name": "Spaced Notes", "Discounts / Notes": "  "},
            {"Camp Name": "Real Notes", "Discounts / Notes": " Bring lunch "},
        ]
    )

    assert [camp.notes for camp in camps] == [None, "  ", " Bring lunch "]
