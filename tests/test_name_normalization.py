from __future__ import annotations

import pytest

from src.normalize.names import clean_name, derive_city, format_website, is_duplicate, slugify


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Camp Longhorn (see General)", True),
        ("Camp Fun - see Faith", True),
        ("Camp Fun", False),
        ("Camp Fun (See General)", False),
        ("Seesaw Camp", False),
    ],
)
def test_is_duplicate(name: str, expected: bool) -> None:
    assert is_duplicate(name) is expected


def test_clean_name_strips_markers_case_insensitively() -> None:
    assert clean_name("Camp Fun (See General)") == "Camp Fun"
    assert clean_name("Camp Fun - SEE Faith") == "Camp Fun"
    assert clean_name("Camp A (see B) Day") == "Camp A Day"
    assert clean_name("  Camp Fun  ") == "Camp Fun"
    assert clean_name("Camp Fun") == "Camp Fun"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Camp Longhorn", "camp-longhorn"),
        ("Zach Theatre: Summer   Camp!", "zach-theatre-summer-camp"),
        ("  -- Rock & Roll -- ", "rock-roll"),
        ("St. Mary's VBS 2026", "st-marys-vbs-2026"),
        ("", ""),
    ],
)
def test_slugify(name: str, expected: str) -> None:
    assert slugify(name) == expected


@pytest.mark.parametrize(
    "name",
    ["Camp Longhorn", "  -- Rock & Roll -- ", "Ünïcödé Camp", "a--b  c", "-", "Kids' Art\tStudio\n"],
)
def test_slugify_is_idempotent(name: str) -> None:
    once = slugify(name)

    assert slugify(once) == once


def test_format_website_adds_protocol() -> None:
    assert format_website("camplonghorn.com") == "https://camplonghorn.com"
    assert format_website("http://example.org") == "http://example.org"
    assert format_website("") is None
    assert format_website(None) is None


def test_derive_city() -> None:
    assert derive_city("Round Rock / Georgetown", default_city="Austin") == "Round Rock"
    assert derive_city("Austin Metro", default_city="Austin") == "Austin"
    assert derive_city("Austin (Zilker)", default_city="Austin") == "Austin"
    assert derive_city(None, default_city="Austin") == "Austin"
    assert derive_city("(varies)", default_city="Austin") == "Austin"
