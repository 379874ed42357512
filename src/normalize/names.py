from __future__ import annotations

import re
from typing import Any

from src.normalize.rules import coerce_text

_DUPLICATE_MARKERS = ("(see ", "- see ")
_SEE_PAREN_PATTERN = re.compile(r"\s*\(see\s+\w+\)\s*", re.IGNORECASE)
_SEE_DASH_PATTERN = re.compile(r"\s*-\s*see\s+\w+\s*", re.IGNORECASE)

_SLUG_UNSAFE_PATTERN = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_DASH_RUN_PATTERN = re.compile(r"-+")
_METRO_PATTERN = re.compile(r"\s*Metro\s*")


def is_duplicate(name: Any) -> bool:
    """True when the listing is a cross-reference such as "Camp X (see General)"."""

    text = coerce_text(name) or ""
    return any(marker in text for marker in _DUPLICATE_MARKERS)


def clean_name(name: Any) -> str:
    text = coerce_text(name) or ""
    text = _SEE_PAREN_PATTERN.sub(" ", text)
    text = _SEE_DASH_PATTERN.sub(" ", text)
    return text.strip()


def slugify(name: str) -> str:
    slug = _SLUG_UNSAFE_PATTERN.sub("", name.lower())
    slug = _WHITESPACE_PATTERN.sub("-", slug)
    slug = _DASH_RUN_PATTERN.sub("-", slug)
    return slug.strip("-")


def format_website(url: Any) -> str | None:
    text = (coerce_text(url) or "").strip()
    if not text:
        return None
    if text.startswith("http"):
        return text
    return f"https://{text}"


def derive_city(city_area: Any, *, default_city: str) -> str:
    """First place named in a City/Area cell, e.g. "Round Rock / Georgetown" -> "Round Rock"."""

    text = coerce_text(city_area)
    if not text:
        return default_city
    city = text.split("/")[0].split("(")[0]
    city = _METRO_PATTERN.sub("", city, count=1).strip()
    return city or default_city
