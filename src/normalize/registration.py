from __future__ import annotations

import re
from datetime import date
from functools import lru_cache
from typing import Any

from src.normalize.config import DEFAULT_PLANNING_YEAR
from src.normalize.rules import RULE_ABSENT, RULE_FALLBACK, ParseRule, RuleHit, coerce_text, first_match

UNKNOWN_STATUS = "unknown"


def _constant(value: str):
    def build(match: re.Match[str], text: str) -> str:
        return value

    return build


STATUS_RULES: tuple[ParseRule, ...] = (
    ParseRule("open", re.compile(r"\Aopen\Z|walk-in", re.IGNORECASE), _constant("open")),
    ParseRule("opens_soon", re.compile(r"opens|closing", re.IGNORECASE), _constant("opens_soon")),
    ParseRule("waitlist", re.compile(r"waitlist", re.IGNORECASE), _constant("waitlist")),
    ParseRule("closed", re.compile(r"closed", re.IGNORECASE), _constant("closed")),
)


def match_status(value: Any) -> RuleHit:
    text = coerce_text(value)
    if text is None:
        return RuleHit(rule=RULE_ABSENT, value=UNKNOWN_STATUS)
    hit = first_match(STATUS_RULES, text)
    if hit is None:
        return RuleHit(rule=RULE_FALLBACK, value=UNKNOWN_STATUS)
    return hit


def parse_status(value: Any) -> str:
    return match_status(value).value


def _month_day(year: int):
    def build(match: re.Match[str], text: str) -> str | None:
        try:
            return date(year, int(match.group(1)), int(match.group(2))).isoformat()
        except ValueError:
            return None

    return build


@lru_cache(maxsize=16)
def opens_date_rules(planning_year: int, placeholder_day: int = 15) -> tuple[ParseRule, ...]:
    # "Opens 2/28", "Open 4/1", "Opens Today (2/21)", "Opens Feb 2026"
    return (
        ParseRule("opens_month_day", re.compile(r"Opens?\s+(\d+)/(\d+)"), _month_day(planning_year)),
        ParseRule("today_month_day", re.compile(r"Today\s*\((\d+)/(\d+)\)"), _month_day(planning_year)),
        ParseRule(
            "february",
            re.compile(rf"Feb\s+{planning_year}"),
            _constant(date(planning_year, 2, placeholder_day).isoformat()),
        ),
    )


def parse_opens_date(
    value: Any,
    *,
    planning_year: int = DEFAULT_PLANNING_YEAR,
    placeholder_day: int = 15,
) -> str | None:
    """Return the ISO date registration opens, when the status text states one."""

    text = coerce_text(value)
    if text is None:
        return None
    hit = first_match(opens_date_rules(planning_year, placeholder_day), text)
    return hit.value if hit is not None else None
