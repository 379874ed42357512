from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from src.normalize.rules import RULE_ABSENT, RULE_FALLBACK, ParseRule, coerce_text, first_match, to_int

DAYS_PER_WEEK = 5
CONTACT_FOR_PRICING = "Contact for pricing"

_AMOUNT = r"(\d[\d,]*)"
_DOLLAR_PATTERN = re.compile(rf"\${_AMOUNT}")


@dataclass(frozen=True, slots=True)
class PriceRange:
    min: Optional[int]
    max: Optional[int]
    note: str
    rule: str


def _span(low: int, high: int, note: str) -> tuple[int, int, str]:
    return low, high, note


def _either_or(match: re.Match[str], text: str) -> tuple[int, int, str]:
    first = to_int(match.group(1))
    second = to_int(match.group(3))
    return min(first, second), max(first, second), text


def _tiered(match: re.Match[str], text: str) -> tuple[int, int, str]:
    amounts = [to_int(chunk) for chunk in _DOLLAR_PATTERN.findall(text)]
    return min(amounts), max(amounts), text


def _single(match: re.Match[str], text: str) -> tuple[int, int, str]:
    amount = to_int(match.group(1))
    note = "Discounts available" if "discount" in text.lower() else "per week"
    return amount, amount, note


def _day_rate(match: re.Match[str], text: str) -> tuple[int, int, str]:
    daily = to_int(match.group(1))
    return daily * DAYS_PER_WEEK, daily * DAYS_PER_WEEK, f"${daily}/day"


PRICE_RULES: tuple[ParseRule, ...] = (
    ParseRule("free", re.compile(r"\AFREE\Z", re.IGNORECASE), lambda match, text: (0, 0, "FREE")),
    ParseRule(
        "varies",
        re.compile(r"varies|\Acity rates\Z", re.IGNORECASE),
        lambda match, text: (None, None, text),
    ),
    # "$135-500 (sliding scale)"
    ParseRule(
        "range_with_note",
        re.compile(rf"\${_AMOUNT}-{_AMOUNT}\s*\(([^)]+)\)"),
        lambda match, text: _span(to_int(match.group(1)), to_int(match.group(2)), match.group(3)),
    ),
    # "$400/wk or $85/day"
    ParseRule("either_or", re.compile(rf"\${_AMOUNT}/?(\w*)\s+or\s+\${_AMOUNT}"), _either_or),
    # "Member $385 / Standard $425"
    ParseRule(
        "member_standard",
        re.compile(rf"Member\s+\${_AMOUNT}.*Standard\s+\${_AMOUNT}", re.IGNORECASE),
        lambda match, text: _span(to_int(match.group(1)), to_int(match.group(2)), "Member/Standard pricing"),
    ),
    # "$250 ($195 early bird thru 4/15)"
    ParseRule(
        "early_bird",
        re.compile(rf"\${_AMOUNT}\s*\(\${_AMOUNT}\s+early\s+bird", re.IGNORECASE),
        lambda match, text: _span(
            to_int(match.group(2)), to_int(match.group(1)), "Early bird pricing available"
        ),
    ),
    # "$355 half-day / $445 full-day / $545 extended day"
    ParseRule("tiered", re.compile(r"\$\d.*\$\d.*\$\d"), _tiered),
    # "$270 half-day / $420 full-day"
    ParseRule(
        "half_full_day",
        re.compile(rf"\${_AMOUNT}.*half.*\${_AMOUNT}.*full", re.IGNORECASE),
        lambda match, text: _span(
            to_int(match.group(1)), to_int(match.group(2)), "Half-day / Full-day options"
        ),
    ),
    # "$272-365/wk"
    ParseRule(
        "weekly_range",
        re.compile(rf"\${_AMOUNT}-{_AMOUNT}(?:/wk)?"),
        lambda match, text: _span(to_int(match.group(1)), to_int(match.group(2)), "per week"),
    ),
    # "~$599/wk (discounts available)"; a "/day" rate belongs to day_rate.
    ParseRule("approximate_weekly", re.compile(rf"~?\${_AMOUNT}(?![\d,]|/day)(?:/wk)?"), _single),
    # "$60/day"
    ParseRule("day_rate", re.compile(rf"\${_AMOUNT}/day"), _day_rate),
    # "$550/wk"
    ParseRule(
        "single_weekly",
        re.compile(rf"\${_AMOUNT}(?:/wk)?"),
        lambda match, text: _span(to_int(match.group(1)), to_int(match.group(1)), "per week"),
    ),
    # "$2,400-4,595/session"
    ParseRule(
        "session_range",
        re.compile(rf"\${_AMOUNT}-{_AMOUNT}/session"),
        lambda match, text: _span(to_int(match.group(1)), to_int(match.group(2)), "per session"),
    ),
)


def match_prices(text: str) -> PriceRange:
    hit = first_match(PRICE_RULES, text)
    if hit is None:
        return PriceRange(min=None, max=None, note=text, rule=RULE_FALLBACK)
    low, high, note = hit.value
    return PriceRange(min=low, max=high, note=note, rule=hit.rule)


def parse_prices(value: Any) -> PriceRange:
    """Map a free-text weekly price cell to a (min, max, note) range.

    Both bounds are None when pricing must be requested from the camp.
    """

    text = coerce_text(value)
    if text is None:
        return PriceRange(min=None, max=None, note=CONTACT_FOR_PRICING, rule=RULE_ABSENT)
    return match_prices(text)
