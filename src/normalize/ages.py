from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from src.normalize.rules import RULE_ABSENT, RULE_FALLBACK, ParseRule, coerce_text, first_match

GRADE_AGE_OFFSET = 5
RISING_GRADE_AGE_OFFSET = 4
KINDERGARTEN_AGE = 5


@dataclass(frozen=True, slots=True)
class AgeRange:
    min: int
    max: int
    rule: str


ABSENT_AGES = AgeRange(min=5, max=12, rule=RULE_ABSENT)
FALLBACK_AGES = AgeRange(min=5, max=17, rule=RULE_FALLBACK)


def _grade_span(offset: int):
    def build(match: re.Match[str], text: str) -> tuple[int, int]:
        return int(match.group(1)) + offset, int(match.group(2)) + offset

    return build


def _literal_span(match: re.Match[str], text: str) -> tuple[int, int]:
    return int(match.group(1)), int(match.group(2))


def _fixed(low: int, high: int):
    def build(match: re.Match[str], text: str) -> tuple[int, int]:
        return low, high

    return build


_ORDINAL = r"(?:th|st|nd|rd)"

AGE_RULES: tuple[ParseRule, ...] = (
    # "Rising K-3rd"
    ParseRule(
        "rising_kindergarten",
        re.compile(r"Rising\s+K-(\d+)", re.IGNORECASE),
        lambda match, text: (KINDERGARTEN_AGE, int(match.group(1)) + GRADE_AGE_OFFSET),
    ),
    # "Rising 10th-12th grade"
    ParseRule(
        "rising_grades",
        re.compile(rf"Rising\s+(\d+){_ORDINAL}-(\d+){_ORDINAL}", re.IGNORECASE),
        _grade_span(RISING_GRADE_AGE_OFFSET),
    ),
    # "Grades 3-12", "Grade 3-8"
    ParseRule("grades", re.compile(r"Grades?\s+(\d+)-(\d+)", re.IGNORECASE), _grade_span(GRADE_AGE_OFFSET)),
    # "Girls entering 4th-8th grade"
    ParseRule(
        "entering_grades",
        re.compile(rf"entering\s+(\d+){_ORDINAL}-(\d+){_ORDINAL}", re.IGNORECASE),
        _grade_span(GRADE_AGE_OFFSET),
    ),
    # "3-Grade 9": the leading number is an age, only the grade is offset.
    ParseRule(
        "age_then_grade",
        re.compile(r"(\d+)-Grade\s+(\d+)", re.IGNORECASE),
        lambda match, text: (int(match.group(1)), int(match.group(2)) + GRADE_AGE_OFFSET),
    ),
    # "K-13"
    ParseRule(
        "kindergarten_to_age",
        re.compile(r"K-(\d+)", re.IGNORECASE),
        lambda match, text: (KINDERGARTEN_AGE, int(match.group(1))),
    ),
    ParseRule("high_school", re.compile(r"high school", re.IGNORECASE), _fixed(14, 18)),
    # "~7-17", "4-13"
    ParseRule("age_range", re.compile(r"~?(\d+)-(\d+)"), _literal_span),
    # "5-12 (teens 12-15 select sites)"
    ParseRule("age_range_with_note", re.compile(r"(\d+)-(\d+)\s*\("), _literal_span),
    # "Children of fallen military"
    ParseRule("children", re.compile(r"children", re.IGNORECASE), _fixed(6, 17)),
)


def match_ages(text: str) -> AgeRange:
    hit = first_match(AGE_RULES, text)
    if hit is None:
        return FALLBACK_AGES
    low, high = hit.value
    return AgeRange(min=low, max=high, rule=hit.rule)


def parse_ages(value: Any) -> AgeRange:
    """Map free-text age/grade eligibility to an age span.

    Grades convert to ages by adding 5 (kindergarten is age 5). The span is
    not checked for ``min <= max``; see ``normalize.quality``.
    """

    text = coerce_text(value)
    if text is None:
        return ABSENT_AGES
    return match_ages(text)
