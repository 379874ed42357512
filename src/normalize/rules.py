from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable

import pandas as pd

RULE_FALLBACK = "fallback"
RULE_ABSENT = "absent"


@dataclass(frozen=True, slots=True)
class ParseRule:
    """One entry of an ordered rule table: a pattern and the value it extracts."""

    name: str
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str], str], Any]

    def apply(self, text: str) -> Any | None:
        match = self.pattern.search(text)
        if match is None:
            return None
        return self.build(match, text)


@dataclass(frozen=True, slots=True)
class RuleHit:
    rule: str
    value: Any

    @property
    def is_fallback(self) -> bool:
        return self.rule == RULE_FALLBACK


def first_match(rules: Iterable[ParseRule], text: str) -> RuleHit | None:
    for rule in rules:
        value = rule.apply(text)
        if value is not None:
            return RuleHit(rule=rule.name, value=value)
    return None


def coerce_text(value: Any) -> str | None:
    """Return raw cell text, or None when the cell is absent (None/NaN/NA)."""

    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return str(int(value))
        return str(value)
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return str(value)


def to_int(chunk: str) -> int:
    return int(chunk.replace(",", ""))
