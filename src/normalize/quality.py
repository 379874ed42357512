from __future__ import annotations

from collections import Counter
from typing import Any, Sequence

from src.normalize.pipeline import RowResult


def _label(result: RowResult) -> str:
    return f"Camp {result.camp.id} ({result.camp.name!r})"


def build_quality_warnings(results: Sequence[RowResult]) -> list[str]:
    """Post-hoc checks over a normalized batch; never raises on bad data."""

    warnings: list[str] = []
    for result in results:
        camp = result.camp
        if camp.ages_min > camp.ages_max:
            warnings.append(
                f"{_label(result)}: ages_min {camp.ages_min} is greater than ages_max {camp.ages_max}."
            )
        if camp.price_min is not None and camp.price_max is not None and camp.price_min > camp.price_max:
            warnings.append(
                f"{_label(result)}: price_min {camp.price_min} is greater than price_max {camp.price_max}."
            )
        for hit in result.fallbacks:
            warnings.append(
                f"{_label(result)}: {hit.field} text {hit.raw_text!r} matched no rule; default applied."
            )
    return warnings


def summarize_fallbacks(results: Sequence[RowResult]) -> dict[str, Any]:
    counts = Counter(hit.field for result in results for hit in result.fallbacks)
    return {field: counts[field] for field in sorted(counts)}
