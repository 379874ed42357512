from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

DEFAULT_PLANNING_YEAR = 2026


@dataclass(frozen=True, slots=True)
class NormalizeConfig:
    """Caller-supplied settings; `planning_year` dates registration openings."""

    planning_year: int = DEFAULT_PLANNING_YEAR
    default_city: str = "Austin"
    state: str = "TX"
    feb_placeholder_day: int = 15

    def __post_init__(self) -> None:
        if not 1000 <= int(self.planning_year) <= 9999:
            raise ValueError(f"planning_year must be a four-digit year (received {self.planning_year}).")
        if not 1 <= int(self.feb_placeholder_day) <= 28:
            raise ValueError(
                f"feb_placeholder_day must be between 1 and 28 (received {self.feb_placeholder_day})."
            )
        if not str(self.default_city).strip():
            raise ValueError("default_city must be a non-empty string.")

    @classmethod
    def baseline(cls) -> NormalizeConfig:
        return cls()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> NormalizeConfig:
        values = payload or {}
        baseline = cls.baseline()
        return cls(
            planning_year=int(values.get("planning_year", baseline.planning_year)),
            default_city=str(values.get("default_city", baseline.default_city)),
            state=str(values.get("state", baseline.state)),
            feb_placeholder_day=int(values.get("feb_placeholder_day", baseline.feb_placeholder_day)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "planning_year": self.planning_year,
            "default_city": self.default_city,
            "state": self.state,
            "feb_placeholder_day": self.feb_placeholder_day,
        }


def load_config(config_path: Path | None, *, planning_year: int | None = None) -> NormalizeConfig:
    payload: dict[str, Any] = {}
    if config_path is not None:
        loaded = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file '{config_path}' must contain a JSON object.")
        payload.update(loaded)
    if planning_year is not None:
        payload["planning_year"] = planning_year
    return NormalizeConfig.from_mapping(payload)
