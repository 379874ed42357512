from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.normalize.config import NormalizeConfig, load_config


def test_baseline_config_targets_2026_in_austin() -> None:
    config = NormalizeConfig.baseline()

    assert config.planning_year == 2026
    assert config.default_city == "Austin"
    assert config.state == "TX"


def test_from_mapping_falls_back_to_baseline_values() -> None:
    config = NormalizeConfig.from_mapping({"planning_year": "2027"})

    assert config.to_dict() == {
        "planning_year": 2027,
        "default_city": "Austin",
        "state": "TX",
        "feb_placeholder_day": 15,
    }


@pytest.mark.parametrize(
    "payload",
    [{"planning_year": 26}, {"feb_placeholder_day": 30}, {"default_city": "  "}],
)
def test_invalid_config_values_raise(payload: dict) -> None:
    with pytest.raises(ValueError):
        NormalizeConfig.from_mapping(payload)


def test_load_config_reads_file_and_applies_cli_override(tmp_path: Path) -> None:
    config_path = tmp_path / "normalize.json"
    config_path.write_text(json.dumps({"planning_year": 2027, "default_city": "Kyle"}), encoding="utf-8")

    from_file = load_config(config_path)
    overridden = load_config(config_path, planning_year=2028)

    assert (from_file.planning_year, from_file.default_city) == (2027, "Kyle")
    assert (overridden.planning_year, overridden.default_city) == (2028, "Kyle")
    assert load_config(None) == NormalizeConfig.baseline()


def test_load_config_rejects_non_object_payload(tmp_path: Path) -> None:
    config_path = tmp_path / "normalize.json"
    config_path.write_text("[2027]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(config_path)
