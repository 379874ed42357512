from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from scripts.run_convert import run_convert
from src.normalize.config import NormalizeConfig

FIXTURE_PATH = Path(__file__).resolve().parent / "resources" / "raw_camp_sample.json"


def test_run_convert_writes_artifacts_and_report(tmp_path: Path) -> None:
    report = run_convert(
        str(FIXTURE_PATH),
        date=date(2026, 2, 21),
        config=NormalizeConfig(planning_year=2026),
        raw_dir=tmp_path / "raw",
        processed_dir=tmp_path / "processed",
        report_dir=tmp_path / "reports",
        seed_sql_path=tmp_path / "seed" / "seed.sql",
    )

    assert report["status"] == "success"
    assert report["source"] == "json_export"
    assert report["records"] == {"rows_read": 6, "camps_converted": 4, "duplicates_skipped": 2}
    assert report["fallback_counts"] == {"ages": 1, "price": 1, "registration_status": 1}
    assert len(report["quality_warnings"]) == 3
    assert report["breakdown"]["region"]["austin_metro"] == 2

    for key in ("raw", "snapshot", "records", "seed_sql", "report"):
        assert Path(report["artifact_paths"][key]).exists()

    persisted = json.loads(Path(report["artifact_paths"]["report"]).read_text(encoding="utf-8"))
    assert persisted["status"] == "success"
    assert persisted["config"]["planning_year"] == 2026

    records = json.loads(Path(report["artifact_paths"]["records"]).read_text(encoding="utf-8"))
    assert [record["id"] for record in records] == [1, 2, 3, 4]


def test_run_convert_reports_failure_for_unsupported_input(tmp_path: Path) -> None:
    report = run_convert(
        str(tmp_path / "camps.txt"),
        raw_dir=tmp_path / "raw",
        processed_dir=tmp_path / "processed",
        report_dir=tmp_path / "reports",
    )

    assert report["status"] == "failed"
    assert report["exception_summary"]["type"] == "ValueError"
    assert report["artifact_paths"]["snapshot"] is None
    assert Path(report["artifact_paths"]["report"]).exists()


def test_run_convert_reports_failure_when_snapshot_write_fails(monkeypatch, tmp_path: Path) -> None:
    def _raise_disk_full(*args, **kwargs):  # noqa: ANN002, ANN003
        raise OSError("disk full")

    monkeypatch.setattr("scripts.run_convert.build_and_write_snapshot", _raise_disk_full)

    report = run_convert(
        str(FIXTURE_PATH),
        raw_dir=tmp_path / "raw",
        processed_dir=tmp_path / "processed",
        report_dir=tmp_path / "reports",
    )

    assert report["status"] == "failed"
    assert report["exception_summary"] == {"type": "OSError", "message": "disk full"}
    assert report["records"]["camps_converted"] == 4
    assert report["artifact_paths"]["raw"] is not None
