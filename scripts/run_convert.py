from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.ingest.base import is_remote
from src.ingest.cache import write_raw_payload
from src.ingest.http import PoliteHttpClient
from src.ingest.registry import resolve_source
from src.io.seed_sql import write_seed_sql
from src.io.snapshotting import build_and_write_snapshot, summarize_breakdown, write_json_atomic
from src.normalize.config import NormalizeConfig, load_config
from src.normalize.pipeline import RowResult, normalize_with_results
from src.normalize.quality import build_quality_warnings, summarize_fallbacks

logger = logging.getLogger("run_convert")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a raw camp spreadsheet export into structured camps.")
    parser.add_argument("input", type=str, help="Path or http(s) URL of a .json, .csv or .xlsx export.")
    parser.add_argument("--sheet", type=str, default=None, help="Sheet name for workbook exports.")
    parser.add_argument("--raw-dir", type=Path, default=ROOT_DIR / "data" / "raw")
    parser.add_argument("--processed-dir", type=Path, default=ROOT_DIR / "data" / "processed")
    parser.add_argument("--report-dir", type=Path, default=ROOT_DIR / "reports" / "convert_runs")
    parser.add_argument("--seed-sql", type=Path, default=None, help="Also write an INSERT seed file here.")
    parser.add_argument("--config", type=Path, default=None, help="JSON file of normalization settings.")
    parser.add_argument("--planning-year", type=int, default=None)
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Run date in YYYYMMDD format. Defaults to current UTC date.",
    )
    parser.add_argument("--concurrency", type=int, default=1)
    parser.add_argument("--request-timeout-seconds", type=float, default=20.0)
    return parser.parse_args()


def _resolve_repo_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return ROOT_DIR / path


def _coerce_run_date(run_date: str | None) -> date:
    if run_date is None:
        return datetime.now(tz=UTC).date()
    return datetime.strptime(run_date, "%Y%m%d").date()


def _exception_summary(exc: Exception) -> dict[str, str]:
    return {"type": type(exc).__name__, "message": str(exc)}


def _input_name(location: str) -> str:
    return Path(location.split("?", 1)[0]).stem


def run_convert(
    input_location: str,
    *,
    date: date | None = None,
    sheet_name: str | None = None,
    config: NormalizeConfig | None = None,
    raw_dir: Path | None = None,
    processed_dir: Path | None = None,
    report_dir: Path | None = None,
    seed_sql_path: Path | None = None,
    concurrency: int = 1,
    request_timeout_seconds: float = 20.0,
) -> dict[str, Any]:
    started_at = datetime.now(tz=UTC)
    resolved_config = config or NormalizeConfig.baseline()
    resolved_raw_dir = _resolve_repo_path(raw_dir or (ROOT_DIR / "data" / "raw"))
    resolved_processed_dir = _resolve_repo_path(processed_dir or (ROOT_DIR / "data" / "processed"))
    resolved_report_dir = _resolve_repo_path(report_dir or (ROOT_DIR / "reports" / "convert_runs"))
    effective_run_date = date or started_at.date()
    report_path = resolved_report_dir / f"convert_{started_at.strftime('%Y%m%dT%H%M%SZ')}.json"

    source_name: str | None = None
    raw_path: Path | None = None
    rows: list[dict[str, Any]] = []
    results: list[RowResult] = []
    duplicates_skipped = 0
    quality_warnings: list[str] = []
    snapshot_path: Path | None = None
    records_path: Path | None = None
    seed_path: Path | None = None
    run_exception: dict[str, str] | None = None

    try:
        source = resolve_source(input_location, sheet_name=sheet_name)
        source_name = source.name
        if is_remote(input_location):
            with PoliteHttpClient(timeout_seconds=request_timeout_seconds) as client:
                raw_response = source.fetch(input_location, client)
        else:
            raw_response = source.fetch(input_location)

        raw_path = write_raw_payload(
            source_name=source.name,
            payload=raw_response.content,
            extension=raw_response.extension,
            raw_root=resolved_raw_dir,
            timestamp=raw_response.fetched_at,
            original_name=_input_name(input_location),
        )
        rows = source.parse(raw_response.content)
        logger.info("Source=%s cached=%s rows=%d", source.name, raw_path, len(rows))

        results = normalize_with_results(rows, config=resolved_config, concurrency=concurrency)
        camps = [result.camp for result in results]
        duplicates_skipped = len(rows) - len(camps)
        logger.info("Converted %d camps (skipped %d duplicates)", len(camps), duplicates_skipped)

        quality_warnings = build_quality_warnings(results)
        for warning in quality_warnings:
            logger.warning("Data quality: %s", warning)

        snapshot_path, records_path = build_and_write_snapshot(
            camps,
            processed_dir=resolved_processed_dir,
            run_date=effective_run_date,
        )
        if seed_sql_path is not None:
            seed_path = write_seed_sql(camps, _resolve_repo_path(seed_sql_path))
            logger.info("Wrote seed SQL: %s", seed_path)
    except Exception as exc:
        run_exception = _exception_summary(exc)
        logger.exception("Conversion failed for %s.", input_location)
    finally:
        finished_at = datetime.now(tz=UTC)
        camps = [result.camp for result in results]
        report_payload = {
            "status": "failed" if run_exception is not None else "success",
            "run_started_at": started_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "run_finished_at": finished_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "duration_seconds": round((finished_at - started_at).total_seconds(), 3),
            "run_date": effective_run_date.isoformat(),
            "input": input_location,
            "source": source_name,
            "config": {**resolved_config.to_dict(), "concurrency": concurrency},
            "records": {
                "rows_read": len(rows),
                "camps_converted": len(camps),
                "duplicates_skipped": duplicates_skipped,
            },
            "breakdown": summarize_breakdown(camps),
            "fallback_counts": summarize_fallbacks(results),
            "quality_warnings": quality_warnings,
            "artifact_paths": {
                "raw": str(raw_path.resolve()) if raw_path else None,
                "snapshot": str(snapshot_path.resolve()) if snapshot_path else None,
                "records": str(records_path.resolve()) if records_path else None,
                "seed_sql": str(seed_path.resolve()) if seed_path else None,
                "report": str(report_path.resolve()),
            },
            "exception_summary": run_exception,
        }
        write_json_atomic(report_payload, report_path)
    return report_payload


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = load_config(args.config, planning_year=args.planning_year)
    report = run_convert(
        args.input,
        date=_coerce_run_date(args.date),
        sheet_name=args.sheet,
        config=config,
        raw_dir=args.raw_dir,
        processed_dir=args.processed_dir,
        report_dir=args.report_dir,
        seed_sql_path=args.seed_sql,
        concurrency=args.concurrency,
        request_timeout_seconds=args.request_timeout_seconds,
    )

    print(f"Run status: {report['status']}")
    print(
        f"Converted {report['records']['camps_converted']} camps "
        f"(skipped {report['records']['duplicates_skipped']} duplicates)"
    )
    print(f"Wrote snapshot: {report['artifact_paths']['snapshot']}")
    print(f"Wrote records: {report['artifact_paths']['records']}")
    print(f"Wrote report: {report['artifact_paths']['report']}")
    for label, counts in report["breakdown"].items():
        print(f"\n{label.title()} breakdown:")
        for key, count in counts.items():
            print(f"  {key}: {count}")
    return 0 if report["status"] != "failed" else 1


if __name__ == "__main__":
    raise SystemExit(main())
