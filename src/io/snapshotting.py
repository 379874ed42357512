from __future__ import annotations

import json
import re
from collections import Counter
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any, Sequence
from uuid import uuid4

import pandas as pd

from src.normalize.schema import CAMP_COLUMNS, StructuredCamp

SNAPSHOT_PREFIX = "camps_snapshot_"
RECORDS_PREFIX = "camps_"
SNAPSHOT_PATTERN = re.compile(r"^camps_snapshot_(\d{8})\.parquet$")


def _coerce_output_date(run_date: date | str | None) -> date:
    if run_date is None:
        return datetime.now(tz=UTC).date()
    if isinstance(run_date, date):
        return run_date
    return datetime.strptime(run_date, "%Y%m%d").date()


def _snapshot_filename(run_date: date) -> str:
    return f"{SNAPSHOT_PREFIX}{run_date.strftime('%Y%m%d')}.parquet"


def _records_filename(run_date: date) -> str:
    return f"{RECORDS_PREFIX}{run_date.strftime('%Y%m%d')}.json"


def camps_to_frame(camps: Sequence[StructuredCamp]) -> pd.DataFrame:
    if not camps:
        return pd.DataFrame(columns=CAMP_COLUMNS)
    frame = pd.DataFrame([camp.to_dict() for camp in camps])
    for numeric_column in ("price_min", "price_max"):
        frame[numeric_column] = frame[numeric_column].astype("Int64")
    return frame[CAMP_COLUMNS]


def list_snapshot_files(processed_dir: Path) -> list[Path]:
    snapshots: list[tuple[datetime, Path]] = []
    for candidate in processed_dir.glob(f"{SNAPSHOT_PREFIX}*.parquet"):
        match = SNAPSHOT_PATTERN.match(candidate.name)
        if not match:
            continue
        snapshots.append((datetime.strptime(match.group(1), "%Y%m%d"), candidate))

    snapshots.sort(key=lambda item: item[0])
    return [item[1] for item in snapshots]


def get_latest_snapshot_path(processed_dir: Path) -> Path | None:
    snapshots = list_snapshot_files(processed_dir)
    if not snapshots:
        return None
    return snapshots[-1]


def load_latest_snapshot_df(processed_dir: Path) -> pd.DataFrame:
    latest_path = get_latest_snapshot_path(processed_dir)
    if latest_path is None:
        raise FileNotFoundError(
            f"No snapshot parquet found in '{processed_dir}'. "
            "Run the converter to generate data/processed/camps_snapshot_YYYYMMDD.parquet."
        )
    return pd.read_parquet(latest_path)


def write_parquet_atomic(df: pd.DataFrame, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        df.to_parquet(temp_path, index=False, engine="pyarrow")
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def write_text_atomic(text: str, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        temp_path.write_text(text, encoding="utf-8")
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def write_json_atomic(payload: Any, output_path: Path) -> None:
    write_text_atomic(json.dumps(payload, indent=2, sort_keys=True), output_path)


def _ranked_counts(values: Sequence[str]) -> dict[str, int]:
    counts = Counter(values)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return dict(ranked)


def summarize_breakdown(camps: Sequence[StructuredCamp]) -> dict[str, dict[str, int]]:
    return {
        "category": _ranked_counts([camp.category for camp in camps]),
        "region": _ranked_counts([camp.region for camp in camps]),
    }


def build_and_write_snapshot(
    camps: Sequence[StructuredCamp],
    *,
    processed_dir: Path,
    run_date: date | str | None = None,
) -> tuple[Path, Path]:
    snapshot_date = _coerce_output_date(run_date)
    snapshot_path = processed_dir / _snapshot_filename(snapshot_date)
    records_path = processed_dir / _records_filename(snapshot_date)

    write_parquet_atomic(camps_to_frame(camps), snapshot_path)
    write_json_atomic([camp.to_dict() for camp in camps], records_path)
    return snapshot_path, records_path
