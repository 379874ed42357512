from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path


_SLUG_SAFE_PATTERN = re.compile(r"[^a-z0-9]+")


def _file_stem(value: str) -> str:
    stem = _SLUG_SAFE_PATTERN.sub("-", value.strip().lower()).strip("-")
    return stem or "export"


def write_raw_payload(
    *,
    source_name: str,
    payload: bytes,
    extension: str,
    raw_root: Path,
    timestamp: datetime | None = None,
    original_name: str | None = None,
) -> Path:
    """Archive the exact input bytes as data/raw/<source>/<stamp>[_<name>].<ext>."""

    resolved_ts = timestamp or datetime.now(tz=UTC)
    stamp = resolved_ts.astimezone(UTC).strftime("%Y%m%dT%H%M%SZ")
    suffix = extension.lstrip(".")

    target_dir = raw_root / source_name
    target_dir.mkdir(parents=True, exist_ok=True)

    filename = f"{stamp}_{_file_stem(original_name)}.{suffix}" if original_name else f"{stamp}.{suffix}"
    output_path = target_dir / filename
    output_path.write_bytes(payload)
    return output_path
