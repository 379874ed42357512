from __future__ import annotations

import json
from typing import Any

from src.ingest.base import RawRowSource

DEFAULT_SHEET_NAME = "2026 Camps"


class JsonExportSource(RawRowSource):
    """Workbook dump shaped as {sheet name: [row objects]}, or a bare row list."""

    name = "json_export"
    extension = "json"

    def __init__(self, sheet_name: str = DEFAULT_SHEET_NAME) -> None:
        self.sheet_name = sheet_name

    def parse(self, raw_content: bytes) -> list[dict[str, Any]]:
        loaded = json.loads(raw_content.decode("utf-8-sig"))
        if isinstance(loaded, dict):
            if self.sheet_name not in loaded:
                available = ", ".join(sorted(str(key) for key in loaded)) or "none"
                raise ValueError(f"Sheet '{self.sheet_name}' not found in export (available: {available}).")
            candidates = loaded[self.sheet_name]
        else:
            candidates = loaded

        if not isinstance(candidates, list):
            raise ValueError(f"Expected a list of rows for sheet '{self.sheet_name}'.")
        return [_strip_keys(item) for item in candidates if isinstance(item, dict)]


def _strip_keys(row: dict[str, Any]) -> dict[str, Any]:
    return {str(key).strip(): value for key, value in row.items()}
