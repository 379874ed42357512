from __future__ import annotations

from io import BytesIO
from typing import Any

import pandas as pd

from src.ingest.base import RawRowSource

# Only empty cells are missing; "N/A" or "None" typed into a cell is source text.
_NA_OPTIONS: dict[str, Any] = {"keep_default_na": False, "na_values": [""]}


def frame_to_rows(frame: pd.DataFrame) -> list[dict[str, Any]]:
    """Convert a sheet to row mappings, with blank cells as None and headers trimmed."""

    if frame.empty:
        return []
    cleaned = frame.rename(columns=lambda column: str(column).strip())
    cleaned = cleaned.dropna(how="all")
    cleaned = cleaned.astype(object).where(pd.notna(cleaned), None)
    return cleaned.to_dict(orient="records")


class CsvSource(RawRowSource):
    name = "csv_export"
    extension = "csv"

    def parse(self, raw_content: bytes) -> list[dict[str, Any]]:
        frame = pd.read_csv(BytesIO(raw_content), dtype=str, encoding="utf-8-sig", **_NA_OPTIONS)
        return frame_to_rows(frame)


class ExcelSource(RawRowSource):
    name = "excel_export"

    def __init__(self, sheet_name: str | int = 0, extension: str = "xlsx") -> None:
        self.sheet_name = sheet_name
        self.extension = extension.lstrip(".").lower()

    def parse(self, raw_content: bytes) -> list[dict[str, Any]]:
        frame = pd.read_excel(
            BytesIO(raw_content),
            sheet_name=self.sheet_name,
            engine="openpyxl",
            **_NA_OPTIONS,
        )
        return frame_to_rows(frame)
