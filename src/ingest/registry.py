from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import parse_qsl, urlparse

from .base import RawRowSource, is_remote
from .sources.json_export import DEFAULT_SHEET_NAME, JsonExportSource
from .sources.tabular import CsvSource, ExcelSource

_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def _location_suffix(location: str | Path) -> str:
    if is_remote(location):
        parsed = urlparse(str(location))
        export_format = dict(parse_qsl(parsed.query)).get("format")
        if export_format:
            return f".{export_format.lower()}"
        return PurePosixPath(parsed.path).suffix.lower()
    return Path(location).suffix.lower()


def resolve_source(location: str | Path, *, sheet_name: str | None = None) -> RawRowSource:
    """Pick the reader for a raw camp export from its extension (or `format=` query)."""

    suffix = _location_suffix(location)
    if suffix == ".json":
        return JsonExportSource(sheet_name=sheet_name or DEFAULT_SHEET_NAME)
    if suffix == ".csv":
        return CsvSource()
    if suffix in _EXCEL_SUFFIXES:
        return ExcelSource(sheet_name=sheet_name if sheet_name is not None else 0, extension=suffix)
    raise ValueError(
        f"Unsupported raw export '{location}'. Expected one of: .json, .csv, "
        f"{', '.join(sorted(_EXCEL_SUFFIXES))}."
    )
