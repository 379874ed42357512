from __future__ import annotations

from .json_export import JsonExportSource
from .tabular import CsvSource, ExcelSource

__all__ = ["CsvSource", "ExcelSource", "JsonExportSource"]
