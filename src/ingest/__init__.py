from __future__ import annotations

from .base import RawResponse, RawRowSource
from .cache import write_raw_payload
from .http import PoliteHttpClient
from .registry import resolve_source

__all__ = [
    "PoliteHttpClient",
    "RawResponse",
    "RawRowSource",
    "resolve_source",
    "write_raw_payload",
]
