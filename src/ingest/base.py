from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class RawResponse:
    content: bytes
    extension: str
    fetched_at: datetime


def is_remote(location: str | Path) -> bool:
    return str(location).lower().startswith(("http://", "https://"))


class RawRowSource(ABC):
    name: str
    extension: str

    def fetch(self, location: str | Path, http_client: Any | None = None) -> RawResponse:
        """Read the raw spreadsheet export from a local path or an http(s) URL."""

        if is_remote(location):
            if http_client is None:
                raise ValueError(f"An HTTP client is required to fetch '{location}'.")
            content = http_client.get_bytes(str(location))
        else:
            path = Path(location)
            if not path.exists():
                raise FileNotFoundError(f"Raw camp export not found at '{path}'.")
            content = path.read_bytes()
        return RawResponse(content=content, extension=self.extension, fetched_at=self.utcnow())

    @abstractmethod
    def parse(self, raw_content: bytes) -> list[dict[str, Any]]:
        """Parse raw export bytes into one mapping per spreadsheet row."""

    @staticmethod
    def utcnow() -> datetime:
        return datetime.now(tz=UTC)
