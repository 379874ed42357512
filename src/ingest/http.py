from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import requests
from requests import Response
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

DEFAULT_USER_AGENT = "CampFinderConverter/0.1 (+https://localhost; contact=local)"
logger = logging.getLogger(__name__)
_SLOW_REQUEST_SECONDS = 5.0


@dataclass(slots=True)
class PoliteHttpClient:
    """Retrying session used to download a published spreadsheet export."""

    timeout_seconds: float = 20.0
    user_agent: str = DEFAULT_USER_AGENT
    max_retries: int = 3
    backoff_factor: float = 0.5
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

        retry = Retry(
            total=self.max_retries,
            connect=self.max_retries,
            read=self.max_retries,
            status=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=frozenset({"GET"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> PoliteHttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def timeout_tuple(self) -> tuple[float, float]:
        connect_timeout = max(1.0, min(self.timeout_seconds, 5.0))
        read_timeout = max(connect_timeout, self.timeout_seconds)
        return connect_timeout, read_timeout

    def get_bytes(self, url: str) -> bytes:
        started_at = time.monotonic()
        response: Response = self._session.get(url, timeout=self.timeout_tuple)
        elapsed = time.monotonic() - started_at
        if elapsed > _SLOW_REQUEST_SECONDS:
            logger.warning("Slow HTTP GET %.3fs %s", elapsed, url)
        response.raise_for_status()
        logger.info("Downloaded %d bytes from %s", len(response.content), url)
        return response.content
