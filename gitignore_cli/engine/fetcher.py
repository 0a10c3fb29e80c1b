"""Thin HTTP fetching layer shared by the catalog and template downloaders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict

import httpx
import structlog

from ..config import GlobalConfig
from ..logging_conf import component_logger


class FetchError(RuntimeError):
    """Transport failure or non-success status for a single request."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


@dataclass(slots=True)
class FetchRequest:
    """Input for the fetcher."""

    url: str
    headers: dict[str, str] | None = None
    timeout: float | None = None


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    url: str
    status_code: int
    text: str
    headers: Dict[str, str]
    raw: httpx.Response | None = field(repr=False, default=None)
    content: bytes = field(repr=False, default=b"")

    def json(self) -> Any:
        return json.loads(self.text)


class Fetcher:
    """Issue read-only GET requests through one shared, thread-safe client."""

    def __init__(
        self,
        config: GlobalConfig,
        client: httpx.Client | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or component_logger("fetcher")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            follow_redirects=True,
            timeout=config.request_timeout,
            headers={"User-Agent": config.user_agent},
        )

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def fetch(self, request: FetchRequest) -> FetchResponse:
        """Perform a single GET; no retries."""

        headers = dict(request.headers or {})
        timeout = request.timeout or self.config.request_timeout
        try:
            response = self._client.request(
                method="GET",
                url=request.url,
                headers=headers,
                timeout=timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self.logger.warning("fetch_error", url=request.url, error=str(exc))
            raise FetchError(request.url, f"Request failed: {exc}") from exc

        if self._is_failure(response):
            self.logger.warning("fetch_bad_status", url=request.url, status=response.status_code)
            raise FetchError(
                request.url,
                f"Unexpected status {response.status_code}",
                status_code=response.status_code,
            )
        self.logger.debug("fetch_ok", url=request.url, status=response.status_code)
        return FetchResponse(
            url=str(response.url),
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
            raw=response,
            content=response.content,
        )

    def get(self, url: str) -> FetchResponse:
        return self.fetch(FetchRequest(url=url))

    @staticmethod
    def _is_failure(response: Any) -> bool:
        status_code = getattr(response, "status_code", 0)
        return not 200 <= status_code < 300


__all__ = ["FetchError", "FetchRequest", "FetchResponse", "Fetcher"]
