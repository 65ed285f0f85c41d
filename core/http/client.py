"""
HTTP Client

Thin requests wrapper used by the JSON-RPC transport.
Transport failures are retried; HTTP status errors are not.
"""

from __future__ import annotations

import json as jsonlib
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

import requests


logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """
    Response from an HTTP request.
    """
    status_code: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return jsonlib.loads(self.content)

    def raise_for_status(self) -> None:
        """Raise exception if status is not 2xx."""
        if not self.ok:
            raise HttpError(
                f"HTTP {self.status_code}",
                status_code=self.status_code,
                response=self,
            )


class HttpError(Exception):
    """HTTP request error."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[HttpResponse] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response

    @property
    def retryable(self) -> bool:
        """Connection-level failures (no status) and 5xx/429 may be retried."""
        return self.status_code is None or self.status_code >= 500 or self.status_code == 429


class HttpClient:
    """
    HTTP client with bounded retries.

    Usage:
        client = HttpClient(timeout=10.0, max_retries=2)
        response = client.post("https://node.example/rpc", json=payload)
        response.raise_for_status()
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        default_headers: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            timeout: Default request timeout in seconds
            max_retries: Extra attempts after a retryable failure
            retry_delay: Seconds to wait between attempts
            default_headers: Headers to include in all requests
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.default_headers = default_headers or {}
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        """Lazy-create the requests session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.default_headers)
        return self._session

    def _send(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]],
        json: Optional[Any],
        timeout: float,
    ) -> HttpResponse:
        session = self._get_session()
        try:
            response = session.request(
                method=method,
                url=url,
                headers=headers,
                json=json,
                timeout=timeout,
            )
        except requests.RequestException as e:
            raise HttpError(str(e)) from e

        result = HttpResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            url=str(response.url),
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )
        result.raise_for_status()
        return result

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        json: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        Make an HTTP request, retrying retryable failures.

        Raises:
            HttpError: On non-2xx status or transport failure after retries
        """
        effective_timeout = timeout or self.timeout
        attempt = 0
        while True:
            try:
                return self._send(method, url, headers, json, effective_timeout)
            except HttpError as e:
                if not e.retryable or attempt >= self.max_retries:
                    raise
                attempt += 1
                logger.warning(
                    f"{method} {url} failed ({e}); retry {attempt}/{self.max_retries}"
                )
                time.sleep(self.retry_delay)

    def post(
        self,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        json: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """Make a POST request."""
        return self.request("POST", url, headers=headers, json=json, timeout=timeout)

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
