"""
Transport protocol for Horizon HTTP calls.

Defines the seam where concrete HTTP implementations plug in. The
Horizon client depends on this protocol, not on httpx directly, so the
transport can be swapped for a fake in tests without touching parsing.

Horizon answers expected failures (404 account not found, 400
transaction failed, 504 timeout) with JSON problem documents, so the
transport returns the status code and body instead of raising on 4xx/5xx.
It raises TransportError only when no usable JSON came back.

Concrete implementations:
    - HttpxTransport (default, uses httpx.Client)
    - FakeTransport (tests, returns canned responses)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from stellar_wallet.errors import TransportError
from stellar_wallet.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Status code plus parsed JSON object body."""

    status_code: int
    body: dict[str, Any]


@runtime_checkable
class HttpTransport(Protocol):
    """Blocking transport for Horizon requests."""

    def get_json(self, url: str) -> HttpResponse:
        """GET ``url`` and return the parsed JSON response.

        Raises:
            TransportError: On timeout, connection failure, or a body
                that is not a JSON object.
        """
        ...

    def post_form(self, url: str, form: dict[str, str]) -> HttpResponse:
        """POST ``form`` url-encoded to ``url`` and return the parsed response.

        Raises:
            TransportError: As for get_json.
        """
        ...


class HttpxTransport:
    """Default transport using a short-lived httpx.Client per request."""

    def __init__(self, timeout_s: float = 30.0, headers: dict[str, str] | None = None) -> None:
        self._timeout_s = timeout_s
        self._headers = headers or {}

    def get_json(self, url: str) -> HttpResponse:
        return self._request("GET", url)

    def post_form(self, url: str, form: dict[str, str]) -> HttpResponse:
        return self._request("POST", url, data=form)

    def _request(self, method: str, url: str, data: dict[str, str] | None = None) -> HttpResponse:
        try:
            with httpx.Client(timeout=self._timeout_s) as client:
                response = client.request(
                    method,
                    url,
                    data=data,
                    headers={"Accept": "application/json", **self._headers},
                )
        except httpx.TimeoutException as e:
            logger.warning("transport.failed", url=url, error_code="TIMEOUT")
            raise TransportError(
                f"HTTP request timed out after {self._timeout_s}s",
                error_code="TIMEOUT",
                details={"url": url, "timeout_s": self._timeout_s},
            ) from e
        except httpx.ConnectError as e:
            logger.warning("transport.failed", url=url, error_code="CONNECTION_FAILED")
            raise TransportError(
                f"Failed to connect to {url}",
                error_code="CONNECTION_FAILED",
                details={"url": url},
            ) from e
        except httpx.HTTPError as e:
            logger.warning("transport.failed", url=url, error_code="HTTP_ERROR")
            raise TransportError(
                f"HTTP error: {e}",
                error_code="HTTP_ERROR",
                details={"url": url, "error": str(e)},
            ) from e

        # Undecodable bytes raise UnicodeDecodeError, not JSONDecodeError.
        try:
            body = response.json()
        except ValueError as e:
            logger.warning(
                "transport.failed",
                url=url,
                error_code="INVALID_JSON",
                status_code=response.status_code,
            )
            raise TransportError(
                f"HTTP {response.status_code}: response was not valid JSON",
                error_code="INVALID_JSON",
                details={
                    "url": url,
                    "status_code": response.status_code,
                    "body_preview": response.text[:200] if response.text else "",
                },
            ) from e

        if not isinstance(body, dict):
            raise TransportError(
                "Response JSON was not an object",
                error_code="INVALID_JSON",
                details={"url": url, "type": type(body).__name__},
            )

        return HttpResponse(status_code=response.status_code, body=body)
