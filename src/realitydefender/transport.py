"""HTTP transport: httpx wrapper with API-key injection and error mapping.

Every failure leaving this module is a :class:`RealityDefenderError` whose
``code`` was decided here from the HTTP status. Layers above never
re-classify.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from realitydefender.constants import (
    API_KEY_HEADER,
    DEFAULT_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_S,
    FREE_TIER_NOT_ALLOWED,
)
from realitydefender.errors import RealityDefenderError, _walk_exception_chain

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Minimal transport protocol consumed by the result and upload helpers."""

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET *path* and return the decoded JSON body."""
        ...

    async def post(self, path: str, json: Any = None) -> Any:
        """POST *json* to *path* and return the decoded JSON body."""
        ...

    async def put(
        self,
        url: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """PUT raw bytes to an absolute (signed) URL."""
        ...


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def classify_http_error(exc: BaseException) -> RealityDefenderError:
    """Map an httpx (or arbitrary) exception into a typed error.

    Status mapping: 400 with a free-tier code → ``unauthorized``; 401 →
    ``unauthorized``; 404 → ``not_found``; 415 → ``invalid_file``; 5xx →
    ``server_error``; anything else → ``unknown_error``.
    """
    if isinstance(exc, asyncio.CancelledError):
        raise exc
    if isinstance(exc, RealityDefenderError):
        return exc

    response: httpx.Response | None = None
    for e in _walk_exception_chain(exc):
        if isinstance(e, httpx.HTTPStatusError):
            response = e.response
            break

    if response is None:
        if isinstance(exc, httpx.HTTPError):
            return RealityDefenderError(f"API error: {exc}", "unknown_error")
        return RealityDefenderError(f"Request failed: {exc}", "unknown_error")

    status = response.status_code
    body = _response_body(response)

    if status == 400 and isinstance(body, dict):
        code = body.get("code")
        if isinstance(code, str) and FREE_TIER_NOT_ALLOWED in code:
            return RealityDefenderError(
                body.get("message") or "Free tier not allowed",
                "unauthorized",
                status_code=status,
            )
    if status == 401:
        return RealityDefenderError(
            "Unauthorized: Invalid API key",
            "unauthorized",
            hint="Check REALITY_DEFENDER_API_KEY or Config.api_key.",
            status_code=status,
        )
    if status == 404:
        return RealityDefenderError(
            f"Resource not found: {response.request.url}",
            "not_found",
            status_code=status,
        )
    if status == 415:
        return RealityDefenderError(
            "Unsupported file type", "invalid_file", status_code=status
        )
    if status >= 500:
        return RealityDefenderError("Server error", "server_error", status_code=status)
    return RealityDefenderError(
        f"API error: {body}", "unknown_error", status_code=status
    )


class HttpTransport:
    """Async JSON transport bound to one API key and base URL."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize with credentials; the httpx client is created lazily.

        Args:
            api_key: Value sent in the ``X-API-KEY`` header.
            base_url: Prefix for relative request paths.
            timeout_s: Per-request timeout in seconds.
            transport: Optional httpx transport (``httpx.MockTransport`` in tests).
        """
        if not api_key:
            raise RealityDefenderError("API key is required", "unauthorized")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    API_KEY_HEADER: self.api_key,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout_s,
                transport=self._transport,
            )
        return self._client

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            response = await self._get_client().request(method, url, **kwargs)
            response.raise_for_status()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            err = classify_http_error(exc)
            logger.debug("%s %s failed: %s (%s)", method, url, err, err.code)
            if err is exc:
                raise
            raise err from exc
        return response

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """Send a GET request and return the decoded JSON body."""
        response = await self._request(
            "GET", path, params=dict(params) if params else None
        )
        return _response_body(response)

    async def post(self, path: str, json: Any = None) -> Any:
        """Send a POST request with a JSON body and return the decoded body."""
        response = await self._request("POST", path, json=json)
        return _response_body(response)

    async def put(
        self,
        url: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """PUT raw bytes to a signed URL.

        Signed URLs carry their own credentials, so the API-key header is
        dropped for this request.
        """
        logger.debug("PUT %s (%d bytes)", url.split("?", 1)[0], len(content))
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self._transport
            ) as client:
                response = await client.put(
                    url, content=content, headers={"Content-Type": content_type}
                )
                response.raise_for_status()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            raise classify_http_error(exc) from exc

    async def aclose(self) -> None:
        """Close the underlying httpx client, if one was created."""
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
