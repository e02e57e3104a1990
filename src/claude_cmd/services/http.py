"""HTTP GET capability built on httpx.

Every request maps transport failures onto the claude-cmd HTTP error types
so repositories never see raw ``httpx`` exceptions:

- timeouts -> :class:`HTTPTimeoutError`
- connection/protocol failures and invalid URLs -> :class:`HTTPNetworkError`
- non-2xx responses -> :class:`HTTPStatusError`
"""

from __future__ import annotations

import logging
import ssl
from dataclasses import dataclass, field
from typing import Mapping, Protocol
from urllib.parse import urlparse

import httpx
import truststore

from claude_cmd.core.config import DEFAULT_HTTP_TIMEOUT
from claude_cmd.errors import HTTPNetworkError, HTTPStatusError, HTTPTimeoutError

logger = logging.getLogger(__name__)

USER_AGENT = "claude-cmd"


@dataclass(frozen=True)
class HTTPResponse:
    status: int
    status_text: str
    body: str
    final_url: str
    headers: dict[str, str] = field(default_factory=dict)


class HTTPGetter(Protocol):
    """What repositories need from an HTTP client."""

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HTTPResponse: ...


class HTTPClient:
    """Async HTTP client with bounded timeouts and typed failures.

    A fresh ``httpx.AsyncClient`` is opened per request so an instance can be
    shared across event loops (each CLI invocation runs its own loop).
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        verify: ssl.SSLContext | bool | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError(f"Invalid timeout value: {timeout}. Must be a positive number.")
        self.timeout = timeout
        self._transport = transport
        if verify is None and transport is None:
            verify = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        self._verify = True if verify is None else verify

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HTTPResponse:
        effective_timeout = self.timeout if timeout is None else timeout
        if effective_timeout <= 0:
            raise HTTPNetworkError(url, f"Invalid timeout value: {effective_timeout}")
        _validate_url(url)

        request_headers = {"User-Agent": USER_AGENT}
        if headers:
            request_headers.update({str(k).strip(): str(v) for k, v in headers.items() if str(k).strip()})

        logger.debug("GET %s (timeout %ss)", url, effective_timeout)
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                verify=self._verify,
                timeout=effective_timeout,
                follow_redirects=True,
            ) as client:
                response = await client.get(url, headers=request_headers)
        except httpx.TimeoutException as exc:
            raise HTTPTimeoutError(url, effective_timeout) from exc
        except httpx.HTTPError as exc:
            raise HTTPNetworkError(url, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            logger.debug("GET %s -> %s", url, response.status_code)
            raise HTTPStatusError(url, response.status_code, response.reason_phrase)

        return HTTPResponse(
            status=response.status_code,
            status_text=response.reason_phrase,
            body=response.text,
            final_url=str(response.url),
            headers={key.lower(): value for key, value in response.headers.items()},
        )


def _validate_url(url: str) -> None:
    if not isinstance(url, str) or not url.strip():
        raise HTTPNetworkError(str(url), "URL must be a non-empty string")
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise HTTPNetworkError(url, "Invalid URL: only absolute http(s) URLs are supported")


__all__ = ["HTTPClient", "HTTPGetter", "HTTPResponse"]
