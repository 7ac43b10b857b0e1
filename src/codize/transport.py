"""Pluggable HTTP transport.

The client depends only on the Transport protocol: an async callable
taking the URL and request options and returning a fully-read
httpx.Response. Test doubles and alternate network stacks implement the
same call signature.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import httpx

from codize._logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = get_logger(__name__)


class Transport(Protocol):
    """Issues one HTTP request and returns the response with its body read."""

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        content: bytes,
    ) -> httpx.Response: ...


class HttpxTransport:
    """Default transport backed by httpx.AsyncClient.

    A fresh AsyncClient is opened per call; no connections are shared
    between calls. Keyword arguments (timeout, proxy, verify, ...) are
    passed to the AsyncClient constructor unchanged.

    Callers that need connection reuse should pass their own Transport to
    CodizeClient instead, e.g. an async function forwarding to a
    long-lived httpx.AsyncClient:

        http = httpx.AsyncClient(timeout=30)

        async def pooled(url, *, method, headers, content):
            return await http.request(method, url, headers=dict(headers), content=content)

        client = CodizeClient(api_key, transport=pooled)

    Network failures propagate as httpx.HTTPError subclasses.
    """

    __slots__ = ("_client_kwargs",)

    def __init__(self, **client_kwargs: Any) -> None:
        self._client_kwargs = client_kwargs

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        content: bytes,
    ) -> httpx.Response:
        async with httpx.AsyncClient(**self._client_kwargs) as client:
            response = await client.request(method, url, headers=dict(headers), content=content)
        logger.debug(
            "HTTP request completed",
            extra={"method": method, "url": url, "status": response.status_code},
        )
        return response
