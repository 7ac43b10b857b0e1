"""Shared pytest fixtures for codize tests.

The transport seam is replaced by FakeTransport, which returns real
httpx.Response objects. No network access.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import pytest

from codize.client import CodizeClient

# ============================================================================
# Sample payloads
# ============================================================================

SAMPLE_RUN_RESULT: dict[str, Any] = {
    "stdout": "Hello\n",
    "stderr": "",
    "output": "Hello\n",
    "exitCode": 0,
}

SAMPLE_REQUEST: dict[str, Any] = {
    "language": "python",
    "files": [{"name": "main.py", "content": 'print("Hello")'}],
}


def json_response(body: Any, status: int = 200, headers: Mapping[str, str] | None = None) -> httpx.Response:
    """Build an httpx.Response with a JSON body."""
    return httpx.Response(status, json=body, headers=headers)


def text_response(body: str, status: int, headers: Mapping[str, str] | None = None) -> httpx.Response:
    """Build an httpx.Response with a plain-text body."""
    return httpx.Response(status, text=body, headers=headers)


# ============================================================================
# Fake transport
# ============================================================================


@dataclass(frozen=True)
class RecordedRequest:
    url: str
    method: str
    headers: dict[str, str]
    content: bytes

    @property
    def json(self) -> Any:
        return json.loads(self.content)


class FakeTransport:
    """Drop-in for HttpxTransport. Records requests, returns responder()."""

    def __init__(self, responder: Callable[[], httpx.Response]) -> None:
        self._responder = responder
        self.requests: list[RecordedRequest] = []

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        content: bytes,
    ) -> httpx.Response:
        self.requests.append(RecordedRequest(url=url, method=method, headers=dict(headers), content=content))
        return self._responder()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def success_transport() -> FakeTransport:
    """Transport answering every call with a python-style success body."""
    return FakeTransport(lambda: json_response({"compile": None, "run": SAMPLE_RUN_RESULT}))


@pytest.fixture
def client(success_transport: FakeTransport) -> CodizeClient:
    return CodizeClient("test-api-key", transport=success_transport)
