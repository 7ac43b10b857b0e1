"""Async client for the Codize API.

Usage:
    client = CodizeClient(api_key="...")
    result = await client.sandbox.execute(
        {"language": "python", "files": [{"name": "main.py", "content": "print(1)"}]}
    )
    print(result.data.run.stdout)

Each execute() call issues exactly one request. Non-2xx responses raise
CodizeApiError when the body is a structured error, UnexpectedApiError
otherwise. Success bodies that fail to decode raise the decoder's own
error (json.JSONDecodeError, pydantic.ValidationError) unwrapped.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from urllib.parse import urljoin

from codize import constants
from codize._logging import get_logger
from codize.api_errors import parse_api_error
from codize.exceptions import CodizeApiError, UnexpectedApiError
from codize.models import SandboxExecuteData, SandboxExecuteRequest, SandboxExecuteResponse
from codize.transport import HttpxTransport, Transport

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from codize.settings import Settings

logger = get_logger(__name__)


class SandboxResource:
    """Namespace for sandbox APIs (client.sandbox)."""

    __slots__ = ("_client",)

    def __init__(self, client: CodizeClient) -> None:
        self._client = client

    async def execute(self, request: SandboxExecuteRequest | Mapping[str, Any]) -> SandboxExecuteResponse:
        """Execute code in the Codize sandbox.

        Args:
            request: Language and files, as a model or a mapping of the same shape

        Returns:
            Stage results and raw response headers

        Raises:
            CodizeApiError: Non-2xx response with a structured error body
            UnexpectedApiError: Non-2xx response with any other body
            pydantic.ValidationError: request mapping or success body has the wrong shape
            json.JSONDecodeError: 2xx response body is not JSON
        """
        if not isinstance(request, SandboxExecuteRequest):
            request = SandboxExecuteRequest.model_validate(request)
        return await self._client._sandbox_execute(request)


class CodizeClient:
    """API client for Codize.

    Configuration is read-only after construction; concurrent calls on one
    instance share no mutable state.

    Attributes:
        sandbox: Sandbox API namespace
    """

    __slots__ = ("_api_key", "_base_url", "_transport", "sandbox")

    def __init__(
        self,
        api_key: str,
        *,
        transport: Transport | None = None,
        base_url: str = constants.DEFAULT_BASE_URL,
    ) -> None:
        # No local validation: an empty key is sent as "Bearer " and rejected server-side
        self._api_key = api_key
        self._transport: Transport = transport if transport is not None else HttpxTransport()
        self._base_url = base_url
        self.sandbox = SandboxResource(self)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, *, transport: Transport | None = None) -> CodizeClient:
        """Build a client from CODIZE_* environment settings."""
        from codize.settings import Settings  # noqa: PLC0415

        settings = settings if settings is not None else Settings()
        return cls(settings.api_key, transport=transport, base_url=settings.base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"CodizeClient(base_url={self._base_url!r})"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": constants.CONTENT_TYPE_JSON,
            "Authorization": f"{constants.AUTH_SCHEME} {self._api_key}",
        }

    async def _sandbox_execute(self, request: SandboxExecuteRequest) -> SandboxExecuteResponse:
        url = urljoin(self._base_url, constants.SANDBOX_EXECUTE_PATH)
        logger.debug(
            "Sending sandbox execute request",
            extra={"url": url, "language": request.language, "file_count": len(request.files)},
        )

        response = await self._transport(
            url,
            method="POST",
            headers=self._headers(),
            content=request.model_dump_json().encode("utf-8"),
        )

        if not constants.SUCCESS_STATUS_MIN <= response.status_code <= constants.SUCCESS_STATUS_MAX:
            raise _api_error(response)

        data = SandboxExecuteData.from_wire(response.json())
        logger.debug(
            "Sandbox execute succeeded",
            extra={
                "status": response.status_code,
                "run_exit_code": data.run.exit_code,
                "has_compile": data.compile is not None,
            },
        )
        return SandboxExecuteResponse(headers=response.headers, data=data)


def _api_error(response: httpx.Response) -> CodizeApiError | UnexpectedApiError:
    """Convert a non-2xx response into the matching exception.

    The body text is read once; the generic error quotes it verbatim.
    """
    raw = response.text
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Error response body is not JSON", extra={"status": response.status_code})
        return UnexpectedApiError(response.status_code, response.reason_phrase, raw)

    validated = parse_api_error(parsed)
    if validated is None:
        return UnexpectedApiError(response.status_code, response.reason_phrase, raw)

    logger.debug(
        "API returned structured error",
        extra={"status": response.status_code, "code": validated.error.code},
    )
    return CodizeApiError(response.status_code, response.headers, validated)
