"""Exception hierarchy for codize.

All API failures inherit from CodizeError.

Hierarchy:
    CodizeError (base)
    ├── CodizeApiError        ← non-2xx with a structured error body
    └── UnexpectedApiError    ← non-2xx with any other body

Success-path decode failures (invalid JSON, missing stage fields) are not
part of this hierarchy: they surface as json.JSONDecodeError or
pydantic.ValidationError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from codize.constants import UNEXPECTED_ERROR_TEMPLATE

if TYPE_CHECKING:
    from collections.abc import Mapping

    from codize.api_errors import ApiErrorResponse

_RETRYABLE_CODES = frozenset({"RATE_LIMITED", "INTERNAL_ERROR"})


class CodizeError(Exception):
    """Base exception for all codize errors with structured context.

    Attributes:
        message: Human-readable error message
        context: Dictionary of structured error context for logging/debugging
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class CodizeApiError(CodizeError):
    """Non-2xx API response with a structured error body.

    Built only from a body that passed parse_api_error(). Code and message
    are taken verbatim from the payload; codes outside ApiErrorCode pass
    through unchanged.

    Attributes:
        status: HTTP status code of the response
        headers: Response headers (the transport's object, not a copy)
        code: Machine-readable error code
        errors: Field-level validation errors, or None when absent
    """

    def __init__(self, status: int, headers: Mapping[str, str], response: ApiErrorResponse):
        body = response.error
        super().__init__(body.message, context={"status": status, "code": body.code})
        self.status = status
        self.headers = headers
        self.code = body.code
        self.errors: list[dict[str, Any]] | None = (
            [detail.model_dump() for detail in body.errors] if body.errors is not None else None
        )

    @property
    def is_retryable(self) -> bool:
        """Whether the failure is worth retrying (rate limit or server-side).

        Advisory only; the client never retries.
        """
        return self.code in _RETRYABLE_CODES or self.status == 429 or self.status >= 500

    def __repr__(self) -> str:
        return f"CodizeApiError(status={self.status}, code={self.code!r}, message={self.message!r})"


class UnexpectedApiError(CodizeError):
    """Non-2xx API response whose body is not a structured error.

    Covers bodies that are not JSON and JSON that does not match the
    error shape. Only the composed message is meant for callers; the
    attributes are kept for diagnostics.

    Attributes:
        status: HTTP status code of the response
        reason_phrase: HTTP reason phrase (e.g. "Gateway Timeout")
        body: Raw response text
    """

    def __init__(self, status: int, reason_phrase: str, body: str):
        message = UNEXPECTED_ERROR_TEMPLATE.format(status=status, reason=reason_phrase, body=body)
        super().__init__(message, context={"status": status})
        self.status = status
        self.reason_phrase = reason_phrase
        self.body = body
