"""Structured error payloads returned by the Codize API.

Wire shape for non-2xx responses:
    {"error": {"code": str, "message": str, "errors"?: [{"message": str, "path": [str | int, ...]}]}}

parse_api_error() is a two-outcome check: it returns the validated model
or None, never raising for a shape mismatch. String and integer fields are
strict (no coercion from numbers, booleans or null).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, field_validator

from codize._logging import get_logger

logger = get_logger(__name__)


class ApiErrorCode(str, Enum):
    """Error codes documented by the API.

    Not exhaustive: CodizeApiError.code carries whatever the server sent.
    """

    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class ApiErrorDetails(BaseModel):
    """A single field-level validation error."""

    model_config = ConfigDict(frozen=True)

    message: StrictStr = Field(description="Human-readable description of the problem")
    path: list[StrictStr | StrictInt] = Field(description="Location of the offending field in the request")


class ApiErrorBody(BaseModel):
    """The `error` object of an error response."""

    model_config = ConfigDict(frozen=True)

    code: StrictStr = Field(description="Machine-readable error code")
    message: StrictStr = Field(description="Human-readable error message")
    errors: list[ApiErrorDetails] | None = Field(default=None, description="Optional field-level errors")

    @field_validator("errors", mode="before")
    @classmethod
    def reject_null_errors(cls, v: Any) -> Any:
        """`errors` may be omitted but not sent as null."""
        if v is None:
            raise ValueError("errors must be a list when present")
        return v


class ApiErrorResponse(BaseModel):
    """Top-level error response payload."""

    model_config = ConfigDict(frozen=True)

    error: ApiErrorBody


def parse_api_error(value: Any) -> ApiErrorResponse | None:
    """Validate an already JSON-decoded value against the error response shape.

    Args:
        value: Any value produced by json.loads()

    Returns:
        The validated payload, or None if the shape does not match
    """
    try:
        return ApiErrorResponse.model_validate(value)
    except ValidationError as e:
        logger.debug(
            "Response body is not a structured API error",
            extra={"error_count": e.error_count()},
        )
        return None
