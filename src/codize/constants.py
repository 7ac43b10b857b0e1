"""Constants for the Codize API client."""

from typing import Final

# ============================================================================
# Endpoint
# ============================================================================

DEFAULT_BASE_URL: Final[str] = "https://codize.dev"
"""Production API endpoint."""

SANDBOX_EXECUTE_PATH: Final[str] = "/api/v1/sandbox/execute"
"""Absolute path, resolved against the base URL."""

# ============================================================================
# HTTP
# ============================================================================

CONTENT_TYPE_JSON: Final[str] = "application/json"
AUTH_SCHEME: Final[str] = "Bearer"

SUCCESS_STATUS_MIN: Final[int] = 200
SUCCESS_STATUS_MAX: Final[int] = 299

UNEXPECTED_ERROR_TEMPLATE: Final[str] = "Unexpected API error: {status} {reason} - {body}"

# ============================================================================
# Environment
# ============================================================================

ENV_PREFIX: Final[str] = "CODIZE_"
LOG_LEVEL_ENV: Final[str] = "CODIZE_LOG_LEVEL"
