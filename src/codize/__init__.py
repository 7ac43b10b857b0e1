"""codize: Python client for the Codize sandbox execution API.

Quick Start:
    ```python
    from codize import CodizeClient

    client = CodizeClient(api_key="...")
    result = await client.sandbox.execute(
        {
            "language": "python",
            "files": [{"name": "main.py", "content": "print('hello')"}],
        }
    )
    print(result.data.run.stdout)  # "hello\\n"
    ```

Error handling:
    ```python
    from codize import CodizeApiError, UnexpectedApiError

    try:
        result = await client.sandbox.execute(request)
    except CodizeApiError as e:
        # Structured error body: branch on e.code, inspect e.errors
        if e.is_retryable:
            ...
    except UnexpectedApiError as e:
        # Non-2xx with an unstructured body; e.message has status and body
        ...
    ```

Custom transport (tests, instrumentation):
    ```python
    import httpx

    async def transport(url, *, method, headers, content):
        return httpx.Response(200, json={"compile": None, "run": {...}})

    client = CodizeClient(api_key="...", transport=transport)
    ```
"""

from codize.api_errors import ApiErrorBody, ApiErrorCode, ApiErrorDetails, ApiErrorResponse, parse_api_error
from codize.client import CodizeClient, SandboxResource
from codize.exceptions import CodizeApiError, CodizeError, UnexpectedApiError
from codize.models import (
    Language,
    SandboxExecuteData,
    SandboxExecuteRequest,
    SandboxExecuteResponse,
    SandboxFile,
    SandboxStageResult,
)
from codize.settings import Settings
from codize.transport import HttpxTransport, Transport

__all__ = [
    "ApiErrorBody",
    "ApiErrorCode",
    "ApiErrorDetails",
    "ApiErrorResponse",
    "CodizeApiError",
    "CodizeClient",
    "CodizeError",
    "HttpxTransport",
    "Language",
    "SandboxExecuteData",
    "SandboxExecuteRequest",
    "SandboxExecuteResponse",
    "SandboxFile",
    "SandboxResource",
    "SandboxStageResult",
    "Settings",
    "Transport",
    "UnexpectedApiError",
    "parse_api_error",
]

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("codize")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
