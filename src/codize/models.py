"""Data models for codize."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    import httpx


class Language(str, Enum):
    """Languages known to the sandbox.

    Informational: SandboxExecuteRequest.language accepts any string.
    """

    GO = "go"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    RUBY = "ruby"
    RUST = "rust"
    TYPESCRIPT = "typescript"


class SandboxFile(BaseModel):
    """A source file uploaded to the sandbox.

    Extra keys given by the caller are sent unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = Field(description="File name")
    content: str = Field(description="Full text content of the file")


class SandboxExecuteRequest(BaseModel):
    """Request payload for sandbox.execute.

    Files are sent in the given order, without dedup; an empty list is
    passed through. Extra keys given by the caller are sent unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    language: str = Field(description="Language name used for execution")
    files: list[SandboxFile] = Field(description="Source files to execute")

    @field_validator("language", mode="before")
    @classmethod
    def language_value(cls, v: Any) -> Any:
        """Accept Language members as their wire value."""
        if isinstance(v, Language):
            return v.value
        return v


class SandboxStageResult(Mapping[str, Any]):
    """Output of a single sandbox stage (compile or run).

    A read-only view of the stage object exactly as the server sent it:
    fields are not validated or coerced, and unknown fields are kept.
    Compares equal to a dict with the same content.

    Attributes:
        stdout: Standard output
        stderr: Standard error
        output: Combined stdout and stderr, as produced by the server
        exit_code: Process exit code (wire name exitCode)

    Each attribute is None when the server omitted the field.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Mapping[str, Any]) -> None:
        self._raw = dict(raw)

    def __getitem__(self, key: str) -> Any:
        return self._raw[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._raw)

    def __len__(self) -> int:
        return len(self._raw)

    def __repr__(self) -> str:
        return f"SandboxStageResult({self._raw!r})"

    @property
    def stdout(self) -> Any:
        return self._raw.get("stdout")

    @property
    def stderr(self) -> Any:
        return self._raw.get("stderr")

    @property
    def output(self) -> Any:
        return self._raw.get("output")

    @property
    def exit_code(self) -> Any:
        return self._raw.get("exitCode")

    def to_wire(self) -> dict[str, Any]:
        """The stage object as received."""
        return dict(self._raw)


class _ExecuteBody(BaseModel):
    """Success body envelope: run must be an object, compile an object or null."""

    compile: dict[str, Any] | None = None
    run: dict[str, Any]


@dataclass(frozen=True)
class SandboxExecuteData:
    """Stage results of an execution.

    compile is None for languages without a compile step.
    """

    compile: SandboxStageResult | None
    run: SandboxStageResult

    @classmethod
    def from_wire(cls, body: Any) -> SandboxExecuteData:
        """Extract compile and run from a decoded success body.

        Other top-level keys are ignored; stage objects are kept as sent.

        Raises:
            pydantic.ValidationError: body is not an object, run is missing,
                or a stage is not an object
        """
        envelope = _ExecuteBody.model_validate(body)
        return cls(
            compile=SandboxStageResult(envelope.compile) if envelope.compile is not None else None,
            run=SandboxStageResult(envelope.run),
        )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with API field names, stage objects as received."""
        return {
            "compile": self.compile.to_wire() if self.compile is not None else None,
            "run": self.run.to_wire(),
        }


@dataclass(frozen=True)
class SandboxExecuteResponse:
    """Response returned by sandbox.execute.

    Attributes:
        headers: Raw HTTP response headers
        data: Compile and run stage results
    """

    headers: httpx.Headers
    data: SandboxExecuteData
