"""Command-line interface for codize.

Usage:
    codize main.py                     # Run file (language from extension)
    codize -l go main.go util.go       # Several files, explicit language
    codize -c 'print("hello")'         # Inline code (python by default)
    echo 'puts 1' | codize -l ruby -   # Run from stdin
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import NoReturn

import click
import httpx

from codize import (
    CodizeApiError,
    CodizeClient,
    HttpxTransport,
    Language,
    SandboxExecuteRequest,
    SandboxExecuteResponse,
    SandboxFile,
    SandboxStageResult,
    Settings,
    UnexpectedApiError,
    __version__,
)
from codize._logging import configure_logging

# Exit codes following Unix conventions
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CLI_ERROR = 2
EXIT_API_ERROR = 125

# File extension to language mapping
EXTENSION_MAP: dict[str, str] = {
    ".go": Language.GO.value,
    ".js": Language.JAVASCRIPT.value,
    ".mjs": Language.JAVASCRIPT.value,
    ".py": Language.PYTHON.value,
    ".rb": Language.RUBY.value,
    ".rs": Language.RUST.value,
    ".ts": Language.TYPESCRIPT.value,
}

# Default file name for inline/stdin code
MAIN_FILE_NAMES: dict[str, str] = {
    Language.GO.value: "main.go",
    Language.JAVASCRIPT.value: "main.js",
    Language.PYTHON.value: "main.py",
    Language.RUBY.value: "main.rb",
    Language.RUST.value: "main.rs",
    Language.TYPESCRIPT.value: "main.ts",
}

ERROR_SUGGESTIONS: dict[str, list[str]] = {
    "UNAUTHORIZED": ["Check the API key (--api-key or CODIZE_API_KEY)"],
    "RATE_LIMITED": ["Wait a moment and retry"],
    "INTERNAL_ERROR": ["Retry later; the error is on the server side"],
}


def detect_language(path: str) -> str | None:
    """Auto-detect language from file extension.

    Args:
        path: File path or stdin marker ("-")

    Returns:
        Detected language name or None if cannot detect
    """
    if path == "-":
        return None
    return EXTENSION_MAP.get(Path(path).suffix.lower())


def main_file_name(language: str) -> str:
    """File name used for inline or stdin code."""
    return MAIN_FILE_NAMES.get(language, "main")


def format_error(title: str, message: str, suggestions: list[str] | None = None) -> str:
    """Format an error message following What → Why → Fix pattern.

    Args:
        title: Short error title
        message: Detailed explanation
        suggestions: Optional list of suggestions to fix the issue

    Returns:
        Formatted error string
    """
    lines = [
        click.style(f"Error: {title}", fg="red", bold=True),
        "",
        f"  {message}",
    ]

    if suggestions:
        lines.extend(["", "  Suggestions:"])
        lines.extend(f"    • {suggestion}" for suggestion in suggestions)

    return "\n".join(lines)


def format_api_error(error: CodizeApiError) -> str:
    """Format a structured API error, listing field errors when present."""
    suggestions = list(ERROR_SUGGESTIONS.get(error.code, []))
    for detail in error.errors or []:
        location = ".".join(str(part) for part in detail["path"]) or "<request>"
        suggestions.append(f"{location}: {detail['message']}")
    return format_error(f"API error {error.status} ({error.code})", error.message, suggestions)


def format_result_json(result: SandboxExecuteResponse) -> str:
    """Format stage results as JSON, using API field names."""
    return json.dumps(result.data.to_wire(), indent=2)


def echo_stage(stage: SandboxStageResult) -> None:
    """Write a stage's stdout and stderr to the matching streams."""
    if stage.stdout:
        click.echo(stage.stdout, nl=False)
    if stage.stderr:
        click.echo(stage.stderr, nl=False, err=True)


def stage_exit_code(stage: SandboxStageResult) -> int:
    """Exit code of a stage; a missing or non-integer code counts as failure."""
    code = stage.exit_code
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return EXIT_FAILURE


async def run_code(client: CodizeClient, request: SandboxExecuteRequest, json_output: bool) -> int:
    """Execute the request and return the exit code for the CLI.

    Args:
        client: Configured API client
        request: Language and files to execute
        json_output: Output stage results as JSON

    Returns:
        Exit code to return from CLI
    """
    try:
        result = await client.sandbox.execute(request)

    except CodizeApiError as e:
        click.echo(format_api_error(e), err=True)
        return EXIT_API_ERROR

    except UnexpectedApiError as e:
        click.echo(format_error("Unexpected API response", e.message), err=True)
        return EXIT_API_ERROR

    except httpx.HTTPError as e:
        error_msg = format_error(
            "Connection error",
            str(e) or type(e).__name__,
            ["Check network connectivity", f"Check the base URL ({client.base_url})"],
        )
        click.echo(error_msg, err=True)
        return EXIT_API_ERROR

    if json_output:
        click.echo(format_result_json(result))
        return stage_exit_code(result.data.run)

    compile_stage = result.data.compile
    if compile_stage is not None:
        echo_stage(compile_stage)
        if stage_exit_code(compile_stage) != EXIT_SUCCESS:
            return stage_exit_code(compile_stage)

    echo_stage(result.data.run)
    return stage_exit_code(result.data.run)


def read_sources(sources: tuple[str, ...], inline_code: str | None, language: str) -> list[SandboxFile]:
    """Collect files from paths, stdin ("-") or inline code.

    Raises:
        click.UsageError: No input, unreadable path, or stdin mixed with paths
    """
    if inline_code is not None:
        return [SandboxFile(name=main_file_name(language), content=inline_code)]

    if not sources:
        raise click.UsageError("No code provided. Provide SOURCE arguments or use -c flag.")

    if "-" in sources:
        if len(sources) > 1:
            raise click.UsageError("Stdin ('-') cannot be combined with file paths.")
        if sys.stdin.isatty():
            raise click.UsageError("No input provided. Pipe code to stdin or use -c flag.")
        return [SandboxFile(name=main_file_name(language), content=sys.stdin.read())]

    files: list[SandboxFile] = []
    for source in sources:
        path = Path(source)
        if not path.is_file():
            raise click.UsageError(f"File not found: {source}")
        files.append(SandboxFile(name=path.name, content=path.read_text()))
    return files


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("sources", nargs=-1)
@click.option("-l", "--language", help="Language name (auto-detected from the first file's extension)")
@click.option("-c", "--code", "inline_code", help="Code to execute (alternative to SOURCE)")
@click.option("--api-key", help="API key (default: CODIZE_API_KEY)")
@click.option("--base-url", help="API base URL (default: CODIZE_BASE_URL or https://codize.dev)")
@click.option("--json", "json_output", is_flag=True, help="Output stage results as JSON")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors")
@click.option("-v", "--verbose", is_flag=True, help="Log requests and responses")
@click.version_option(__version__, "-V", "--version", prog_name="codize")
def main(
    sources: tuple[str, ...],
    language: str | None,
    inline_code: str | None,
    api_key: str | None,
    base_url: str | None,
    json_output: bool,
    quiet: bool,
    verbose: bool,
) -> NoReturn:
    """Execute code in the Codize sandbox.

    SOURCES can be:

    \b
      - File paths:   codize main.go util.go
      - Stdin:        echo 'print(1)' | codize -

    Language is auto-detected from the first file's extension
    (.py, .js, .mjs, .ts, .rb, .rs, .go) or defaults to Python for
    inline and stdin code.

    Examples:

    \b
      codize main.py                          # Run a file
      codize -l rust main.rs                  # Explicit language
      codize -c 'console.log(1)' -l javascript
      codize --json main.py | jq .run.stdout  # JSON output
    """
    settings = Settings()

    if quiet:
        configure_logging(quiet=True)
    elif verbose:
        configure_logging(level="DEBUG")
    elif settings.log_level:
        configure_logging(level=settings.log_level.upper())

    resolved_key = api_key if api_key is not None else settings.api_key
    if not resolved_key:
        raise click.UsageError("No API key provided. Use --api-key or set CODIZE_API_KEY.")

    # Resolve language (explicit, first file's extension, python for inline code)
    if language:
        resolved_language = language.lower()
    elif inline_code is None and sources and sources[0] != "-":
        detected = detect_language(sources[0])
        if detected is None:
            raise click.UsageError(f"Cannot detect language of {sources[0]}. Use -l/--language.")
        resolved_language = detected
    else:
        resolved_language = Language.PYTHON.value

    files = read_sources(sources, inline_code, resolved_language)

    client = CodizeClient(
        resolved_key,
        transport=HttpxTransport(),
        base_url=base_url or settings.base_url,
    )
    request = SandboxExecuteRequest(language=resolved_language, files=files)

    exit_code = asyncio.run(run_code(client, request, json_output))

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
