"""Logger setup for codize.

Library modules log through get_logger(__name__). Nothing is printed unless
the host application configures logging: the "codize" logger only carries
a NullHandler. CODIZE_LOG_LEVEL, read once at import, sets its level.

The CLI calls configure_logging(), which attaches one handler writing
records to stderr through click, e.g.:
    codize.client DEBUG: Sending sandbox execute request
"""

import logging
import os

import click

from codize.constants import LOG_LEVEL_ENV

LIBRARY_LOGGER_NAME: str = "codize"

_FMT = "%(name)s %(levelname)s: %(message)s"

# Styling per level; levels not listed are printed dim
_LEVEL_COLORS: dict[int, str] = {
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


def _level_from_env() -> int | None:
    """Level named by CODIZE_LOG_LEVEL, or None when unset or unknown."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    return logging.getLevelNamesMapping().get(name) or None


_library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
_library_logger.addHandler(logging.NullHandler())
if (_env_level := _level_from_env()) is not None:
    _library_logger.setLevel(_env_level)


class _ClickHandler(logging.Handler):
    """Writes formatted records to stderr with click.echo.

    click strips the styling when stderr is not a terminal.
    """

    def __init__(self) -> None:
        super().__init__()
        self.setFormatter(logging.Formatter(_FMT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self.format(record)
            color = _LEVEL_COLORS.get(record.levelno)
            styled = click.style(text, fg=color) if color else click.style(text, dim=True)
            click.echo(styled, err=True)
        except Exception:  # noqa: BLE001
            self.handleError(record)


def get_logger(name: str) -> logging.Logger:
    """Logger for a codize module (child of the "codize" logger)."""
    return logging.getLogger(name)


def configure_logging(*, level: int | str | None = None, quiet: bool = False) -> None:
    """Send codize log records to stderr. Safe to call more than once.

    Args:
        level: Log level (e.g. logging.DEBUG, "WARNING"); overrides CODIZE_LOG_LEVEL
        quiet: Only show errors. Takes precedence over level.

    Raises:
        ValueError: level is an unknown level name
    """
    if not any(isinstance(h, _ClickHandler) for h in _library_logger.handlers):
        _library_logger.addHandler(_ClickHandler())

    if quiet:
        _library_logger.setLevel(logging.ERROR)
    elif level is not None:
        _library_logger.setLevel(level)
