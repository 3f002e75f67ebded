"""Logging utilities for phasegate.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to a file or to stderr. Each logger is
self-contained and does not modify global structlog configuration.
"""

import logging
import sys
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, PHASEGATE_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer, INFO for unknown names.
    """
    if respect_env and getenv("PHASEGATE_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def create_logger(
    stream: TextIO,
    *,
    log_level: int = logging.INFO,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger writing to a text stream.

    Args:
        stream: Stream the rendered entries are written to.
        log_level: Minimum level that is emitted.
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLogger(file=stream),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "warning",
    log_format: LogFormatType = "text",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    Entries go to ``log_file`` when set (opened in append mode, parent
    directories created), otherwise to stderr. PHASEGATE_DEBUG forces DEBUG
    level regardless of ``level``.

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to the log file; empty logs to stderr.
        command: Name of the CLI command, bound to all entries.

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    stream: TextIO = sys.stderr
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        stream = log_path.open("a", encoding="utf-8")

    logger = create_logger(
        stream,
        log_level=_log_level_from_string(level, respect_env=True),
        log_format=log_format,
    )

    if command:
        return logger.bind(command=command)
    return logger
