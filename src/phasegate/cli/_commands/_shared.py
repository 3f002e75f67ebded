# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes and exception mapping
- Output formatters (JSON, Markdown table)
- Snapshot loading with error reporting
"""

from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Never

from phasegate.exceptions import (
    DependencyError,
    SnapshotIOError,
    SnapshotParseError,
    TaskNotFoundError,
)
from phasegate.project import Project, load_project

if TYPE_CHECKING:
    from rich.console import Console
    from structlog.typing import FilteringBoundLogger

FormattableData = dict[str, Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_code_for_exception",
    "exit_with_error",
    "format_bool",
    "format_json",
    "format_table",
    "get_error_console",
    "load_snapshot",
]


class ExitCode(IntEnum):
    """Standard exit codes for phasegate CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def exit_code_for_exception(exc: BaseException) -> ExitCode:
    """Map an exception to the matching exit code.

    Args:
        exc: The exception to map.

    Returns:
        Exit code corresponding to the exception type.
    """
    if isinstance(exc, TaskNotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(exc, DependencyError):
        return ExitCode.VALIDATION_ERROR
    if isinstance(exc, SnapshotIOError):
        return ExitCode.IO_ERROR
    if isinstance(exc, SnapshotParseError):
        return ExitCode.LOAD_ERROR
    return ExitCode.INTERNAL_ERROR


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Dictionary to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    import orjson

    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Format data as a Markdown table.

    Args:
        headers: Column headers for the table.
        rows: List of rows, where each row is a list of cell values.

    Returns:
        Markdown table string representation.
    """
    from pytablewriter import MarkdownTableWriter

    writer = MarkdownTableWriter(
        headers=headers,
        value_matrix=rows,
        margin=1,
    )
    return writer.dumps()


def format_bool(value: bool) -> str:  # noqa: FBT001
    """Render a flag as a table cell."""
    return "yes" if value else "no"


def get_error_console() -> "Console":  # noqa: UP037
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    from rich.markup import escape

    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {escape(message)}", markup=True, highlight=False)
    raise SystemExit(code)


def load_snapshot(path: Path, logger: "FilteringBoundLogger") -> Project:
    """Load a project snapshot, exiting with an error on failure.

    Args:
        path: Path to the JSON snapshot.
        logger: Logger receiving the load outcome.

    Returns:
        The loaded project snapshot.

    Raises:
        SystemExit: With IO_ERROR if the file cannot be read, or LOAD_ERROR
            if its content is not a valid snapshot.
    """
    try:
        project = load_project(path)
    except (SnapshotIOError, SnapshotParseError) as e:
        logger.error("snapshot_load_failed", path=str(path), error=str(e))
        exit_with_error(str(e), exit_code_for_exception(e))

    logger.info(
        "snapshot_loaded",
        path=str(path),
        tasks=len(project.tasks),
        documents=len(project.documents),
        requirements=len(project.requirements),
    )
    return project
