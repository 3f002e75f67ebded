"""Phasegate CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._context import CLIContext, OutputFormat
from ._graph import deps_app, graph
from ._lifecycle import access, phases, stlc
from ._shared import (
    ExitCode,
    FormattableData,
    exit_code_for_exception,
    exit_with_error,
    format_json,
    format_table,
    get_error_console,
    load_snapshot,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "deps_app",
    "exit_code_for_exception",
    "exit_with_error",
    "format_json",
    "format_table",
    "get_error_console",
    "load_snapshot",
    "register_commands",
]


def register_commands(app: "App") -> None:  # noqa: UP037
    app.command(graph, name="graph")
    app.command(deps_app)
    app.command(phases, name="phases")
    app.command(stlc, name="stlc")
    app.command(access, name="access")
