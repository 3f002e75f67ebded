"""Command-line interface for phasegate."""

from ._app import app, create_app, main
from ._commands import CLIContext

__all__ = ["CLIContext", "app", "create_app", "main"]
