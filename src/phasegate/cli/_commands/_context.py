# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""CLI context for global state management.

The CLIContext is set once at CLI startup and made available to all
commands via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from phasegate.config import Config
from phasegate.utils import create_cli_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    TABLE = "table"
    JSON = "json"


_current_cli_context: contextvars.ContextVar["CLIContext | None"] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        verbose: Enable verbose output with additional details.
        config_path: Explicit config file passed with --config.
        config_error: Error message if config loading failed.
        logger: Structured logger for CLI commands.
    """

    config: Config = field(repr=False)
    verbose: bool = False
    config_path: Path | None = None
    config_error: str | None = None
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)

    def get_logger(self, command: str = "") -> "FilteringBoundLogger":  # noqa: UP037
        """Return the context logger, or one built from the config.

        Args:
            command: Command name bound to every entry.

        Returns:
            A structured logger.
        """
        if self.logger is not None:
            return self.logger.bind(command=command) if command else self.logger

        return create_cli_logger(
            level=self.config.logging.level.value,
            log_format=self.config.logging.format.value,  # pyright: ignore[reportArgumentType]
            log_file=self.config.logging.file,
            command=command,
        )

    @classmethod
    def get_current(cls) -> "CLIContext":  # noqa: UP037
        """Get the active CLIContext, or a default one if none is set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Set the active CLIContext."""
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to the default context."""
        _current_cli_context.set(None)
