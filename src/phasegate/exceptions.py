"""Phasegate exceptions."""

from pathlib import Path


class PhasegateError(Exception):
    """Base exception for phasegate errors."""


# =============================================================================
# Dependency Exceptions
# =============================================================================


class DependencyError(PhasegateError, ValueError):
    """Base exception for rejected dependency mutations.

    Attributes:
        task_id: The task that would receive the dependency.
        dependency_id: The task it would depend on.
    """

    def __init__(
        self,
        message: str,
        *,
        task_id: str | None = None,
        dependency_id: str | None = None,
    ) -> None:
        """Initialize with error message and edge context.

        Args:
            message: Human-readable error message.
            task_id: The task that would receive the dependency.
            dependency_id: The task it would depend on.
        """
        super().__init__(message)
        self.task_id: str | None = task_id
        self.dependency_id: str | None = dependency_id


class SelfReferenceError(DependencyError):
    """Raised when a task is made to depend on itself."""


class CircularDependencyError(DependencyError):
    """Raised when a dependency edge would close a cycle.

    Attributes:
        cycle: Task IDs forming the cycle, first and last entries equal.
    """

    def __init__(
        self,
        message: str,
        *,
        task_id: str | None = None,
        dependency_id: str | None = None,
        cycle: list[str] | None = None,
    ) -> None:
        """Initialize with error message and cycle context.

        Args:
            message: Human-readable error message.
            task_id: The task that would receive the dependency.
            dependency_id: The task it would depend on.
            cycle: Task IDs forming the cycle.
        """
        super().__init__(message, task_id=task_id, dependency_id=dependency_id)
        self.cycle: list[str] | None = cycle


class TaskNotFoundError(PhasegateError, KeyError):
    """Raised when a task cannot be found in a project snapshot.

    Attributes:
        task_id: The ID of the task that was not found.
    """

    def __init__(self, message: str, *, task_id: str | None = None) -> None:
        """Initialize with error message and task context.

        Args:
            message: Human-readable error message.
            task_id: The ID of the task that was not found.
        """
        super().__init__(message)
        self.task_id: str | None = task_id


# =============================================================================
# Snapshot Exceptions
# =============================================================================


class SnapshotError(PhasegateError):
    """Base exception for project snapshot loading."""


class SnapshotIOError(SnapshotError):
    """Raised when a snapshot file cannot be read.

    Attributes:
        path: Path to the file that caused the error.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and I/O context."""
        super().__init__(message)
        self.path: Path = path
        self.cause: Exception | None = cause


class SnapshotParseError(SnapshotError, ValueError):
    """Raised when snapshot content cannot be parsed into a project.

    Attributes:
        path: Path to the file that caused the error, if any.
        field: Dotted location of the offending field, if known.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        field: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and parse context.

        Args:
            message: Human-readable error message.
            path: Path to the file that caused the error.
            field: Dotted location of the offending field.
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.path: Path | None = path
        self.field: str | None = field
        self.cause: Exception | None = cause


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(PhasegateError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column
