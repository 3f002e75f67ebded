# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration models.

This module provides the pydantic models that give typed, immutable access
to phasegate configuration, and the factory methods that build them from
defaults, TOML files and environment variables.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

from phasegate.config._defaults import DEFAULT_CONFIG, PROJECT_CONFIG_NAME
from phasegate.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
)
from phasegate.exceptions import ConfigLoadError


class LogLevel(StrEnum):
    """Log level threshold values, most verbose first."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Configuration source names, highest precedence first."""

    ENV = "env"
    PROJECT = "project"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """A configuration source that contributed values.

    Attributes:
        name: The source type.
        path: Path to the config file, or None for non-file sources.
        values: Configuration values from this source.
    """

    name: ConfigSourceName
    path: Path | None
    values: dict[str, Any]


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to the log file; empty logs to stderr.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class RequirementsConfig(BaseModel):
    """Requirements configuration section.

    Attributes:
        show_restricted: Whether listings include requirements gated to a
            later STLC phase.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    show_restricted: bool = True


E = TypeVar("E", bound=StrEnum)


def _parse_enum(enum_type: type[E], value: Any, default: E) -> E:
    try:
        return enum_type(str(value).lower())
    except ValueError:
        return default


def _section(merged: dict[str, Any], name: str) -> dict[str, Any]:
    value = merged.get(name, {})
    if not isinstance(value, dict):
        msg = f"Expected a table for '{name}', got {type(value).__name__}"
        raise ConfigLoadError(msg)
    return value


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=_parse_enum(LogLevel, data.get("level", "warning"), LogLevel.WARNING),
        format=_parse_enum(LogFormat, data.get("format", "text"), LogFormat.TEXT),
        file=str(data.get("file", "")),
    )


def _parse_requirements(data: dict[str, Any]) -> RequirementsConfig:
    value = data.get("show_restricted", True)
    return RequirementsConfig(
        show_restricted=bool(value) if isinstance(value, int) else True,
    )


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    requirements: RequirementsConfig = RequirementsConfig()

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def _build(
        cls, merged: dict[str, Any], sources: tuple[ConfigSource, ...]
    ) -> Self:
        config = cls(
            logging=_parse_logging(_section(merged, "logging")),
            requirements=_parse_requirements(_section(merged, "requirements")),
        )
        config._data = merged
        config._sources = sources
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Invalid enum values fall back to their defaults.

        Args:
            data: Dictionary of configuration values.

        Returns:
            Configuration object.

        Raises:
            ConfigLoadError: If a section is not a table.
        """
        return cls._build(deep_merge(DEFAULT_CONFIG, data), ())

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a single TOML file.

        Args:
            path: Path to the TOML file.

        Returns:
            Configuration from the defaults and that file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed or a section is not
                a table.
        """
        data = read_toml_file(path)
        source = ConfigSource(name=ConfigSourceName.PROJECT, path=path, values=data)
        return cls._build(deep_merge(DEFAULT_CONFIG, data), (source,))

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        cwd: Path | None = None,
        include_env: bool = True,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged defaults, then the project file, then environment
        variables. The project file is ``config_path`` when given, otherwise
        ``phasegate.toml`` in ``cwd`` if it exists.

        Args:
            config_path: Explicit config file; it must exist.
            cwd: Directory searched for the project file. Defaults to the
                current working directory.
            include_env: Include ``PHASEGATE_*`` environment variables.

        Returns:
            Merged configuration object.

        Raises:
            FileNotFoundError: If ``config_path`` does not exist.
            ConfigLoadError: If a config file cannot be parsed or a section
                is not a table.
        """
        sources = [
            ConfigSource(
                name=ConfigSourceName.DEFAULT,
                path=None,
                values=copy_value(DEFAULT_CONFIG),
            )
        ]

        project_file = config_path
        if project_file is None:
            candidate = (cwd or Path.cwd()) / PROJECT_CONFIG_NAME
            if candidate.is_file():
                project_file = candidate
        if project_file is not None:
            sources.append(
                ConfigSource(
                    name=ConfigSourceName.PROJECT,
                    path=project_file,
                    values=read_toml_file(project_file),
                )
            )

        if include_env:
            env_values = parse_env_vars()
            if env_values:
                sources.append(
                    ConfigSource(
                        name=ConfigSourceName.ENV, path=None, values=env_values
                    )
                )

        merged: dict[str, Any] = {}
        for source in sources:
            merged = deep_merge(merged, source.values)

        return cls._build(merged, tuple(reversed(sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the contributing sources, highest precedence first."""
        return list(self._sources)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., "logging.level").
            default: Value returned if the key is not found.

        Returns:
            The configuration value, or ``default``.
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the merged configuration."""
        return copy_value(self._data)
