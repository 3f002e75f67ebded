"""Phasegate configuration.

This module provides loading and typed access to phasegate configuration,
merged from built-in defaults, ``phasegate.toml`` and ``PHASEGATE_*``
environment variables.

Example:
    >>> from phasegate.config import Config
    >>> config = Config.load()
    >>> config.requirements.show_restricted
    True
"""

from phasegate.exceptions import ConfigError, ConfigLoadError

from ._defaults import DEFAULT_CONFIG, ENV_PREFIX, PROJECT_CONFIG_NAME
from ._load import safe_load_config
from ._loader import (
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    RequirementsConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "PROJECT_CONFIG_NAME",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RequirementsConfig",
    "deep_merge",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
