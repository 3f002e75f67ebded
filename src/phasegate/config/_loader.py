# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
# pyright: reportExplicitAny=false
"""TOML configuration file loading and merging."""

import os
import tomllib
from pathlib import Path
from typing import Any

import orjson

from phasegate.config._defaults import ENV_PREFIX
from phasegate.exceptions import ConfigLoadError


def read_toml_file(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=e.lineno,
            column=e.colno,
        ) from e


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration dictionaries.

    Neither input is modified. Nested dictionaries merge recursively; any
    other value in ``override`` replaces the one in ``base``.

    Args:
        base: Base configuration (lower precedence).
        override: Override configuration (higher precedence).

    Returns:
        Merged configuration dictionary.
    """
    result = {key: copy_value(value) for key, value in base.items()}

    for key, override_val in override.items():
        base_val = result.get(key)
        if isinstance(base_val, dict) and isinstance(override_val, dict):
            result[key] = deep_merge(base_val, override_val)
        else:
            result[key] = copy_value(override_val)

    return result


def copy_value(value: Any) -> Any:
    """Return a deep copy of a configuration value."""
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def parse_env_vars(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Parse environment variables into a nested config dictionary.

    ``PHASEGATE_LOGGING__LEVEL=debug`` becomes ``{"logging": {"level":
    "debug"}}``. Variables without a double underscore after the prefix
    (``PHASEGATE_DEBUG``, ``PHASEGATE_STRICT_CONFIG``) are switches, not
    config keys, and are skipped.

    Args:
        prefix: Environment variable prefix.

    Returns:
        Dictionary of parsed config values.
    """
    result: dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        config_key = key[len(prefix) :]
        if "__" not in config_key:
            continue

        config_path = config_key.replace("__", ".").lower()
        set_nested_key(result, config_path, parse_string_value(value))

    return result


def parse_string_value(value: str) -> Any:
    """Parse a string value with type inference.

    Booleans (true/false), integers, floats (with a decimal point) and JSON
    arrays or objects are recognized; anything else stays a string.

    Examples:
        >>> parse_string_value("true")
        True
        >>> parse_string_value("42")
        42
        >>> parse_string_value("[1, 2]")
        [1, 2]
    """
    lower_value = value.lower()
    if lower_value in ("true", "false"):
        return lower_value == "true"

    try:
        return int(value)
    except ValueError:
        pass

    if "." in value:
        try:
            return float(value)
        except ValueError:
            pass

    if (value.startswith("[") and value.endswith("]")) or (
        value.startswith("{") and value.endswith("}")
    ):
        try:
            return orjson.loads(value)
        except orjson.JSONDecodeError:
            pass

    return value


def set_nested_key(d: dict[str, Any], key_path: str, value: Any) -> None:
    """Set a value at a dotted key path, creating intermediate dicts.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "logging.level", "debug")
        >>> d
        {'logging': {'level': 'debug'}}
    """
    parts = key_path.split(".")
    current = d

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value
