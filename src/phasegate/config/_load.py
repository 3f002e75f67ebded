import os
import sys
from pathlib import Path

from phasegate.config._models import Config
from phasegate.exceptions import ConfigError


def safe_load_config(
    *,
    config_path: Path | None = None,
    cwd: Path | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Load failures are handled according to PHASEGATE_STRICT_CONFIG:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1)

    An explicit ``config_path`` must exist regardless of strict mode.

    Args:
        config_path: Explicit path to config file (--config flag).
        cwd: Directory searched for ``phasegate.toml``.

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
    """
    strict_mode = os.environ.get("PHASEGATE_STRICT_CONFIG", "0") == "1"

    if config_path is not None and not config_path.exists():
        print(  # noqa: T201
            f"Error: Config file not found: {config_path}",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        config = Config.load(config_path=config_path, cwd=cwd)
    except (ConfigError, OSError) as e:
        error_msg = f"Failed to load config: {e}"
        if strict_mode:
            print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        print(f"Warning: {error_msg}", file=sys.stderr)  # noqa: T201
        return Config.from_dict({}), error_msg
    else:
        return config, None
