"""Default configuration values.

DEFAULT_CONFIG is a plain dict so it can be passed straight to deep_merge,
which never modifies its inputs.
"""

from typing import Any

PROJECT_CONFIG_NAME = "phasegate.toml"

ENV_PREFIX = "PHASEGATE_"

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "warning",
        "format": "text",
        "file": "",
    },
    "requirements": {
        "show_restricted": True,
    },
}
