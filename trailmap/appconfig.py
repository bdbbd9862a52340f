"""Application configuration helpers.

Configuration is layered, later layers winning:

  1. Built-in ``DEFAULT_CONFIG``.
  2. The first JSON config file found in ``_FILE_PATHS`` (top-level keys
     are merged over the defaults).
  3. ``TRAILMAP_*`` environment variables. The CLI calls ``load_dotenv()``
     first, so these can also live in a ``.env`` file.

No config file is required; trailmap always boots with the defaults.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CONFIG: dict[str, Any] = {
    "home_timezone": "UTC",
    "debug": False,
    "data_folder": "activities",
    "export_folder": "exports",
}

# Candidate JSON config file locations (searched in order)
_FILE_PATHS: list[Path] = [
    Path("trailmap_config.json"),
    Path("../trailmap_config.json"),
]

# Environment variable -> config key
_ENV_OVERRIDES: dict[str, str] = {
    "TRAILMAP_HOME_TIMEZONE": "home_timezone",
    "TRAILMAP_DEBUG": "debug",
    "TRAILMAP_DATA_FOLDER": "data_folder",
    "TRAILMAP_EXPORT_FOLDER": "export_folder",
}

_TRUTHY = {"1", "true", "yes", "y", "on"}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_from_file() -> dict[str, Any] | None:
    """Try each candidate path; return parsed JSON or ``None``."""
    for path in _FILE_PATHS:
        if path.exists():
            try:
                with open(path) as f:
                    return json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                print(f"Warning: could not read config file {path}: {e}")
    return None


def _load_from_env() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for env_name, key in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is None or value == "":
            continue
        if key == "debug":
            overrides[key] = value.strip().lower() in _TRUTHY
        else:
            overrides[key] = value
    return overrides


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config() -> dict[str, Any]:
    """Return the effective configuration (defaults < config file < environment)."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    file_cfg = _load_from_file()
    if file_cfg:
        config.update(file_cfg)
    config.update(_load_from_env())
    return config


def save_config(config: dict[str, Any], path: Path | None = None) -> Path:
    """Write *config* as JSON to *path* (default: the first candidate location)."""
    target = path or _FILE_PATHS[0]
    with open(target, "w") as f:
        json.dump(config, f, indent=2)
        f.write("\n")
    return target
