"""Configuration persistence: load and save user preferences."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from booktop.io_utils import atomic_write_text
from booktop.models import (
    CONFIG_APP_NAME,
    DEFAULT_TAG_SEPARATOR,
    SORT_OPTIONS,
    UserConfig,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Persistence
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input:
#
#   Field             Rule                              Handler
#   ────────────────  ────────────────────────────────  ──────────────────
#   tag_separator     one non-space character           UserConfig.__post_init__
#   default_sort      in SORT_OPTIONS                   _dict_to_config
#   scalar fields     type-checked via _safe_get()      _dict_to_config
#
CONFIG_FILENAME = "config.json"


def get_config_dir() -> Path:
    """Directory holding config.json and debug.log."""
    return Path(user_config_dir(CONFIG_APP_NAME))


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/booktop/config.json
    - macOS: ~/Library/Application Support/booktop/config.json
    - Windows: %APPDATA%/booktop/config.json
    """
    return get_config_dir() / CONFIG_FILENAME


def _config_to_dict(config: UserConfig) -> dict[str, Any]:
    """Serialize UserConfig to a JSON-compatible dictionary."""
    return {
        "version": config.version,
        "default_bookcase": config.default_bookcase,
        "theme_name": config.theme_name,
        "tag_separator": config.tag_separator,
        "default_sort": config.default_sort,
        "sort_on_start": config.sort_on_start,
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type):
        return default
    return value


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Deserialize a dictionary to UserConfig with type validation."""
    default_sort = _safe_get(data, "default_sort", "title", str)
    if default_sort not in SORT_OPTIONS:
        logger.warning("Invalid default_sort %r, defaulting to 'title'", default_sort)
        default_sort = "title"

    return UserConfig(
        default_bookcase=_safe_get(data, "default_bookcase", "", str),
        theme_name=_safe_get(data, "theme_name", "monokai", str),
        tag_separator=_safe_get(data, "tag_separator", DEFAULT_TAG_SEPARATOR, str),
        default_sort=default_sort,
        sort_on_start=_safe_get(data, "sort_on_start", False, bool),
        version=_safe_get(data, "version", 1, int),
    )


def load_config() -> UserConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted.
    Logs specific errors to help diagnose config issues.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise TypeError("top-level JSON value is not an object")
        return _dict_to_config(data)
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return UserConfig()
    except UnicodeDecodeError as e:
        logger.warning("Config file is not valid UTF-8, using defaults: %s", e)
        return UserConfig()
    except (KeyError, TypeError) as e:
        logger.warning("Config file has invalid structure, using defaults: %s", e)
        return UserConfig()
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()


def save_config(config: UserConfig) -> bool:
    """Save configuration to disk atomically.

    Creates the config directory if it doesn't exist.
    Returns True on success, False on failure.
    """
    config_path = get_config_path()

    json_str = json.dumps(_config_to_dict(config), indent=2, ensure_ascii=False)
    try:
        atomic_write_text(config_path, json_str, prefix=".config-")
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "get_config_dir",
    "get_config_path",
    "load_config",
    "save_config",
]
