"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import os
from pathlib import Path
from typing import Any

from .models import ResolverConfig

# Global cache to avoid reloading config multiple times per process
_config_cache: ResolverConfig | None = None

FALSE_VALUES = ("false", "0", "no", "off", "")


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/flagnames/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "flagnames" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .flagnames.json in that directory
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".flagnames.json"


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            print(f"Warning: Config at {path} is not a JSON object, ignoring")
            return None
    except (json.JSONDecodeError, OSError) as e:
        # Config layers are optional; a broken one is skipped
        print(f"Warning: Failed to parse config at {path}: {e}")
        return None


def _env_bool(value: str) -> bool:
    return value.strip().lower() not in FALSE_VALUES


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        FLAGNAMES_TRACE - overrides trace
        FLAGNAMES_STOP_AT_POSITIONAL - overrides stop_at_positional
        FLAGNAMES_EXACT_MATCH_WINS - overrides exact_match_wins
        FLAGNAMES_BOOLEAN_VALUES - comma separated, overrides boolean_values

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if (trace_str := os.environ.get("FLAGNAMES_TRACE")) is not None:
        result["trace"] = _env_bool(trace_str)

    if (stop_str := os.environ.get("FLAGNAMES_STOP_AT_POSITIONAL")) is not None:
        result["stop_at_positional"] = _env_bool(stop_str)

    if (exact_str := os.environ.get("FLAGNAMES_EXACT_MATCH_WINS")) is not None:
        result["exact_match_wins"] = _env_bool(exact_str)

    if (values_str := os.environ.get("FLAGNAMES_BOOLEAN_VALUES")) is not None:
        values = [v.strip() for v in values_str.split(",") if v.strip()]
        if any(v.startswith("-") for v in values):
            print(f"Warning: Invalid FLAGNAMES_BOOLEAN_VALUES value '{values_str}', ignoring")
        else:
            result["boolean_values"] = values

    return result


def get_default_config() -> dict[str, Any]:
    """Hardcoded defaults, the lowest configuration layer."""
    return {
        "trace": False,
        "stop_at_positional": False,
        "exact_match_wins": False,
        "boolean_values": ["true", "false"],
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> ResolverConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (FLAGNAMES_*)
        2. Project config (.flagnames.json)
        3. User config (~/.config/flagnames/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Directory to load .flagnames.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated ResolverConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged.update(user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged.update(project_config)

    merged = apply_env_overrides(merged)

    config = ResolverConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """Clear the configuration cache (mainly for tests)."""
    global _config_cache
    _config_cache = None
