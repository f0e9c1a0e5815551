"""
.env support for flagnames settings.

FLAGNAMES_* variables can be kept in a user-wide .env under the XDG config
directory or in the project directory. Files are read in order, user first,
and later files replace earlier ones. Anything already present in the
process environment when loading starts is left untouched.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

from .loader import get_xdg_config_home


def read_env_file(path: Path) -> dict[str, str]:
    """Parse one .env file; bare keys with no value are skipped."""
    if not path.exists():
        return {}
    return {str(k): str(v) for k, v in dotenv_values(path).items() if k and v is not None}


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> list[str]:
    """
    Export variables from the user and project .env files.

    Args:
        project_dir: Where the project .env lives (defaults to cwd)
        user_env_paths: Replaces the default user .env location
        project_env_paths: Replaces the default project .env location

    Returns:
        Sorted names of the variables exported
    """
    if project_dir is None:
        project_dir = Path.cwd()
    if user_env_paths is None:
        user_env_paths = [get_xdg_config_home() / "flagnames" / ".env"]
    if project_env_paths is None:
        project_env_paths = [project_dir / ".env"]

    inherited = set(os.environ)
    values: dict[str, str] = {}
    for path in [*user_env_paths, *project_env_paths]:
        values.update(read_env_file(Path(path)))

    exported = sorted(key for key in values if key not in inherited)
    for key in exported:
        os.environ[key] = values[key]
    return exported
