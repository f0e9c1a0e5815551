"""
Pytest configuration and shared fixtures.

Provides the flag set used throughout the suite (the same one the demo
program declares) and isolates every test from real config files.
"""

import argparse

import pytest

from flagnames.core.config import clear_cache
from flagnames.core.models import KnownFlag

# ==============================================================================
# Environment Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Keep user/project config and FLAGNAMES_* vars out of every test.

    Config is cached per process, so the cache is cleared on both sides.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    for var in (
        "FLAGNAMES_TRACE",
        "FLAGNAMES_STOP_AT_POSITIONAL",
        "FLAGNAMES_EXACT_MATCH_WINS",
        "FLAGNAMES_BOOLEAN_VALUES",
    ):
        monkeypatch.delenv(var, raising=False)
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    clear_cache()
    yield project
    clear_cache()


# ==============================================================================
# Flag Fixtures
# ==============================================================================


@pytest.fixture
def sample_flags() -> list[KnownFlag]:
    """verbose (bool), id, item and prefix."""
    return [
        KnownFlag(name="verbose", is_boolean=True),
        KnownFlag(name="id"),
        KnownFlag(name="item"),
        KnownFlag(name="prefix"),
    ]


@pytest.fixture
def strict_parser() -> argparse.ArgumentParser:
    """
    argparse parser declaring the sample flags, with abbreviations off.

    Parse errors raise ``SystemExit`` as usual.
    """
    parser = argparse.ArgumentParser(prog="myprog", allow_abbrev=False)
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--id", type=int, default=0)
    parser.add_argument("--item", type=int, default=0)
    parser.add_argument("--prefix", default="")
    parser.add_argument("args", nargs="*")
    return parser
