"""
Unit tests for configuration loader.

Tests multi-layer config merging, environment variable overrides,
caching, XDG directory handling and .env loading.
"""

import json
import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from flagnames.core.config import (
    ResolverConfig,
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    load_config,
    load_layered_env,
)
from flagnames.core.config.env import read_env_file
from flagnames.core.config.loader import (
    apply_env_overrides,
    get_default_config,
    get_xdg_config_home,
    load_json_file,
)

# ==============================================================================
# Helper Functions Tests
# ==============================================================================


class TestLoadJsonFile:
    """Test JSON file loading."""

    def test_load_existing_file(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"trace": True}))
        assert load_json_file(config_file) == {"trace": True}

    def test_load_nonexistent_file(self, tmp_path):
        assert load_json_file(tmp_path / "nonexistent.json") is None

    def test_load_invalid_json(self, tmp_path, capsys):
        """Invalid JSON returns None and prints a warning."""
        config_file = tmp_path / "invalid.json"
        config_file.write_text("{ invalid json }")

        assert load_json_file(config_file) is None

        captured = capsys.readouterr()
        assert "Warning" in captured.out
        assert "Failed to parse" in captured.out

    def test_load_non_object(self, tmp_path, capsys):
        config_file = tmp_path / "list.json"
        config_file.write_text("[1, 2]")

        assert load_json_file(config_file) is None
        assert "not a JSON object" in capsys.readouterr().out


class TestApplyEnvOverrides:
    """Test environment variable override logic."""

    def test_trace_true(self, monkeypatch):
        monkeypatch.setenv("FLAGNAMES_TRACE", "1")
        assert apply_env_overrides({})["trace"] is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", "", "FALSE"])
    def test_trace_false(self, monkeypatch, value):
        monkeypatch.setenv("FLAGNAMES_TRACE", value)
        assert apply_env_overrides({"trace": True})["trace"] is False

    def test_stop_at_positional(self, monkeypatch):
        monkeypatch.setenv("FLAGNAMES_STOP_AT_POSITIONAL", "yes")
        assert apply_env_overrides({})["stop_at_positional"] is True

    def test_exact_match_wins(self, monkeypatch):
        monkeypatch.setenv("FLAGNAMES_EXACT_MATCH_WINS", "on")
        assert apply_env_overrides({})["exact_match_wins"] is True

    def test_boolean_values(self, monkeypatch):
        monkeypatch.setenv("FLAGNAMES_BOOLEAN_VALUES", "on, off ,,")
        assert apply_env_overrides({})["boolean_values"] == ["on", "off"]

    def test_empty_boolean_values(self, monkeypatch):
        monkeypatch.setenv("FLAGNAMES_BOOLEAN_VALUES", "")
        assert apply_env_overrides({})["boolean_values"] == []

    def test_invalid_boolean_values_ignored(self, monkeypatch, capsys):
        monkeypatch.setenv("FLAGNAMES_BOOLEAN_VALUES", "on,-off")
        config = {"boolean_values": ["true"]}

        result = apply_env_overrides(config)
        assert result["boolean_values"] == ["true"]

        captured = capsys.readouterr()
        assert "Warning" in captured.out
        assert "FLAGNAMES_BOOLEAN_VALUES" in captured.out

    def test_no_env_overrides(self):
        config = {"trace": False}
        assert apply_env_overrides(config) == config

    def test_input_not_modified(self, monkeypatch):
        monkeypatch.setenv("FLAGNAMES_TRACE", "1")
        config = {"trace": False}
        apply_env_overrides(config)
        assert config == {"trace": False}


class TestGetDefaultConfig:
    def test_defaults_match_model(self):
        assert ResolverConfig(**get_default_config()) == ResolverConfig()


class TestXdgDirectories:
    """Test XDG directory helpers."""

    def test_get_xdg_config_home_default(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_xdg_config_home() == Path.home() / ".config"

    def test_get_xdg_config_home_custom(self, monkeypatch, tmp_path):
        custom_path = tmp_path / "custom-config"
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom_path))
        assert get_xdg_config_home() == custom_path

    def test_get_user_config_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_user_config_path() == tmp_path / "flagnames" / "config.json"

    def test_get_project_config_path(self, tmp_path):
        assert get_project_config_path(tmp_path) == tmp_path / ".flagnames.json"

    def test_get_project_config_path_defaults_to_cwd(self, isolated_config):
        assert get_project_config_path() == isolated_config / ".flagnames.json"


# ==============================================================================
# load_config Tests
# ==============================================================================


@pytest.fixture
def user_config_file():
    path = get_user_config_path()
    path.parent.mkdir(parents=True)
    return path


class TestLoadConfig:
    """Test layered loading."""

    def test_defaults_only(self):
        assert load_config() == ResolverConfig()

    def test_user_config(self, user_config_file):
        user_config_file.write_text(json.dumps({"trace": True}))
        assert load_config().trace is True

    def test_project_overrides_user(self, user_config_file, isolated_config):
        user_config_file.write_text(json.dumps({"trace": True, "boolean_values": ["y", "n"]}))
        (isolated_config / ".flagnames.json").write_text(json.dumps({"trace": False}))

        config = load_config()
        assert config.trace is False
        assert config.boolean_values == ["y", "n"]

    def test_env_overrides_project(self, isolated_config, monkeypatch):
        (isolated_config / ".flagnames.json").write_text(
            json.dumps({"stop_at_positional": False})
        )
        monkeypatch.setenv("FLAGNAMES_STOP_AT_POSITIONAL", "true")
        assert load_config().stop_at_positional is True

    def test_explicit_project_dir(self, tmp_path):
        other = tmp_path / "other"
        other.mkdir()
        (other / ".flagnames.json").write_text(json.dumps({"trace": True}))

        assert load_config(project_dir=other).trace is True

    def test_broken_project_config_skipped(self, isolated_config, capsys):
        (isolated_config / ".flagnames.json").write_text("not json")
        assert load_config() == ResolverConfig()
        assert "Warning" in capsys.readouterr().out

    def test_invalid_values_raise(self, isolated_config):
        (isolated_config / ".flagnames.json").write_text(
            json.dumps({"boolean_values": ["--yes"]})
        )
        with pytest.raises(ValidationError):
            load_config()

    def test_cached(self, isolated_config):
        first = load_config()
        (isolated_config / ".flagnames.json").write_text(json.dumps({"trace": True}))
        assert load_config() is first
        assert load_config(use_cache=False).trace is True

    def test_clear_cache(self, isolated_config):
        load_config()
        (isolated_config / ".flagnames.json").write_text(json.dumps({"trace": True}))
        clear_cache()
        assert load_config().trace is True


# ==============================================================================
# .env Loading Tests
# ==============================================================================


@pytest.fixture
def clean_env_keys(monkeypatch):
    """Remove keys a test's .env files may set, before and after."""
    keys = ["FLAGNAMES_TRACE", "FLAGNAMES_STOP_AT_POSITIONAL", "FLAGNAMES_TEST_ONLY"]
    for key in keys:
        monkeypatch.delenv(key, raising=False)
    yield
    for key in keys:
        os.environ.pop(key, None)


class TestLayeredEnv:
    """Test .env loading precedence."""

    def test_read_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("FLAGNAMES_TRACE=1\nEMPTY\n")
        assert read_env_file(env_file) == {"FLAGNAMES_TRACE": "1"}

    def test_read_missing_env_file(self, tmp_path):
        assert read_env_file(tmp_path / "missing.env") == {}

    def test_project_env_loaded(self, isolated_config, clean_env_keys):
        (isolated_config / ".env").write_text("FLAGNAMES_TRACE=1\n")

        assert load_layered_env() == ["FLAGNAMES_TRACE"]
        assert os.environ["FLAGNAMES_TRACE"] == "1"
        assert load_config().trace is True

    def test_project_overrides_user(self, tmp_path, clean_env_keys):
        user_env = tmp_path / "user.env"
        user_env.write_text("FLAGNAMES_TEST_ONLY=user\nFLAGNAMES_TRACE=1\n")
        project_env = tmp_path / "project.env"
        project_env.write_text("FLAGNAMES_TEST_ONLY=project\n")

        load_layered_env(user_env_paths=[user_env], project_env_paths=[project_env])
        assert os.environ["FLAGNAMES_TEST_ONLY"] == "project"
        assert os.environ["FLAGNAMES_TRACE"] == "1"

    def test_real_environment_wins(self, tmp_path, monkeypatch, clean_env_keys):
        monkeypatch.setenv("FLAGNAMES_TEST_ONLY", "shell")
        project_env = tmp_path / "project.env"
        project_env.write_text("FLAGNAMES_TEST_ONLY=project\n")

        assert load_layered_env(user_env_paths=[], project_env_paths=[project_env]) == []
        assert os.environ["FLAGNAMES_TEST_ONLY"] == "shell"
