"""Tests for settings loading, named paths and logging setup.

These tests exercise pure-logic helpers from ``apppath/settings.py``
against a fixed base directory inside ``tmp_path``.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

import pytest
import yaml

# Ensure the apppath package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from apppath import AppPath
from apppath.base_dir import ExecutableBaseDirectory
from apppath.resolver import PathResolver
from apppath.settings import (
    DEFAULT_SETTINGS,
    SETTINGS_ENV,
    load_settings,
    named_path,
    save_settings,
    settings_path,
    setup_logging,
)


@pytest.fixture
def base(tmp_path):
    directory = tmp_path / "app"
    directory.mkdir()
    return directory


@pytest.fixture
def resolver(base):
    return PathResolver(ExecutableBaseDirectory.fixed(base))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (SETTINGS_ENV, "MYAPP_CONFIG", "CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# load_settings / save_settings
# ---------------------------------------------------------------------------
class TestLoadSettings:
    """Unit tests for the YAML settings loader."""

    def test_default_location_is_beside_executable(self, resolver, base):
        assert settings_path(resolver) == AppPath(base / "apppath.yaml")

    def test_env_variable_moves_settings_file(self, resolver, tmp_path, monkeypatch):
        monkeypatch.setenv(SETTINGS_ENV, str(tmp_path / "elsewhere.yaml"))
        assert settings_path(resolver) == AppPath(tmp_path / "elsewhere.yaml")

    def test_load_existing_file(self, resolver, base):
        (base / "apppath.yaml").write_text("logging:\n  level: DEBUG\n")
        result = load_settings(resolver=resolver)
        assert result["logging"]["level"] == "DEBUG"
        # Missing keys should be filled from defaults
        assert result["logging"]["backup_count"] == 5
        assert result["paths"] == {}

    def test_missing_file_returns_defaults(self, tmp_path):
        result = load_settings(str(tmp_path / "does_not_exist.yaml"))
        assert result == DEFAULT_SETTINGS

    def test_invalid_yaml_returns_defaults(self, tmp_path):
        cfg_file = tmp_path / "bad.yaml"
        cfg_file.write_text(":::\n  - ][")
        assert load_settings(str(cfg_file)) == DEFAULT_SETTINGS

    def test_empty_file_returns_defaults(self, tmp_path):
        cfg_file = tmp_path / "empty.yaml"
        cfg_file.write_text("")
        assert load_settings(str(cfg_file)) == DEFAULT_SETTINGS

    def test_unlocatable_executable_returns_defaults(self):
        broken = PathResolver(ExecutableBaseDirectory(lambda: None))
        assert load_settings(resolver=broken) == DEFAULT_SETTINGS

    def test_explicit_path_ignores_broken_base(self, tmp_path):
        cfg_file = tmp_path / "explicit.yaml"
        cfg_file.write_text("logging:\n  level: ERROR\n")
        broken = PathResolver(ExecutableBaseDirectory(lambda: None))
        assert load_settings(str(cfg_file), broken)["logging"]["level"] == "ERROR"

    def test_wrong_type_uses_default(self, tmp_path):
        cfg_file = tmp_path / "typed.yaml"
        cfg_file.write_text("logging:\n  console: 'yes'\n  max_bytes: true\n")
        result = load_settings(str(cfg_file))
        assert result["logging"]["console"] is True
        assert result["logging"]["max_bytes"] == DEFAULT_SETTINGS["logging"]["max_bytes"]

    def test_unknown_level_and_negative_count_use_default(self, tmp_path):
        cfg_file = tmp_path / "levels.yaml"
        cfg_file.write_text("logging:\n  level: LOUD\n  backup_count: -1\n  file: app.log\n")
        result = load_settings(str(cfg_file))
        assert result["logging"]["level"] == "WARNING"
        assert result["logging"]["backup_count"] == 5
        assert result["logging"]["file"] == "app.log"

    def test_lowercase_level_accepted(self, tmp_path):
        cfg_file = tmp_path / "lower.yaml"
        cfg_file.write_text("logging:\n  level: debug\n")
        assert load_settings(str(cfg_file))["logging"]["level"] == "debug"

    def test_logging_block_not_a_mapping(self, tmp_path):
        cfg_file = tmp_path / "flat.yaml"
        cfg_file.write_text("logging: verbose\n")
        assert load_settings(str(cfg_file))["logging"] == DEFAULT_SETTINGS["logging"]

    def test_paths_table_validation(self, tmp_path):
        cfg_file = tmp_path / "paths.yaml"
        cfg_file.write_text(
            "paths:\n"
            "  data: var/data\n"
            "  config:\n    path: config.toml\n    env: MYAPP_CONFIG\n"
            "  broken:\n    env: X\n"
        )
        table = load_settings(str(cfg_file))["paths"]
        assert table == {
            "data": "var/data",
            "config": {"path": "config.toml", "env": "MYAPP_CONFIG"},
        }

    def test_paths_not_a_mapping(self, tmp_path):
        cfg_file = tmp_path / "list.yaml"
        cfg_file.write_text("paths:\n  - data\n")
        assert load_settings(str(cfg_file))["paths"] == {}

    def test_extra_top_level_keys_kept(self, tmp_path):
        cfg_file = tmp_path / "extra.yaml"
        cfg_file.write_text("profile: dev\n")
        result = load_settings(str(cfg_file))
        assert result["profile"] == "dev"
        assert result["logging"] == DEFAULT_SETTINGS["logging"]

    def test_defaults_not_shared(self, tmp_path):
        result = load_settings(str(tmp_path / "missing.yaml"))
        result["paths"]["x"] = "y"
        assert DEFAULT_SETTINGS["paths"] == {}

    def test_save_creates_parents(self, tmp_path):
        target = tmp_path / "nested" / "out.yaml"
        written = save_settings({"paths": {"data": "data"}}, str(target))
        assert written == AppPath(target)
        assert yaml.safe_load(target.read_text())["paths"]["data"] == "data"

    def test_save_then_load(self, resolver, base):
        settings = load_settings(resolver=resolver)
        settings["logging"]["level"] = "INFO"
        save_settings(settings, resolver=resolver)
        assert (base / "apppath.yaml").is_file()
        assert load_settings(resolver=resolver)["logging"]["level"] == "INFO"


# ---------------------------------------------------------------------------
# named_path
# ---------------------------------------------------------------------------
class TestNamedPath:

    SETTINGS = {
        "paths": {
            "data": "data",
            "config": {
                "path": "config.toml",
                "env": ["MYAPP_CONFIG", "CONFIG_FILE"],
                "override": "fallback.toml",
            },
            "logs": {"path": "logs/app.log", "env": "MYAPP_CONFIG"},
            "broken": {"env": "X"},
        }
    }

    def test_plain_entry(self, resolver, base):
        assert named_path(self.SETTINGS, "data", resolver) == AppPath(base / "data")

    def test_env_variables_in_order(self, resolver, base, monkeypatch):
        monkeypatch.setenv("CONFIG_FILE", "second.toml")
        assert named_path(self.SETTINGS, "config", resolver) == AppPath(base / "second.toml")
        monkeypatch.setenv("MYAPP_CONFIG", "first.toml")
        assert named_path(self.SETTINGS, "config", resolver) == AppPath(base / "first.toml")

    def test_literal_override_after_env(self, resolver, base):
        assert named_path(self.SETTINGS, "config", resolver) == AppPath(base / "fallback.toml")

    def test_single_env_name(self, resolver, tmp_path, monkeypatch):
        monkeypatch.setenv("MYAPP_CONFIG", str(tmp_path / "abs.log"))
        assert named_path(self.SETTINGS, "logs", resolver) == AppPath(tmp_path / "abs.log")

    def test_unknown_name(self, resolver):
        with pytest.raises(KeyError):
            named_path(self.SETTINGS, "nope", resolver)

    def test_entry_without_path(self, resolver):
        with pytest.raises(ValueError):
            named_path(self.SETTINGS, "broken", resolver)


# ---------------------------------------------------------------------------
# setup_logging
# ---------------------------------------------------------------------------
class TestSetupLogging:

    def test_console_only(self, resolver, restore_root_logger):
        handlers = setup_logging(DEFAULT_SETTINGS, resolver)
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert logging.getLogger().level == logging.WARNING

    def test_relative_log_file_beside_executable(self, resolver, base, restore_root_logger):
        settings = {"logging": {"level": "INFO", "file": "logs/apppath.log", "console": False}}
        handlers = setup_logging(settings, resolver)
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)
        assert (base / "logs").is_dir()
        assert handlers[0].baseFilename == str(base / "logs" / "apppath.log")
        assert logging.getLogger().level == logging.INFO

    def test_level_argument_wins(self, resolver, restore_root_logger):
        setup_logging(DEFAULT_SETTINGS, resolver, level=logging.DEBUG)
        assert logging.getLogger().level == logging.DEBUG

    def test_no_handlers_configured_falls_back_to_console(self, resolver, restore_root_logger):
        handlers = setup_logging({"logging": {"console": False}}, resolver)
        assert len(handlers) == 1
