#!/usr/bin/env python3
"""Tests for the hierarchical ConfigManager."""

import os
import threading

import pytest

from dyntags.core.config import (
    CONFIG_SCHEMA,
    ConfigError,
    ConfigManager,
    ConfigSource,
)
from dyntags.core.constants import ErrorCode


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove DYNTAGS_* variables so defaults are predictable."""
    for key in list(os.environ):
        if key.startswith("DYNTAGS_"):
            monkeypatch.delenv(key)


class TestConfigSource:
    """Tests for ConfigSource enum."""

    def test_precedence_order(self):
        """Test config source precedence ordering."""
        sources = [
            ConfigSource.COMPILED_DEFAULTS,
            ConfigSource.USER_CONFIG,
            ConfigSource.ENVIRONMENT,
            ConfigSource.CLI_ARGS,
            ConfigSource.RUNTIME,
        ]
        assert [s.value for s in sources] == [1, 2, 3, 4, 5]


class TestConfigError:
    """Tests for ConfigError exception."""

    def test_default_code(self):
        """Test default error code."""
        error = ConfigError("Test error")
        assert error.message == "Test error"
        assert error.error_code == ErrorCode.INVALID_INPUT
        assert str(error) == "Test error"


class TestDefaults:
    """Tests for compiled defaults."""

    def test_defaults(self):
        """Test the defaults are visible through get()."""
        config = ConfigManager()
        assert config.get("logging.level") == "WARNING"
        assert config.get("transforms.preserve_on_error") is False
        assert config.get("matching.include_disabled") is False
        assert config.get("rules") == []

    def test_defaults_are_copied(self):
        """Test mutating one manager leaves the shared defaults intact."""
        first = ConfigManager()
        first.get("rules").append("junk")
        assert ConfigManager().get("rules") == []

    def test_missing_key_default(self):
        """Test default value for missing keys."""
        config = ConfigManager()
        assert config.get("nothing.here") is None
        assert config.get("nothing.here", default=5) == 5
        assert config.get("logging.level.deeper") is None


class TestLoadFile:
    """Tests for loading YAML settings files."""

    def test_load_yaml(self, tmp_path):
        """Test file values override defaults."""
        path = tmp_path / "dyntags.yaml"
        path.write_text("logging:\n  level: DEBUG\n", encoding="utf-8")

        config = ConfigManager(str(path))

        assert config.get("logging.level") == "DEBUG"
        assert config.get("logging.file") is None
        assert config.get("transforms.preserve_on_error") is False

    def test_not_found(self, tmp_path):
        """Test missing file error."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager().load_file(str(tmp_path / "missing.yaml"))
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_invalid_yaml(self, tmp_path):
        """Test YAML syntax errors."""
        path = tmp_path / "bad.yaml"
        path.write_text("rules: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="YAML parse error"):
            ConfigManager().load_file(str(path))

    def test_non_mapping(self, tmp_path):
        """Test a top-level list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid config format"):
            ConfigManager().load_file(str(path))

    def test_empty_file(self, tmp_path):
        """Test an empty file loads as no overrides."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        config = ConfigManager(str(path))
        assert config.get("logging.level") == "WARNING"


class TestEnvironment:
    """Tests for DYNTAGS_* overrides."""

    def test_section_and_key(self, monkeypatch):
        """Test the first underscore separates section from key."""
        monkeypatch.setenv("DYNTAGS_TRANSFORMS_PRESERVE_ON_ERROR", "true")
        monkeypatch.setenv("DYNTAGS_LOGGING_LEVEL", "INFO")

        config = ConfigManager()

        assert config.get("transforms.preserve_on_error") is True
        assert config.get("logging.level") == "INFO"

    def test_environment_beats_file(self, monkeypatch, tmp_path):
        """Test environment overrides the settings file."""
        path = tmp_path / "dyntags.yaml"
        path.write_text("logging:\n  level: DEBUG\n", encoding="utf-8")
        monkeypatch.setenv("DYNTAGS_LOGGING_LEVEL", "ERROR")

        assert ConfigManager(str(path)).get("logging.level") == "ERROR"

    def test_malformed_names_ignored(self, monkeypatch):
        """Test variables without a key part are skipped."""
        monkeypatch.setenv("DYNTAGS_LOGGING", "x")
        monkeypatch.setenv("DYNTAGS__LEVEL", "x")

        config = ConfigManager()
        assert ConfigSource.ENVIRONMENT not in config._config

    @pytest.mark.parametrize(
        "raw,parsed",
        [
            ("true", True),
            ("Yes", True),
            ("on", True),
            ("false", False),
            ("NO", False),
            ("off", False),
            ("42", 42),
            ("1.5", 1.5),
            ("hello", "hello"),
        ],
    )
    def test_parse_env_value(self, raw, parsed):
        """Test value coercion."""
        assert ConfigManager()._parse_env_value(raw) == parsed


class TestGetSet:
    """Tests for get, set and precedence."""

    def test_runtime_beats_everything(self):
        """Test runtime values win over CLI values."""
        config = ConfigManager()
        config.set("logging.level", "ERROR", ConfigSource.CLI_ARGS)
        config.set("logging.level", "DEBUG")

        assert config.get("logging.level") == "DEBUG"

    def test_set_creates_sections(self):
        """Test nested sections are created on demand."""
        config = ConfigManager()
        config.set("a.b.c", 1)
        assert config.get("a.b.c") == 1
        assert config.get("a") == {"b": {"c": 1}}

    def test_load_dict(self):
        """Test loading a dictionary at a given level."""
        config = ConfigManager()
        data = {"matching": {"include_disabled": True}}
        config.load_dict(data, ConfigSource.USER_CONFIG)
        data["matching"]["include_disabled"] = False

        assert config.get("matching.include_disabled") is True

    def test_get_all_deep_merges(self):
        """Test sections merge key by key across levels."""
        config = ConfigManager()
        config.set("logging.file", "dyntags.log", ConfigSource.CLI_ARGS)

        merged = config.get_all()

        assert merged["logging"] == {"level": "WARNING", "file": "dyntags.log"}
        assert merged["transforms"] == {"preserve_on_error": False}

    def test_concurrent_sets(self):
        """Test concurrent writers do not lose updates."""
        config = ConfigManager()

        def writer(i):
            config.set(f"threads.t{i}", i)

        threads = [threading.Thread(target=writer, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(config.get("threads")) == 10


class TestValidateSchema:
    """Tests for schema validation."""

    def test_defaults_valid(self):
        """Test compiled defaults satisfy the schema."""
        assert ConfigManager().validate_schema(CONFIG_SCHEMA) is True

    def test_version_accepts_numbers(self):
        """Test tuple types accept any member."""
        config = ConfigManager()
        config.set("version", 1.0)
        assert config.validate_schema(CONFIG_SCHEMA) is True

    def test_wrong_type(self):
        """Test type mismatches name the path."""
        config = ConfigManager()
        config.set("transforms.preserve_on_error", "sometimes")

        with pytest.raises(ConfigError, match="Expected bool for transforms.preserve_on_error, got str"):
            config.validate_schema(CONFIG_SCHEMA)

    def test_tuple_message(self):
        """Test tuple types are listed in the message."""
        config = ConfigManager()
        config.set("logging.file", 3)

        with pytest.raises(ConfigError, match="Expected str or NoneType for logging.file, got int"):
            config.validate_schema(CONFIG_SCHEMA)

    def test_section_not_dict(self):
        """Test a scalar where a section is expected."""
        config = ConfigManager()
        config.load_dict({"logging": "loud"}, ConfigSource.USER_CONFIG)

        with pytest.raises(ConfigError, match="Expected dict for logging, got str"):
            config.validate_schema(CONFIG_SCHEMA)


class TestClear:
    """Tests for clearing configuration."""

    def test_clear_source(self):
        """Test clearing one level."""
        config = ConfigManager()
        config.set("logging.level", "DEBUG")
        config.set("logging.level", "ERROR", ConfigSource.CLI_ARGS)

        config.clear(ConfigSource.RUNTIME)

        assert config.get("logging.level") == "ERROR"

    def test_clear_all_keeps_defaults(self):
        """Test clearing everything falls back to defaults."""
        config = ConfigManager()
        config.set("logging.level", "DEBUG")
        config.clear(ConfigSource.COMPILED_DEFAULTS)
        config.clear()

        assert config.get("logging.level") == "WARNING"
