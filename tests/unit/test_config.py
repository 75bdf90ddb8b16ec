"""Tests for Config module."""

import logging

import pytest

from pgdiff.config import Config, load_pgdiffcfg, parse_bool
from pgdiff.exceptions import ConfigError

ENV_KEYS = (
    "PGDIFF_ENCODING",
    "PGDIFF_SKIP_ERRORS",
    "PGDIFF_LOG_LEVEL",
    "PGDIFF_CONFIG_PROFILE",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point HOME at an empty directory and clear pgdiff variables."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return tmp_path


def write_cfg(home, content: str) -> None:
    (home / ".pgdiffcfg").write_text(content)


class TestConfigDefaults:
    """Test Config default values."""

    def test_config_defaults(self):
        """Config should have sensible defaults."""
        config = Config()
        assert config.encoding == "utf-8"
        assert config.skip_errors is False
        assert config.log_level == "INFO"
        assert config.logging_level == logging.INFO

    def test_from_env_without_anything_set(self):
        assert Config.from_env() == Config()


class TestConfigFromEnv:
    """Test Config.from_env() loading from environment variables."""

    def test_config_loads_from_env(self, monkeypatch):
        monkeypatch.setenv("PGDIFF_ENCODING", "latin-1")
        monkeypatch.setenv("PGDIFF_SKIP_ERRORS", "yes")
        monkeypatch.setenv("PGDIFF_LOG_LEVEL", "debug")

        config = Config.from_env()

        assert config.encoding == "latin-1"
        assert config.skip_errors is True
        assert config.log_level == "DEBUG"

    def test_invalid_boolean_raises_ConfigError(self, monkeypatch):
        monkeypatch.setenv("PGDIFF_SKIP_ERRORS", "maybe")
        with pytest.raises(ConfigError, match="skip_errors"):
            Config.from_env()


class TestConfigFile:
    def test_default_profile(self, isolated_env):
        write_cfg(isolated_env, "[DEFAULT]\nencoding = latin-1\nskip_errors = true\n")
        config = Config.from_env()
        assert config.encoding == "latin-1"
        assert config.skip_errors is True

    def test_named_profile(self, isolated_env, monkeypatch):
        write_cfg(
            isolated_env,
            "[DEFAULT]\nlog_level = INFO\n\n[dev]\nlog_level = DEBUG\n",
        )
        monkeypatch.setenv("PGDIFF_CONFIG_PROFILE", "dev")
        assert Config.from_env().log_level == "DEBUG"

    def test_env_overrides_file(self, isolated_env, monkeypatch):
        write_cfg(isolated_env, "[DEFAULT]\nencoding = latin-1\n")
        monkeypatch.setenv("PGDIFF_ENCODING", "utf-16")
        assert Config.from_env().encoding == "utf-16"

    def test_unknown_profile_raises_ConfigError(self, isolated_env):
        write_cfg(isolated_env, "[dev]\nencoding = latin-1\n")
        with pytest.raises(ConfigError, match="Available profiles: dev"):
            load_pgdiffcfg("prod")

    def test_unknown_profile_falls_back_in_from_env(self, isolated_env):
        write_cfg(isolated_env, "[dev]\nencoding = latin-1\n")
        assert Config.from_env(profile="prod").encoding == "utf-8"

    def test_missing_file_is_empty(self):
        assert load_pgdiffcfg() == {}


class TestConfigCliOverrides:
    """Test CLI argument overrides."""

    def test_config_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("PGDIFF_SKIP_ERRORS", "true")
        monkeypatch.setenv("PGDIFF_ENCODING", "latin-1")

        config = Config.from_env(skip_errors=False, encoding="utf-8")

        assert config.skip_errors is False
        assert config.encoding == "utf-8"

    def test_config_cli_partial_override(self, monkeypatch):
        monkeypatch.setenv("PGDIFF_ENCODING", "latin-1")
        config = Config.from_env(skip_errors=True)
        assert config.skip_errors is True
        assert config.encoding == "latin-1"


class TestConfigValidation:
    """Test Config.validate()."""

    def test_valid_config(self):
        Config(encoding="latin-1", log_level="WARNING").validate()

    def test_unknown_encoding_raises_ConfigError(self):
        with pytest.raises(ConfigError, match="encoding"):
            Config(encoding="no-such-codec").validate()

    def test_invalid_log_level_raises_ConfigError(self):
        with pytest.raises(ConfigError, match="log level"):
            Config(log_level="LOUD").validate()

    def test_reports_all_problems(self):
        with pytest.raises(ConfigError) as exc_info:
            Config(encoding="no-such-codec", log_level="LOUD").validate()
        message = str(exc_info.value)
        assert "no-such-codec" in message
        assert "LOUD" in message


class TestParseBool:
    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_true_values(self, value):
        assert parse_bool(value, "x") is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off"])
    def test_false_values(self, value):
        assert parse_bool(value, "x") is False
