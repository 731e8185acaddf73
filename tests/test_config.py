"""Tests for config.py - settings from TOML and the environment."""

from __future__ import annotations

from pathlib import Path

import pytest

from chatter.config import ChatterSettings, load_settings
from chatter.errors import ConfigError


def test_defaults_without_file() -> None:
    assert load_settings(environ={}) == ChatterSettings(
        log_level="info", log_format="console"
    )


def test_load_from_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "chatter.toml"
    config_path.write_text('[chatter]\nlog_level = "DEBUG"\nlog_format = "json"\n')

    settings = load_settings(config_path, environ={})

    assert settings == ChatterSettings(log_level="debug", log_format="json")


def test_missing_table_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "chatter.toml"
    config_path.write_text("# nothing here\n")

    assert load_settings(config_path, environ={}) == ChatterSettings()


def test_env_overrides_file(tmp_path: Path) -> None:
    config_path = tmp_path / "chatter.toml"
    config_path.write_text('[chatter]\nlog_level = "debug"\n')

    settings = load_settings(
        config_path,
        environ={"CHATTER_LOG_LEVEL": "warning", "CHATTER_LOG_FORMAT": " JSON "},
    )

    assert settings == ChatterSettings(log_level="warning", log_format="json")


def test_blank_env_is_ignored() -> None:
    settings = load_settings(environ={"CHATTER_LOG_LEVEL": "  "})
    assert settings.log_level == "info"


def test_invalid_level_raises() -> None:
    with pytest.raises(ConfigError, match="log_level must be one of"):
        load_settings(environ={"CHATTER_LOG_LEVEL": "loud"})


def test_non_string_value_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "chatter.toml"
    config_path.write_text("[chatter]\nlog_format = 3\n")

    with pytest.raises(ConfigError, match="log_format must be a string"):
        load_settings(config_path, environ={})


def test_unknown_key_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "chatter.toml"
    config_path.write_text('[chatter]\ncolour = "blue"\n')

    with pytest.raises(ConfigError, match="Unknown chatter settings: colour"):
        load_settings(config_path, environ={})


def test_chatter_must_be_table(tmp_path: Path) -> None:
    config_path = tmp_path / "chatter.toml"
    config_path.write_text('chatter = "nope"\n')

    with pytest.raises(ConfigError, match="must be a table"):
        load_settings(config_path, environ={})


def test_invalid_toml_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "chatter.toml"
    config_path.write_text("[chatter\n")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_settings(config_path, environ={})


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Cannot read config"):
        load_settings(tmp_path / "missing.toml", environ={})
