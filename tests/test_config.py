"""Tests for termui.config."""

from __future__ import annotations

import pytest

from termui.config import Config, ConfigError
from termui.screens import build_registry


class TestFromEnv:
    def test_defaults(self) -> None:
        config = Config.from_env({})
        assert config.host == "0.0.0.0"
        assert config.port == 2222
        assert config.start_screen == "loader"
        assert config.theme == "ocean"
        assert config.escape_timeout_ms == 50

    def test_overrides(self) -> None:
        config = Config.from_env(
            {
                "TERMUI_HOST": "127.0.0.1",
                "TERMUI_PORT": "8022",
                "TERMUI_START_SCREEN": "menu",
                "TERMUI_THEME": "cyber",
                "TERMUI_ESCAPE_TIMEOUT_MS": "20",
                "TERMUI_LOG_LEVEL": "DEBUG",
                "TERMUI_LOG_FILE": "/tmp/termui.log",
            }
        )
        assert config.host == "127.0.0.1"
        assert config.port == 8022
        assert config.start_screen == "menu"
        assert config.theme == "cyber"
        assert config.escape_timeout_ms == 20
        assert config.log_level == "debug"
        assert config.log_file == "/tmp/termui.log"

    def test_empty_values_keep_defaults(self) -> None:
        assert Config.from_env({"TERMUI_PORT": "", "TERMUI_THEME": ""}) == Config()

    def test_bad_integer(self) -> None:
        with pytest.raises(ConfigError, match="TERMUI_PORT"):
            Config.from_env({"TERMUI_PORT": "ssh"})


class TestValidate:
    def test_defaults_are_valid(self) -> None:
        config = Config()
        assert config.validate(build_registry()) is config

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("port", 0),
            ("port", 70000),
            ("cols", 0),
            ("escape_timeout_ms", -1),
            ("log_level", "loud"),
            ("theme", "plaid"),
        ],
    )
    def test_rejects(self, field: str, value) -> None:
        config = Config()
        setattr(config, field, value)
        with pytest.raises(ConfigError):
            config.validate()

    def test_unknown_start_screen(self) -> None:
        with pytest.raises(ConfigError, match="start screen"):
            Config(start_screen="nowhere").validate(build_registry())

    def test_start_screen_unchecked_without_registry(self) -> None:
        Config(start_screen="nowhere").validate()
