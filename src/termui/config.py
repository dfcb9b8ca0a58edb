"""Configuration for the terminal server and the local runner."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

from termui.theme import THEMES

if TYPE_CHECKING:
    from termui.screen import ScreenRegistry

ENV_PREFIX = "TERMUI_"
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class ConfigError(ValueError):
    """A configuration value is malformed or names something that does not exist."""


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


@dataclass
class Config:
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 2222
    start_screen: str = "loader"
    theme: str = "ocean"
    cols: int = 80
    rows: int = 24
    escape_timeout_ms: int = 50
    log_level: str = "info"
    log_file: str | None = None
    static_dir: str = field(default_factory=lambda: str(Path(__file__).parent / "static"))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Defaults overridden by ``TERMUI_*`` environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=env.get(ENV_PREFIX + "HOST") or defaults.host,
            port=_env_int(env, "PORT", defaults.port),
            start_screen=env.get(ENV_PREFIX + "START_SCREEN") or defaults.start_screen,
            theme=env.get(ENV_PREFIX + "THEME") or defaults.theme,
            escape_timeout_ms=_env_int(env, "ESCAPE_TIMEOUT_MS", defaults.escape_timeout_ms),
            log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or defaults.log_level).lower(),
            log_file=env.get(ENV_PREFIX + "LOG_FILE") or defaults.log_file,
            static_dir=env.get(ENV_PREFIX + "STATIC_DIR") or defaults.static_dir,
        )

    def validate(self, registry: ScreenRegistry | None = None) -> Config:
        """Reject values that would only fail once a client connects."""
        if not 0 < self.port < 65536:
            raise ConfigError(f"port must be between 1 and 65535, got {self.port}")
        if self.cols < 1 or self.rows < 1:
            raise ConfigError(f"terminal size must be positive, got {self.cols}x{self.rows}")
        if self.escape_timeout_ms < 0:
            raise ConfigError("escape timeout must not be negative")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {self.log_level!r}")
        if self.theme not in THEMES:
            raise ConfigError(f"unknown theme {self.theme!r}; choose from {', '.join(THEMES)}")
        if registry is not None and self.start_screen not in registry:
            raise ConfigError(f"unknown start screen {self.start_screen!r}; choose from {', '.join(registry)}")
        return self
