"""termui: full-screen terminal UI sessions with whole-frame rendering."""

# Styling and layout
from termui.ansi import (
    style,
    strip_ansi,
    truncate,
    visible_length,
    visible_width,
)

# Configuration
from termui.config import Config, ConfigError

# Sessions
from termui.hub import SessionHub

# Keyboard input
from termui.input import InputDecoder
from termui.keys import KeyEvent, KeyType
from termui.layout import center_block, center_line, draw_box, join_columns
from termui.renderer import compose_frame, render_frame

# Screens
from termui.screen import BaseScreen, RegistryError, Screen, ScreenRegistry, UnknownScreenError
from termui.session import Session

# Themes
from termui.theme import THEMES, Theme, get_theme, theme_names

__all__ = [
    # Styling and layout
    "center_block",
    "center_line",
    "compose_frame",
    "draw_box",
    "join_columns",
    "render_frame",
    "strip_ansi",
    "style",
    "truncate",
    "visible_length",
    "visible_width",
    # Configuration
    "Config",
    "ConfigError",
    # Keyboard input
    "InputDecoder",
    "KeyEvent",
    "KeyType",
    # Screens
    "BaseScreen",
    "RegistryError",
    "Screen",
    "ScreenRegistry",
    "UnknownScreenError",
    # Sessions
    "Session",
    "SessionHub",
    # Themes
    "THEMES",
    "Theme",
    "get_theme",
    "theme_names",
]
