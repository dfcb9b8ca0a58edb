"""Colour themes.

A theme is an immutable table of colour roles. There is no process-wide
"current theme": every session carries its own :class:`Theme`, so one
client switching themes never repaints another client's screen.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Callable

from termui.ansi import fg

ROLES = (
    "primary",
    "secondary",
    "success",
    "danger",
    "warning",
    "info",
    "muted",
    "text",
    "border",
    "accent",
)


@dataclass(frozen=True)
class Theme:
    name: str
    label: str
    primary: str
    secondary: str
    success: str
    danger: str
    warning: str
    info: str
    muted: str
    text: str
    border: str
    accent: str
    background: str = "#000000"

    def paint(self, role: str, text: str) -> str:
        """Colour *text* with the hex value of *role*; unknown roles pass through."""
        if role not in ROLES:
            return text
        return fg(getattr(self, role), text)

    def role(self, name: str) -> Callable[[str], str]:
        """A ``str -> str`` painter for *name*, handy as a ``color=`` argument."""
        return lambda text: self.paint(name, text)

    def swatch(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in ROLES}


THEMES = MappingProxyType(
    {
        "ocean": Theme(
            name="ocean",
            label="Ocean",
            primary="#00A8E8",
            secondary="#007EA7",
            success="#00D9FF",
            danger="#FF6B6B",
            warning="#FFD93D",
            info="#6BCF7F",
            muted="#6C757D",
            text="#E0E0E0",
            border="#00D9FF",
            accent="#00FFF5",
            background="#1A1A2E",
        ),
        "forest": Theme(
            name="forest",
            label="Forest",
            primary="#2D6A4F",
            secondary="#40916C",
            success="#52B788",
            danger="#FF6B6B",
            warning="#F4A261",
            info="#95D5B2",
            muted="#74C69D",
            text="#D8F3DC",
            border="#52B788",
            accent="#B7E4C7",
            background="#1B4332",
        ),
        "sunset": Theme(
            name="sunset",
            label="Sunset",
            primary="#FF6B35",
            secondary="#F7931E",
            success="#6BCF7F",
            danger="#C1121F",
            warning="#FFC300",
            info="#4CC9F0",
            muted="#ADB5BD",
            text="#FFF3E0",
            border="#FF6B35",
            accent="#FFB627",
            background="#2B1B17",
        ),
        "midnight": Theme(
            name="midnight",
            label="Midnight",
            primary="#7209B7",
            secondary="#560BAD",
            success="#4CC9F0",
            danger="#F72585",
            warning="#FCA311",
            info="#4361EE",
            muted="#6C757D",
            text="#E0E0E0",
            border="#B5179E",
            accent="#F72585",
            background="#10002B",
        ),
        "cyber": Theme(
            name="cyber",
            label="Cyber",
            primary="#00FF41",
            secondary="#00D9FF",
            success="#39FF14",
            danger="#FF073A",
            warning="#FFD700",
            info="#00FFFF",
            muted="#808080",
            text="#00FF41",
            border="#00FF41",
            accent="#FF10F0",
            background="#0A0E27",
        ),
        "monochrome": Theme(
            name="monochrome",
            label="Monochrome",
            primary="#FFFFFF",
            secondary="#CCCCCC",
            success="#FFFFFF",
            danger="#999999",
            warning="#BBBBBB",
            info="#DDDDDD",
            muted="#666666",
            text="#FFFFFF",
            border="#888888",
            accent="#AAAAAA",
            background="#000000",
        ),
    }
)

DEFAULT_THEME = "ocean"


def get_theme(name: str) -> Theme:
    """Look up a theme by name. Raises :class:`KeyError` for unknown names."""
    try:
        return THEMES[name]
    except KeyError:
        raise KeyError(f"unknown theme {name!r}; choose from {', '.join(THEMES)}") from None


def theme_names() -> list[str]:
    return list(THEMES)
