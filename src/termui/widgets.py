"""Small renderers shared by the screens: bars, spinners, badges, buttons."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Sequence

from termui.ansi import (
    bg,
    bold,
    color256,
    cyan,
    dim,
    gray,
    green,
    inverse,
    muted,
    style,
    underline,
    white,
    yellow,
)
from termui.layout import center_line
from termui.theme import Theme

Painter = Callable[[str], str]

# ---------------------------------------------------------------------------
# Progress bars
# ---------------------------------------------------------------------------

# style -> (filled, empty, left cap, right cap)
BAR_STYLES = MappingProxyType(
    {
        "block": ("█", "░", "[", "]"),
        "hash": ("#", "·", "|", "|"),
        "equal": ("=", "-", "[", "]"),
        "arrow": ("▶", "▹", "[", "]"),
        "dots": ("⣿", "⣀", "[", "]"),
        "line": ("━", "─", " ", " "),
    }
)


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def bar_color(pct: float, base: Painter) -> Painter:
    """Colour for a bar at *pct*: green when done, cyan past 75, yellow past 50."""
    if pct >= 100:
        return green
    if pct >= 75:
        return cyan
    if pct >= 50:
        return yellow
    return base


def progress_bar(
    pct: float,
    width: int = 40,
    style: str = "block",
    color: Painter | None = None,
    *,
    show_percent: bool = True,
) -> str:
    """One-line bar. *pct* is clamped to 0..100; unknown styles fall back to block."""
    pct = min(100.0, max(0.0, float(pct)))
    width = max(0, width)
    filled_char, empty_char, left, right = BAR_STYLES.get(style, BAR_STYLES["block"])

    filled = _round_half_up(pct / 100 * width)
    empty = width - filled
    paint = bar_color(pct, color or cyan)

    bar = (
        dim(gray(left))
        + (paint(filled_char * filled) if filled else "")
        + (dim(gray(empty_char * empty)) if empty else "")
        + dim(gray(right))
    )
    if not show_percent:
        return bar

    label = f"{_round_half_up(pct):>3}%"
    return bar + " " + (bold(green(label)) if pct >= 100 else white(label))


# ---------------------------------------------------------------------------
# Spinners
# ---------------------------------------------------------------------------

SPINNERS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "braille": ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"),
        "dots": ("⠁", "⠃", "⠇", "⏐", "⏐", "⠇", "⠃", "⠁", "⠂", "⠄"),
        "line": ("─", "╲", "│", "╱"),
        "arrow": ("▹▹▹▹▹", "▸▹▹▹▹", "▹▸▹▹▹", "▹▹▸▹▹", "▹▹▹▸▹", "▹▹▹▹▸"),
        "bounce": ("▄▄▄", "▀▄▄", "▀▀▄", "▀▀▀", "▀▀▄", "▀▄▄"),
        "clock": ("🕐", "🕑", "🕒", "🕓", "🕔", "🕕", "🕖", "🕗", "🕘", "🕙", "🕚", "🕛"),
        "pulse": (
            "░░░░░░░░",
            "▒░░░░░░░",
            "▒▒░░░░░░",
            "▒▒▒░░░░░",
            "▒▒▒▒░░░░",
            "▒▒▒░░░░░",
            "▒▒░░░░░░",
            "▒░░░░░░░",
        ),
        "dense": ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷"),
    }
)


def spinner_frame(name: str, tick: int) -> str:
    """Frame *tick* of spinner *name*, wrapping around. Unknown names use braille."""
    frames = SPINNERS.get(name, SPINNERS["braille"])
    return frames[tick % len(frames)]


# ---------------------------------------------------------------------------
# Badges
# ---------------------------------------------------------------------------

_BADGE_KINDS: dict[str, tuple[str, str]] = {
    "success": ("green", "✓"),
    "error": ("red", "✗"),
    "warning": ("yellow", "⚠"),
    "info": ("blue", "ℹ"),
}


def badge(label: str, kind: str = "default") -> str:
    """Solid badge: white text on a background chosen by *kind*."""
    if kind in _BADGE_KINDS:
        background, icon = _BADGE_KINDS[kind]
        return style(f" {icon} {label} ", bold=True, fg="white", bg=background)
    if kind == "neutral":
        return style(f" ● {label} ", fg="white", bg="bright_black")
    return white(f" {label} ")


def outlined_badge(label: str, color: Painter) -> str:
    return color(f"[ {label} ]")


def dot_badge(label: str, color: Painter, dot: str = "●") -> str:
    return color(dot) + " " + color(label)


# ---------------------------------------------------------------------------
# Buttons
# ---------------------------------------------------------------------------

# variant -> (theme role, 256-colour background for the selected state)
BUTTON_VARIANTS = MappingProxyType(
    {
        "primary": ("primary", 24),
        "secondary": ("secondary", None),
        "danger": ("danger", 52),
        "success": ("success", 22),
        "ghost": ("text", None),
        "outlined": ("accent", None),
    }
)


def button(
    label: str,
    variant: str = "primary",
    selected: bool = False,
    pressed: bool = False,
    theme: Theme | None = None,
) -> str:
    """Render one button in its idle, selected or pressed state."""
    role, selected_bg = BUTTON_VARIANTS.get(variant, BUTTON_VARIANTS["primary"])
    paint: Painter = theme.role(role) if theme is not None else cyan
    text = f" {label} "

    if pressed:
        if variant == "ghost":
            return bold(inverse(text))
        hex_color = getattr(theme, role) if theme is not None else "cyan"
        return bold(style(text, fg="white", bg=hex_color))

    if selected:
        if variant == "ghost":
            body = underline(white(text))
        elif variant == "outlined":
            body = bold(paint(text))
        elif selected_bg is None:
            body = inverse(text)
        else:
            body = bg(selected_bg, white(text))
        return bold(paint("▸ ") + body + paint(" ◂"))

    return dim(paint("  " + text + "  "))


# ---------------------------------------------------------------------------
# Headers and footers
# ---------------------------------------------------------------------------


def screen_header(title: str, subtitle: str, cols: int, theme: Theme) -> list[str]:
    """Blank line, centred title, centred subtitle, two blank lines."""
    return [
        "",
        center_line(bold(theme.paint("primary", f"── {title} ──")), cols),
        center_line(muted(subtitle), cols) if subtitle else "",
        "",
        "",
    ]


def key_hints(hints: Sequence[tuple[str, str]], cols: int) -> str:
    """Centred footer such as ``↑↓ Navigate   Enter Select   q Back``."""
    text = "   ".join(f"{key} {action}" for key, action in hints)
    return center_line(muted(text), cols)


def rule(width: int, cols: int) -> str:
    return center_line(muted("─" * width), cols)


def color_swatch(n: int) -> str:
    return color256(n, "██")
