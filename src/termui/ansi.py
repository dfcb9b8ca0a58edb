"""ANSI escape primitives: styling, cursor/screen control, visible measurement.

Everything here is a pure string builder. Styled fragments always close
with a single ``RESET`` so frames can be composed by plain concatenation.
"""

from __future__ import annotations

import functools
import re
import unicodedata
from typing import Any, Callable, Mapping

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Raw sequences
# ---------------------------------------------------------------------------

ESC = "\x1b"
CSI = ESC + "["
RESET = CSI + "0m"

HIDE_CURSOR = CSI + "?25l"
SHOW_CURSOR = CSI + "?25h"
CLEAR_SCREEN = CSI + "2J" + CSI + "H"
CLEAR_LINE = CSI + "2K"
CLEAR_BELOW = CSI + "J"
SAVE_CURSOR = ESC + "7"
RESTORE_CURSOR = ESC + "8"

ALT_SCREEN_ENTER = CSI + "?1049h"
ALT_SCREEN_EXIT = CSI + "?1049l"

# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------

FG_CODES: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "gray": 90,
    "bright_black": 90,
    "bright_red": 91,
    "bright_green": 92,
    "bright_yellow": 93,
    "bright_blue": 94,
    "bright_magenta": 95,
    "bright_cyan": 96,
    "bright_white": 97,
}

_ATTR_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "inverse": 7,
    "strike": 9,
}

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{6})$")


def _color_params(color: Any, background: bool) -> str | None:
    """Return the SGR parameter string for *color*, or ``None`` if unusable."""
    if isinstance(color, bool) or color is None:
        return None
    if isinstance(color, int):
        if 0 <= color <= 255:
            return f"{48 if background else 38};5;{color}"
        return None
    if isinstance(color, str):
        code = FG_CODES.get(color.lower())
        if code is not None:
            return str(code + 10 if background else code)
        match = _HEX_RE.match(color)
        if match:
            value = int(match.group(1), 16)
            r, g, b = (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
            return f"{48 if background else 38};2;{r};{g};{b}"
    return None


def style(text: str, attrs: Mapping[str, Any] | None = None, **kwargs: Any) -> str:
    """Wrap *text* in the open sequences for *attrs* and a trailing reset.

    Recognised attributes are ``bold``, ``dim``, ``italic``, ``underline``,
    ``inverse``, ``strike`` (truthy flags) and ``fg`` / ``bg`` (colour name,
    256-colour index or ``"#rrggbb"``). Anything else is ignored.
    """
    merged: dict[str, Any] = dict(attrs or {})
    merged.update(kwargs)

    opens: list[str] = []
    for name, code in _ATTR_CODES.items():
        if merged.get(name):
            opens.append(f"{CSI}{code}m")
    for name, background in (("fg", False), ("bg", True)):
        params = _color_params(merged.get(name), background)
        if params is not None:
            opens.append(f"{CSI}{params}m")

    return "".join(opens) + text + RESET


def fg(color: str | int, text: str) -> str:
    return style(text, fg=color)


def bg(color: str | int, text: str) -> str:
    return style(text, bg=color)


def color256(n: int, text: str) -> str:
    return style(text, fg=n)


bold = functools.partial(style, bold=True)
dim = functools.partial(style, dim=True)
italic = functools.partial(style, italic=True)
underline = functools.partial(style, underline=True)
inverse = functools.partial(style, inverse=True)
strike = functools.partial(style, strike=True)

black = functools.partial(fg, "black")
red = functools.partial(fg, "red")
green = functools.partial(fg, "green")
yellow = functools.partial(fg, "yellow")
blue = functools.partial(fg, "blue")
magenta = functools.partial(fg, "magenta")
cyan = functools.partial(fg, "cyan")
white = functools.partial(fg, "white")
gray = functools.partial(fg, "gray")
bright_red = functools.partial(fg, "bright_red")
bright_green = functools.partial(fg, "bright_green")
bright_yellow = functools.partial(fg, "bright_yellow")
bright_blue = functools.partial(fg, "bright_blue")
bright_magenta = functools.partial(fg, "bright_magenta")
bright_cyan = functools.partial(fg, "bright_cyan")
bright_white = functools.partial(fg, "bright_white")


def muted(text: str) -> str:
    """Dim gray, the usual colour for hints and secondary text."""
    return style(text, dim=True, fg="gray")


# ---------------------------------------------------------------------------
# Cursor builders
# ---------------------------------------------------------------------------


def cursor_to(row: int, col: int) -> str:
    return f"{CSI}{row};{col}H"


def cursor_up(n: int = 1) -> str:
    return f"{CSI}{n}A"


def cursor_down(n: int = 1) -> str:
    return f"{CSI}{n}B"


def cursor_forward(n: int = 1) -> str:
    return f"{CSI}{n}C"


def cursor_back(n: int = 1) -> str:
    return f"{CSI}{n}D"


# ---------------------------------------------------------------------------
# Stripping and measurement
# ---------------------------------------------------------------------------

# CSI: ESC [ <params 0x30-0x3F, includes ? and ;> <intermediates> <final>
# OSC: ESC ] ... (BEL | ESC \)
# Two-byte save/restore cursor: ESC 7 / ESC 8
_ANSI_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[78]"
)


def strip_ansi(text: str) -> str:
    """Remove every escape sequence from *text*."""
    return _ANSI_RE.sub("", text)


def visible_length(text: str) -> int:
    """Number of code points left after stripping escape sequences.

    Wide glyphs (CJK, most emoji) count as one; use :func:`visible_width`
    when display cells matter.
    """
    if not text:
        return 0
    return len(strip_ansi(text))


def _grapheme_width(g: str) -> int:
    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        # VS16, ZWJ, skin tones and regional indicators force emoji width
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2
    if ord(g[0]) >= 0x1F000:
        return 2
    if unicodedata.category(g[0]) in ("Mn", "Me", "Mc", "Cf"):
        return 0
    return max(_wcwidth.wcwidth(g[0]), 0)


@functools.lru_cache(maxsize=512)
def _cell_width(stripped: str) -> int:
    return sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))


def visible_width(text: str) -> int:
    """Terminal display width of *text* in cells, ignoring escape sequences."""
    if not text:
        return 0
    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)
    return _cell_width(stripped)


# ---------------------------------------------------------------------------
# Padding, centring, truncation
# ---------------------------------------------------------------------------

Measure = Callable[[str], int]


def pad_end(text: str, width: int, fill: str = " ", measure: Measure = visible_length) -> str:
    length = measure(text)
    if length >= width:
        return text
    return text + fill * (width - length)


def pad_start(text: str, width: int, fill: str = " ", measure: Measure = visible_length) -> str:
    length = measure(text)
    if length >= width:
        return text
    return fill * (width - length) + text


def center(text: str, width: int, fill: str = " ", measure: Measure = visible_length) -> str:
    length = measure(text)
    if length >= width:
        return text
    total = width - length
    left = total // 2
    return fill * left + text + fill * (total - left)


def truncate(
    text: str,
    width: int,
    ellipsis: str = "",
    measure: Measure = visible_length,
) -> str:
    """Cut *text* to at most *width* visible units, keeping escape codes.

    When a cut leaves styling open a ``RESET`` is appended so the fragment
    can be concatenated safely.
    """
    if width <= 0:
        return ""
    if measure(text) <= width:
        return text

    target = width - measure(ellipsis)
    if target <= 0:
        return truncate(ellipsis, width, measure=measure)

    parts: list[str] = []
    used = 0
    styled = False
    pos = 0
    while pos < len(text):
        match = _ANSI_RE.match(text, pos)
        if match is not None:
            code = match.group(0)
            parts.append(code)
            styled = code != RESET if code.endswith("m") else styled
            pos = match.end()
            continue
        ch = text[pos]
        w = measure(ch)
        if used + w > target:
            break
        parts.append(ch)
        used += w
        pos += 1

    result = "".join(parts) + ellipsis
    if styled:
        result += RESET
    return result
