"""Box drawing and block centring on top of :mod:`termui.ansi`."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from termui.ansi import Measure, gray, truncate, visible_length

# ---------------------------------------------------------------------------
# Border glyph tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BorderSpec:
    """Box-drawing glyphs for one border style."""

    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    left_t: str
    right_t: str
    top_t: str
    bottom_t: str
    cross: str


BORDERS: Mapping[str, BorderSpec] = MappingProxyType(
    {
        "rounded": BorderSpec("╭", "╮", "╰", "╯", "─", "│", "├", "┤", "┬", "┴", "┼"),
        "sharp": BorderSpec("┌", "┐", "└", "┘", "─", "│", "├", "┤", "┬", "┴", "┼"),
        "double": BorderSpec("╔", "╗", "╚", "╝", "═", "║", "╠", "╣", "╦", "╩", "╬"),
        "heavy": BorderSpec("┏", "┓", "┗", "┛", "━", "┃", "┣", "┫", "┳", "┻", "╋"),
        "ascii": BorderSpec("+", "+", "+", "+", "-", "|", "+", "+", "+", "+", "+"),
    }
)

_ALIASES = {"round": "rounded", "single": "sharp", "bold": "heavy"}


def border(name: str) -> BorderSpec:
    """Look up a border style; unknown names fall back to ``rounded``."""
    name = _ALIASES.get(name, name)
    return BORDERS.get(name, BORDERS["rounded"])


# ---------------------------------------------------------------------------
# Boxes
# ---------------------------------------------------------------------------


def draw_box(
    lines: Sequence[str],
    *,
    style: str = "rounded",
    color: Callable[[str], str] | None = None,
    title: str = "",
    width: int | None = None,
    padding: int = 1,
    measure: Measure = visible_length,
) -> list[str]:
    """Wrap *lines* in a border.

    The inner width is ``width - 2`` when *width* is given, otherwise the
    widest line plus ``2 * padding``. Content lines wider than the content
    area are truncated, narrower ones padded, so every returned row has the
    same visible length. The result always has ``len(lines) + 2`` rows.
    """
    chars = border(style)
    paint = color or gray
    padding = max(0, padding)

    if width is not None:
        inner = max(width - 2, 0)
    else:
        inner = max((measure(line) for line in lines), default=0) + padding * 2

    # a fixed width narrower than the padding squeezes the padding first
    side_pad = min(padding, inner // 2)
    content_width = inner - side_pad * 2

    result: list[str] = [_top_border(chars, inner, title, paint, measure)]

    pad = " " * side_pad
    for line in lines:
        cut = truncate(line, content_width, measure=measure)
        fill = " " * max(0, content_width - measure(cut))
        result.append(paint(chars.vertical) + pad + cut + fill + pad + paint(chars.vertical))

    result.append(paint(chars.bottom_left + chars.horizontal * inner + chars.bottom_right))
    return result


def _top_border(
    chars: BorderSpec,
    inner: int,
    title: str,
    paint: Callable[[str], str],
    measure: Measure,
) -> str:
    if not title or inner < 3:
        return paint(chars.top_left + chars.horizontal * inner + chars.top_right)

    label = f" {truncate(title, inner - 2, measure=measure)} "
    remaining = inner - measure(label)
    left = remaining // 2
    return paint(
        chars.top_left
        + chars.horizontal * left
        + label
        + chars.horizontal * (remaining - left)
        + chars.top_right
    )


def draw_divider(
    inner_width: int,
    *,
    style: str = "rounded",
    color: Callable[[str], str] | None = None,
    label: str = "",
    measure: Measure = visible_length,
) -> str:
    """A separator row that fits inside a box with the given inner width."""
    chars = border(style)
    paint = color or gray
    inner_width = max(inner_width, 0)

    if not label or inner_width < 3:
        return paint(chars.left_t + chars.horizontal * inner_width + chars.right_t)

    text = f" {truncate(label, inner_width - 2, measure=measure)} "
    remaining = inner_width - measure(text)
    left = remaining // 2
    return paint(
        chars.left_t
        + chars.horizontal * left
        + text
        + chars.horizontal * (remaining - left)
        + chars.right_t
    )


# ---------------------------------------------------------------------------
# Centring and columns
# ---------------------------------------------------------------------------


def center_line(line: str, width: int, measure: Measure = visible_length) -> str:
    """Left-pad *line* so it sits centred in *width* columns."""
    length = measure(line)
    if length >= width:
        return line
    return " " * ((width - length) // 2) + line


def center_block(lines: Sequence[str], width: int, measure: Measure = visible_length) -> list[str]:
    return [center_line(line, width, measure) for line in lines]


def join_columns(
    blocks: Sequence[Sequence[str]],
    gap: int = 2,
    measure: Measure = visible_length,
) -> list[str]:
    """Place blocks of lines side by side.

    Each block is padded to its own widest line; shorter blocks get blank
    rows at the bottom.
    """
    if not blocks:
        return []

    widths = [max((measure(line) for line in block), default=0) for block in blocks]
    height = max(len(block) for block in blocks)
    spacer = " " * gap

    rows: list[str] = []
    for i in range(height):
        cells = []
        for block, block_width in zip(blocks, widths):
            line = block[i] if i < len(block) else ""
            cells.append(line + " " * max(0, block_width - measure(line)))
        rows.append(spacer.join(cells))
    return rows
