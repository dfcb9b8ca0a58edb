"""Dashboard-style cards in a 2x2 grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from termui.ansi import bold, cyan, dim, gray, green, muted, red, white, yellow
from termui.keys import KeyEvent, KeyType
from termui.layout import center_line, draw_box, join_columns
from termui.screen import BaseScreen
from termui.widgets import key_hints, screen_header

if TYPE_CHECKING:
    from termui.session import Session

GRID_COLUMNS = 2
MAX_CARD_WIDTH = 38
MIN_CARD_WIDTH = 12
GAP = 3


class Card(NamedTuple):
    title: str
    role: str
    border: str
    lines: tuple[str, ...]


CARDS: tuple[Card, ...] = (
    Card(
        "◔ Analytics",
        "info",
        "rounded",
        (
            "Daily users    " + bold(cyan("12,847")) + green("  ↑ 12.5%"),
            "Page views    " + bold(cyan("284,921")) + green("  ↑ 8.2%"),
            "Bounce rate       " + bold(yellow("34%")) + red("  ↑ 2.1%"),
            muted("updated 2 min ago"),
        ),
    ),
    Card(
        "» Performance",
        "success",
        "sharp",
        (
            "Response time  " + bold(green("124ms")) + gray("  avg"),
            "Uptime        " + bold(green("99.97%")) + gray("  30d"),
            "Errors             " + bold(red("3")) + gray("  this hour"),
            muted("all regions healthy"),
        ),
    ),
    Card(
        "▲ Deployments",
        "accent",
        "rounded",
        (
            "Latest   " + white("v2.4.1") + gray("  12 min ago"),
            "Status   " + bold(green("● Live")),
            "Branch   " + cyan("main") + "   CI " + green("✓ passed"),
            "Commits  " + yellow("47") + gray(" since last release"),
        ),
    ),
    Card(
        "● Team Status",
        "warning",
        "heavy",
        (
            green("● ") + "Alice  " + gray("working") + "  " + green("● ") + "Bob  " + gray("meeting"),
            yellow("● ") + "Carol  " + gray("away") + "     " + gray("○ ") + "Eve  " + gray("offline"),
            green("● ") + "Diana  " + gray("coding"),
            muted("3 online · 1 away · 1 offline"),
        ),
    ),
)

USAGE = (
    white("1. Lines   ") + green('lines = ["Daily users", "12,847"]'),
    white("2. Box     ") + cyan('draw_box(lines, title="Stats", style="rounded")'),
    white("3. Grid    ") + yellow("join_columns([left, right], gap=3)"),
)


def card_width(cols: int) -> int:
    return max(MIN_CARD_WIDTH, min(MAX_CARD_WIDTH, (cols - 6) // GRID_COLUMNS))


def move(selected: int, key: KeyType) -> int:
    """New grid position after an arrow key; edges do not wrap."""
    row, col = divmod(selected, GRID_COLUMNS)
    rows = (len(CARDS) + GRID_COLUMNS - 1) // GRID_COLUMNS
    match key:
        case KeyType.UP:
            row = max(0, row - 1)
        case KeyType.DOWN:
            row = min(rows - 1, row + 1)
        case KeyType.LEFT:
            col = max(0, col - 1)
        case KeyType.RIGHT:
            col = min(GRID_COLUMNS - 1, col + 1)
    return min(len(CARDS) - 1, row * GRID_COLUMNS + col)


_VIM_KEYS = {"k": KeyType.UP, "j": KeyType.DOWN, "h": KeyType.LEFT, "l": KeyType.RIGHT}


@dataclass
class CardsState:
    selected: int = 0
    info_open: bool = False


class CardsScreen(BaseScreen):
    title = "Cards"
    description = "Panel layouts"

    def init_state(self, session: Session) -> CardsState:
        return CardsState()

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        state: CardsState = session.screen_state

        if event.type in (KeyType.UP, KeyType.DOWN, KeyType.LEFT, KeyType.RIGHT):
            state.selected = move(state.selected, event.type)
        elif event.type is KeyType.CHAR and event.char in _VIM_KEYS:
            state.selected = move(state.selected, _VIM_KEYS[event.char])
        elif event.is_char("i", "I"):
            state.info_open = not state.info_open
        else:
            return
        session.render()

    def render(self, session: Session) -> str:
        state: CardsState = session.screen_state
        cols, theme = session.cols, session.theme
        width = card_width(cols)
        lines = screen_header("Cards & Panels", "Dashboard-style card layouts", cols, theme)

        boxes = [
            draw_box(
                list(card.lines),
                style=card.border,
                title=card.title,
                width=width,
                color=theme.role(card.role) if i == state.selected else dim,
            )
            for i, card in enumerate(CARDS)
        ]
        for start in range(0, len(boxes), GRID_COLUMNS):
            if start:
                lines.append("")
            row = join_columns(boxes[start : start + GRID_COLUMNS], gap=GAP)
            lines.extend(center_line(line, cols) for line in row)
        lines.append("")

        arrow = "▼" if state.info_open else "▶"
        if state.info_open:
            lines.append(center_line(bold(theme.paint("primary", f"{arrow} How to build cards")), cols))
            lines.extend(center_line(line, cols) for line in USAGE)
        else:
            selected = CARDS[state.selected]
            lines.append(center_line(muted("Selected: ") + bold(theme.paint(selected.role, selected.title)), cols))
            lines.append(center_line(muted(f"{arrow} How to build cards (press i)"), cols))

        lines.append(key_hints([("↑↓←→", "Navigate"), ("i", "Info"), ("q", "Back")], cols))
        return "\n".join(lines)
