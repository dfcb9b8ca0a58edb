"""Scrollable data table.

The number of visible data rows is derived from ``session.rows`` on every
render, so a resize immediately changes how much of the table is shown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from termui.ansi import bold, cyan, dim, gray, green, muted, pad_end, white, yellow
from termui.keys import KeyEvent, KeyType
from termui.layout import center_line
from termui.screen import BaseScreen
from termui.widgets import key_hints

if TYPE_CHECKING:
    from termui.session import Session


class Column(NamedTuple):
    key: str
    header: str
    width: int


COLUMNS = (
    Column("id", "ID", 5),
    Column("name", "Name", 18),
    Column("lang", "Language", 12),
    Column("stars", "Stars", 9),
    Column("status", "Status", 12),
)

_ROWS = (
    ("express", "JavaScript", "64.2k", "active"),
    ("react", "JavaScript", "218k", "active"),
    ("vue", "JavaScript", "205k", "active"),
    ("rust", "Rust", "88.1k", "active"),
    ("flask", "Python", "66.3k", "active"),
    ("django", "Python", "77.4k", "active"),
    ("fastapi", "Python", "72.9k", "active"),
    ("gin", "Go", "75.6k", "stable"),
    ("echo", "Go", "28.4k", "stable"),
    ("rails", "Ruby", "55.1k", "stable"),
    ("laravel", "PHP", "77.2k", "stable"),
    ("spring-boot", "Java", "73.4k", "stable"),
    ("actix-web", "Rust", "20.4k", "beta"),
    ("axum", "Rust", "17.9k", "beta"),
    ("phoenix", "Elixir", "20.9k", "stable"),
    ("svelte", "JavaScript", "77.1k", "active"),
    ("solid", "TypeScript", "31.2k", "beta"),
    ("nestjs", "TypeScript", "64.8k", "active"),
    ("htmx", "JavaScript", "36.5k", "beta"),
    ("tokio", "Rust", "25.2k", "stable"),
    ("ktor", "Kotlin", "12.5k", "beta"),
    ("vapor", "Swift", "24.1k", "stable"),
    ("sinatra", "Ruby", "12.2k", "stable"),
    ("starlette", "Python", "9.8k", "active"),
)

DATA: tuple[dict[str, str], ...] = tuple(
    {"id": f"{i:03d}", "name": name, "lang": lang, "stars": stars, "status": status}
    for i, (name, lang, stars, status) in enumerate(_ROWS, start=1)
)

# title block, header, separator, blank, position line, blank, hints
CHROME_LINES = 9
MIN_VISIBLE = 4

_STATUS = {
    "active": ("● active", green),
    "stable": ("◆ stable", cyan),
    "beta": ("◇ beta", yellow),
}


def visible_rows(rows: int) -> int:
    return max(MIN_VISIBLE, rows - CHROME_LINES)


def scroll_window(selected: int, scroll_top: int, visible: int) -> int:
    """Smallest change to *scroll_top* that keeps *selected* on screen."""
    if selected < scroll_top:
        return selected
    if selected >= scroll_top + visible:
        return selected - visible + 1
    return max(0, min(scroll_top, len(DATA) - visible))


@dataclass
class TableState:
    selected: int = 0
    scroll_top: int = 0


class TableScreen(BaseScreen):
    title = "Table"
    description = "Data grid"

    def init_state(self, session: Session) -> TableState:
        return TableState()

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        state: TableState = session.screen_state
        visible = visible_rows(session.rows)
        last = len(DATA) - 1

        if event.type is KeyType.UP or event.is_char("k"):
            state.selected = max(0, state.selected - 1)
        elif event.type is KeyType.DOWN or event.is_char("j"):
            state.selected = min(last, state.selected + 1)
        elif event.type is KeyType.PAGE_UP:
            state.selected = max(0, state.selected - visible)
        elif event.type is KeyType.PAGE_DOWN:
            state.selected = min(last, state.selected + visible)
        elif event.type is KeyType.HOME or event.is_char("g"):
            state.selected = 0
        elif event.type is KeyType.END or event.is_char("G"):
            state.selected = last
        else:
            return
        state.scroll_top = scroll_window(state.selected, state.scroll_top, visible)
        session.render()

    def _row(self, index: int, selected: bool) -> str:
        row = DATA[index]
        parts = []
        for col in COLUMNS:
            value = row[col.key]
            paint = white if index % 2 == 0 else (lambda text: dim(gray(text)))
            if col.key == "status":
                value, paint = _STATUS.get(value, (value, white))
            elif col.key == "stars":
                paint = yellow
            cell = pad_end(value, col.width)
            parts.append(bold(white(cell)) if selected else paint(cell))
        prefix = cyan("▸ ") if selected else "  "
        return prefix + dim(" │ ").join(parts)

    def render(self, session: Session) -> str:
        state: TableState = session.screen_state
        cols = session.cols
        visible = visible_rows(session.rows)
        top = scroll_window(state.selected, state.scroll_top, visible)
        end = min(len(DATA), top + visible)

        header = "  " + muted(" │ ").join(bold(cyan(pad_end(c.header, c.width))) for c in COLUMNS)
        separator = "  " + dim(cyan("─┼─")).join(dim(cyan("─" * c.width)) for c in COLUMNS)

        lines = [
            "",
            center_line(bold(session.theme.paint("primary", "── Data Table ──")), cols),
            center_line(muted("Scrollable table with row selection"), cols),
            center_line(header, cols),
            center_line(separator, cols),
        ]
        lines.extend(center_line(self._row(i, i == state.selected), cols) for i in range(top, end))
        lines.append("")
        lines.append(
            center_line(muted(f"Row {state.selected + 1} of {len(DATA)}  ·  Showing {top + 1}–{end}"), cols)
        )
        lines.append("")
        lines.append(key_hints([("↑↓", "Navigate"), ("PgUp/PgDn", "Scroll"), ("Home/End", "Jump"), ("q", "Back")], cols))
        return "\n".join(lines)
