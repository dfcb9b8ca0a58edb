"""The main menu: a grid of cards, one per demo screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from termui.ansi import bold, dim, muted, pad_end, white
from termui.keys import KeyEvent, KeyType
from termui.layout import center_line, join_columns
from termui.screen import BaseScreen
from termui.widgets import key_hints, rule

if TYPE_CHECKING:
    from termui.session import Session

CARD_WIDTH = 22
CARD_HEIGHT = 5
GAP = 2
HEADER_LINES = 6
FOOTER_LINES = 3


@dataclass(frozen=True)
class MenuItem:
    key: str
    label: str
    icon: str
    preview: str
    desc: str
    role: str


MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem("buttons", "Buttons", "◉", "[ ◉ Primary ]", "Styled variants", "primary"),
    MenuItem("select", "Select", "◎", "▸ Option 1", "Single-select", "info"),
    MenuItem("multiselect", "Multi-Select", "☑", "☑ Item A", "Checkboxes", "success"),
    MenuItem("textinput", "Text Input", "✎", "│ Type... ▌", "Live typing", "warning"),
    MenuItem("tree", "Tree", "⊞", "├── folder/", "Hierarchy", "accent"),
    MenuItem("tabs", "Tabs", "⊟", "[ Tab 1 ]", "Tab interface", "primary"),
    MenuItem("table", "Table", "▦", "│ Row 1 │", "Data grid", "info"),
    MenuItem("cards", "Cards", "◇", "╭─Card─╮", "Panel layout", "success"),
    MenuItem("badges", "Badges", "◆", "[ Active ]", "Status tags", "warning"),
    MenuItem("progress", "Progress", "▓", "[████░░] 60%", "Progress bars", "accent"),
    MenuItem("spinners", "Spinners", "◌", "⠋ Loading...", "Animations", "primary"),
    MenuItem("chart", "Chart", "▄", "▄▆█▅▃", "Live data", "info"),
    MenuItem("themes", "Themes", "◐", "● ● ● ●", "Colour schemes", "success"),
)


@dataclass
class MenuState:
    selected: int = 0


def _items(session: Session) -> list[MenuItem]:
    return [item for item in MENU_ITEMS if item.key in session.registry]


def cards_per_row(cols: int) -> int:
    return max(1, min(4, (cols + GAP) // (CARD_WIDTH + GAP)))


def render_card(item: MenuItem, selected: bool, session: Session) -> list[str]:
    theme = session.theme
    paint = theme.role(item.role) if selected else dim
    h, v = ("═", "║") if selected else ("─", "│")
    tl, tr, bl, br = ("╔", "╗", "╚", "╝") if selected else ("┌", "┐", "└", "┘")
    inner = CARD_WIDTH - 2

    label = pad_end(f" {item.icon}  {bold(white(item.label))}", inner)
    preview = pad_end(f" {item.preview}", inner)
    desc = pad_end(f" {item.desc}", inner)
    return [
        paint(tl + h * inner + tr),
        paint(v) + label + paint(v),
        paint(v) + (theme.paint(item.role, preview) if selected else dim(preview)) + paint(v),
        paint(v) + muted(desc) + paint(v),
        paint(bl + h * inner + br),
    ]


class MenuScreen(BaseScreen):
    title = "Menu"
    description = "Component showcase"
    back_to = None

    def init_state(self, session: Session) -> MenuState:
        return MenuState()

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        state: MenuState = session.screen_state
        items = _items(session)
        if not items:
            if event.is_char("q", "Q"):
                session.destroy("quit")
            return

        per_row = cards_per_row(session.cols)
        selected = min(state.selected, len(items) - 1)

        if event.type is KeyType.UP or event.is_char("k"):
            if selected >= per_row:
                selected -= per_row
        elif event.type is KeyType.DOWN or event.is_char("j"):
            if selected + per_row < len(items):
                selected += per_row
        elif event.type is KeyType.LEFT or event.is_char("h"):
            if selected % per_row:
                selected -= 1
        elif event.type is KeyType.RIGHT or event.is_char("l"):
            if selected % per_row != per_row - 1 and selected < len(items) - 1:
                selected += 1
        elif event.type is KeyType.ENTER:
            session.navigate(items[selected].key)
            return
        elif event.is_char("q", "Q"):
            session.destroy("quit")
            return
        else:
            return

        state.selected = selected
        session.render()

    def render(self, session: Session) -> str:
        state: MenuState = session.screen_state
        cols = session.cols
        theme = session.theme
        items = _items(session)
        selected = min(state.selected, max(len(items) - 1, 0))

        lines = [
            "",
            center_line(bold(theme.paint("primary", "╔" + "═" * 47 + "╗")), cols),
            center_line(
                bold(theme.paint("primary", "║") + "termui Component Showcase".center(47) + theme.paint("primary", "║")),
                cols,
            ),
            center_line(bold(theme.paint("primary", "╚" + "═" * 47 + "╝")), cols),
            center_line(muted("Navigate the grid with arrow keys · Enter to explore"), cols),
            "",
        ]

        per_row = cards_per_row(cols)
        grid_rows = [items[i : i + per_row] for i in range(0, len(items), per_row)]
        visible = max(1, (session.rows - HEADER_LINES - FOOTER_LINES) // CARD_HEIGHT)
        first = max(0, selected // per_row - visible + 1)

        for row_index in range(first, min(len(grid_rows), first + visible)):
            row = grid_rows[row_index]
            cards = [
                render_card(item, row_index * per_row + i == selected, session)
                for i, item in enumerate(row)
            ]
            lines.extend(center_line(line, cols) for line in join_columns(cards, gap=GAP))

        if len(grid_rows) > visible:
            lines.append(center_line(muted(f"row {selected // per_row + 1} of {len(grid_rows)}"), cols))

        lines.append(rule(60, cols))
        lines.append(
            key_hints(
                [("←↑↓→", "Navigate"), ("Enter", "Open"), ("q", "Quit"), (f"{len(items)}", "components")],
                cols,
            )
        )
        return "\n".join(lines)
