"""Single-select list with category filters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from termui.ansi import bold, cyan, dim, gray, green, inverse, muted, white
from termui.keys import KeyEvent, KeyType
from termui.layout import center_line
from termui.screen import BaseScreen
from termui.widgets import key_hints, rule, screen_header

if TYPE_CHECKING:
    from termui.session import Session


class Option(NamedTuple):
    value: str
    label: str
    icon: str
    desc: str
    category: str


OPTIONS = (
    Option("node", "Node.js", "⬡", "JavaScript runtime", "web"),
    Option("python", "Python", "◆", "General purpose", "systems"),
    Option("rust", "Rust", "⬢", "Systems language", "systems"),
    Option("go", "Go", "◈", "Cloud native", "systems"),
    Option("typescript", "TypeScript", "◎", "Typed JavaScript", "web"),
    Option("java", "Java", "☕", "Enterprise", "systems"),
    Option("swift", "Swift", "◇", "Apple ecosystem", "mobile"),
    Option("kotlin", "Kotlin", "◆", "JVM language", "mobile"),
    Option("elixir", "Elixir", "◌", "Functional", "web"),
    Option("ruby", "Ruby", "◉", "Developer joy", "web"),
)

FILTERS = ("all", "web", "systems", "mobile")


@dataclass
class SelectState:
    cursor: int = 0
    selected: str | None = None
    filter_index: int = 0


def visible_options(filter_index: int) -> list[Option]:
    name = FILTERS[filter_index]
    if name == "all":
        return list(OPTIONS)
    return [option for option in OPTIONS if option.category == name]


class SelectScreen(BaseScreen):
    title = "Select"
    description = "Single-select"

    def init_state(self, session: Session) -> SelectState:
        return SelectState()

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        state: SelectState = session.screen_state
        options = visible_options(state.filter_index)

        if event.type is KeyType.UP or event.is_char("k"):
            state.cursor = max(0, state.cursor - 1)
        elif event.type is KeyType.DOWN or event.is_char("j"):
            state.cursor = min(len(options) - 1, state.cursor + 1)
        elif event.type is KeyType.ENTER or event.is_char(" "):
            if options:
                state.selected = options[state.cursor].value
        elif event.type is KeyType.TAB or event.is_char("f", "F"):
            state.filter_index = (state.filter_index + 1) % len(FILTERS)
            state.cursor = 0
        else:
            return
        session.render()

    def render(self, session: Session) -> str:
        state: SelectState = session.screen_state
        cols = session.cols
        options = visible_options(state.filter_index)
        lines = screen_header("Select List", "Choose your favourite programming language", cols, session.theme)

        tabs = "  ".join(
            cyan(inverse(f" {name.upper()} ")) if i == state.filter_index else muted(f"[{name.upper()}]")
            for i, name in enumerate(FILTERS)
        )
        lines.append(center_line(tabs, cols))
        lines.append(rule(40, cols))

        if not options:
            lines.append(center_line(muted("(No items found)"), cols))
        for i, option in enumerate(options):
            is_cursor = i == state.cursor
            is_selected = option.value == state.selected
            label = option.label.ljust(14)
            check = bold(green(" ✓")) if is_selected else "  "
            if is_cursor:
                row = (
                    bold(cyan("▸ "))
                    + (green(option.icon) if is_selected else cyan(option.icon))
                    + " "
                    + bold(white(label))
                    + check
                    + dim(cyan("  " + option.desc))
                )
            else:
                row = (
                    "  "
                    + (green(option.icon) if is_selected else muted(option.icon))
                    + " "
                    + (green(label) if is_selected else gray(label))
                    + check
                    + muted("  " + option.desc)
                )
            lines.append("    " + row)

        lines.append(rule(40, cols))
        chosen = next((o for o in OPTIONS if o.value == state.selected), None)
        if chosen is not None:
            lines.append(
                center_line(
                    muted("Selected: ") + bold(green(f"{chosen.icon}  {chosen.label}")) + muted(f"  · {chosen.desc}"),
                    cols,
                )
            )
        else:
            lines.append(center_line(muted("No selection yet. Press Enter to confirm."), cols))
        lines.append("")
        lines.append(key_hints([("↑↓", "Move"), ("Enter", "Select"), ("f", "Filter"), ("q", "Back")], cols))
        return "\n".join(lines)
