"""Tabbed panels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from termui.ansi import bold, inverse, muted, white
from termui.keys import KeyEvent, KeyType
from termui.layout import center_block, center_line, draw_box
from termui.screen import BaseScreen
from termui.widgets import key_hints, screen_header

if TYPE_CHECKING:
    from termui.session import Session

PANEL_WIDTH = 56

TABS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Overview",
        (
            "termui renders every screen as one full frame.",
            "",
            "Each connection gets its own session with its own",
            "theme, timers and screen state.",
        ),
    ),
    (
        "Install",
        (
            "pip install termui",
            "",
            "termui local          run in this terminal",
            "termui serve          serve the browser terminal",
        ),
    ),
    (
        "Keys",
        (
            "Tab / Shift+Tab       next / previous tab",
            "← →                   switch tabs",
            "1-4                   jump to a tab",
            "q / Esc               back to the menu",
        ),
    ),
    (
        "About",
        (
            "Screens are plain objects with init_state,",
            "handle_input and render hooks.",
            "",
            "Ctrl+C quits from anywhere.",
        ),
    ),
)


@dataclass
class TabsState:
    active: int = 0


class TabsScreen(BaseScreen):
    title = "Tabs"
    description = "Tab interface"

    def init_state(self, session: Session) -> TabsState:
        return TabsState()

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        state: TabsState = session.screen_state

        if event.type in (KeyType.TAB, KeyType.RIGHT) or event.is_char("l"):
            state.active = (state.active + 1) % len(TABS)
        elif event.type in (KeyType.SHIFT_TAB, KeyType.LEFT) or event.is_char("h"):
            state.active = (state.active - 1) % len(TABS)
        elif event.type is KeyType.CHAR and event.char and event.char.isdigit():
            index = int(event.char) - 1
            if not 0 <= index < len(TABS):
                return
            state.active = index
        else:
            return
        session.render()

    def render(self, session: Session) -> str:
        state: TabsState = session.screen_state
        cols, theme = session.cols, session.theme
        lines = screen_header("Tabs", "Switch between panels", cols, theme)

        labels = []
        for i, (name, _) in enumerate(TABS):
            if i == state.active:
                labels.append(bold(theme.paint("primary", inverse(f" {i + 1} {name} "))))
            else:
                labels.append(muted(f" {i + 1} {name} "))
        lines.append(center_line(" ".join(labels), cols))
        lines.append("")

        name, body = TABS[state.active]
        box = draw_box([white(line) for line in body], width=PANEL_WIDTH, title=name, color=theme.role("border"))
        lines.extend(center_block(box, cols))
        lines.append("")
        lines.append(center_line(muted(f"Tab {state.active + 1} of {len(TABS)}"), cols))
        lines.append(key_hints([("Tab", "Next"), ("←→", "Switch"), ("1-4", "Jump"), ("q", "Back")], cols))
        return "\n".join(lines)
