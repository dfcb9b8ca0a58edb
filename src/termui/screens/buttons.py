"""Button variants; Enter or Space "presses" the selected one."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from termui.ansi import dim, muted, white, yellow
from termui.keys import KeyEvent, KeyType
from termui.layout import center_line
from termui.screen import BaseScreen
from termui.widgets import button, key_hints, rule, screen_header

if TYPE_CHECKING:
    from termui.session import Session

PRESS_FLASH_MS = 150
HISTORY_SIZE = 5

BUTTONS = (
    ("◉  Primary  ", "primary", "Main call-to-action. Bold and prominent."),
    ("◎  Secondary", "secondary", "Supporting action. Softer presence."),
    ("⚠  Danger   ", "danger", "Destructive actions. Warns the user."),
    ("✓  Success  ", "success", "Confirms a positive action."),
    ("○  Ghost    ", "ghost", "Minimal. Blends into the background."),
    ("□  Outlined ", "outlined", "Bordered style. Clean and structured."),
)


@dataclass
class ButtonsState:
    selected: int = 0
    pressed: int | None = None
    history: list[str] = field(default_factory=list)


class ButtonsScreen(BaseScreen):
    title = "Buttons"
    description = "Styled variants"

    def init_state(self, session: Session) -> ButtonsState:
        return ButtonsState()

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        state: ButtonsState = session.screen_state

        if event.type is KeyType.UP:
            state.selected = max(0, state.selected - 1)
        elif event.type is KeyType.DOWN:
            state.selected = min(len(BUTTONS) - 1, state.selected + 1)
        elif event.type is KeyType.ENTER or event.is_char(" "):
            self._press(session, state)
        else:
            return
        session.render()

    def _press(self, session: Session, state: ButtonsState) -> None:
        index = state.selected
        state.pressed = index
        state.history.append(BUTTONS[index][0].split()[1])
        del state.history[:-HISTORY_SIZE]

        def release() -> None:
            if state.pressed == index:
                state.pressed = None
                session.render()

        session.start_animation(release, PRESS_FLASH_MS, once=True)

    def render(self, session: Session) -> str:
        state: ButtonsState = session.screen_state
        cols = session.cols
        lines = screen_header("Button Components", "Styled button variants for terminal interfaces", cols, session.theme)

        for i, (label, variant, desc) in enumerate(BUTTONS):
            selected = i == state.selected
            rendered = button(label, variant, selected=selected, pressed=i == state.pressed, theme=session.theme)
            lines.append(center_line(rendered, cols))
            lines.append(center_line(dim(white(desc)) if selected else muted(desc), cols))

        lines.append(rule(36, cols))
        if state.history:
            lines.append(center_line(muted("Recent: ") + yellow(" → ".join(state.history)), cols))
        else:
            lines.append(center_line(muted("Press Enter or Space to activate a button"), cols))
        lines.append("")
        lines.append(key_hints([("↑↓", "Navigate"), ("Enter", "Press"), ("q", "Back")], cols))
        return "\n".join(lines)
