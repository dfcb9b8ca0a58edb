"""Theme picker. The choice applies to this session only."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from termui.ansi import bg, bold, green, muted, white
from termui.keys import KeyEvent, KeyType
from termui.layout import center_block, center_line, draw_box
from termui.screen import BaseScreen
from termui.theme import THEMES, theme_names
from termui.widgets import badge, key_hints, rule, screen_header

if TYPE_CHECKING:
    from termui.session import Session

PREVIEW_ROLES = ("primary", "secondary", "success", "danger", "warning", "info", "accent")


@dataclass
class ThemesState:
    cursor: int = 0


class ThemesScreen(BaseScreen):
    title = "Themes"
    description = "Colour schemes"

    def init_state(self, session: Session) -> ThemesState:
        names = theme_names()
        current = session.theme.name
        return ThemesState(cursor=names.index(current) if current in names else 0)

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        state: ThemesState = session.screen_state
        names = theme_names()

        if event.type is KeyType.UP or event.is_char("k"):
            state.cursor = (state.cursor - 1) % len(names)
        elif event.type is KeyType.DOWN or event.is_char("j"):
            state.cursor = (state.cursor + 1) % len(names)
        elif event.type is KeyType.ENTER or event.is_char(" "):
            # set_theme renders on success
            session.set_theme(names[state.cursor])
            return
        else:
            return
        session.render()

    def render(self, session: Session) -> str:
        state: ThemesState = session.screen_state
        cols, theme = session.cols, session.theme
        lines = screen_header("Themes", "Pick a colour scheme for this session", cols, theme)

        for i, name in enumerate(theme_names()):
            candidate = THEMES[name]
            swatch = "".join(bg(candidate.swatch()[role], "  ") for role in PREVIEW_ROLES)
            label = candidate.label.ljust(12)
            marker = bold(green(" ✓")) if name == theme.name else "  "
            if i == state.cursor:
                row = bold(theme.paint("primary", "▸ ")) + bold(white(label)) + swatch + marker
            else:
                row = "  " + muted(label) + swatch + marker
            lines.append(center_line(row, cols))

        lines.append("")
        preview = [
            theme.paint("text", "The quick brown fox jumps over the lazy dog."),
            "",
            "  ".join(
                [badge("OK", "success"), theme.paint("warning", "warning"), theme.paint("danger", "danger")]
            ),
        ]
        box = draw_box(preview, width=52, title=theme.label, color=theme.role("border"))
        lines.extend(center_block(box, cols))
        lines.append(rule(44, cols))
        lines.append(key_hints([("↑↓", "Move"), ("Enter", "Apply"), ("q", "Back")], cols))
        return "\n".join(lines)
