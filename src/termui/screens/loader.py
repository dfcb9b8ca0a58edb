"""Boot splash: an animated progress bar that hands over to the menu."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from termui.ansi import bold, muted
from termui.keys import KeyEvent, KeyType
from termui.layout import center_block
from termui.screen import BaseScreen
from termui.widgets import progress_bar, spinner_frame

if TYPE_CHECKING:
    from termui.session import Session

TICK_MS = 30
STEP = 2
HANDOFF_MS = 500
NEXT_SCREEN = "menu"

STAGES = (
    "Initializing termui",
    "Loading components",
    "Setting up themes",
    "Preparing interface",
    "Ready!",
)

LOGO = (
    "████████╗███████╗██████╗ ███╗   ███╗██╗   ██╗██╗",
    "╚══██╔══╝██╔════╝██╔══██╗████╗ ████║██║   ██║██║",
    "   ██║   █████╗  ██████╔╝██╔████╔██║██║   ██║██║",
    "   ██║   ██╔══╝  ██╔══██╗██║╚██╔╝██║██║   ██║██║",
    "   ██║   ███████╗██║  ██║██║ ╚═╝ ██║╚██████╔╝██║",
    "   ╚═╝   ╚══════╝╚═╝  ╚═╝╚═╝     ╚═╝ ╚═════╝ ╚═╝",
)


@dataclass
class LoaderState:
    progress: int = 0
    tick: int = 0
    done: bool = False


def stage_for(progress: int) -> str:
    index = min(len(STAGES) - 1, progress * (len(STAGES) - 1) // 100)
    return STAGES[index]


class LoaderScreen(BaseScreen):
    title = "Loader"
    description = "Boot splash"
    back_to = None

    def init_state(self, session: Session) -> LoaderState:
        return LoaderState()

    def on_mount(self, session: Session) -> None:
        state: LoaderState = session.screen_state

        def advance() -> None:
            state.tick += 1
            if state.done:
                return
            state.progress = min(100, state.progress + STEP)
            if state.progress >= 100:
                state.done = True
                ticker.cancel()
                session.start_animation(lambda: session.navigate(NEXT_SCREEN), HANDOFF_MS, once=True)
            session.render()

        ticker = session.start_animation(advance, TICK_MS)

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if event.type in (KeyType.ENTER, KeyType.ESCAPE) or event.is_char(" "):
            session.navigate(NEXT_SCREEN)
        elif event.is_char("q", "Q"):
            session.destroy("quit")

    def render(self, session: Session) -> str:
        state: LoaderState = session.screen_state
        cols, theme = session.cols, session.theme

        body = [
            *(theme.paint("primary", line) for line in LOGO),
            "",
            bold(theme.paint("warning", "Terminal UI Component Showcase")),
            "",
            theme.paint("primary", spinner_frame("dense", state.tick)) + " " + stage_for(state.progress),
            "",
            progress_bar(state.progress, 50, "block", theme.role("primary")),
            "",
            muted("Enter to skip · q to quit"),
        ]
        top = max(0, (session.rows - len(body)) // 2)
        return "\n".join([""] * top + center_block(body, cols))
