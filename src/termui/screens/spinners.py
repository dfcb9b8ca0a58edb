"""Every spinner style animating side by side."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from termui.ansi import (
    blue,
    bold,
    bright_cyan,
    bright_green,
    cyan,
    dim,
    green,
    magenta,
    muted,
    pad_end,
    red,
    white,
    yellow,
)
from termui.layout import center_line
from termui.screen import BaseScreen
from termui.widgets import SPINNERS, key_hints, rule, screen_header, spinner_frame

if TYPE_CHECKING:
    from termui.session import Session

TICK_MS = 80

ROWS: tuple[tuple[str, str, Callable[[str], str], str], ...] = (
    ("braille", "Loading data...", cyan, "Smooth braille-dot rotation"),
    ("dots", "Connecting...", green, "Traveling dot pattern"),
    ("line", "Processing...", yellow, "Classic rotating line"),
    ("arrow", "Fetching...", magenta, "Moving arrow indicator"),
    ("bounce", "Syncing...", blue, "Bouncing block animation"),
    ("clock", "Waiting...", red, "Clock face rotation"),
    ("pulse", "Scanning...", bright_cyan, "Pulsing fill effect"),
    ("dense", "Uploading...", bright_green, "Dense braille rotation"),
)


@dataclass
class SpinnersState:
    tick: int = 0


class SpinnersScreen(BaseScreen):
    title = "Spinners"
    description = "Animations"

    def init_state(self, session: Session) -> SpinnersState:
        return SpinnersState()

    def on_mount(self, session: Session) -> None:
        state: SpinnersState = session.screen_state

        def step() -> None:
            state.tick += 1
            session.render()

        session.start_animation(step, TICK_MS)

    def render(self, session: Session) -> str:
        state: SpinnersState = session.screen_state
        cols = session.cols
        lines = screen_header(
            "Spinner Animations",
            f"{len(SPINNERS)} spinner styles, all animated at once",
            cols,
            session.theme,
        )

        for name, label, color, desc in ROWS:
            # pad to the widest frame so the columns do not jitter
            frame = pad_end(spinner_frame(name, state.tick), 10)
            lines.append(
                "    " + bold(color(frame)) + "  " + white(label.ljust(18)) + dim(cyan(name.ljust(10))) + muted(desc)
            )
            lines.append("")

        lines.append(rule(44, cols))
        lines.append(center_line(muted(f"Frame: {state.tick}"), cols))
        lines.append(key_hints([("q", "Back")], cols))
        return "\n".join(lines)
