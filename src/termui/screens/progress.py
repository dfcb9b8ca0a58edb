"""Progress bars filling at different rates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, NamedTuple

from termui.ansi import bold, cyan, green, magenta, muted, white, yellow
from termui.keys import KeyEvent
from termui.layout import center_line
from termui.screen import BaseScreen
from termui.widgets import key_hints, progress_bar, rule, screen_header, spinner_frame

if TYPE_CHECKING:
    from termui.session import Session

TICK_MS = 66
RESET_AFTER_TICKS = 60
BAR_WIDTH = 40


class Bar(NamedTuple):
    label: str
    speed: float
    color: Callable[[str], str]
    style: str


BARS = (
    Bar("Downloading", 1.2, cyan, "block"),
    Bar("Compiling", 0.7, green, "hash"),
    Bar("Uploading", 0.4, yellow, "equal"),
    Bar("Processing", 0.9, magenta, "arrow"),
)


@dataclass
class ProgressState:
    values: list[float] = field(default_factory=lambda: [0.0] * len(BARS))
    tick: int = 0
    idle: int = 0

    @property
    def completed(self) -> int:
        return sum(1 for value in self.values if value >= 100)

    def reset(self) -> None:
        self.values = [0.0] * len(BARS)
        self.tick = 0
        self.idle = 0

    def advance(self) -> None:
        self.tick += 1
        if self.completed == len(BARS):
            # hold the finished state for a while, then start over
            self.idle += 1
            if self.idle >= RESET_AFTER_TICKS:
                self.reset()
            return
        self.values = [min(100.0, value + bar.speed) for value, bar in zip(self.values, BARS)]


class ProgressScreen(BaseScreen):
    title = "Progress"
    description = "Progress bars"

    def init_state(self, session: Session) -> ProgressState:
        return ProgressState()

    def on_mount(self, session: Session) -> None:
        state: ProgressState = session.screen_state

        def step() -> None:
            state.advance()
            session.render()

        session.start_animation(step, TICK_MS)

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        if event.is_char("r", "R"):
            session.screen_state.reset()
            session.render()

    def render(self, session: Session) -> str:
        state: ProgressState = session.screen_state
        cols = session.cols
        lines = screen_header("Progress Bars", "Animated progress with style variants", cols, session.theme)

        for bar, value in zip(BARS, state.values):
            label = bar.label.ljust(14)
            if value >= 100:
                head = bold(green(label)) + bold(green(" ✓ Complete"))
            else:
                head = bold(white(label)) + " " + bar.color(spinner_frame("braille", state.tick))
            lines.append(center_line(head, cols))
            lines.append(center_line(progress_bar(value, BAR_WIDTH, bar.style, bar.color), cols))
            lines.append("")

        lines.append(rule(44, cols))
        if state.completed == len(BARS):
            lines.append(center_line(bold(green("✓ All tasks completed!")), cols))
        else:
            lines.append(center_line(muted(f"{state.completed}/{len(BARS)} complete"), cols))
        lines.append("")
        lines.append(key_hints([("r", "Reset"), ("q", "Back")], cols))
        return "\n".join(lines)
