"""Live bar chart whose bars ease toward new random targets."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from termui.ansi import blue, bold, cyan, dim, muted, red, yellow
from termui.keys import KeyEvent
from termui.layout import center_block, center_line, join_columns
from termui.screen import BaseScreen
from termui.widgets import key_hints, screen_header

if TYPE_CHECKING:
    from termui.session import Session

LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
TICK_MS = 66
RETARGET_TICKS = 15
EASING = 0.15
BAR_WIDTH = 3
GAP = 2
MAX_HEIGHT = 12
MIN_HEIGHT = 4
# header, axis, labels, values, blank, stats, hints
CHROME_LINES = 11


def interpolate(current: list[float], target: list[float], factor: float = EASING) -> list[float]:
    """Move each value a fraction of the way toward its target."""
    return [cur + (goal - cur) * factor for cur, goal in zip(current, target)]


def value_color(value: float) -> Callable[[str], str]:
    if value >= 80:
        return red
    if value >= 60:
        return yellow
    if value >= 40:
        return cyan
    if value >= 20:
        return blue
    return dim


@dataclass
class ChartState:
    rng: random.Random
    values: list[float] = field(default_factory=lambda: [0.0] * len(LABELS))
    targets: list[float] = field(default_factory=list)
    tick: int = 0
    paused: bool = False

    def retarget(self) -> None:
        self.targets = [float(self.rng.randrange(100)) for _ in LABELS]

    def advance(self) -> None:
        if self.paused:
            return
        self.tick += 1
        if self.tick % RETARGET_TICKS == 0:
            self.retarget()
        self.values = interpolate(self.values, self.targets)


def render_chart(values: list[float], height: int) -> list[str]:
    lines = []
    for row in range(height, 0, -1):
        threshold = row / height * 100
        line = muted(f"{round(threshold):>3}") + " " + muted("│")
        for value in values:
            line += " " * GAP
            if value / 100 * height >= row:
                line += value_color(value)("█" * BAR_WIDTH)
            else:
                line += " " * BAR_WIDTH
        lines.append(line)

    lines.append("    " + muted("└" + "─" * ((BAR_WIDTH + GAP) * len(values) + GAP)))
    lines.append("     " + "".join(" " * GAP + muted(label.center(BAR_WIDTH)) for label in LABELS))
    lines.append(
        "     " + "".join(" " * GAP + value_color(v)(str(round(v)).center(BAR_WIDTH)) for v in values)
    )
    return lines


class ChartScreen(BaseScreen):
    title = "Chart"
    description = "Live data"

    def init_state(self, session: Session) -> ChartState:
        state = ChartState(rng=random.Random(session.params.get("seed")))
        state.retarget()
        return state

    def on_mount(self, session: Session) -> None:
        state: ChartState = session.screen_state

        def step() -> None:
            state.advance()
            session.render()

        session.start_animation(step, TICK_MS)

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        state: ChartState = session.screen_state
        if event.is_char(" ", "p", "P"):
            state.paused = not state.paused
        elif event.is_char("r", "R"):
            state.retarget()
        else:
            return
        session.render()

    def render(self, session: Session) -> str:
        state: ChartState = session.screen_state
        cols = session.cols
        lines = screen_header("Live Chart", "Weekly activity, eased toward new data every second", cols, session.theme)

        height = max(MIN_HEIGHT, min(MAX_HEIGHT, session.rows - CHROME_LINES))
        lines.extend(center_block(join_columns([render_chart(state.values, height)]), cols))
        lines.append("")

        average = sum(state.values) / len(state.values)
        peak = max(state.values)
        status = "paused" if state.paused else "live"
        lines.append(center_line(muted(f"avg {average:5.1f} · peak {peak:5.1f} · ") + bold(status), cols))
        lines.append(key_hints([("Space", "Pause"), ("r", "New data"), ("q", "Back")], cols))
        return "\n".join(lines)
