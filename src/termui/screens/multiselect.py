"""Checkbox list with an optional selection limit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from termui.ansi import bold, cyan, gray, green, muted, white, yellow
from termui.keys import KeyEvent, KeyType
from termui.layout import center_line
from termui.screen import BaseScreen
from termui.widgets import key_hints, rule, screen_header

if TYPE_CHECKING:
    from termui.session import Session

ITEMS = (
    ("docker", "Docker", "Containerization"),
    ("kubernetes", "Kubernetes", "Container orchestration"),
    ("terraform", "Terraform", "Infrastructure as code"),
    ("aws", "AWS", "Cloud platform"),
    ("gcp", "GCP", "Google Cloud"),
    ("azure", "Azure", "Microsoft Cloud"),
    ("github", "GitHub Actions", "CI/CD pipeline"),
    ("gitlab", "GitLab CI", "DevOps platform"),
    ("jenkins", "Jenkins", "Automation server"),
    ("ansible", "Ansible", "Config management"),
    ("grafana", "Grafana", "Monitoring dashboards"),
    ("prometheus", "Prometheus", "Metrics collection"),
)

LIMIT = 3
CHROME_LINES = 11


@dataclass
class MultiSelectState:
    cursor: int = 0
    checked: list[int] = field(default_factory=list)
    limit: int = 0
    confirmed: bool = False

    def toggle(self, index: int) -> None:
        if index in self.checked:
            self.checked.remove(index)
        elif not self.limit or len(self.checked) < self.limit:
            self.checked.append(index)
        self.confirmed = False


class MultiSelectScreen(BaseScreen):
    title = "Multi-Select"
    description = "Checkboxes"

    def init_state(self, session: Session) -> MultiSelectState:
        return MultiSelectState()

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        state: MultiSelectState = session.screen_state

        if event.type is KeyType.UP or event.is_char("k"):
            state.cursor = max(0, state.cursor - 1)
        elif event.type is KeyType.DOWN or event.is_char("j"):
            state.cursor = min(len(ITEMS) - 1, state.cursor + 1)
        elif event.is_char(" "):
            state.toggle(state.cursor)
        elif event.is_char("a", "A"):
            if not state.limit:
                state.checked = list(range(len(ITEMS)))
        elif event.is_char("n", "N"):
            state.checked = []
        elif event.is_char("l", "L"):
            state.limit = 0 if state.limit else LIMIT
            if state.limit:
                del state.checked[state.limit :]
        elif event.type is KeyType.ENTER:
            state.confirmed = True
        else:
            return
        session.render()

    def render(self, session: Session) -> str:
        state: MultiSelectState = session.screen_state
        cols = session.cols
        lines = screen_header("Multi-Select", "Pick your DevOps toolchain", cols, session.theme)

        limit_text = f"limit {state.limit}" if state.limit else "no limit"
        lines.append(center_line(muted(f"{len(state.checked)} selected · {limit_text}"), cols))
        lines.append(rule(44, cols))

        visible = max(3, session.rows - CHROME_LINES)
        top = max(0, min(state.cursor - visible + 1, len(ITEMS) - visible))
        for i in range(top, min(len(ITEMS), top + visible)):
            _, label, desc = ITEMS[i]
            checked = i in state.checked
            box = green("☑") if checked else gray("☐")
            name = label.ljust(16)
            if i == state.cursor:
                row = bold(cyan("▸ ")) + box + " " + bold(white(name)) + muted(desc)
            else:
                row = "  " + box + " " + (green(name) if checked else gray(name)) + muted(desc)
            lines.append("    " + row)

        lines.append(rule(44, cols))
        if state.confirmed and state.checked:
            chosen = ", ".join(ITEMS[i][1] for i in sorted(state.checked))
            lines.append(center_line(bold(green("✓ Confirmed: ")) + yellow(chosen), cols))
        elif state.confirmed:
            lines.append(center_line(yellow("Nothing selected"), cols))
        else:
            lines.append(center_line(muted("Space toggles · Enter confirms"), cols))
        lines.append(
            key_hints([("Space", "Toggle"), ("a", "All"), ("n", "None"), ("l", "Limit"), ("q", "Back")], cols)
        )
        return "\n".join(lines)
