"""Single-line text input with a blinking cursor and per-prompt validation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, NamedTuple

from termui.ansi import bold, cyan, green, inverse, muted, red, white
from termui.keys import KeyEvent, KeyType
from termui.layout import center_block, center_line, draw_box
from termui.screen import BaseScreen
from termui.widgets import key_hints, screen_header

if TYPE_CHECKING:
    from termui.scheduler import Animation
    from termui.session import Session

BLINK_MS = 500
ADVANCE_MS = 600
FIELD_WIDTH = 40
HISTORY_SIZE = 4

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _required(value: str) -> str | None:
    return None if value.strip() else "This field is required"


def _email(value: str) -> str | None:
    return None if _EMAIL_RE.match(value) else "Enter a valid email address"


def _username(value: str) -> str | None:
    if len(value) < 3:
        return "At least 3 characters"
    if not value.replace("_", "").isalnum():
        return "Letters, digits and underscores only"
    return None


class Prompt(NamedTuple):
    label: str
    placeholder: str
    validate: Callable[[str], str | None]


PROMPTS = (
    Prompt("Your name", "Ada Lovelace", _required),
    Prompt("Email", "ada@example.com", _email),
    Prompt("Username", "ada_l", _username),
)


@dataclass
class TextInputState:
    value: str = ""
    cursor: int = 0
    prompt: int = 0
    submitted: bool = False
    error: str | None = None
    blink: int = 0
    history: list[tuple[str, str]] = field(default_factory=list)
    offset: int = 0
    advance: Animation | None = field(default=None, repr=False)

    def edit(self, value: str, cursor: int) -> None:
        # editing after a submit keeps the user on this prompt
        if self.advance is not None:
            self.advance.cancel()
            self.advance = None
        self.value = value
        self.cursor = cursor
        self.submitted = False
        self.error = None


def field_offset(cursor: int, offset: int, width: int) -> int:
    """First visible character of a *width*-wide field that keeps *cursor* in view."""
    if cursor < offset:
        return cursor
    if cursor >= offset + width:
        return cursor - width + 1
    return offset


class TextInputScreen(BaseScreen):
    title = "Text Input"
    description = "Live typing"

    def init_state(self, session: Session) -> TextInputState:
        return TextInputState()

    def on_mount(self, session: Session) -> None:
        state: TextInputState = session.screen_state

        def blink() -> None:
            state.blink += 1
            session.render()

        session.start_animation(blink, BLINK_MS)

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        state: TextInputState = session.screen_state
        value, cursor = state.value, state.cursor

        if event.type is KeyType.ESCAPE:
            session.navigate(self.back_to or "menu")
            return
        if event.type is KeyType.CHAR and event.char:
            # q only leaves while there is nothing typed
            if event.char in "qQ" and not value:
                session.navigate(self.back_to or "menu")
                return
            state.edit(value[:cursor] + event.char + value[cursor:], cursor + 1)
        elif event.type is KeyType.BACKSPACE:
            if cursor > 0:
                state.edit(value[: cursor - 1] + value[cursor:], cursor - 1)
        elif event.type is KeyType.DELETE:
            if cursor < len(value):
                state.edit(value[:cursor] + value[cursor + 1 :], cursor)
        elif event.type is KeyType.LEFT:
            state.cursor = max(0, cursor - 1)
        elif event.type is KeyType.RIGHT:
            state.cursor = min(len(value), cursor + 1)
        elif event.type in (KeyType.HOME, KeyType.CTRL_A):
            state.cursor = 0
        elif event.type in (KeyType.END, KeyType.CTRL_E):
            state.cursor = len(value)
        elif event.type is KeyType.CTRL_U:
            state.edit("", 0)
        elif event.type is KeyType.ENTER:
            self._submit(session, state)
        else:
            return
        state.offset = field_offset(state.cursor, state.offset, FIELD_WIDTH)
        state.blink = 0
        session.render()

    def _submit(self, session: Session, state: TextInputState) -> None:
        if state.submitted:
            return
        prompt = PROMPTS[state.prompt]
        error = prompt.validate(state.value)
        if error:
            state.error = error
            return
        state.submitted = True
        state.history.append((prompt.label, state.value))
        del state.history[:-HISTORY_SIZE]

        def advance() -> None:
            state.advance = None
            state.prompt = (state.prompt + 1) % len(PROMPTS)
            state.edit("", 0)
            session.render()

        state.advance = session.start_animation(advance, ADVANCE_MS, once=True)

    def _field(self, state: TextInputState) -> str:
        prompt = PROMPTS[state.prompt]
        cursor_on = state.blink % 2 == 0
        if not state.value:
            caret = inverse(" ") if cursor_on else " "
            return caret + muted(prompt.placeholder)
        offset = field_offset(state.cursor, state.offset, FIELD_WIDTH)
        end = offset + FIELD_WIDTH
        before = state.value[offset : state.cursor]
        at = state.value[state.cursor : state.cursor + 1]
        after = state.value[state.cursor + 1 : end]
        if cursor_on:
            at = inverse(at or " ")
        else:
            at = at or " "
        return white(before) + at + white(after)

    def render(self, session: Session) -> str:
        state: TextInputState = session.screen_state
        cols, theme = session.cols, session.theme
        prompt = PROMPTS[state.prompt]
        lines = screen_header("Text Input", f"Prompt {state.prompt + 1} of {len(PROMPTS)}", cols, theme)

        if state.error:
            color = theme.role("danger")
        elif state.submitted:
            color = theme.role("success")
        else:
            color = theme.role("border")
        box = draw_box([self._field(state)], width=FIELD_WIDTH + 4, title=prompt.label, color=color)
        lines.extend(center_block(box, cols))

        if state.error:
            lines.append(center_line(red("✗ " + state.error), cols))
        elif state.submitted:
            lines.append(center_line(bold(green("✓ Saved")), cols))
        else:
            lines.append(center_line(muted(f"{len(state.value)} characters"), cols))
        lines.append("")

        if state.history:
            lines.append(center_line(muted("Submitted"), cols))
            for label, value in state.history:
                lines.append(center_line(cyan(label.ljust(12)) + white(value), cols))
        lines.append("")
        lines.append(key_hints([("Enter", "Submit"), ("Ctrl+U", "Clear"), ("Esc", "Back")], cols))
        return "\n".join(lines)
