"""Atomic full-frame writes and alternate-screen management.

Every frame is a full repaint: clear, hide cursor, content, show cursor,
built as one string and handed to the stream in a single ``write`` so a
remote terminal never shows a half-drawn frame.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from termui.ansi import (
    ALT_SCREEN_ENTER,
    ALT_SCREEN_EXIT,
    CLEAR_SCREEN,
    HIDE_CURSOR,
    SHOW_CURSOR,
)

if TYPE_CHECKING:
    from termui.transports.base import Stream

CRLF = "\r\n"


def join_lines(lines: Iterable[str]) -> str:
    """Join screen lines with CRLF, as raw-mode terminals expect."""
    return CRLF.join(lines)


def compose_frame(frame: str, rows: int | None = None) -> str:
    """Build the exact bytes of one redraw.

    Bare ``\\n`` line endings are upgraded to ``\\r\\n``. With *rows* set the
    frame is clipped to that many lines so the alternate screen never
    scrolls.
    """
    body = frame.replace(CRLF, "\n")
    if rows is not None:
        lines = body.split("\n")
        if len(lines) > rows:
            body = "\n".join(lines[: max(rows, 0)])
    body = body.replace("\n", CRLF)
    return CLEAR_SCREEN + HIDE_CURSOR + body + SHOW_CURSOR


def render_frame(stream: Stream, frame: str, rows: int | None = None) -> None:
    """Write one complete frame with exactly one ``write`` call.

    Write errors propagate; the caller decides they mean "disconnected".
    """
    stream.write(compose_frame(frame, rows))


def enter_alt_screen(stream: Stream) -> None:
    stream.write(ALT_SCREEN_ENTER)


def exit_alt_screen(stream: Stream) -> None:
    """Leave the alternate screen and make sure the cursor is visible again."""
    stream.write(ALT_SCREEN_EXIT + SHOW_CURSOR)
