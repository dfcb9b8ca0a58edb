"""Buffered decoding of raw terminal input into key events.

Transport reads arrive in arbitrary chunks: an arrow key's three bytes may
be split across two reads, a paste may arrive as one large read, and a
multi-byte UTF-8 character may straddle a boundary. ``InputDecoder`` keeps
incomplete data buffered until the rest arrives (or a short timeout says a
lone ESC really was the Escape key) so a sequence is never reported as two
events and never silently lost.
"""

from __future__ import annotations

import codecs
import logging
from typing import Callable

from termui.keys import ESC, KeyEvent, KeyType, char_event, decode_sequence, decode_single
from termui.scheduler import Scheduler, TimerHandle, resolve_scheduler

logger = logging.getLogger(__name__)

BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

# ---------------------------------------------------------------------------
# Sequence completeness
# ---------------------------------------------------------------------------


def _is_complete_sequence(data: str) -> str:
    """Classify *data* as ``'complete'``, ``'incomplete'`` or ``'not-escape'``."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer = data[1]

    if introducer == "[":
        if data.startswith(ESC + "[M"):
            # X10 mouse: ESC [ M + three raw bytes
            return "complete" if len(data) >= 6 else "incomplete"
        if data.startswith(ESC + "[["):
            # Linux console F1-F5: ESC [ [ + one letter
            return "complete" if len(data) >= 4 else "incomplete"
        if len(data) < 3:
            return "incomplete"
        return "complete" if 0x40 <= ord(data[-1]) <= 0x7E else "incomplete"

    if introducer == "]":
        if data.endswith("\x07") or data.endswith(ESC + "\\"):
            return "complete"
        return "incomplete"

    if introducer in "P_":
        return "complete" if data.endswith(ESC + "\\") else "incomplete"

    if introducer == "O":
        return "complete" if len(data) >= 3 else "incomplete"

    # meta key: ESC + one character
    return "complete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete units plus an incomplete remainder."""
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]
        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        end = 1
        while end <= len(remaining):
            status = _is_complete_sequence(remaining[:end])
            if status == "complete":
                break
            end += 1
        else:
            return sequences, remaining

        # ESC ESC: the first one was a lone Escape press
        if remaining[1:2] == ESC:
            sequences.append(ESC)
            pos += 1
            continue

        sequences.append(remaining[:end])
        pos += end

    return sequences, ""


def _decode_leftover(data: str) -> list[KeyEvent]:
    """Decode data that never completed: a lone ESC press, then plain keys."""
    events: list[KeyEvent] = []
    if data.startswith(ESC):
        events.append(KeyEvent(KeyType.ESCAPE, None, ESC))
        data = data[1:]
    for ch in data:
        event = decode_single(ch)
        if event is not None:
            events.append(event)
    return events


# ---------------------------------------------------------------------------
# InputDecoder
# ---------------------------------------------------------------------------


class InputDecoder:
    """Turns raw transport reads into an ordered stream of :class:`KeyEvent`.

    *timeout* is in seconds: how long an incomplete escape sequence may wait
    for its remaining bytes before being decoded as-is.
    """

    def __init__(
        self,
        on_event: Callable[[KeyEvent], None],
        *,
        timeout: float = 0.05,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._on_event: Callable[[KeyEvent], None] | None = on_event
        self._timeout = timeout
        self._scheduler = scheduler
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._timeout_handle: TimerHandle | None = None
        self._paste_mode = False
        self._paste_buffer = ""
        self._last_was_cr = False

    @property
    def pending(self) -> str:
        """Buffered input that has not been decoded yet."""
        return self._buffer

    @property
    def timeout(self) -> float:
        return self._timeout

    # -- feeding ------------------------------------------------------------

    def feed(self, data: bytes | str) -> None:
        """Feed one transport read."""
        if self._on_event is None:
            return
        if isinstance(data, (bytes, bytearray)):
            text = self._utf8.decode(bytes(data))
        else:
            text = data
        if not text:
            return

        self._cancel_timeout()
        self._buffer += text

        if self._paste_mode:
            self._continue_paste()
            return

        start = self._buffer.find(BRACKETED_PASTE_START)
        if start != -1:
            before = self._buffer[:start]
            sequences, leftover = _extract_complete_sequences(before)
            self._emit_sequences(sequences)
            for event in _decode_leftover(leftover):
                self._emit(event)
            self._paste_mode = True
            self._paste_buffer = ""
            self._buffer = self._buffer[start + len(BRACKETED_PASTE_START) :]
            self._continue_paste()
            return

        sequences, self._buffer = _extract_complete_sequences(self._buffer)
        self._emit_sequences(sequences)

        if self._buffer:
            self._arm_timeout()

    def _continue_paste(self) -> None:
        self._paste_buffer += self._buffer
        self._buffer = ""
        end = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end == -1:
            return

        pasted = self._paste_buffer[:end]
        rest = self._paste_buffer[end + len(BRACKETED_PASTE_END) :]
        self._paste_mode = False
        self._paste_buffer = ""
        self._emit_paste(pasted)
        if rest:
            self.feed(rest)

    # -- emission -----------------------------------------------------------

    def _emit(self, event: KeyEvent) -> None:
        if self._on_event is None:
            return
        self._on_event(event)

    def _emit_sequences(self, sequences: list[str]) -> None:
        for seq in sequences:
            if seq == "\n" and self._last_was_cr:
                self._last_was_cr = False
                continue
            self._last_was_cr = seq == "\r"
            for event in decode_sequence(seq):
                self._emit(event)

    def _emit_paste(self, text: str) -> None:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        for ch in text:
            if ch == "\n":
                self._emit(KeyEvent(KeyType.ENTER, None, ch))
            elif ch.isprintable():
                self._emit(char_event(ch))
        self._last_was_cr = False

    # -- timeout flush ------------------------------------------------------

    def _arm_timeout(self) -> None:
        scheduler = resolve_scheduler(self._scheduler)
        if scheduler is None:
            self._flush_and_emit()
            return
        self._timeout_handle = scheduler.call_later(self._timeout, self._on_timeout)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def _on_timeout(self) -> None:
        self._timeout_handle = None
        self._flush_and_emit()

    def _flush_and_emit(self) -> None:
        for leftover in self.flush():
            logger.debug("flushing incomplete input %r", leftover)
            for event in _decode_leftover(leftover):
                self._emit(event)

    def flush(self) -> list[str]:
        """Drop and return whatever is buffered, cancelling the timer."""
        self._cancel_timeout()
        if not self._buffer:
            return []
        leftover = self._buffer
        self._buffer = ""
        return [leftover]

    def clear(self) -> None:
        self._cancel_timeout()
        self._buffer = ""
        self._paste_mode = False
        self._paste_buffer = ""
        self._last_was_cr = False

    def destroy(self) -> None:
        """Stop delivering events; later feeds are ignored."""
        self.clear()
        self._on_event = None
