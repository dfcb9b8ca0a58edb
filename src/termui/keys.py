"""Abstract key events and decoding of complete input sequences.

Screens never see raw bytes; they receive :class:`KeyEvent` values from a
closed vocabulary (:class:`KeyType`). Splitting a byte stream into complete
sequences is the job of :mod:`termui.input`; this module only maps one
complete unit to events.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ESC = "\x1b"


class KeyType(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    ENTER = "ENTER"
    ESCAPE = "ESCAPE"
    TAB = "TAB"
    SHIFT_TAB = "SHIFT_TAB"
    BACKSPACE = "BACKSPACE"
    DELETE = "DELETE"
    INSERT = "INSERT"
    HOME = "HOME"
    END = "END"
    PAGE_UP = "PAGE_UP"
    PAGE_DOWN = "PAGE_DOWN"
    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F5 = "F5"
    F6 = "F6"
    F7 = "F7"
    F8 = "F8"
    F9 = "F9"
    F10 = "F10"
    F11 = "F11"
    F12 = "F12"
    SHIFT_UP = "SHIFT_UP"
    SHIFT_DOWN = "SHIFT_DOWN"
    SHIFT_LEFT = "SHIFT_LEFT"
    SHIFT_RIGHT = "SHIFT_RIGHT"
    CTRL_UP = "CTRL_UP"
    CTRL_DOWN = "CTRL_DOWN"
    CTRL_LEFT = "CTRL_LEFT"
    CTRL_RIGHT = "CTRL_RIGHT"
    CTRL_A = "CTRL_A"
    CTRL_B = "CTRL_B"
    CTRL_C = "CTRL_C"
    CTRL_D = "CTRL_D"
    CTRL_E = "CTRL_E"
    CTRL_F = "CTRL_F"
    CTRL_K = "CTRL_K"
    CTRL_L = "CTRL_L"
    CTRL_U = "CTRL_U"
    CTRL_Z = "CTRL_Z"
    CHAR = "CHAR"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class KeyEvent:
    """One decoded key press."""

    type: KeyType
    char: str | None = None
    sequence: str = ""

    def is_char(self, *chars: str) -> bool:
        """True for a ``CHAR`` event carrying one of *chars*."""
        return self.type is KeyType.CHAR and self.char in chars


def char_event(ch: str) -> KeyEvent:
    return KeyEvent(KeyType.CHAR, ch, ch)


# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

_FINAL_KEYS: dict[str, KeyType] = {
    "A": KeyType.UP,
    "B": KeyType.DOWN,
    "C": KeyType.RIGHT,
    "D": KeyType.LEFT,
    "H": KeyType.HOME,
    "F": KeyType.END,
}

# xterm modifier parameter (1 + bitmask) -> prefix
_MODIFIED_ARROWS: dict[str, dict[str, KeyType]] = {
    "2": {
        "A": KeyType.SHIFT_UP,
        "B": KeyType.SHIFT_DOWN,
        "C": KeyType.SHIFT_RIGHT,
        "D": KeyType.SHIFT_LEFT,
    },
    "5": {
        "A": KeyType.CTRL_UP,
        "B": KeyType.CTRL_DOWN,
        "C": KeyType.CTRL_RIGHT,
        "D": KeyType.CTRL_LEFT,
    },
}

_TILDE_KEYS: dict[str, KeyType] = {
    "1": KeyType.HOME,
    "2": KeyType.INSERT,
    "3": KeyType.DELETE,
    "4": KeyType.END,
    "5": KeyType.PAGE_UP,
    "6": KeyType.PAGE_DOWN,
    "7": KeyType.HOME,
    "8": KeyType.END,
    "11": KeyType.F1,
    "12": KeyType.F2,
    "13": KeyType.F3,
    "14": KeyType.F4,
    "15": KeyType.F5,
    "17": KeyType.F6,
    "18": KeyType.F7,
    "19": KeyType.F8,
    "20": KeyType.F9,
    "21": KeyType.F10,
    "23": KeyType.F11,
    "24": KeyType.F12,
}

_SS3_KEYS: dict[str, KeyType] = {
    **_FINAL_KEYS,
    "P": KeyType.F1,
    "Q": KeyType.F2,
    "R": KeyType.F3,
    "S": KeyType.F4,
    "M": KeyType.ENTER,
}

# Linux console: ESC [ [ A .. ESC [ [ E
_LINUX_CONSOLE_KEYS: dict[str, KeyType] = {
    "A": KeyType.F1,
    "B": KeyType.F2,
    "C": KeyType.F3,
    "D": KeyType.F4,
    "E": KeyType.F5,
}

_CONTROLS: dict[str, KeyType] = {
    "\r": KeyType.ENTER,
    "\n": KeyType.ENTER,
    "\x7f": KeyType.BACKSPACE,
    "\x08": KeyType.BACKSPACE,
    "\t": KeyType.TAB,
    "\x1b": KeyType.ESCAPE,
    "\x01": KeyType.CTRL_A,
    "\x02": KeyType.CTRL_B,
    "\x03": KeyType.CTRL_C,
    "\x04": KeyType.CTRL_D,
    "\x05": KeyType.CTRL_E,
    "\x06": KeyType.CTRL_F,
    "\x0b": KeyType.CTRL_K,
    "\x0c": KeyType.CTRL_L,
    "\x15": KeyType.CTRL_U,
    "\x1a": KeyType.CTRL_Z,
}


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _decode_csi(seq: str) -> KeyType | None:
    body = seq[2:]
    if not body:
        return None
    final = body[-1]
    params = body[:-1]

    if params == "[":
        return _LINUX_CONSOLE_KEYS.get(final)
    if final == "~":
        return _TILDE_KEYS.get(params.split(";")[0])
    if final == "Z" and not params:
        return KeyType.SHIFT_TAB
    if final in _FINAL_KEYS:
        if not params or params == "1":
            return _FINAL_KEYS[final]
        parts = params.split(";")
        if len(parts) == 2 and parts[0] == "1":
            modified = _MODIFIED_ARROWS.get(parts[1], {})
            if final in modified:
                return modified[final]
            return _FINAL_KEYS[final]
    return None


def decode_single(ch: str) -> KeyEvent | None:
    """Decode one non-escape character; ``None`` for unmapped control bytes."""
    key = _CONTROLS.get(ch)
    if key is not None:
        return KeyEvent(key, None, ch)
    if ch.isprintable():
        return char_event(ch)
    return None


def decode_sequence(seq: str) -> list[KeyEvent]:
    """Map one complete input unit to zero or more key events."""
    if not seq:
        return []

    if not seq.startswith(ESC):
        events = []
        for ch in seq:
            event = decode_single(ch)
            if event is not None:
                events.append(event)
        return events

    if seq == ESC:
        return [KeyEvent(KeyType.ESCAPE, None, seq)]

    if seq.startswith(ESC + "["):
        key = _decode_csi(seq)
        return [KeyEvent(key, None, seq)] if key is not None else []

    if seq.startswith(ESC + "O") and len(seq) == 3:
        key = _SS3_KEYS.get(seq[2])
        return [KeyEvent(key, None, seq)] if key is not None else []

    if seq[1] in "]P_":
        # OSC / DCS / APC strings are terminal replies, not key presses
        return []

    # ESC followed by ordinary input: a separate Escape press, then the rest
    return [KeyEvent(KeyType.ESCAPE, None, ESC), *decode_sequence(seq[1:])]
