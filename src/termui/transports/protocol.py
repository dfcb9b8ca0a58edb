"""WebSocket message protocol definitions.

Client -> server messages are JSON objects. Server -> client messages are
raw ANSI text frames, written straight into the browser terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MAX_DIMENSION = 1000


# --- Client -> Server messages ---


@dataclass
class InputMessage:
    type: str = "input"
    data: str = ""


@dataclass
class ResizeMessage:
    type: str = "resize"
    cols: int = 80
    rows: int = 24


ClientMessage = InputMessage | ResizeMessage


def _dimension(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = int(value)
    if value < 1 or value > MAX_DIMENSION:
        return None
    return value


def parse_client_message(data: Any) -> ClientMessage | None:
    """Parse a decoded JSON value into a typed client message.

    Returns ``None`` for unknown types and malformed payloads.
    """
    if not isinstance(data, dict):
        return None
    msg_type = data.get("type", "")
    match msg_type:
        case "input":
            payload = data.get("data")
            if not isinstance(payload, str):
                return None
            return InputMessage(data=payload)
        case "resize":
            cols = _dimension(data.get("cols"))
            rows = _dimension(data.get("rows"))
            if cols is None or rows is None:
                return None
            return ResizeMessage(cols=cols, rows=rows)
        case _:
            return None
