"""Transport-facing stream contract."""

from __future__ import annotations

from typing import Protocol


class StreamClosedError(ConnectionError):
    """Raised by a stream when the peer has gone away."""


# Anything a write may raise that means "this client is gone".
TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (OSError, StreamClosedError)


class Stream(Protocol):
    """The only thing a session needs from its connection: a text sink.

    Input and resize notifications are pushed into the session by the
    transport (``Session.feed`` / ``Session.resize``).
    """

    def write(self, data: str) -> None: ...
