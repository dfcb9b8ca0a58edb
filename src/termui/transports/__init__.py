"""Stream adapters that connect sessions to real terminals."""

from termui.transports.base import TRANSPORT_ERRORS, Stream, StreamClosedError

__all__ = [
    "TRANSPORT_ERRORS",
    "Stream",
    "StreamClosedError",
]
