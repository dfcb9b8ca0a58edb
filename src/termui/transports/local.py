"""Run a session in the terminal this process is attached to.

``LocalTerminal`` puts stdin into raw mode, feeds stdin reads to the
session through the event loop, turns SIGWINCH into ``session.resize`` and
restores the terminal exactly as it found it on stop.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
import termios
import tty
from typing import TYPE_CHECKING, Any

from termui.hub import SessionHub
from termui.transports.base import StreamClosedError

if TYPE_CHECKING:
    from termui.config import Config
    from termui.screen import ScreenRegistry
    from termui.session import Session

logger = logging.getLogger(__name__)

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"


class LocalTerminal:
    """A :class:`~termui.transports.base.Stream` over the process's stdin/stdout."""

    def __init__(self, stdin: Any = None, stdout: Any = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: Any = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._session: Session | None = None
        self._reader_active = False
        self._closed = False

    # -- size ---------------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- Stream -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write and flush. Errors propagate so the session can close."""
        if self._closed:
            raise StreamClosedError("terminal has been released")
        self._stdout.write(data)
        self._stdout.flush()

    # -- start / stop -------------------------------------------------------

    def start(self, session: Session, loop: asyncio.AbstractEventLoop) -> None:
        """Enter raw mode and start forwarding input and resizes to *session*."""
        self._session = session
        self._loop = loop

        fd = self._stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)
        self.write(_BRACKETED_PASTE_ENABLE)

        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)

        loop.add_reader(fd, self._on_stdin_readable)
        self._reader_active = True

    def stop(self) -> None:
        """Restore terminal attributes and remove every handler. Idempotent."""
        if self._closed:
            return

        if self._reader_active and self._loop is not None:
            try:
                self._loop.remove_reader(self._stdin.fileno())
            except (RuntimeError, ValueError):
                pass
            self._reader_active = False

        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None

        try:
            self.write(_BRACKETED_PASTE_DISABLE)
        except OSError:
            pass
        self._closed = True

        if self._original_termios is not None:
            termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
        self._session = None

    # -- callbacks ----------------------------------------------------------

    def _on_stdin_readable(self) -> None:
        try:
            raw = os.read(self._stdin.fileno(), 4096)
        except OSError:
            return
        session = self._session
        if session is None:
            return
        if not raw:
            session.destroy("eof")
            return
        session.feed(raw)

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        # signal handlers may interrupt a render; resize on the loop instead
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._apply_resize)

    def _apply_resize(self) -> None:
        if self._session is not None:
            self._session.resize(self.columns, self.rows)


async def run_local(config: Config, registry: ScreenRegistry) -> str | None:
    """Run one session in the current terminal until it closes.

    Returns the session's close reason.
    """
    loop = asyncio.get_running_loop()
    hub = SessionHub(registry, config)
    terminal = LocalTerminal()

    session = hub.open(terminal, cols=terminal.columns, rows=terminal.rows)
    finished = asyncio.Event()
    session.on_close(lambda _session: finished.set())

    hub.install_signal_handlers(loop)
    terminal.start(session, loop)
    try:
        session.start()
        await finished.wait()
    finally:
        hub.shutdown()
        terminal.stop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)
    return session.close_reason
