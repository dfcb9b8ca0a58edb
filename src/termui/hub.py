"""Tracks live sessions for one server process and shuts them all down."""

from __future__ import annotations

import asyncio
import itertools
import logging
import signal
from typing import TYPE_CHECKING, Callable, Iterator

from termui.session import Session

if TYPE_CHECKING:
    from termui.config import Config
    from termui.screen import ScreenRegistry
    from termui.scheduler import Scheduler
    from termui.transports.base import Stream

logger = logging.getLogger(__name__)


class SessionHub:
    """Creates sessions with increasing ids and forgets them when they close.

    A fault in one session never reaches the hub: sessions deal with their
    own errors, and the hub only sees the close callback.
    """

    def __init__(
        self,
        registry: ScreenRegistry,
        config: Config,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._registry = registry
        self._config = config
        self._scheduler = scheduler
        self._sessions: dict[int, Session] = {}
        self._ids = itertools.count(1)
        self._shut_down = False

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def open(
        self,
        stream: Stream,
        *,
        cols: int | None = None,
        rows: int | None = None,
        start: str | None = None,
    ) -> Session:
        """Create and track a session. The caller decides when to ``start()`` it."""
        if self._shut_down:
            raise RuntimeError("hub is shut down")

        config = self._config
        session = Session(
            stream,
            self._registry,
            start=start or config.start_screen,
            cols=cols or config.cols,
            rows=rows or config.rows,
            theme=config.theme,
            scheduler=self._scheduler,
            escape_timeout=config.escape_timeout_ms / 1000.0,
            session_id=next(self._ids),
            home="menu",
        )
        self._sessions[session.id] = session
        session.on_close(self._forget)
        logger.info(
            "session %s: connected (%dx%d, %d live)",
            session.id,
            session.cols,
            session.rows,
            len(self._sessions),
        )
        return session

    def _forget(self, session: Session) -> None:
        self._sessions.pop(session.id, None)
        logger.info(
            "session %s: disconnected (%s, %d live)",
            session.id,
            session.close_reason,
            len(self._sessions),
        )

    def get(self, session_id: int) -> Session | None:
        return self._sessions.get(session_id)

    def sessions(self) -> list[Session]:
        return list(self._sessions.values())

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(self.sessions())

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def shutdown(self, reason: str = "shutdown") -> None:
        """Destroy every live session; each one restores its terminal."""
        if self._shut_down:
            return
        self._shut_down = True
        live = self.sessions()
        if live:
            logger.info("shutting down %d session(s)", len(live))
        for session in live:
            session.destroy(reason)

    @property
    def is_shut_down(self) -> bool:
        return self._shut_down

    def install_signal_handlers(
        self,
        loop: asyncio.AbstractEventLoop,
        on_shutdown: Callable[[], None] | None = None,
    ) -> None:
        """SIGINT/SIGTERM: close every session, then run *on_shutdown*."""

        def _shutdown() -> None:
            logger.info("Shutting down...")
            self.shutdown()
            if on_shutdown is not None:
                on_shutdown()

        loop.add_signal_handler(signal.SIGINT, _shutdown)
        loop.add_signal_handler(signal.SIGTERM, _shutdown)
