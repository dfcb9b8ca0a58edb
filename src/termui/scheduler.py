"""Timer plumbing: the scheduler contract and session-owned animations."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from termui.session import Session

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback later.

    A running :class:`asyncio.AbstractEventLoop` satisfies this protocol
    as-is; tests substitute a fake clock.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


def resolve_scheduler(scheduler: Scheduler | None) -> Scheduler | None:
    """Return *scheduler*, else the running event loop, else ``None``."""
    if scheduler is not None:
        return scheduler
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class Animation:
    """A repeating (or, with *once*, single-shot) timer owned by one session.

    The handle is the cancellation token: once :meth:`cancel` has been
    called, or the owning session is destroyed, no further tick runs the
    callback.
    """

    def __init__(
        self,
        session: Session,
        callback: Callable[[], None],
        interval_ms: float,
        scheduler: Scheduler,
        *,
        once: bool = False,
    ) -> None:
        self._session = session
        self._callback = callback
        self.interval_ms = max(float(interval_ms), 1.0)
        self._scheduler = scheduler
        self.once = once
        self._handle: TimerHandle | None = None
        self.cancelled = False
        self.ticks = 0

    @property
    def active(self) -> bool:
        return not self.cancelled and not self._session.destroyed

    def start(self) -> None:
        if self.active and self._handle is None:
            self._arm()

    def _arm(self) -> None:
        self._handle = self._scheduler.call_later(self.interval_ms / 1000.0, self._tick)

    def _tick(self) -> None:
        self._handle = None
        if not self.active:
            return
        self.ticks += 1
        self._session._run_animation(self, self._callback)
        if self.once:
            self.cancel()
        elif self.active:
            self._arm()

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"<Animation {self.interval_ms:g}ms {state} ticks={self.ticks}>"
