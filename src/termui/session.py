"""Per-connection session runtime.

A :class:`Session` owns everything one connected terminal needs: its
dimensions, the active screen key and that screen's state, its theme, its
input decoder and its animations. Sessions share nothing mutable with each
other; the screen registry they read from is frozen.

All state transitions for one session (input dispatch, navigation, timer
ticks, resizes and renders) run under that session's reentrant lock, so a
screen's ``handle_input`` may call :meth:`Session.navigate`, which renders,
without deadlocking, and a timer tick never interleaves with a half-applied
key press.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Callable, Mapping

from termui.ansi import bold
from termui.input import InputDecoder
from termui.keys import KeyEvent, KeyType
from termui.layout import center_block, draw_box
from termui.renderer import enter_alt_screen, exit_alt_screen, render_frame
from termui.scheduler import Animation, Scheduler, resolve_scheduler
from termui.screen import Screen, UnknownScreenError
from termui.theme import DEFAULT_THEME, Theme, get_theme
from termui.transports.base import TRANSPORT_ERRORS, Stream

logger = logging.getLogger(__name__)

_session_ids = itertools.count(1)

CloseCallback = Callable[["Session"], None]


class Session:
    """One connected terminal driving one screen at a time."""

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def __init__(
        self,
        stream: Stream,
        registry: Mapping[str, Screen],
        *,
        start: str = "menu",
        cols: int = 80,
        rows: int = 24,
        theme: Theme | str | None = None,
        scheduler: Scheduler | None = None,
        escape_timeout: float = 0.05,
        session_id: int | str | None = None,
        home: str | None = None,
    ) -> None:
        if start not in registry:
            raise UnknownScreenError(start)

        self.id = session_id if session_id is not None else next(_session_ids)
        self.stream = stream
        self.registry = registry
        self.cols = max(1, int(cols))
        self.rows = max(1, int(rows))
        self.theme: Theme = get_theme(theme) if isinstance(theme, str) else theme or get_theme(DEFAULT_THEME)
        self.home = home if home is not None and home in registry else start

        self.screen_key = start
        self.screen_state: Any = None
        self.params: dict[str, Any] = {}

        self.destroyed = False
        self.close_reason: str | None = None
        self.render_count = 0

        self._lock = threading.RLock()
        self._scheduler = scheduler
        self._animations: list[Animation] = []
        self._close_callbacks: list[CloseCallback] = []
        self._started = False
        self._fault: str | None = None

        self._decoder = InputDecoder(self.dispatch, timeout=escape_timeout, scheduler=scheduler)

        self._init_screen()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def screen(self) -> Screen:
        return self.registry[self.screen_key]

    @property
    def animations(self) -> list[Animation]:
        """Animations that are still live."""
        return [a for a in self._animations if a.active]

    @property
    def faulted(self) -> bool:
        """True while the error frame is on display."""
        return self._fault is not None

    @property
    def started(self) -> bool:
        return self._started

    def __repr__(self) -> str:
        state = "destroyed" if self.destroyed else self.screen_key
        return f"<Session {self.id} {state} {self.cols}x{self.rows}>"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Switch to the alternate screen, mount the start screen and draw it."""
        with self._lock:
            if self._started or self.destroyed:
                return
            self._started = True
            try:
                enter_alt_screen(self.stream)
            except TRANSPORT_ERRORS:
                logger.warning("session %s: stream failed on start", self.id)
                self.destroy("write-error")
                return
            self._mount_screen()
            self.render()

    def destroy(self, reason: str = "quit") -> None:
        """Tear the session down. Safe to call more than once."""
        with self._lock:
            if self.destroyed:
                return
            self.destroyed = True
            self.close_reason = reason
            logger.info("session %s: closing (%s)", self.id, reason)

            self.stop_animations()
            self._call_hook("on_unmount")
            self._decoder.destroy()

            if self._started:
                try:
                    exit_alt_screen(self.stream)
                except TRANSPORT_ERRORS:
                    logger.debug("session %s: stream already gone on close", self.id)

            callbacks, self._close_callbacks = self._close_callbacks, []
        for callback in callbacks:
            try:
                callback(self)
            except Exception:
                logger.exception("session %s: close callback failed", self.id)

    def on_close(self, callback: CloseCallback) -> None:
        """Run *callback(session)* once the session is destroyed."""
        if self.destroyed:
            callback(self)
            return
        self._close_callbacks.append(callback)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, key: str, **params: Any) -> bool:
        """Switch to screen *key*. Unknown keys leave the session where it is."""
        with self._lock:
            if self.destroyed:
                return False
            if key not in self.registry:
                logger.warning("session %s: unknown screen %r, staying on %r", self.id, key, self.screen_key)
                return False

            logger.debug("session %s: %s -> %s", self.id, self.screen_key, key)
            self.stop_animations()
            self._call_hook("on_unmount")

            self.screen_key = key
            self.params = dict(params)
            self._fault = None
            self._init_screen()
            self._mount_screen()
            self.render()
            return True

    def _init_screen(self) -> None:
        try:
            self.screen_state = self.screen.init_state(self)
        except Exception as exc:
            logger.exception("session %s: init_state of %r failed", self.id, self.screen_key)
            self.screen_state = None
            self._set_fault(exc)

    def _mount_screen(self) -> None:
        if self._fault is None:
            self._call_hook("on_mount")

    def _call_hook(self, name: str) -> None:
        hook = getattr(self.screen, name, None)
        if not callable(hook):
            return
        try:
            hook(self)
        except Exception as exc:
            logger.exception("session %s: %s of %r failed", self.id, name, self.screen_key)
            if name == "on_mount":
                self._set_fault(exc)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> None:
        """Draw the active screen as one frame."""
        with self._lock:
            if self.destroyed:
                return
            if self._fault is None:
                try:
                    frame = self.screen.render(self)
                    if not isinstance(frame, str):
                        raise TypeError(f"render returned {type(frame).__name__}, expected str")
                except Exception as exc:
                    logger.exception("session %s: render of %r failed", self.id, self.screen_key)
                    self._set_fault(exc)
            if self._fault is not None:
                frame = self._error_frame()

            try:
                render_frame(self.stream, frame, self.rows)
            except TRANSPORT_ERRORS:
                logger.warning("session %s: write failed, closing", self.id)
                self.destroy("write-error")
                return
            self.render_count += 1

    def _set_fault(self, exc: BaseException) -> None:
        self._fault = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
        self.stop_animations()

    def _error_frame(self) -> str:
        danger = self.theme.role("danger")
        width = min(max(self.cols - 4, 20), 72)
        box = draw_box(
            [
                bold(f"Screen {self.screen_key!r} failed"),
                "",
                self._fault or "",
                "",
                self.theme.paint("muted", f"Press any key to return to {self.home}"),
            ],
            width=width,
            title="Error",
            color=danger,
        )
        top = max(0, (self.rows - len(box)) // 2)
        return "\n".join([""] * top + center_block(box, self.cols))

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def feed(self, data: bytes | str) -> None:
        """Feed one raw transport read; decoded keys go to :meth:`dispatch`."""
        if self.destroyed:
            return
        self._decoder.feed(data)

    def dispatch(self, event: KeyEvent) -> None:
        with self._lock:
            if self.destroyed:
                return
            if event.type is KeyType.CTRL_C:
                self.destroy("quit")
                return
            if self._fault is not None:
                self.navigate(self.home)
                return
            try:
                self.screen.handle_input(self, event)
            except Exception as exc:
                logger.exception("session %s: input handler of %r failed", self.id, self.screen_key)
                self._set_fault(exc)
                self.render()

    # ------------------------------------------------------------------
    # Animations
    # ------------------------------------------------------------------

    def start_animation(
        self,
        callback: Callable[[], None],
        interval_ms: float,
        *,
        once: bool = False,
    ) -> Animation:
        """Run *callback* every *interval_ms* until cancelled, navigation or close.

        With *once* the callback runs a single time after *interval_ms*.
        """
        scheduler = resolve_scheduler(self._scheduler)
        if scheduler is None:
            raise RuntimeError("start_animation needs a running event loop or an explicit scheduler")
        animation = Animation(self, callback, interval_ms, scheduler, once=once)
        with self._lock:
            self._animations = [a for a in self._animations if a.active]
            if self.destroyed:
                animation.cancel()
                return animation
            self._animations.append(animation)
        animation.start()
        return animation

    def stop_animations(self) -> None:
        animations, self._animations = self._animations, []
        for animation in animations:
            animation.cancel()

    def _run_animation(self, animation: Animation, callback: Callable[[], None]) -> None:
        with self._lock:
            if not animation.active:
                return
            try:
                callback()
            except Exception:
                logger.exception("session %s: animation on %r failed, cancelling it", self.id, self.screen_key)
                animation.cancel()

    # ------------------------------------------------------------------
    # Terminal state
    # ------------------------------------------------------------------

    def resize(self, cols: int, rows: int) -> None:
        with self._lock:
            if self.destroyed:
                return
            self.cols = max(1, int(cols))
            self.rows = max(1, int(rows))
            logger.debug("session %s: resized to %dx%d", self.id, self.cols, self.rows)
            self.render()

    def set_theme(self, name: str) -> bool:
        """Switch this session's theme. Other sessions are unaffected."""
        with self._lock:
            try:
                theme = get_theme(name)
            except KeyError:
                logger.warning("session %s: unknown theme %r", self.id, name)
                return False
            self.theme = theme
            self.render()
            return True
