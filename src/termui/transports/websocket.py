"""Browser transport: one session per WebSocket connection.

The browser page runs a terminal emulator, forwards keystrokes and size
changes as JSON messages and writes every text frame it receives straight
into the emulator.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Callable

from fastapi import FastAPI, WebSocket
from fastapi.staticfiles import StaticFiles
from starlette.websockets import WebSocketDisconnect

from termui.ansi import CLEAR_SCREEN
from termui.config import Config
from termui.hub import SessionHub
from termui.screen import ScreenRegistry
from termui.session import Session
from termui.transports.base import StreamClosedError
from termui.transports.protocol import InputMessage, ResizeMessage, parse_client_message

logger = logging.getLogger(__name__)

_SEND_ERRORS = (WebSocketDisconnect, RuntimeError, OSError)


class WebSocketStream:
    """A synchronous ``write`` in front of an async WebSocket.

    Writes are sent in order by a single sender task, so a session can
    render from any callback without awaiting. Every frame is a full
    repaint, so a frame still waiting behind a slow client is replaced by
    the next one instead of piling up; other writes (alternate screen
    switches) always go out in order.
    """

    def __init__(self, websocket: WebSocket, on_error: Callable[[], None] | None = None) -> None:
        self._websocket = websocket
        self._pending: deque[str] = deque()
        self._wakeup = asyncio.Event()
        self._sender: asyncio.Task[None] | None = None
        self._closed = False
        self.on_error = on_error
        self.dropped_frames = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return len(self._pending)

    def start(self) -> None:
        if self._sender is None:
            self._sender = asyncio.get_running_loop().create_task(self._send_loop())

    def write(self, data: str) -> None:
        if self._closed:
            raise StreamClosedError("websocket is closed")
        if self._pending and _is_frame(data) and _is_frame(self._pending[-1]):
            self._pending[-1] = data
            self.dropped_frames += 1
        else:
            self._pending.append(data)
        self._wakeup.set()

    async def _send_loop(self) -> None:
        while True:
            while not self._pending:
                if self._closed:
                    return
                self._wakeup.clear()
                await self._wakeup.wait()
            data = self._pending.popleft()
            try:
                await self._websocket.send_text(data)
            except _SEND_ERRORS:
                logger.debug("websocket send failed; closing stream")
                self._closed = True
                self._pending.clear()
                if self.on_error is not None:
                    self.on_error()
                return

    def close(self) -> None:
        """Stop accepting writes; anything already pending is still sent."""
        if self._closed:
            return
        self._closed = True
        self._wakeup.set()

    async def aclose(self, code: int = 1000) -> None:
        self.close()
        if self._sender is not None:
            await self._sender
        try:
            await self._websocket.close(code=code)
        except _SEND_ERRORS:
            pass


def _is_frame(data: str) -> bool:
    return data.startswith(CLEAR_SCREEN)


def _query_dimension(websocket: WebSocket, name: str, default: int) -> int:
    raw = websocket.query_params.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


async def _pump_input(websocket: WebSocket, session: Session) -> None:
    while not session.destroyed:
        raw = await websocket.receive_text()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("session %s: ignoring non-JSON message", session.id)
            continue

        msg = parse_client_message(data)
        match msg:
            case InputMessage():
                session.feed(msg.data)
            case ResizeMessage():
                session.resize(msg.cols, msg.rows)
            case _:
                logger.debug("session %s: ignoring message %r", session.id, data)


async def terminal_handler(websocket: WebSocket, hub: SessionHub, config: Config) -> None:
    """Main WebSocket handler - one session per client connection."""
    cols = _query_dimension(websocket, "cols", config.cols)
    rows = _query_dimension(websocket, "rows", config.rows)
    await websocket.accept()

    stream = WebSocketStream(websocket)
    stream.start()
    session = hub.open(stream, cols=cols, rows=rows)

    closed = asyncio.Event()
    session.on_close(lambda _session: closed.set())
    stream.on_error = lambda: session.destroy("write-error")

    pump = asyncio.create_task(_pump_input(websocket, session))
    waiter = asyncio.create_task(closed.wait())
    try:
        session.start()
        done, _ = await asyncio.wait({pump, waiter}, return_when=asyncio.FIRST_COMPLETED)
        if pump in done and not pump.cancelled():
            exc = pump.exception()
            if isinstance(exc, WebSocketDisconnect):
                session.destroy("disconnect")
            elif exc is not None:
                logger.error("session %s: websocket error", session.id, exc_info=exc)
                session.destroy("transport-error")
    finally:
        for task in (pump, waiter):
            task.cancel()
        session.destroy("disconnect")
        await stream.aclose()


def create_app(
    config: Config | None = None,
    registry: ScreenRegistry | None = None,
    hub: SessionHub | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or Config()
    if registry is None:
        from termui.screens import build_registry

        registry = build_registry()
    config.validate(registry)
    hub = hub or SessionHub(registry, config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> Any:
        logger.info("Serving %d screens, start screen %r", len(registry), config.start_screen)
        yield
        hub.shutdown()
        logger.info("All sessions closed")

    app = FastAPI(title="termui", lifespan=lifespan)
    app.state.hub = hub

    # --- WebSocket endpoint ---

    @app.websocket("/ws")
    async def ws_endpoint(websocket: WebSocket) -> None:
        await terminal_handler(websocket, hub, config)

    # --- REST API endpoints ---

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/sessions")
    async def sessions() -> dict[str, Any]:
        live = hub.sessions()
        return {
            "count": len(live),
            "sessions": [
                {"id": s.id, "screen": s.screen_key, "cols": s.cols, "rows": s.rows, "theme": s.theme.name}
                for s in live
            ],
        }

    @app.get("/api/screens")
    async def screens() -> dict[str, list[str]]:
        return {"screens": list(registry)}

    # --- Static files (must be last) ---

    static_dir = Path(config.static_dir)
    if static_dir.exists():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app
