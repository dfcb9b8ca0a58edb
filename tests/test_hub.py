"""Tests for termui.hub.SessionHub."""

from __future__ import annotations

import asyncio
import signal

import pytest

from termui.config import Config
from termui.hub import SessionHub
from termui.keys import KeyEvent, KeyType
from termui.screens import build_registry

from .fake_clock import FakeClock
from .virtual_stream import VirtualStream


@pytest.fixture
def hub(clock: FakeClock) -> SessionHub:
    return SessionHub(build_registry(), Config(start_screen="menu"), scheduler=clock)


class TestOpen:
    def test_sessions_get_increasing_ids(self, hub: SessionHub) -> None:
        s1 = hub.open(VirtualStream())
        s2 = hub.open(VirtualStream())
        assert (s1.id, s2.id) == (1, 2)
        assert hub.sessions() == [s1, s2]
        assert hub.get(2) is s2
        assert len(hub) == 2

    def test_config_defaults(self, hub: SessionHub) -> None:
        session = hub.open(VirtualStream())
        assert session.screen_key == "menu"
        assert (session.cols, session.rows) == (80, 24)
        assert session.theme.name == "ocean"
        assert session.home == "menu"

    def test_explicit_size_and_start(self, hub: SessionHub) -> None:
        session = hub.open(VirtualStream(), cols=100, rows=30, start="badges")
        assert (session.cols, session.rows) == (100, 30)
        assert session.screen_key == "badges"

    def test_closed_sessions_are_forgotten(self, hub: SessionHub) -> None:
        session = hub.open(VirtualStream())
        session.start()
        session.dispatch(KeyEvent(KeyType.CTRL_C))
        assert len(hub) == 0
        assert hub.get(session.id) is None

    def test_open_after_shutdown(self, hub: SessionHub) -> None:
        hub.shutdown()
        with pytest.raises(RuntimeError):
            hub.open(VirtualStream())


class TestShutdown:
    def test_shutdown_restores_every_terminal(self, hub: SessionHub) -> None:
        streams = [VirtualStream() for _ in range(3)]
        sessions = [hub.open(s) for s in streams]
        for session in sessions:
            session.start()

        hub.shutdown()

        assert hub.is_shut_down
        assert len(hub) == 0
        for session, stream in zip(sessions, streams):
            assert session.destroyed
            assert session.close_reason == "shutdown"
            assert "\x1b[?1049l" in stream.writes[-1]

    def test_shutdown_is_idempotent(self, hub: SessionHub) -> None:
        stream = VirtualStream()
        hub.open(stream).start()
        hub.shutdown()
        count = len(stream.writes)
        hub.shutdown()
        assert len(stream.writes) == count

    def test_one_broken_stream_does_not_stop_shutdown(self, hub: SessionHub) -> None:
        bad, good = VirtualStream(), VirtualStream()
        s1, s2 = hub.open(bad), hub.open(good)
        s1.start()
        s2.start()
        bad.fail = True
        hub.shutdown()
        assert s1.destroyed and s2.destroyed


async def test_signal_handler_shuts_down(clock: FakeClock) -> None:
    hub = SessionHub(build_registry(), Config(start_screen="menu"), scheduler=clock)
    session = hub.open(VirtualStream())
    session.start()
    loop = asyncio.get_running_loop()
    called = []
    hub.install_signal_handlers(loop, on_shutdown=lambda: called.append(True))
    try:
        signal.raise_signal(signal.SIGTERM)
        await asyncio.sleep(0.05)
    finally:
        loop.remove_signal_handler(signal.SIGINT)
        loop.remove_signal_handler(signal.SIGTERM)
    assert session.destroyed
    assert called == [True]
