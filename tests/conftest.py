import pytest

from .fake_clock import FakeClock
from .virtual_stream import VirtualStream


@pytest.fixture
def clock():
    """A fake timer source; timers fire only on ``clock.advance``."""
    return FakeClock()


@pytest.fixture
def stream():
    return VirtualStream()
