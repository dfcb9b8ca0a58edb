"""The screen contract and the read-only screen registry.

A screen is any object with ``init_state``, ``handle_input`` and ``render``;
``on_mount`` / ``on_unmount`` are optional and looked up with ``getattr`` at
call sites. Screens hold no per-session data themselves: everything a
session needs lives in ``session.screen_state``, so one screen instance
serves every connected client.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Iterator,
    Mapping,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from termui.keys import KeyEvent, KeyType

if TYPE_CHECKING:
    from termui.session import Session

__all__ = [
    "BaseScreen",
    "RegistryError",
    "Screen",
    "ScreenRegistry",
    "UnknownScreenError",
]

REQUIRED_HOOKS = ("init_state", "handle_input", "render")


class RegistryError(Exception):
    """Invalid registration: duplicate key, missing hook, or frozen registry."""


class UnknownScreenError(KeyError):
    """No screen is registered under the requested key."""


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


@runtime_checkable
class Screen(Protocol):
    """A pluggable unit of terminal content."""

    def init_state(self, session: Session) -> Any:
        """Build fresh per-activation state. Called once per activation."""
        ...

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        """Consume one key event; may mutate state, navigate or render."""
        ...

    def render(self, session: Session) -> str:
        """Produce the display string from current state. Must not mutate it."""
        ...

    # on_mount(session) and on_unmount(session) are optional.


class BaseScreen:
    """Convenience base for screens with the common back/quit behaviour.

    ``q`` or Escape returns to :attr:`back_to`; subclasses call
    :meth:`handle_back` first in their ``handle_input``.
    """

    title: str = ""
    description: str = ""
    back_to: str | None = "menu"

    def init_state(self, session: Session) -> Any:
        return None

    def on_mount(self, session: Session) -> None:
        pass

    def on_unmount(self, session: Session) -> None:
        pass

    def handle_back(self, session: Session, event: KeyEvent) -> bool:
        """Navigate back on ``q``/``Q``/Escape. Returns ``True`` if handled."""
        if self.back_to is None:
            return False
        if event.type is KeyType.ESCAPE or event.is_char("q", "Q"):
            session.navigate(self.back_to)
            return True
        return False

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        self.handle_back(session, event)

    def render(self, session: Session) -> str:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_S = TypeVar("_S")


class ScreenRegistry(Mapping[str, Screen]):
    """Key -> screen table, read-only once :meth:`freeze` has been called.

    Registration checks that every required hook is callable, so a
    misspelled hook fails at startup instead of inside a live session.
    """

    def __init__(self) -> None:
        self._screens: dict[str, Screen] = {}
        self._frozen = False

    # -- registration -------------------------------------------------------

    def register(self, key: str, screen: Any) -> Screen:
        if self._frozen:
            raise RegistryError(f"registry is frozen; cannot register {key!r}")
        if not key:
            raise RegistryError("screen key must be a non-empty string")
        if key in self._screens:
            raise RegistryError(f"screen {key!r} is already registered")

        missing = [hook for hook in REQUIRED_HOOKS if not callable(getattr(screen, hook, None))]
        if missing:
            raise RegistryError(f"screen {key!r} is missing hooks: {', '.join(missing)}")
        for hook in ("on_mount", "on_unmount"):
            value = getattr(screen, hook, None)
            if value is not None and not callable(value):
                raise RegistryError(f"screen {key!r} has a non-callable {hook}")

        self._screens[key] = screen
        return screen

    def screen(self, key: str) -> Callable[[type[_S]], type[_S]]:
        """Class decorator: instantiate the class and register it under *key*."""

        def decorator(cls: type[_S]) -> type[_S]:
            self.register(key, cls())
            return cls

        return decorator

    def freeze(self) -> ScreenRegistry:
        self._frozen = True
        self._screens = dict(self._screens)
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- lookup -------------------------------------------------------------

    def __getitem__(self, key: str) -> Screen:
        try:
            return self._screens[key]
        except KeyError:
            raise UnknownScreenError(key) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._screens)

    def __len__(self) -> int:
        return len(self._screens)

    def as_mapping(self) -> Mapping[str, Screen]:
        return MappingProxyType(self._screens)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<ScreenRegistry {state} {list(self._screens)}>"
