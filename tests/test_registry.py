"""Tests for termui.screen registry and contract."""

from __future__ import annotations

import pytest

from termui.keys import KeyEvent, KeyType, char_event
from termui.screen import BaseScreen, RegistryError, Screen, ScreenRegistry, UnknownScreenError
from termui.screens import SCREENS, build_registry


class Plain:
    """A screen that does not inherit from BaseScreen."""

    def init_state(self, session):
        return {}

    def handle_input(self, session, event):
        pass

    def render(self, session):
        return "plain"


class NoRender:
    def init_state(self, session):
        return None

    def handle_input(self, session, event):
        pass


class FakeSession:
    def __init__(self) -> None:
        self.navigated: list[str] = []

    def navigate(self, key: str) -> bool:
        self.navigated.append(key)
        return True


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegister:
    def test_register_and_lookup(self) -> None:
        registry = ScreenRegistry()
        screen = registry.register("plain", Plain())
        assert registry["plain"] is screen
        assert "plain" in registry
        assert list(registry) == ["plain"]
        assert len(registry) == 1

    def test_plain_object_satisfies_protocol(self) -> None:
        assert isinstance(Plain(), Screen)

    def test_duplicate_key(self) -> None:
        registry = ScreenRegistry()
        registry.register("plain", Plain())
        with pytest.raises(RegistryError, match="already registered"):
            registry.register("plain", Plain())

    def test_missing_hook(self) -> None:
        with pytest.raises(RegistryError, match="render"):
            ScreenRegistry().register("bad", NoRender())

    def test_empty_key(self) -> None:
        with pytest.raises(RegistryError):
            ScreenRegistry().register("", Plain())

    def test_non_callable_optional_hook(self) -> None:
        screen = Plain()
        screen.on_mount = "not callable"
        with pytest.raises(RegistryError, match="on_mount"):
            ScreenRegistry().register("bad", screen)

    def test_decorator_registers_an_instance(self) -> None:
        registry = ScreenRegistry()

        @registry.screen("deco")
        class Deco(Plain):
            pass

        assert isinstance(registry["deco"], Deco)

    def test_frozen_registry_rejects_new_screens(self) -> None:
        registry = ScreenRegistry().freeze()
        assert registry.frozen
        with pytest.raises(RegistryError, match="frozen"):
            registry.register("late", Plain())


class TestLookup:
    def test_unknown_key(self) -> None:
        registry = ScreenRegistry()
        with pytest.raises(UnknownScreenError):
            registry["missing"]

    def test_get_returns_none_for_unknown(self) -> None:
        assert ScreenRegistry().get("missing") is None

    def test_as_mapping_is_read_only(self) -> None:
        registry = ScreenRegistry()
        registry.register("plain", Plain())
        view = registry.as_mapping()
        with pytest.raises(TypeError):
            view["other"] = Plain()


# ---------------------------------------------------------------------------
# BaseScreen
# ---------------------------------------------------------------------------


class TestBaseScreen:
    @pytest.mark.parametrize("event", [KeyEvent(KeyType.ESCAPE), char_event("q"), char_event("Q")])
    def test_back_keys(self, event: KeyEvent) -> None:
        session = FakeSession()
        assert BaseScreen().handle_back(session, event)
        assert session.navigated == ["menu"]

    def test_other_keys_are_not_back(self) -> None:
        session = FakeSession()
        assert not BaseScreen().handle_back(session, char_event("x"))
        assert session.navigated == []

    def test_no_back_target(self) -> None:
        screen = BaseScreen()
        screen.back_to = None
        session = FakeSession()
        assert not screen.handle_back(session, char_event("q"))

    def test_render_must_be_overridden(self) -> None:
        with pytest.raises(NotImplementedError):
            BaseScreen().render(FakeSession())


# ---------------------------------------------------------------------------
# Built-in screens
# ---------------------------------------------------------------------------


class TestBuiltinRegistry:
    def test_every_screen_is_registered(self) -> None:
        registry = build_registry()
        assert list(registry) == list(SCREENS)
        assert registry.frozen

    def test_menu_and_loader_are_present(self) -> None:
        registry = build_registry()
        assert "menu" in registry
        assert "loader" in registry
