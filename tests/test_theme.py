"""Tests for termui.theme."""

from __future__ import annotations

import dataclasses

import pytest

from termui.ansi import strip_ansi
from termui.theme import DEFAULT_THEME, ROLES, THEMES, Theme, get_theme, theme_names


class TestThemes:
    def test_builtin_names(self) -> None:
        assert theme_names() == ["ocean", "forest", "sunset", "midnight", "cyber", "monochrome"]
        assert DEFAULT_THEME in THEMES

    @pytest.mark.parametrize("name", list(THEMES))
    def test_every_role_is_a_hex_colour(self, name: str) -> None:
        theme = THEMES[name]
        assert set(theme.swatch()) == set(ROLES)
        for value in theme.swatch().values():
            assert value.startswith("#") and len(value) == 7

    def test_themes_are_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            THEMES["ocean"].primary = "#000000"

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            THEMES["new"] = THEMES["ocean"]


class TestLookup:
    def test_get_theme(self) -> None:
        assert get_theme("cyber").label == "Cyber"

    def test_unknown_theme_lists_choices(self) -> None:
        with pytest.raises(KeyError, match="ocean"):
            get_theme("plaid")


class TestPaint:
    def test_paint_uses_role_colour(self) -> None:
        theme = get_theme("ocean")
        out = theme.paint("primary", "hi")
        assert out.startswith("\x1b[38;2;0;168;232m")
        assert strip_ansi(out) == "hi"

    def test_unknown_role_passes_through(self) -> None:
        assert get_theme("ocean").paint("nope", "hi") == "hi"

    def test_role_painter(self) -> None:
        theme = get_theme("forest")
        assert theme.role("danger")("x") == theme.paint("danger", "x")

    def test_custom_theme(self) -> None:
        theme = Theme("t", "T", *(["#112233"] * len(ROLES)))
        assert theme.paint("accent", "x").startswith("\x1b[38;2;17;34;51m")
