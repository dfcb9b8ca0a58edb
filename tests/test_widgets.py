"""Tests for termui.widgets."""

from __future__ import annotations

import pytest

from termui.ansi import cyan, green, strip_ansi, visible_length
from termui.theme import get_theme
from termui.widgets import (
    BAR_STYLES,
    BUTTON_VARIANTS,
    SPINNERS,
    badge,
    bar_color,
    button,
    dot_badge,
    key_hints,
    outlined_badge,
    progress_bar,
    screen_header,
    spinner_frame,
)


# ---------------------------------------------------------------------------
# Progress bars
# ---------------------------------------------------------------------------


class TestProgressBar:
    @pytest.mark.parametrize("style", list(BAR_STYLES))
    def test_width_is_constant(self, style: str) -> None:
        lengths = {visible_length(progress_bar(pct, 20, style)) for pct in (0, 33.3, 50, 99.9, 100)}
        assert lengths == {20 + 2 + 5}

    def test_fill_count(self) -> None:
        text = strip_ansi(progress_bar(50, 10, show_percent=False))
        assert text == "[" + "█" * 5 + "░" * 5 + "]"

    def test_rounds_half_up(self) -> None:
        assert strip_ansi(progress_bar(25, 10, show_percent=False)).count("█") == 3

    def test_clamps(self) -> None:
        assert strip_ansi(progress_bar(150, 4)).endswith("100%")
        assert strip_ansi(progress_bar(-5, 4)).endswith("  0%")

    def test_unknown_style_falls_back(self) -> None:
        assert progress_bar(40, 8, "zigzag") == progress_bar(40, 8, "block")

    def test_bar_color_thresholds(self) -> None:
        base = cyan
        assert bar_color(100, base) is green
        assert bar_color(80, base) is cyan
        assert bar_color(10, base) is base


# ---------------------------------------------------------------------------
# Spinners
# ---------------------------------------------------------------------------


class TestSpinners:
    def test_frames_wrap(self) -> None:
        frames = SPINNERS["line"]
        assert spinner_frame("line", len(frames)) == frames[0]
        assert spinner_frame("line", 1) == frames[1]

    def test_unknown_spinner_uses_braille(self) -> None:
        assert spinner_frame("nope", 0) == SPINNERS["braille"][0]


# ---------------------------------------------------------------------------
# Badges and buttons
# ---------------------------------------------------------------------------


class TestBadges:
    @pytest.mark.parametrize(("kind", "icon"), [("success", "✓"), ("error", "✗"), ("warning", "⚠"), ("info", "ℹ")])
    def test_solid_badges(self, kind: str, icon: str) -> None:
        assert strip_ansi(badge("Done", kind)) == f" {icon} Done "

    def test_default_badge(self) -> None:
        assert strip_ansi(badge("plain")) == " plain "

    def test_outlined_and_dot(self) -> None:
        assert strip_ansi(outlined_badge("beta", cyan)) == "[ beta ]"
        assert strip_ansi(dot_badge("API", green)) == "● API"


class TestButtons:
    @pytest.mark.parametrize("variant", list(BUTTON_VARIANTS))
    def test_selected_has_markers(self, variant: str) -> None:
        text = strip_ansi(button("Go", variant, selected=True, theme=get_theme("ocean")))
        assert text.startswith("▸")
        assert text.endswith("◂")

    def test_idle_is_padded_like_selected(self) -> None:
        idle = button("Go", "primary")
        selected = button("Go", "primary", selected=True)
        assert visible_length(idle) == visible_length(selected)

    def test_pressed_uses_theme_background(self) -> None:
        out = button("Go", "danger", pressed=True, theme=get_theme("ocean"))
        assert "\x1b[48;2;255;107;107m" in out


class TestHeaders:
    def test_header_is_five_lines(self) -> None:
        lines = screen_header("Title", "Sub", 40, get_theme("ocean"))
        assert len(lines) == 5
        assert "Title" in strip_ansi(lines[1])

    def test_key_hints(self) -> None:
        assert strip_ansi(key_hints([("q", "Back"), ("↑↓", "Move")], 20)).strip() == "q Back   ↑↓ Move"
