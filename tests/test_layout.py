"""Tests for termui.layout boxes, centring and columns."""

from __future__ import annotations

import pytest

from termui.ansi import red, strip_ansi, visible_length, visible_width
from termui.layout import BORDERS, border, center_block, center_line, draw_box, draw_divider, join_columns


# ---------------------------------------------------------------------------
# draw_box
# ---------------------------------------------------------------------------


class TestDrawBox:
    @pytest.mark.parametrize(
        "lines",
        [
            [],
            ["one"],
            ["short", "a much longer line", ""],
            [red("styled"), "plain"],
        ],
    )
    def test_box_is_rectangular(self, lines: list[str]) -> None:
        box = draw_box(lines)
        assert len(box) == len(lines) + 2
        widths = {visible_length(row) for row in box}
        assert len(widths) == 1

    def test_fixed_width_truncates_long_content(self) -> None:
        box = draw_box(["x" * 50], width=20)
        assert all(visible_length(row) == 20 for row in box)

    def test_padding(self) -> None:
        box = draw_box(["ab"], padding=2, style="ascii", color=str)
        assert box == ["+------+", "|  ab  |", "+------+"]

    def test_rounded_corners_by_default(self) -> None:
        top, *_, bottom = (strip_ansi(row) for row in draw_box(["x"]))
        assert top.startswith("╭") and top.endswith("╮")
        assert bottom.startswith("╰") and bottom.endswith("╯")

    def test_title_sits_in_top_border(self) -> None:
        top = strip_ansi(draw_box(["content here"], title="Hi")[0])
        assert " Hi " in top
        assert visible_length(top) == visible_length(strip_ansi(draw_box(["content here"])[0]))

    def test_colour_painter_is_applied_to_borders(self) -> None:
        box = draw_box(["x"], color=red)
        assert box[0].startswith("\x1b[31m")

    def test_wide_glyphs_with_width_measure(self) -> None:
        box = draw_box(["日本語", "abc"], measure=visible_width)
        assert {visible_width(row) for row in box} == {10}


class TestBorders:
    def test_aliases(self) -> None:
        assert border("single") is BORDERS["sharp"]
        assert border("bold") is BORDERS["heavy"]

    def test_unknown_style_falls_back_to_rounded(self) -> None:
        assert border("zigzag") is BORDERS["rounded"]

    def test_divider_matches_box_width(self) -> None:
        box = draw_box(["hello"], style="sharp")
        divider = draw_divider(visible_length(box[0]) - 2, style="sharp", label="mid")
        assert visible_length(divider) == visible_length(box[0])
        assert strip_ansi(divider).startswith("├")


# ---------------------------------------------------------------------------
# Centring
# ---------------------------------------------------------------------------


class TestCentering:
    def test_center_block_single_char(self) -> None:
        assert center_block(["x"], 10) == ["    x"]

    def test_center_line_ignores_escapes(self) -> None:
        assert center_line(red("ab"), 6) == "  " + red("ab")

    def test_too_wide_is_left_alone(self) -> None:
        assert center_line("abcdef", 4) == "abcdef"

    def test_lines_are_centred_independently(self) -> None:
        assert center_block(["ab", "abcd"], 8) == ["   ab", "  abcd"]


class TestJoinColumns:
    def test_pads_each_block_to_its_width(self) -> None:
        rows = join_columns([["a", "bbb"], ["c"]], gap=1)
        assert rows == ["a   c", "bbb  "]

    def test_empty(self) -> None:
        assert join_columns([]) == []
