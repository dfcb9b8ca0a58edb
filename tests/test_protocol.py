"""Tests for termui.transports.protocol."""

from __future__ import annotations

import pytest

from termui.transports.protocol import MAX_DIMENSION, InputMessage, ResizeMessage, parse_client_message


# ---------------------------------------------------------------------------
# parse_client_message  --  InputMessage
# ---------------------------------------------------------------------------


class TestParseInputMessage:
    def test_input(self):
        msg = parse_client_message({"type": "input", "data": "\x1b[A"})
        assert isinstance(msg, InputMessage)
        assert msg.type == "input"
        assert msg.data == "\x1b[A"

    def test_empty_input_is_allowed(self):
        msg = parse_client_message({"type": "input", "data": ""})
        assert isinstance(msg, InputMessage)
        assert msg.data == ""

    @pytest.mark.parametrize("payload", [None, 5, ["a"], {"a": 1}])
    def test_non_string_data(self, payload):
        assert parse_client_message({"type": "input", "data": payload}) is None

    def test_missing_data(self):
        assert parse_client_message({"type": "input"}) is None


# ---------------------------------------------------------------------------
# parse_client_message  --  ResizeMessage
# ---------------------------------------------------------------------------


class TestParseResizeMessage:
    def test_resize(self):
        msg = parse_client_message({"type": "resize", "cols": 120, "rows": 40})
        assert isinstance(msg, ResizeMessage)
        assert (msg.cols, msg.rows) == (120, 40)

    def test_float_dimensions_are_truncated(self):
        msg = parse_client_message({"type": "resize", "cols": 100.7, "rows": 30.2})
        assert (msg.cols, msg.rows) == (100, 30)

    @pytest.mark.parametrize(
        ("cols", "rows"),
        [
            (0, 24),
            (80, -1),
            (MAX_DIMENSION + 1, 24),
            ("80", 24),
            (True, 24),
            (None, 24),
        ],
    )
    def test_bad_dimensions(self, cols, rows):
        assert parse_client_message({"type": "resize", "cols": cols, "rows": rows}) is None

    def test_max_dimension_accepted(self):
        msg = parse_client_message({"type": "resize", "cols": MAX_DIMENSION, "rows": 1})
        assert isinstance(msg, ResizeMessage)


# ---------------------------------------------------------------------------
# parse_client_message  --  malformed
# ---------------------------------------------------------------------------


class TestParseMalformed:
    @pytest.mark.parametrize("data", [None, "input", 3, ["input"]])
    def test_not_an_object(self, data):
        assert parse_client_message(data) is None

    def test_unknown_type(self):
        assert parse_client_message({"type": "paste", "data": "x"}) is None

    def test_missing_type(self):
        assert parse_client_message({"data": "x"}) is None
