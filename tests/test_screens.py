"""Behaviour tests for the built-in screens, driven through a real Session."""

from __future__ import annotations

import random

import pytest

from termui.keys import KeyEvent, KeyType, char_event
from termui.screens import SCREENS, build_registry
from termui.screens.cards import CARDS, card_width, move
from termui.screens.chart import ChartState
from termui.screens.loader import stage_for
from termui.screens.menu import MENU_ITEMS, cards_per_row
from termui.screens.table import DATA, scroll_window, visible_rows
from termui.screens.textinput import FIELD_WIDTH, field_offset
from termui.screens.tree import TREE, flatten
from termui.session import Session

from .fake_clock import FakeClock
from .virtual_stream import VirtualStream

UP = KeyEvent(KeyType.UP)
DOWN = KeyEvent(KeyType.DOWN)
LEFT = KeyEvent(KeyType.LEFT)
RIGHT = KeyEvent(KeyType.RIGHT)
ENTER = KeyEvent(KeyType.ENTER)
ESC = KeyEvent(KeyType.ESCAPE)
END = KeyEvent(KeyType.END)
BACKSPACE = KeyEvent(KeyType.BACKSPACE)

REGISTRY = build_registry()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def open_screen(key: str, clock: FakeClock, *, cols: int = 80, rows: int = 24, **params) -> tuple[Session, VirtualStream]:
    stream = VirtualStream()
    session = Session(stream, REGISTRY, start="menu", cols=cols, rows=rows, scheduler=clock, home="menu")
    session.start()
    if key != "menu":
        session.navigate(key, **params)
    return session, stream


def type_text(session: Session, text: str) -> None:
    for ch in text:
        session.dispatch(char_event(ch))


# ---------------------------------------------------------------------------
# Every screen
# ---------------------------------------------------------------------------


class TestAllScreens:
    @pytest.mark.parametrize("key", list(SCREENS))
    def test_renders_within_the_default_terminal(self, key: str, clock: FakeClock) -> None:
        session, stream = open_screen(key, clock)
        clock.advance(0.5)
        assert not session.faulted
        frame = session.screen.render(session)
        assert len(frame.split("\n")) <= 24

    @pytest.mark.parametrize("key", list(SCREENS))
    @pytest.mark.parametrize(("cols", "rows"), [(40, 12), (200, 60), (1, 1)])
    def test_odd_sizes_do_not_fault(self, key: str, cols: int, rows: int, clock: FakeClock) -> None:
        session, _ = open_screen(key, clock, cols=cols, rows=rows)
        clock.advance(0.2)
        assert not session.faulted

    @pytest.mark.parametrize("key", [k for k in SCREENS if k not in ("menu", "loader")])
    def test_escape_returns_to_menu(self, key: str, clock: FakeClock) -> None:
        session, _ = open_screen(key, clock)
        session.dispatch(ESC)
        assert session.screen_key == "menu"

    @pytest.mark.parametrize("key", list(SCREENS))
    def test_render_does_not_mutate_state(self, key: str, clock: FakeClock) -> None:
        session, _ = open_screen(key, clock)
        before = repr(session.screen_state)
        session.render()
        session.render()
        assert repr(session.screen_state) == before


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class TestLoader:
    def test_hands_over_to_menu(self, clock: FakeClock) -> None:
        stream = VirtualStream()
        session = Session(stream, REGISTRY, start="loader", scheduler=clock)
        session.start()
        clock.advance(1.0)
        assert session.screen_key == "loader"
        clock.advance(1.5)
        assert session.screen_key == "menu"
        assert session.animations == []

    def test_enter_skips(self, clock: FakeClock) -> None:
        session = Session(VirtualStream(), REGISTRY, start="loader", scheduler=clock)
        session.start()
        session.dispatch(ENTER)
        assert session.screen_key == "menu"
        clock.advance(5)
        assert session.screen_key == "menu"

    def test_stages(self) -> None:
        assert stage_for(0) == "Initializing termui"
        assert stage_for(100) == "Ready!"


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------


class TestMenu:
    def test_cards_per_row(self) -> None:
        assert cards_per_row(80) == 3
        assert cards_per_row(200) == 4
        assert cards_per_row(10) == 1

    def test_enter_opens_selected_card(self, clock: FakeClock) -> None:
        session, _ = open_screen("menu", clock)
        session.dispatch(RIGHT)
        session.dispatch(ENTER)
        assert session.screen_key == MENU_ITEMS[1].key

    def test_down_moves_a_whole_row(self, clock: FakeClock) -> None:
        session, _ = open_screen("menu", clock)
        session.dispatch(DOWN)
        assert session.screen_state.selected == cards_per_row(80)

    def test_q_quits(self, clock: FakeClock) -> None:
        session, _ = open_screen("menu", clock)
        session.dispatch(char_event("q"))
        assert session.destroyed

    def test_every_card_leads_to_a_screen(self) -> None:
        assert all(item.key in REGISTRY for item in MENU_ITEMS)


# ---------------------------------------------------------------------------
# Interactive screens
# ---------------------------------------------------------------------------


class TestButtons:
    def test_press_flashes_then_releases(self, clock: FakeClock) -> None:
        session, _ = open_screen("buttons", clock)
        session.dispatch(DOWN)
        session.dispatch(ENTER)
        assert session.screen_state.pressed == 1
        assert session.screen_state.history == ["Secondary"]
        clock.advance(0.2)
        assert session.screen_state.pressed is None


class TestSelect:
    def test_filter_then_select(self, clock: FakeClock) -> None:
        session, stream = open_screen("select", clock)
        session.dispatch(char_event("f"))
        session.dispatch(ENTER)
        assert session.screen_state.selected == "node"
        assert "Selected:" in stream.last_text()


class TestMultiSelect:
    def test_limit(self, clock: FakeClock) -> None:
        session, _ = open_screen("multiselect", clock)
        session.dispatch(char_event("l"))
        for _ in range(5):
            session.dispatch(char_event(" "))
            session.dispatch(DOWN)
        assert session.screen_state.checked == [0, 1, 2]

    def test_select_all_and_none(self, clock: FakeClock) -> None:
        session, _ = open_screen("multiselect", clock)
        session.dispatch(char_event("a"))
        assert len(session.screen_state.checked) > 3
        session.dispatch(char_event("n"))
        assert session.screen_state.checked == []


class TestTextInput:
    def test_typing_and_editing(self, clock: FakeClock) -> None:
        session, stream = open_screen("textinput", clock)
        type_text(session, "Adq")
        session.dispatch(BACKSPACE)
        type_text(session, "a")
        assert session.screen_state.value == "Ada"
        assert "Ada" in stream.last_text()

    def test_q_types_when_field_has_text(self, clock: FakeClock) -> None:
        session, _ = open_screen("textinput", clock)
        type_text(session, "aq")
        assert session.screen_key == "textinput"
        assert session.screen_state.value == "aq"

    def test_q_leaves_when_empty(self, clock: FakeClock) -> None:
        session, _ = open_screen("textinput", clock)
        session.dispatch(char_event("q"))
        assert session.screen_key == "menu"

    def test_submit_advances_to_next_prompt(self, clock: FakeClock) -> None:
        session, _ = open_screen("textinput", clock)
        type_text(session, "Ada")
        session.dispatch(ENTER)
        session.dispatch(ENTER)
        state = session.screen_state
        assert state.submitted
        assert state.history == [("Your name", "Ada")]
        clock.advance(1.0)
        assert state.prompt == 1
        assert state.value == ""

    def test_typing_after_submit_keeps_the_text(self, clock: FakeClock) -> None:
        session, _ = open_screen("textinput", clock)
        type_text(session, "Ada")
        session.dispatch(ENTER)
        type_text(session, "m")
        clock.advance(1.0)
        state = session.screen_state
        assert state.prompt == 0
        assert state.value == "Adam"
        assert not state.submitted

    def test_long_value_scrolls_with_the_caret(self, clock: FakeClock) -> None:
        session, stream = open_screen("textinput", clock)
        text = "start" + "-" * (FIELD_WIDTH + 10) + "XYZ"
        type_text(session, text)
        frame = stream.last_text()
        assert "XYZ" in frame
        assert "start" not in frame
        session.dispatch(KeyEvent(KeyType.HOME))
        assert "start" in stream.last_text()

    def test_field_offset(self) -> None:
        assert field_offset(5, 0, 10) == 0
        assert field_offset(12, 0, 10) == 3
        assert field_offset(2, 3, 10) == 2
        assert field_offset(8, 3, 10) == 3

    def test_invalid_email(self, clock: FakeClock) -> None:
        session, _ = open_screen("textinput", clock)
        type_text(session, "Ada")
        session.dispatch(ENTER)
        clock.advance(1.0)
        type_text(session, "nope")
        session.dispatch(ENTER)
        assert session.screen_state.error
        assert not session.screen_state.submitted


class TestCards:
    def test_grid_moves_stop_at_edges(self) -> None:
        assert move(0, KeyType.RIGHT) == 1
        assert move(1, KeyType.RIGHT) == 1
        assert move(0, KeyType.DOWN) == 2
        assert move(3, KeyType.DOWN) == 3
        assert move(3, KeyType.LEFT) == 2
        assert move(2, KeyType.UP) == 0

    def test_card_width(self) -> None:
        assert card_width(80) == 37
        assert card_width(200) == 38
        assert card_width(20) == 12

    def test_arrows_and_vim_keys_select(self, clock: FakeClock) -> None:
        session, stream = open_screen("cards", clock)
        session.dispatch(RIGHT)
        session.dispatch(char_event("j"))
        assert session.screen_state.selected == 3
        assert f"Selected: {CARDS[3].title}" in stream.last_text()

    def test_info_toggle(self, clock: FakeClock) -> None:
        session, stream = open_screen("cards", clock)
        assert "press i" in stream.last_text()
        session.dispatch(char_event("i"))
        assert session.screen_state.info_open
        text = stream.last_text()
        assert "draw_box(lines" in text
        assert len(session.screen.render(session).split("\n")) <= 24

    def test_every_card_is_drawn(self, clock: FakeClock) -> None:
        _, stream = open_screen("cards", clock)
        text = stream.last_text()
        for card in CARDS:
            assert card.title in text


class TestTable:
    def test_visible_rows(self) -> None:
        assert visible_rows(24) == 15
        assert visible_rows(5) == 4

    def test_scroll_window(self) -> None:
        assert scroll_window(0, 0, 10) == 0
        assert scroll_window(12, 0, 10) == 3
        assert scroll_window(2, 5, 10) == 2

    def test_end_scrolls_to_last_row(self, clock: FakeClock) -> None:
        session, stream = open_screen("table", clock)
        session.dispatch(END)
        state = session.screen_state
        assert state.selected == len(DATA) - 1
        assert state.scroll_top == len(DATA) - visible_rows(24)
        assert f"Row {len(DATA)} of {len(DATA)}" in stream.last_text()


class TestTree:
    def test_initial_rows(self) -> None:
        rows = flatten(TREE, {"my-project"})
        assert [r.path for r in rows][:3] == ["my-project", "my-project/src", "my-project/public"]
        assert rows[1].prefix == "├── "
        assert rows[-1].prefix == "└── "

    def test_nested_prefixes(self) -> None:
        rows = flatten(TREE, {"my-project", "my-project/src"})
        components = next(r for r in rows if r.path == "my-project/src/components")
        assert components.prefix == "│   ├── "

    def test_expand_and_collapse(self, clock: FakeClock) -> None:
        session, _ = open_screen("tree", clock)
        state = session.screen_state
        session.dispatch(DOWN)
        session.dispatch(DOWN)
        assert "my-project/src/components" not in state.expanded
        session.dispatch(RIGHT)
        assert "my-project/src/components" in state.expanded
        session.dispatch(LEFT)
        assert "my-project/src/components" not in state.expanded
        session.dispatch(LEFT)
        assert state.cursor == 1


class TestTabs:
    def test_cycle_and_jump(self, clock: FakeClock) -> None:
        session, _ = open_screen("tabs", clock)
        session.dispatch(KeyEvent(KeyType.TAB))
        assert session.screen_state.active == 1
        session.dispatch(KeyEvent(KeyType.SHIFT_TAB))
        session.dispatch(KeyEvent(KeyType.SHIFT_TAB))
        assert session.screen_state.active == 3
        session.dispatch(char_event("2"))
        assert session.screen_state.active == 1
        session.dispatch(char_event("9"))
        assert session.screen_state.active == 1


# ---------------------------------------------------------------------------
# Animated screens
# ---------------------------------------------------------------------------


class TestProgress:
    def test_bars_fill_and_reset(self, clock: FakeClock) -> None:
        session, _ = open_screen("progress", clock)
        clock.advance(1.0)
        assert all(value > 0 for value in session.screen_state.values)
        session.dispatch(char_event("r"))
        assert session.screen_state.values == [0.0] * 4


class TestSpinners:
    def test_ticks_advance(self, clock: FakeClock) -> None:
        session, _ = open_screen("spinners", clock)
        clock.advance(0.85)
        assert session.screen_state.tick == 10


class TestChart:
    def test_same_seed_same_data(self, clock: FakeClock) -> None:
        s1, _ = open_screen("chart", clock, seed=7)
        s2, _ = open_screen("chart", clock, seed=7)
        clock.advance(2.0)
        assert s1.screen_state.values == s2.screen_state.values

    def test_values_ease_toward_targets(self) -> None:
        state = ChartState(rng=random.Random(1))
        state.retarget()
        state.advance()
        assert state.values == pytest.approx([t * 0.15 for t in state.targets])

    def test_pause(self, clock: FakeClock) -> None:
        session, _ = open_screen("chart", clock, seed=1)
        session.dispatch(char_event(" "))
        values = list(session.screen_state.values)
        clock.advance(1.0)
        assert session.screen_state.values == values


class TestThemes:
    def test_enter_applies_theme_to_this_session_only(self, clock: FakeClock) -> None:
        session, _ = open_screen("themes", clock)
        other, _ = open_screen("menu", clock)
        session.dispatch(DOWN)
        session.dispatch(ENTER)
        assert session.theme.name == "forest"
        assert other.theme.name == "ocean"

    def test_cursor_starts_on_current_theme(self, clock: FakeClock) -> None:
        stream = VirtualStream()
        session = Session(stream, REGISTRY, start="themes", theme="cyber", scheduler=clock)
        assert session.screen_state.cursor == 4
