"""Built-in demo screens."""

from __future__ import annotations

from termui.screen import ScreenRegistry
from termui.screens.badges import BadgesScreen
from termui.screens.buttons import ButtonsScreen
from termui.screens.cards import CardsScreen
from termui.screens.chart import ChartScreen
from termui.screens.loader import LoaderScreen
from termui.screens.menu import MENU_ITEMS, MenuItem, MenuScreen
from termui.screens.multiselect import MultiSelectScreen
from termui.screens.progress import ProgressScreen
from termui.screens.select import SelectScreen
from termui.screens.spinners import SpinnersScreen
from termui.screens.table import TableScreen
from termui.screens.tabs import TabsScreen
from termui.screens.textinput import TextInputScreen
from termui.screens.themes import ThemesScreen
from termui.screens.tree import TreeScreen

SCREENS = {
    "loader": LoaderScreen,
    "menu": MenuScreen,
    "buttons": ButtonsScreen,
    "select": SelectScreen,
    "multiselect": MultiSelectScreen,
    "textinput": TextInputScreen,
    "table": TableScreen,
    "tree": TreeScreen,
    "tabs": TabsScreen,
    "cards": CardsScreen,
    "badges": BadgesScreen,
    "progress": ProgressScreen,
    "spinners": SpinnersScreen,
    "chart": ChartScreen,
    "themes": ThemesScreen,
}


def build_registry() -> ScreenRegistry:
    """A frozen registry holding every built-in screen."""
    registry = ScreenRegistry()
    for key, screen_cls in SCREENS.items():
        registry.register(key, screen_cls())
    return registry.freeze()


__all__ = [
    "MENU_ITEMS",
    "SCREENS",
    "MenuItem",
    "build_registry",
]
