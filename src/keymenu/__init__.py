"""keymenu - Arrow-key menus for the terminal."""

from importlib.metadata import version

__version__ = version("keymenu")

from keymenu.core import LifecycleState, Menu, MenuOption
from keymenu.terminal import KeyEvent
from keymenu.utils.exceptions import ConfigError, KeymenuError, TerminalError

__all__ = [
    "ConfigError",
    "KeyEvent",
    "KeymenuError",
    "LifecycleState",
    "Menu",
    "MenuOption",
    "TerminalError",
]
