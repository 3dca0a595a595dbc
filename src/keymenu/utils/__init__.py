"""Utility modules for keymenu."""

from keymenu.utils.exceptions import ConfigError, KeymenuError, TerminalError

__all__ = ["ConfigError", "KeymenuError", "TerminalError"]
