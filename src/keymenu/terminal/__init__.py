"""Terminal I/O: raw mode, key decoding and drawing."""

from keymenu.terminal.decoder import KeyDecoder, KeyEvent, KeyReader
from keymenu.terminal.mode import TerminalMode
from keymenu.terminal.render import MenuRenderer, MenuTheme

__all__ = [
    "KeyDecoder",
    "KeyEvent",
    "KeyReader",
    "MenuRenderer",
    "MenuTheme",
    "TerminalMode",
]
