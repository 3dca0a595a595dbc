"""Custom exceptions for keymenu.

This module defines a small hierarchy of exceptions:
- KeymenuError: Base exception for all keymenu errors
- ConfigError: Invalid menu construction or configuration
- TerminalError: Terminal mode or terminal input failures

Exceptions raised by menu actions are never wrapped in these types.
"""


class KeymenuError(Exception):
    """Base exception for all keymenu errors.

    All keymenu-specific exceptions inherit from this class, allowing
    callers to catch all keymenu errors with a single except clause.
    """

    pass


class ConfigError(KeymenuError):
    """Menu construction or configuration errors.

    Raised when the menu cannot be built, such as:
    - A menu with no options
    - An option with an empty label or a non-callable action
    - An invalid style string or config value
    """

    pass


class TerminalError(KeymenuError):
    """Terminal related errors.

    Raised when the terminal cannot be driven, such as:
    - Standard input is not a terminal
    - The OS rejects a terminal mode change
    - The input stream is closed while a menu is shown
    """

    pass
