"""Runs the action bound to a menu option."""

from keymenu.core.options import MenuOption
from keymenu.utils.debug import debug_dispatch


def dispatch(option: MenuOption) -> None:
    """Call the option's action synchronously.

    The return value is discarded. Exceptions are not caught: they
    propagate to the caller of ``Menu.show()``.
    """
    debug_dispatch("invoking action", label=option.label)
    try:
        option.action()
    except BaseException as e:
        debug_dispatch("action failed", label=option.label, error=repr(e))
        raise
