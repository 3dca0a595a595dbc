"""Menu engine: options, navigation state and the session loop."""

from keymenu.core.dispatcher import dispatch
from keymenu.core.menu import Menu
from keymenu.core.options import MenuOption
from keymenu.core.session import MenuSession
from keymenu.core.state import Effect, LifecycleState, NavigationStateMachine

__all__ = [
    "Effect",
    "LifecycleState",
    "Menu",
    "MenuOption",
    "MenuSession",
    "NavigationStateMachine",
    "dispatch",
]
