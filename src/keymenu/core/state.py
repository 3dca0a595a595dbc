"""Navigation state machine for a running menu."""

from enum import Enum

from keymenu.terminal.decoder import KeyEvent
from keymenu.utils.debug import debug_state
from keymenu.utils.exceptions import ConfigError


class LifecycleState(Enum):
    """Menu session lifecycle."""

    NAVIGATING = "navigating"
    EXITING = "exiting"


class Effect(Enum):
    """What the session loop must do after a transition."""

    NONE = "none"
    RENDER = "render"
    DISPATCH = "dispatch"
    EXIT = "exit"


class NavigationStateMachine:
    """Owns the selected index and lifecycle of one menu session.

    Movement wraps around in both directions. Confirming does not leave
    the menu: the caller runs the selected action and redraws. Only
    Cancel reaches the terminal EXITING state.
    """

    def __init__(self, option_count: int):
        if option_count < 1:
            raise ConfigError("a menu needs at least one option")
        self.option_count = option_count
        self.selected_index = 0
        self.state = LifecycleState.NAVIGATING

    @property
    def finished(self) -> bool:
        return self.state is LifecycleState.EXITING

    def handle(self, event: KeyEvent) -> Effect:
        """Apply a key event and return the resulting effect."""
        if self.finished:
            return Effect.NONE

        n = self.option_count
        if event is KeyEvent.MOVE_UP:
            self.selected_index = (self.selected_index - 1 + n) % n
            effect = Effect.RENDER
        elif event is KeyEvent.MOVE_DOWN:
            self.selected_index = (self.selected_index + 1) % n
            effect = Effect.RENDER
        elif event is KeyEvent.CONFIRM:
            effect = Effect.DISPATCH
        elif event is KeyEvent.CANCEL:
            self.state = LifecycleState.EXITING
            effect = Effect.EXIT
        else:
            return Effect.NONE

        debug_state(
            "transition",
            event=event.name,
            selected=self.selected_index,
            state=self.state.name,
        )
        return effect
