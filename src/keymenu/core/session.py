"""The read, transition, render loop of a shown menu."""

from typing import Iterable, Optional, Sequence

from keymenu.core.dispatcher import dispatch
from keymenu.core.options import MenuOption
from keymenu.core.state import Effect, NavigationStateMachine
from keymenu.terminal.decoder import KeyEvent
from keymenu.terminal.mode import TerminalMode
from keymenu.terminal.render import MenuRenderer


class MenuSession:
    """One interactive run of a menu.

    The terminal is put in raw mode for the whole run and restored on
    every exit path. Nothing is drawn if raw mode cannot be entered.

    Args:
        options: Options in display order
        terminal: Raw-mode controller used as a context manager
        events: Key events, usually a KeyReader
        renderer: Draws frames
        title: Optional line drawn above the options
        clear_on_exit: Erase the menu when the user cancels
        suspend_during_action: Leave raw mode while an action runs
    """

    def __init__(
        self,
        options: Sequence[MenuOption],
        terminal: TerminalMode,
        events: Iterable[KeyEvent],
        renderer: MenuRenderer,
        title: Optional[str] = None,
        clear_on_exit: bool = True,
        suspend_during_action: bool = True,
    ):
        self.options = options
        self.terminal = terminal
        self.events = events
        self.renderer = renderer
        self.title = title
        self.clear_on_exit = clear_on_exit
        self.suspend_during_action = suspend_during_action
        self.machine = NavigationStateMachine(len(options))

    def run(self) -> None:
        """Block until the user cancels the menu."""
        with self.terminal:
            self._render()
            for event in self.events:
                effect = self.machine.handle(event)
                if effect is Effect.RENDER:
                    self._render()
                elif effect is Effect.DISPATCH:
                    self._dispatch()
                elif effect is Effect.EXIT:
                    break
            if self.clear_on_exit:
                self.renderer.clear()

    def _render(self) -> None:
        self.renderer.render(self.options, self.machine.selected_index, self.title)

    def _dispatch(self) -> None:
        option = self.options[self.machine.selected_index]
        # Action output starts where the menu was; the menu is redrawn below it
        self.renderer.clear()
        if self.suspend_during_action:
            with self.terminal.suspended():
                dispatch(option)
        else:
            dispatch(option)
        self._render()
