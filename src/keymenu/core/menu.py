"""Public menu API."""

import sys
from typing import Iterable, Optional, TextIO, Union

from rich.console import Console

from keymenu.core.options import Action, MenuOption
from keymenu.core.session import MenuSession
from keymenu.core.state import LifecycleState
from keymenu.terminal.decoder import KeyReader
from keymenu.terminal.mode import TerminalMode
from keymenu.terminal.render import MenuRenderer, MenuTheme
from keymenu.utils.config import Config
from keymenu.utils.exceptions import ConfigError, KeymenuError, TerminalError
from keymenu.utils.text import has_control_chars

MenuEntry = Union[MenuOption, tuple[str, Action], tuple[str, Optional[str], Action]]


class Menu:
    """An arrow-key menu of labeled actions.

    Example:
        menu = Menu(
            [
                MenuOption("Build", build).with_hint("Compile the project"),
                ("Test", run_tests),
                ("Deploy", "Push to production", deploy),
            ],
            title="Project",
        )
        menu.show()

    Up/Down move the selection (wrapping around), Enter runs the selected
    action and returns to the menu, Escape closes it.

    Raises:
        ConfigError: If there are no options, an entry or the title is
            invalid, or the config holds an invalid style or timeout.
    """

    def __init__(
        self,
        options: Iterable[MenuEntry],
        title: Optional[str] = None,
        config: Optional[Config] = None,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.options = tuple(MenuOption.from_entry(entry) for entry in options)
        if not self.options:
            raise ConfigError("a menu needs at least one option")
        if title is not None and (not isinstance(title, str) or has_control_chars(title)):
            raise ConfigError(f"menu title must be a single-line string: {title!r}")
        self.title = title
        self.config = config or Config()
        self.theme = MenuTheme.from_config(self.config)
        self.escape_timeout = self.config.escape_timeout
        self._stdin = stdin
        self._stdout = stdout
        self._session: Optional[MenuSession] = None

    @property
    def selected_index(self) -> int:
        """Selected option of the running session (0 when not shown)."""
        if self._session is None:
            return 0
        return self._session.machine.selected_index

    @property
    def lifecycle_state(self) -> Optional[LifecycleState]:
        """Lifecycle state of the running session, None when not shown."""
        if self._session is None:
            return None
        return self._session.machine.state

    def show(self) -> None:
        """Show the menu and block until the user presses Escape.

        Raises:
            TerminalError: If standard input/output is not an interactive
                terminal or the terminal mode cannot be changed.
            KeymenuError: If the menu is already being shown.

        Exceptions raised by actions propagate unchanged, after the
        terminal has been restored.
        """
        if self._session is not None:
            raise KeymenuError("menu is already being shown")
        self._session = self._create_session()
        try:
            self._session.run()
        finally:
            self._session = None

    def _create_session(self) -> MenuSession:
        stdin = self._stdin or sys.stdin
        stdout = self._stdout or sys.stdout
        try:
            fd = stdin.fileno()
        except (AttributeError, OSError, ValueError) as e:
            raise TerminalError(f"standard input has no file descriptor: {e}") from e

        return MenuSession(
            self.options,
            terminal=TerminalMode(fd, stdout),
            events=KeyReader(fd, self.escape_timeout),
            renderer=MenuRenderer(Console(file=stdout, highlight=False), self.theme),
            title=self.title,
            clear_on_exit=self.config.clear_on_exit,
            suspend_during_action=self.config.suspend_during_action,
        )
