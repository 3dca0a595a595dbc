"""Raw terminal mode with guaranteed restoration."""

import os
import sys
import termios
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from keymenu.utils.constants import Ansi
from keymenu.utils.debug import debug_terminal
from keymenu.utils.exceptions import TerminalError

# termios attribute list indices
_IFLAG = 0
_LFLAG = 3
_CC = 6


def stdin_fd() -> int:
    """File descriptor of standard input.

    Raises:
        TerminalError: If standard input has no file descriptor.
    """
    try:
        return sys.stdin.fileno()
    except (AttributeError, OSError, ValueError) as e:
        raise TerminalError(f"standard input has no file descriptor: {e}") from e


def _is_tty(stream) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _raw_attributes(attrs: list) -> list:
    """Return a copy of ``attrs`` with raw-mode flags applied.

    Canonical mode, echo and extended input processing are turned off and
    reads return as soon as one byte is available. ISIG stays on so Ctrl-C
    still interrupts, and output processing is untouched so newlines still
    return the carriage.
    """
    new = list(attrs)
    new[_CC] = list(attrs[_CC])
    new[_LFLAG] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN)
    new[_IFLAG] &= ~(
        termios.IXON | termios.IXOFF | termios.ICRNL | termios.INLCR | termios.IGNCR
    )
    new[_CC][termios.VMIN] = 1
    new[_CC][termios.VTIME] = 0
    return new


class TerminalMode:
    """Scoped raw mode for an interactive menu.

    Usage:
        with TerminalMode() as term:
            ...  # keystrokes arrive one at a time, unechoed

    The saved attributes are reapplied and the cursor shown again on
    every exit path, including exceptions raised inside the block.
    """

    def __init__(self, fd: Optional[int] = None, output: Optional[TextIO] = None):
        self.fd = stdin_fd() if fd is None else fd
        self.output = output or sys.stdout
        self._saved: Optional[list] = None

    @property
    def active(self) -> bool:
        """Whether raw mode is currently applied."""
        return self._saved is not None

    def enter(self) -> None:
        """Switch the terminal to raw mode and hide the cursor.

        Raises:
            TerminalError: If the input fd or the output stream is not a
                terminal, or the mode change fails.
        """
        if self.active:
            return
        if not os.isatty(self.fd):
            raise TerminalError(f"fd {self.fd} is not a terminal")
        if not _is_tty(self.output):
            raise TerminalError("output is not a terminal")

        try:
            saved = termios.tcgetattr(self.fd)
        except termios.error as e:
            raise TerminalError(f"cannot read terminal attributes: {e}") from e

        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, _raw_attributes(saved))
        except termios.error as e:
            # Best effort: the change may have been partially applied
            try:
                termios.tcsetattr(self.fd, termios.TCSANOW, saved)
            except termios.error:
                pass
            raise TerminalError(f"cannot enter raw mode: {e}") from e

        self._saved = saved
        self._write(Ansi.HIDE_CURSOR)
        debug_terminal("entered raw mode", fd=self.fd)

    def restore(self) -> None:
        """Reapply the saved attributes and show the cursor.

        Does nothing when raw mode is not active.

        Raises:
            TerminalError: If the saved attributes cannot be reapplied.
        """
        if not self.active:
            return
        saved, self._saved = self._saved, None
        self._write(Ansi.SHOW_CURSOR)
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, saved)
        except termios.error as e:
            raise TerminalError(f"cannot restore terminal mode: {e}") from e
        debug_terminal("restored terminal mode", fd=self.fd)

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Temporarily leave raw mode, e.g. while a menu action runs.

        Raw mode is re-entered only when the block completes normally; on
        an exception the terminal stays restored.
        """
        was_active = self.active
        self.restore()
        yield
        if was_active:
            self.enter()

    def _write(self, sequence: str) -> None:
        try:
            self.output.write(sequence)
            self.output.flush()
        except (OSError, ValueError):
            pass  # Output closed; attributes are still restored

    def __enter__(self) -> "TerminalMode":
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
