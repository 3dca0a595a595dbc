"""Shared pytest fixtures."""

import io
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

import pytest
from rich.console import Console

from keymenu.core.options import MenuOption
from keymenu.terminal.render import MenuRenderer


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture(autouse=True)
def mock_keymenu_dir(temp_dir, monkeypatch):
    """Point keymenu at a throwaway config directory."""
    from keymenu.utils.debug import reload_config

    keymenu_dir = temp_dir / ".config" / "keymenu"
    keymenu_dir.mkdir(parents=True)
    monkeypatch.setenv("KEYMENU_DIR", str(keymenu_dir))
    for key in list(os.environ):
        if key.startswith("KEYMENU_") and key != "KEYMENU_DIR":
            monkeypatch.delenv(key)
    reload_config()
    yield keymenu_dir
    reload_config()


@pytest.fixture
def pipe():
    """A (read_fd, write_fd) pair closed after the test."""
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


class FakeTerminal:
    """Records raw-mode enter/restore calls instead of touching a tty."""

    def __init__(self, fail_on_enter=None):
        self.calls = []
        self.active = False
        self.fail_on_enter = fail_on_enter

    def enter(self):
        self.calls.append("enter")
        if self.fail_on_enter is not None:
            raise self.fail_on_enter
        self.active = True

    def restore(self):
        if self.active:
            self.calls.append("restore")
        self.active = False

    @contextmanager
    def suspended(self):
        was_active = self.active
        self.restore()
        yield
        if was_active:
            self.enter()

    def __enter__(self):
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.restore()


class RecordingRenderer(MenuRenderer):
    """Renderer that also records each frame's selected index."""

    def __init__(self, console):
        super().__init__(console)
        self.frames = []
        self.clears = 0

    def render(self, options, selected_index, title=None):
        self.frames.append(selected_index)
        super().render(options, selected_index, title)

    def clear(self):
        self.clears += 1
        super().clear()


@pytest.fixture
def fake_terminal():
    return FakeTerminal()


@pytest.fixture
def failing_terminal():
    """A terminal whose raw-mode entry fails like a non-tty would."""
    from keymenu.utils.exceptions import TerminalError

    return FakeTerminal(fail_on_enter=TerminalError("fd 0 is not a terminal"))


class TtyOutput(io.StringIO):
    """String buffer that reports itself as a terminal."""

    def isatty(self):
        return True


@pytest.fixture
def tty_output():
    return TtyOutput()


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output, monkeypatch):
    """A terminal-like rich console writing to a string buffer."""
    monkeypatch.setenv("TERM", "xterm-256color")
    return Console(
        file=output,
        force_terminal=True,
        color_system=None,
        width=60,
        highlight=False,
    )


@pytest.fixture
def renderer(console):
    return RecordingRenderer(console)


@pytest.fixture
def calls():
    """Record of which option actions were invoked."""
    return []


@pytest.fixture
def abc_options(calls):
    """Options A, B, C whose actions record their label."""
    return [
        MenuOption("A", lambda: calls.append("A")),
        MenuOption("B", lambda: calls.append("B")).with_hint("second option"),
        MenuOption("C", lambda: calls.append("C")),
    ]
