"""CLI command handlers."""

from datetime import datetime

import typer
from rich.console import Console
from rich.table import Table

from keymenu.utils.config import Config, get_keymenu_dir
from keymenu.utils.debug import log_error, reload_config
from keymenu.utils.exceptions import KeymenuError

console = Console(highlight=False)


def _fail(category: str, exc: KeymenuError) -> None:
    """Report a keymenu error and exit non-zero."""
    log_error(category, str(exc))
    console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(1)


def build_demo_options():
    """Options shown by the demo menu."""
    from keymenu.core.options import MenuOption

    def say_hello():
        console.print("[green]Hello from keymenu![/green]")

    def show_time():
        console.print(f"It is [cyan]{datetime.now():%H:%M:%S}[/cyan]")

    def show_config_dir():
        console.print(f"Config directory: [dim]{get_keymenu_dir()}[/dim]")

    return [
        MenuOption("Say hello", say_hello).with_hint("Prints a greeting"),
        MenuOption("Show time", show_time).with_hint("Prints the current time"),
        MenuOption("Show config directory", show_config_dir),
    ]


def cmd_demo(title):
    """Show the demo menu."""
    from keymenu.core.menu import Menu

    try:
        menu = Menu(build_demo_options(), title=title or "keymenu demo", config=Config())
        menu.show()
    except KeymenuError as e:
        _fail("demo", e)


def cmd_keys(args):
    """Print decoded key events until Escape."""
    from keymenu.terminal.decoder import KeyEvent, KeyReader
    from keymenu.terminal.mode import TerminalMode

    config = Config()
    console.print("[dim]Press keys to see how they decode • Esc quits[/dim]")
    try:
        reader = KeyReader(escape_timeout=config.escape_timeout)
        with TerminalMode():
            for event in reader:
                color = "dim" if event is KeyEvent.UNRECOGNIZED else "cyan"
                console.print(f"[{color}]{event.name}[/{color}]")
                if event is KeyEvent.CANCEL:
                    break
    except KeymenuError as e:
        _fail("keys", e)


def cmd_config(args):
    """Show the effective configuration."""
    keymenu_dir = get_keymenu_dir()
    config = Config(keymenu_dir)

    table = Table(title="keymenu config", show_header=True, header_style="bold")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in config.as_dict().items():
        if key == "env":
            continue
        table.add_row(key, repr(value))
    console.print(table)

    toggles = Table(title="Toggles", show_header=True, header_style="bold")
    toggles.add_column("Toggle")
    toggles.add_column("Description")
    toggles.add_column("State")
    for attr, desc, enabled in config.get_toggles():
        state = "[green]on[/green]" if enabled else "[dim]off[/dim]"
        toggles.add_row(attr, desc, state)
    console.print(toggles)
    console.print(f"[bold]Config:[/bold] [dim]{keymenu_dir / 'config.json'}[/dim]")


def cmd_debug_on(args):
    """Enable debug logging."""
    config = Config(get_keymenu_dir())
    config.set_toggle("debug", True)
    reload_config()
    console.print(f"Debug logging [green]on[/green] [dim]({config.log_path})[/dim]")


def cmd_debug_off(args):
    """Disable debug logging."""
    config = Config(get_keymenu_dir())
    config.set_toggle("debug", False)
    reload_config()
    console.print("Debug logging [yellow]off[/yellow]")
