"""CLI entry point for keymenu.

Uses Typer for command routing with lazy loading of the menu engine.
"""

from typing import Optional

import typer

__all__ = ["app", "main"]

app = typer.Typer(
    name="keymenu",
    help="Arrow-key menus for the terminal",
    no_args_is_help=False,
)


def _version_callback(value: bool) -> None:
    if value:
        from keymenu import __version__

        typer.echo(f"keymenu {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Show the demo menu if no command given."""
    if ctx.invoked_subcommand is None:
        from keymenu.cli.commands import cmd_demo

        cmd_demo(None)


@app.command()
def demo(
    title: str = typer.Option("keymenu demo", "--title", help="Menu title."),
) -> None:
    """Show a demo menu."""
    from keymenu.cli.commands import cmd_demo

    cmd_demo(title)


@app.command()
def keys() -> None:
    """Print decoded key events until Escape is pressed."""
    from keymenu.cli.commands import cmd_keys

    cmd_keys(None)


@app.command()
def config() -> None:
    """Show the effective configuration."""
    from keymenu.cli.commands import cmd_config

    cmd_config(None)


# Debug subcommand group
debug_app = typer.Typer(help="Debug logging")
app.add_typer(debug_app, name="debug")


@debug_app.command("on")
def debug_on() -> None:
    """Enable debug logging."""
    from keymenu.cli.commands import cmd_debug_on

    cmd_debug_on(None)


@debug_app.command("off")
def debug_off() -> None:
    """Disable debug logging."""
    from keymenu.cli.commands import cmd_debug_off

    cmd_debug_off(None)


def cli_main() -> None:
    """Entry point for pyproject.toml scripts."""
    app()


if __name__ == "__main__":
    cli_main()
