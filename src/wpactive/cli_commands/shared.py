"""Shared CLI app objects and output helpers."""

import typer
from rich.console import Console
from rich.markup import escape

app = typer.Typer(
    name="wpactive",
    help="Find the sites of a WordPress multisite network running a plugin",
    no_args_is_help=True,
)
plugin_app = typer.Typer(help="Inspect plugins across the network", no_args_is_help=True)
app.add_typer(plugin_app, name="plugin")

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)


def print_warning(message: str) -> None:
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)


def fail(message: str) -> None:
    """Report an error and stop with exit code 1."""
    print_error(message)
    raise typer.Exit(1)
