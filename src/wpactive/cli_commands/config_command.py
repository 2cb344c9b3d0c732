"""Configuration CLI command."""

from pathlib import Path

import typer
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from wpactive.errors import WpactiveError

from .deps import cli_module
from .shared import app, console, fail


def mask_db_url(db_url: str | None) -> str:
    """Render a database URL with its password hidden."""
    if not db_url:
        return "(not set)"
    try:
        return make_url(db_url).render_as_string(hide_password=True)
    except ArgumentError:
        return "(invalid URL)"


@app.command()
def config(
    action: str = typer.Argument("show", help="Action: show, init"),
    global_config: bool = typer.Option(
        False,
        "--global",
        help="Create the global config instead of a local .env",
    ),
) -> None:
    """Show or create wpactive configuration."""
    cli = cli_module()

    if action == "init":
        if global_config:
            config_path = cli.create_global_config()
            console.print(f"[green]Created global config:[/green] {config_path}")
            return

        env_path = cli.create_env_template(Path.cwd())
        console.print(f"[green]Created local config:[/green] {env_path}")
        console.print("[dim]Edit the file and uncomment the settings you need.[/dim]")
        return

    if action == "show":
        try:
            settings = cli.load_settings()
        except WpactiveError as exc:
            fail(str(exc))

        plugins_dir = settings.resolved_plugins_dir
        console.print("[bold]Resolved configuration:[/bold]")
        console.print(f"  db_url={mask_db_url(settings.db_url)}", markup=False)
        console.print(f"  table_prefix={settings.table_prefix}", markup=False)
        console.print(f"  network_id={settings.network_id}", markup=False)
        console.print(f"  wp_path={settings.wp_path or '(not set)'}", markup=False)
        console.print(f"  plugins_dir={plugins_dir or '(not set)'}", markup=False)
        console.print(f"  snapshot={settings.snapshot or '(not set)'}", markup=False)
        console.print(f"  site_limit={settings.site_limit}", markup=False)
        console.print(f"  debug={settings.debug}", markup=False)
        return

    fail(f"Unknown action: {action}. Use 'show' or 'init'.")
