"""wpactive CLI - find the sites of a WordPress multisite network running a plugin."""

from wpactive.cli_commands import active_on_sites_command, config_command  # noqa: F401
from wpactive.cli_commands.shared import app, console, err_console, plugin_app
from wpactive.config import create_env_template, create_global_config, load_settings
from wpactive.network import make_backend

__all__ = [
    "app",
    "console",
    "create_env_template",
    "create_global_config",
    "err_console",
    "load_settings",
    "main",
    "make_backend",
    "plugin_app",
    "version",
]


@app.command()
def version() -> None:
    """Show the installed wpactive version."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        current_version = pkg_version("wpactive")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"wpactive {current_version}")


def main():
    """Entry point for the CLI."""
    app()
