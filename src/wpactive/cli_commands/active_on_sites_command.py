"""``wpactive plugin active-on-sites`` command."""

from pathlib import Path

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from sqlalchemy.exc import SQLAlchemyError

from wpactive.errors import WpactiveError
from wpactive.modules.active_on_sites import (
    DisplayConfig,
    PreflightResult,
    display_results,
    find_sites_with_plugin,
    run_preflight,
)
from wpactive.network import NetworkBackend, Site, normalize_target
from wpactive.utils.debug import configure_logging, debug_print, set_debug_enabled

from .deps import cli_module
from .shared import console, err_console, fail, plugin_app, print_error, print_warning

FILTERS_PANEL = "Site filters"
NETWORK_PANEL = "Network"


def report_preflight(result: PreflightResult) -> None:
    """Print the message attached to a terminal preflight outcome."""
    if result.is_error:
        print_error(result.message)
    else:
        print_warning(result.message)


def scan_network(network: NetworkBackend, target: str, limit: int) -> tuple[Site, ...]:
    """Scan with a transient progress bar when stderr is interactive."""
    if not err_console.is_terminal:
        return find_sites_with_plugin(network, target, limit=limit)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Scanning sites for {target}", total=None)

        def advance(site: Site, matched: bool) -> None:
            progress.advance(task)

        return find_sites_with_plugin(network, target, limit=limit, on_site=advance)


@plugin_app.command("active-on-sites")
def active_on_sites(
    plugin_slug: str = typer.Argument(..., help="The plugin to locate"),
    field: str | None = typer.Option(
        None, "--field", help="Prints the value of a single field for each site."
    ),
    fields: str | None = typer.Option(
        None, "--fields", help="Limit the output to specific object fields (blog_id, url, ...)."
    ),
    format: str = typer.Option(
        "table", "--format", help="Render output in a particular format: table, csv, ids, json, count, yaml"
    ),
    blog_id: str | None = typer.Option(None, "--blog-id", rich_help_panel=FILTERS_PANEL),
    site_id: str | None = typer.Option(None, "--site-id", rich_help_panel=FILTERS_PANEL),
    domain: str | None = typer.Option(None, "--domain", rich_help_panel=FILTERS_PANEL),
    path: str | None = typer.Option(None, "--path", rich_help_panel=FILTERS_PANEL),
    registered: str | None = typer.Option(None, "--registered", rich_help_panel=FILTERS_PANEL),
    last_updated: str | None = typer.Option(
        None, "--last-updated", rich_help_panel=FILTERS_PANEL
    ),
    public: str | None = typer.Option(None, "--public", rich_help_panel=FILTERS_PANEL),
    archived: str | None = typer.Option(None, "--archived", rich_help_panel=FILTERS_PANEL),
    mature: str | None = typer.Option(None, "--mature", rich_help_panel=FILTERS_PANEL),
    spam: str | None = typer.Option(None, "--spam", rich_help_panel=FILTERS_PANEL),
    deleted: str | None = typer.Option(None, "--deleted", rich_help_panel=FILTERS_PANEL),
    lang_id: str | None = typer.Option(None, "--lang-id", rich_help_panel=FILTERS_PANEL),
    db_url: str | None = typer.Option(
        None, "--db-url", help="SQLAlchemy URL of the network database", rich_help_panel=NETWORK_PANEL
    ),
    table_prefix: str | None = typer.Option(
        None, "--table-prefix", help="Database table prefix (default wp_)", rich_help_panel=NETWORK_PANEL
    ),
    network_id: int | None = typer.Option(
        None, "--network-id", help="Network whose settings are read", rich_help_panel=NETWORK_PANEL
    ),
    wp_path: Path | None = typer.Option(
        None, "--wp-path", help="WordPress root directory", rich_help_panel=NETWORK_PANEL
    ),
    plugins_dir: Path | None = typer.Option(
        None, "--plugins-dir", help="Installed plugins directory", rich_help_panel=NETWORK_PANEL
    ),
    snapshot: Path | None = typer.Option(
        None, "--snapshot", help="Read the network from a YAML snapshot", rich_help_panel=NETWORK_PANEL
    ),
    limit: int | None = typer.Option(
        None, "--limit", help="Maximum number of sites to read (default 10000)", rich_help_panel=NETWORK_PANEL
    ),
    debug: bool = typer.Option(False, "--debug", help="Trace preflight and per-site decisions"),
) -> None:
    """List all sites in a Multisite network that have activated a given plugin."""
    cli = cli_module()

    filters = {
        "blog_id": blog_id,
        "site_id": site_id,
        "domain": domain,
        "path": path,
        "registered": registered,
        "last_updated": last_updated,
        "public": public,
        "archived": archived,
        "mature": mature,
        "spam": spam,
        "deleted": deleted,
        "lang_id": lang_id,
    }
    try:
        display_config = DisplayConfig.from_options(
            format=format, fields=fields, field=field, filters=filters
        )
        settings = cli.load_settings(
            db_url=db_url,
            table_prefix=table_prefix,
            network_id=network_id,
            wp_path=wp_path,
            plugins_dir=plugins_dir,
            snapshot=snapshot,
            site_limit=limit,
            debug=True if debug else None,
        )
    except WpactiveError as exc:
        fail(str(exc))

    set_debug_enabled(settings.debug)
    configure_logging(settings.debug)

    target = normalize_target(plugin_slug)
    if not target:
        fail("Plugin slug must not be empty.")
    debug_print("config", f"looking for {target}", Filters=display_config.filters or None)

    try:
        with cli.make_backend(settings) as network:
            preflight = run_preflight(network, target)
            if preflight.is_terminal:
                report_preflight(preflight)
                raise typer.Exit(preflight.exit_code)
            found = scan_network(network, target, settings.site_limit)
    except (WpactiveError, SQLAlchemyError) as exc:
        fail(str(exc))

    display_results(target, found, display_config, console=console)
