"""Presentation of the sites where a plugin is active."""

import csv
import io
import json
from collections.abc import Iterable, Sequence
from typing import Any

import yaml
from rich import box
from rich.console import Console
from rich.measure import Measurement
from rich.table import Table

from wpactive.network import Site

from .models import DisplayConfig, OutputFormat

# Upper bound used when measuring a table at its natural width.
TABLE_MAX_WIDTH = 65536


def filter_sites(sites: Iterable[Site], filters: dict[str, str]) -> list[Site]:
    """Keep sites whose attributes equal every filter value."""
    if not filters:
        return list(sites)
    return [
        site
        for site in sites
        if all(str(getattr(site, key)) == value for key, value in filters.items())
    ]


def select_rows(sites: Iterable[Site], columns: Sequence[str]) -> list[dict[str, Any]]:
    """Project sites onto the requested columns, preserving column order."""
    rows = []
    for site in sites:
        full = site.as_row()
        rows.append({name: full[name] for name in columns})
    return rows


def build_table(rows: list[dict[str, Any]], columns: Sequence[str]) -> Table:
    table = Table(box=box.ASCII, show_edge=True)
    for name in columns:
        table.add_column(name, no_wrap=True)
    for row in rows:
        table.add_row(*(str(row[name]) for name in columns))
    return table


def print_table(console: Console, table: Table) -> None:
    """Print ``table`` without shrinking cells to fit the console width."""
    natural = Measurement.get(
        console, console.options.update_width(TABLE_MAX_WIDTH), table
    ).maximum
    if natural > console.width:
        table.width = natural
    console.print(table, crop=False)


def render_rows(sites: Sequence[Site], config: DisplayConfig) -> str:
    """Render every non-table format to text."""
    if config.format is OutputFormat.COUNT:
        return str(len(sites))
    if config.format is OutputFormat.IDS:
        return "\n".join(str(site.blog_id) for site in sites)

    columns = config.columns
    rows = select_rows(sites, columns)

    if config.field:
        values = [row[config.field] for row in rows]
        if config.format is OutputFormat.JSON:
            return json.dumps(values)
        if config.format is OutputFormat.YAML:
            return yaml.safe_dump(values, default_flow_style=False, sort_keys=False).rstrip("\n")
        return "\n".join(str(value) for value in values)

    if config.format is OutputFormat.JSON:
        return json.dumps(rows)
    if config.format is OutputFormat.YAML:
        return yaml.safe_dump(rows, default_flow_style=False, sort_keys=False).rstrip("\n")
    if config.format is OutputFormat.CSV:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(columns)
        for row in rows:
            writer.writerow([row[name] for name in columns])
        return buffer.getvalue().rstrip("\n")
    raise ValueError(f"render_rows cannot render {config.format.value}")


def display_results(
    target: str,
    sites: Sequence[Site],
    config: DisplayConfig,
    *,
    console: Console,
) -> None:
    """Print the matched sites, or a notice when there are none."""
    if not sites:
        console.print(
            f"{target} is not active on any sites.",
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        return

    shown = filter_sites(sites, config.filters)

    if config.format is OutputFormat.TABLE and not config.field:
        print_table(console, build_table(select_rows(shown, config.columns), config.columns))
        return

    text = render_rows(shown, config)
    if text:
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
