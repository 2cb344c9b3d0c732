"""Find the sites of a multisite network where a plugin is active."""

from .models import (
    DEFAULT_FIELDS,
    DisplayConfig,
    OutputFormat,
    PreflightResult,
    PreflightStatus,
    parse_fields,
)
from .preflight import run_preflight
from .presenter import display_results, filter_sites, render_rows, select_rows
from .scanner import active_plugin_dirs, find_sites_with_plugin, switched_to_site

__all__ = [
    "DEFAULT_FIELDS",
    "DisplayConfig",
    "OutputFormat",
    "PreflightResult",
    "PreflightStatus",
    "active_plugin_dirs",
    "display_results",
    "filter_sites",
    "find_sites_with_plugin",
    "parse_fields",
    "render_rows",
    "run_preflight",
    "select_rows",
    "switched_to_site",
]
