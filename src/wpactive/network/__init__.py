"""Access to multisite network data."""

from wpactive.config import Settings
from wpactive.errors import ConfigError

from .base import NetworkBackend
from .database import DatabaseNetwork, decode_php_value
from .models import FILTER_FIELDS, SITE_FIELDS, Site, normalize_target, plugin_dirname
from .plugins import discover_plugins
from .snapshot import SnapshotNetwork, load_snapshot, snapshot_from_dict


def make_backend(settings: Settings) -> NetworkBackend:
    """Build the backend described by ``settings``."""
    if settings.snapshot is not None:
        return load_snapshot(settings.snapshot)
    if not settings.db_url:
        raise ConfigError(
            "No network configured. Pass --db-url (or set WPACTIVE_DB_URL) or --snapshot."
        )
    if settings.resolved_plugins_dir is None:
        raise ConfigError(
            "Cannot tell which plugins are installed. Pass --wp-path or --plugins-dir."
        )
    return DatabaseNetwork(
        settings.db_url,
        table_prefix=settings.table_prefix,
        network_id=settings.network_id,
        plugins_dir=settings.resolved_plugins_dir,
    )


__all__ = [
    "DatabaseNetwork",
    "FILTER_FIELDS",
    "NetworkBackend",
    "SITE_FIELDS",
    "Site",
    "SnapshotNetwork",
    "decode_php_value",
    "discover_plugins",
    "load_snapshot",
    "make_backend",
    "normalize_target",
    "plugin_dirname",
    "snapshot_from_dict",
]
