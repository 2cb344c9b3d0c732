"""In-memory multisite network, optionally loaded from a YAML snapshot.

Snapshot layout::

    multisite: true
    installed_plugins: [akismet/akismet.php, hello.php]
    network_active_plugins: [jetpack/jetpack.php]
    sites:
      - blog_id: 1
        domain: example.com
        path: /
        active_plugins: [akismet/akismet.php]
"""

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from wpactive.errors import SnapshotError

from .base import NetworkBackend
from .models import Site

_SITE_ATTRS = {f.name for f in fields(Site)}


class SnapshotNetwork(NetworkBackend):
    """Network whose data is held in memory."""

    def __init__(
        self,
        sites: list[Site] | None = None,
        active_plugins: dict[int, Any] | None = None,
        installed_plugins: list[str] | None = None,
        network_active_plugins: list[str] | None = None,
        multisite: bool = True,
        main_site_id: int = 1,
    ):
        super().__init__(main_site_id=main_site_id)
        self.sites = list(sites or [])
        self.active_plugins = dict(active_plugins or {})
        self.installed = list(installed_plugins or [])
        self.network_active = list(network_active_plugins or [])
        self.multisite = multisite

    def is_multisite(self) -> bool:
        return self.multisite

    def installed_plugin_files(self) -> list[str]:
        return list(self.installed)

    def network_active_plugin_files(self) -> list[str]:
        return list(self.network_active)

    def get_sites(self, limit: int) -> list[Site]:
        return sorted(self.sites, key=lambda s: s.blog_id)[:limit]

    def read_active_plugins(self, blog_id: int) -> Any:
        return self.active_plugins.get(blog_id)


def _string_list(data: dict[str, Any], key: str, source: Path) -> list[str]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise SnapshotError(f"{source}: '{key}' must be a list.")
    return [str(item) for item in value]


def snapshot_from_dict(data: dict[str, Any], source: Path = Path("<snapshot>")) -> SnapshotNetwork:
    """Build a SnapshotNetwork from parsed snapshot data."""
    if not isinstance(data, dict):
        raise SnapshotError(f"{source}: snapshot must be a mapping.")

    raw_sites = data.get("sites") or []
    if not isinstance(raw_sites, list):
        raise SnapshotError(f"{source}: 'sites' must be a list.")

    sites: list[Site] = []
    active: dict[int, Any] = {}
    for index, entry in enumerate(raw_sites):
        if not isinstance(entry, dict) or "blog_id" not in entry or "domain" not in entry:
            raise SnapshotError(f"{source}: site #{index} needs at least blog_id and domain.")
        attrs = {k: v for k, v in entry.items() if k in _SITE_ATTRS}
        try:
            attrs["blog_id"] = int(attrs["blog_id"])
            site = Site(**attrs)
        except (TypeError, ValueError) as exc:
            raise SnapshotError(f"{source}: invalid site #{index}: {exc}") from exc
        sites.append(site)
        # Kept as-is so malformed values reach the scanner unchanged.
        active[site.blog_id] = entry.get("active_plugins")

    multisite = data.get("multisite", True)
    if not isinstance(multisite, bool):
        raise SnapshotError(f"{source}: 'multisite' must be true or false, got {multisite!r}.")
    try:
        main_site_id = int(data.get("main_site_id", 1))
    except (TypeError, ValueError) as exc:
        raise SnapshotError(f"{source}: invalid main_site_id: {exc}") from exc

    return SnapshotNetwork(
        sites=sites,
        active_plugins=active,
        installed_plugins=_string_list(data, "installed_plugins", source),
        network_active_plugins=_string_list(data, "network_active_plugins", source),
        multisite=multisite,
        main_site_id=main_site_id,
    )


def load_snapshot(path: Path) -> SnapshotNetwork:
    """Load a snapshot YAML (or JSON) file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SnapshotError(f"Snapshot {path} is not valid UTF-8: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SnapshotError(f"Invalid snapshot {path}: {exc}") from exc
    return snapshot_from_dict(data or {}, path)
