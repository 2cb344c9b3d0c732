"""Resolved runtime settings for a single invocation."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wpactive.errors import ConfigError

from .getters import get_bool, get_config

DEFAULT_TABLE_PREFIX = "wp_"
DEFAULT_NETWORK_ID = 1
DEFAULT_SITE_LIMIT = 10000

_PREFIX_RE = re.compile(r"^[A-Za-z0-9_]+$")

ENV_KEYS = {
    "db_url": "WPACTIVE_DB_URL",
    "table_prefix": "WPACTIVE_TABLE_PREFIX",
    "network_id": "WPACTIVE_NETWORK_ID",
    "wp_path": "WPACTIVE_WP_PATH",
    "plugins_dir": "WPACTIVE_PLUGINS_DIR",
    "snapshot": "WPACTIVE_SNAPSHOT",
    "site_limit": "WPACTIVE_SITE_LIMIT",
    "debug": "WPACTIVE_DEBUG",
}


@dataclass
class Settings:
    """Where the network lives and how much of it to read."""

    db_url: str | None = None
    table_prefix: str = DEFAULT_TABLE_PREFIX
    network_id: int = DEFAULT_NETWORK_ID
    wp_path: Path | None = None
    plugins_dir: Path | None = None
    snapshot: Path | None = None
    site_limit: int = DEFAULT_SITE_LIMIT
    debug: bool = False

    @property
    def resolved_plugins_dir(self) -> Path | None:
        """Plugins directory, falling back to <wp_path>/wp-content/plugins."""
        if self.plugins_dir is not None:
            return self.plugins_dir
        if self.wp_path is not None:
            return self.wp_path / "wp-content" / "plugins"
        return None


def _coerce_int(name: str, value: Any, minimum: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}.") from exc
    if number < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {number}.")
    return number


def _coerce_path(value: Any) -> Path | None:
    if value in (None, ""):
        return None
    return Path(str(value)).expanduser()


def load_settings(work_dir: Path | None = None, **overrides: Any) -> Settings:
    """Resolve settings from config sources; non-None overrides win."""
    raw: dict[str, Any] = {}
    for attr, key in ENV_KEYS.items():
        if attr == "debug":
            continue
        raw[attr] = get_config(key, work_dir)
    raw["debug"] = get_bool(ENV_KEYS["debug"], work_dir)
    for attr, value in overrides.items():
        if attr not in ENV_KEYS:
            raise TypeError(f"unknown setting: {attr}")
        if value is not None:
            raw[attr] = value

    prefix = str(raw["table_prefix"] or DEFAULT_TABLE_PREFIX)
    if not _PREFIX_RE.match(prefix):
        raise ConfigError(f"Invalid table prefix {prefix!r}: use letters, digits and underscores.")

    network_id = raw["network_id"]
    site_limit = raw["site_limit"]

    return Settings(
        db_url=str(raw["db_url"]) if raw["db_url"] else None,
        table_prefix=prefix,
        network_id=DEFAULT_NETWORK_ID
        if network_id is None
        else _coerce_int("Network id", network_id, 1),
        wp_path=_coerce_path(raw["wp_path"]),
        plugins_dir=_coerce_path(raw["plugins_dir"]),
        snapshot=_coerce_path(raw["snapshot"]),
        site_limit=DEFAULT_SITE_LIMIT
        if site_limit is None
        else _coerce_int("Site limit", site_limit, 1),
        debug=bool(raw["debug"]),
    )
