"""Multisite network backed by a WordPress database.

Tables are addressed by prefix the way WordPress does it: network tables
(``{prefix}blogs``, ``{prefix}sitemeta``) and the main site's options live
under the base prefix, every other site's options under
``{prefix}{blog_id}_options``.
"""

import logging
from pathlib import Path
from typing import Any

import phpserialize
from sqlalchemy import column, create_engine, inspect, select, table
from sqlalchemy.engine import Engine

from .base import NetworkBackend
from .models import Site
from .plugins import discover_plugins

logger = logging.getLogger(__name__)

SITE_COLUMNS = (
    "blog_id",
    "site_id",
    "domain",
    "path",
    "registered",
    "last_updated",
    "public",
    "archived",
    "mature",
    "spam",
    "deleted",
    "lang_id",
)


def decode_php_value(raw: Any) -> Any:
    """Decode a PHP-serialized option value.

    Values that are not valid serialized data come back unchanged, as
    WordPress' ``maybe_unserialize`` does.
    """
    if raw is None:
        return None
    data = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)
    try:
        return phpserialize.loads(data, decode_strings=True)
    except (ValueError, TypeError):
        return raw


def _php_array_values(value: Any) -> Any:
    # PHP arrays decode to dicts; list semantics keep their insertion order.
    if isinstance(value, dict):
        return list(value.values())
    return value


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class DatabaseNetwork(NetworkBackend):
    """Reads sites and options from a multisite database through SQLAlchemy."""

    def __init__(
        self,
        db_url: str | None = None,
        table_prefix: str = "wp_",
        network_id: int = 1,
        plugins_dir: Path | None = None,
        engine: Engine | None = None,
    ):
        super().__init__(main_site_id=1)
        if engine is None:
            if not db_url:
                raise ValueError("db_url or engine is required")
            engine = create_engine(db_url, echo=False)
        self.engine = engine
        self.table_prefix = table_prefix
        self.network_id = network_id
        self.plugins_dir = plugins_dir
        self._table_names: set[str] | None = None

    # -- helpers -----------------------------------------------------------

    def _tables(self) -> set[str]:
        if self._table_names is None:
            self._table_names = set(inspect(self.engine).get_table_names())
        return self._table_names

    def blog_prefix(self, blog_id: int) -> str:
        """Table prefix of one site's tables."""
        if blog_id in (0, self.main_site_id):
            return self.table_prefix
        return f"{self.table_prefix}{blog_id}_"

    def _fetch_scalar(self, stmt) -> Any:
        with self.engine.connect() as conn:
            return conn.execute(stmt).scalar()

    # -- NetworkBackend ----------------------------------------------------

    def is_multisite(self) -> bool:
        tables = self._tables()
        return (
            f"{self.table_prefix}blogs" in tables and f"{self.table_prefix}sitemeta" in tables
        )

    def installed_plugin_files(self) -> list[str]:
        if self.plugins_dir is None:
            return []
        return discover_plugins(self.plugins_dir)

    def network_active_plugin_files(self) -> list[str]:
        sitemeta = table(
            f"{self.table_prefix}sitemeta",
            column("site_id"),
            column("meta_key"),
            column("meta_value"),
        )
        stmt = (
            select(sitemeta.c.meta_value)
            .where(sitemeta.c.meta_key == "active_sitewide_plugins")
            .where(sitemeta.c.site_id == self.network_id)
            .limit(1)
        )
        value = decode_php_value(self._fetch_scalar(stmt))
        if not isinstance(value, dict):
            return []
        return [str(key) for key in value]

    def get_sites(self, limit: int) -> list[Site]:
        blogs = table(f"{self.table_prefix}blogs", *(column(name) for name in SITE_COLUMNS))
        stmt = select(*blogs.c).order_by(blogs.c.blog_id).limit(limit)
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [
            Site(
                blog_id=int(row["blog_id"]),
                site_id=_to_int(row["site_id"]),
                domain=str(row["domain"] or ""),
                path=str(row["path"] or "/"),
                registered=str(row["registered"] or ""),
                last_updated=str(row["last_updated"] or ""),
                public=_to_int(row["public"]),
                archived=_to_int(row["archived"]),
                mature=_to_int(row["mature"]),
                spam=_to_int(row["spam"]),
                deleted=_to_int(row["deleted"]),
                lang_id=_to_int(row["lang_id"]),
            )
            for row in rows
        ]

    def read_active_plugins(self, blog_id: int) -> Any:
        options_name = f"{self.blog_prefix(blog_id)}options"
        if options_name not in self._tables():
            logger.debug("No options table %s for blog %s", options_name, blog_id)
            return None
        options = table(options_name, column("option_name"), column("option_value"))
        stmt = (
            select(options.c.option_value)
            .where(options.c.option_name == "active_plugins")
            .limit(1)
        )
        return _php_array_values(decode_php_value(self._fetch_scalar(stmt)))

    def close(self) -> None:
        self.engine.dispose()
