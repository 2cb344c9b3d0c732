"""Data models for sites in a multisite network."""

import posixpath
from dataclasses import asdict, dataclass
from typing import Any

SITE_FIELDS = (
    "blog_id",
    "url",
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

# Columns of the site registry; ``url`` is derived and cannot be filtered on.
FILTER_FIELDS = tuple(name for name in SITE_FIELDS if name != "url")


@dataclass(frozen=True)
class Site:
    """One site (blog) of the network, as read from the registry."""

    blog_id: int
    domain: str
    path: str = "/"
    site_id: int = 1
    registered: str = ""
    last_updated: str = ""
    public: int = 1
    archived: int = 0
    mature: int = 0
    spam: int = 0
    deleted: int = 0
    lang_id: int = 0

    @property
    def url(self) -> str:
        return f"{self.domain}{self.path}"

    def as_row(self) -> dict[str, Any]:
        """Return every display field keyed by name."""
        row = asdict(self)
        row["url"] = self.url
        return {name: row[name] for name in SITE_FIELDS}


def plugin_dirname(plugin_file: str) -> str:
    """Normalize a plugin file path to its directory name.

    ``akismet/akismet.php`` becomes ``akismet``; single-file plugins such as
    ``hello.php`` normalize to ``.``.
    """
    return posixpath.dirname(plugin_file.replace("\\", "/")) or "."


def normalize_target(slug: str) -> str:
    """Normalize a user-supplied plugin slug to directory-name form."""
    cleaned = slug.strip().replace("\\", "/").strip("/")
    if "/" in cleaned:
        return cleaned.split("/", 1)[0]
    return cleaned
