"""Walk every site of the network and collect those running a plugin."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from wpactive.config import DEFAULT_SITE_LIMIT
from wpactive.network import NetworkBackend, Site, plugin_dirname
from wpactive.utils.debug import debug_print

logger = logging.getLogger(__name__)

SiteCallback = Callable[[Site, bool], None]


@contextmanager
def switched_to_site(network: NetworkBackend, blog_id: int) -> Iterator[None]:
    """Run the body with ``blog_id`` as the current site, then restore."""
    network.switch_to_site(blog_id)
    try:
        yield
    finally:
        network.restore_current_site()


def active_plugin_dirs(raw: Any, site: Site) -> list[str]:
    """Normalize a site's ``active_plugins`` value; malformed values are empty."""
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        logger.warning(
            "Ignoring malformed active_plugins on site %s (%s): %s",
            site.blog_id,
            site.url,
            type(raw).__name__,
        )
        return []
    return [plugin_dirname(entry) for entry in raw if isinstance(entry, str)]


def find_sites_with_plugin(
    network: NetworkBackend,
    target: str,
    *,
    limit: int = DEFAULT_SITE_LIMIT,
    on_site: SiteCallback | None = None,
) -> tuple[Site, ...]:
    """Return the sites, in registry order, where ``target`` is active."""
    if limit < 1:
        raise ValueError("limit must be at least 1")

    sites = network.get_sites(limit)
    if len(sites) >= limit:
        logger.warning(
            "Site registry returned %d sites, the configured limit; results may be incomplete.",
            limit,
        )

    found: list[Site] = []
    seen: set[int] = set()
    for site in sites:
        if site.blog_id in seen:
            continue
        seen.add(site.blog_id)
        with switched_to_site(network, site.blog_id):
            plugins = active_plugin_dirs(network.get_active_plugins(), site)
            matched = target in plugins
            if matched:
                found.append(site)
        debug_print("scan", f"site {site.blog_id} {site.url}", Active=plugins, Match=matched)
        if on_site is not None:
            on_site(site, matched)

    return tuple(found)
