"""Interface to a multisite network's plugin and site data."""

from abc import ABC, abstractmethod
from typing import Any

from .models import Site, plugin_dirname


class NetworkBackend(ABC):
    """Read access to one multisite network.

    Subclasses provide the storage reads; the current-site stack and the
    context-manager protocol live here.
    """

    def __init__(self, main_site_id: int = 1):
        self.main_site_id = main_site_id
        self._site_stack: list[int] = []
        self._current_site_id = main_site_id

    # -- network-wide reads ------------------------------------------------

    @abstractmethod
    def is_multisite(self) -> bool:
        """Return True when the deployment is a multisite network."""

    @abstractmethod
    def installed_plugin_files(self) -> list[str]:
        """Return plugin file paths present on disk, activated or not."""

    @abstractmethod
    def network_active_plugin_files(self) -> list[str]:
        """Return plugin file paths activated network-wide."""

    @abstractmethod
    def get_sites(self, limit: int) -> list[Site]:
        """Return up to ``limit`` sites ordered by blog id."""

    @abstractmethod
    def read_active_plugins(self, blog_id: int) -> Any:
        """Return the decoded ``active_plugins`` option of one site, or None."""

    def installed_plugins(self) -> set[str]:
        return {plugin_dirname(path) for path in self.installed_plugin_files()}

    def network_active_plugins(self) -> set[str]:
        return {plugin_dirname(path) for path in self.network_active_plugin_files()}

    # -- site context ------------------------------------------------------

    def current_site_id(self) -> int:
        return self._current_site_id

    def switch_to_site(self, blog_id: int) -> None:
        """Make ``blog_id`` the current site, remembering the previous one."""
        self._site_stack.append(self._current_site_id)
        self._current_site_id = int(blog_id)

    def restore_current_site(self) -> bool:
        """Return to the site active before the last switch.

        Returns False when there is nothing to restore.
        """
        if not self._site_stack:
            return False
        self._current_site_id = self._site_stack.pop()
        return True

    def get_active_plugins(self, blog_id: int | None = None) -> Any:
        """Read ``active_plugins`` for ``blog_id`` or the current site."""
        return self.read_active_plugins(self._current_site_id if blog_id is None else blog_id)

    # -- lifecycle ---------------------------------------------------------

    def close(self) -> None:
        """Release any resources held by the backend."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
