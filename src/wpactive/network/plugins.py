"""Discovery of plugins installed in a wp-content/plugins directory."""

import logging
import re
from pathlib import Path

from wpactive.errors import PluginDirectoryError

logger = logging.getLogger(__name__)

HEADER_READ_BYTES = 8192

_PLUGIN_NAME_RE = re.compile(
    r"^(?:[ \t]*<\?php)?[ \t/*#@]*Plugin Name:(.*)$", re.IGNORECASE | re.MULTILINE
)


def has_plugin_header(php_file: Path) -> bool:
    """Return True when the file declares a non-empty ``Plugin Name:`` header."""
    try:
        with open(php_file, "rb") as f:
            head = f.read(HEADER_READ_BYTES).decode("utf-8", errors="replace")
    except OSError as e:
        logger.warning("Could not read plugin file %s: %s", php_file, e)
        return False
    match = _PLUGIN_NAME_RE.search(head)
    return bool(match and match.group(1).strip())


def _php_files(directory: Path) -> list[Path]:
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".php"
    )


def discover_plugins(plugins_dir: Path) -> list[str]:
    """Return plugin files relative to ``plugins_dir``.

    Looks at PHP files at the top level and one directory down, skipping
    hidden entries.
    """
    try:
        if not plugins_dir.is_dir():
            return []
        entries = sorted(plugins_dir.iterdir())
    except OSError as e:
        raise PluginDirectoryError(f"Cannot list plugins directory {plugins_dir}: {e}") from e

    found: list[str] = []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            try:
                candidates = _php_files(entry)
            except OSError as e:
                logger.warning("Could not list plugin directory %s: %s", entry, e)
                continue
            for php_file in candidates:
                if has_plugin_header(php_file):
                    found.append(f"{entry.name}/{php_file.name}")
        elif entry.suffix.lower() == ".php" and has_plugin_header(entry):
            found.append(entry.name)
    return found
