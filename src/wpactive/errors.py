"""Exception types raised by wpactive."""


class WpactiveError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(WpactiveError):
    """Missing or invalid configuration."""


class DisplayConfigError(WpactiveError):
    """Invalid output format, field, or filter."""


class SnapshotError(WpactiveError):
    """A network snapshot file could not be loaded."""


class PluginDirectoryError(WpactiveError):
    """The installed plugins directory could not be listed."""
