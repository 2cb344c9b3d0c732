"""Models for the active-on-sites workflow."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from enum import Enum

from wpactive.errors import DisplayConfigError
from wpactive.network.models import FILTER_FIELDS, SITE_FIELDS

DEFAULT_FIELDS = ("blog_id", "url")

_FIELD_SPLIT_RE = re.compile(r",[ \t]*")


class PreflightStatus(Enum):
    """Outcome of the checks run before a scan."""

    PROCEED = "proceed"
    NETWORK_ACTIVATED = "network_activated"
    NOT_MULTISITE = "not_multisite"
    NOT_INSTALLED = "not_installed"


@dataclass(frozen=True, slots=True)
class PreflightResult:
    """What the dispatcher should do next, and what to tell the user."""

    status: PreflightStatus
    message: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.status is not PreflightStatus.PROCEED

    @property
    def is_error(self) -> bool:
        return self.status in (PreflightStatus.NOT_MULTISITE, PreflightStatus.NOT_INSTALLED)

    @property
    def exit_code(self) -> int:
        return 1 if self.is_error else 0


class OutputFormat(str, Enum):
    """Supported renderings of the matched sites."""

    TABLE = "table"
    CSV = "csv"
    IDS = "ids"
    JSON = "json"
    COUNT = "count"
    YAML = "yaml"


def parse_fields(raw: str | None) -> tuple[str, ...]:
    """Split a ``--fields`` value on commas followed by optional blanks."""
    if raw is None or not raw.strip():
        return DEFAULT_FIELDS
    return tuple(name for name in _FIELD_SPLIT_RE.split(raw.strip()) if name)


@dataclass(frozen=True)
class DisplayConfig:
    """Validated presentation options."""

    format: OutputFormat = OutputFormat.TABLE
    fields: tuple[str, ...] = DEFAULT_FIELDS
    field: str | None = None
    filters: dict[str, str] = dataclasses.field(default_factory=dict)

    @property
    def columns(self) -> tuple[str, ...]:
        """Columns actually rendered."""
        return (self.field,) if self.field else self.fields

    @classmethod
    def from_options(
        cls,
        format: str | OutputFormat = OutputFormat.TABLE,
        fields: str | None = None,
        field: str | None = None,
        filters: dict[str, object] | None = None,
    ) -> DisplayConfig:
        """Build a config from raw option values, rejecting anything unknown."""
        try:
            output_format = OutputFormat(format)
        except ValueError:
            choices = ", ".join(f.value for f in OutputFormat)
            raise DisplayConfigError(
                f"Invalid format: {format}. Choose one of: {choices}."
            ) from None

        selected = parse_fields(fields)
        for name in selected:
            if name not in SITE_FIELDS:
                raise DisplayConfigError(f"Invalid field: {name}.")
        if field is not None and field not in SITE_FIELDS:
            raise DisplayConfigError(f"Invalid field: {field}.")

        clean_filters: dict[str, str] = {}
        for key, value in (filters or {}).items():
            if value is None:
                continue
            if key not in FILTER_FIELDS:
                raise DisplayConfigError(f"Cannot filter on field: {key}.")
            clean_filters[key] = str(value)

        return cls(
            format=output_format,
            fields=selected,
            field=field,
            filters=clean_filters,
        )
