"""Debug utilities for tracing a scan.

Debug output is written to stderr with rich formatting so it never mixes
with machine-readable results on stdout.
"""

import json
import logging
import threading
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

# Thread-local storage for debug state
_debug_state = threading.local()

_stderr = Console(stderr=True)


def set_debug_enabled(enabled: bool) -> None:
    """Set debug mode for the current thread."""
    _debug_state.enabled = enabled


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled for the current thread."""
    return getattr(_debug_state, "enabled", False)


def configure_logging(debug: bool = False) -> None:
    """Route package log records to stderr through rich."""
    logger = logging.getLogger("wpactive")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=_stderr, show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)


def debug_print(category: str, message: str, **data: Any) -> None:
    """Print debug information if debug mode is enabled.

    Args:
        category: Debug category (preflight, scan, config)
        message: Main message to display
        **data: Additional key-value pairs to display
    """
    if not is_debug_enabled():
        return
    _stderr.print(f"[DEBUG:{category}] {message}", style="bold cyan", markup=False)
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            try:
                json_str = json.dumps(value, indent=2, default=str)
                syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)
                _stderr.print(f"  {key}:", style="dim", markup=False)
                _stderr.print(syntax)
            except (TypeError, ValueError):
                _stderr.print(f"  {key}: {value}", style="dim", markup=False)
        elif isinstance(value, (list, tuple, set)):
            _stderr.print(f"  {key}: {', '.join(str(v) for v in value)}", style="dim", markup=False)
        elif isinstance(value, str) and len(value) > 100:
            _stderr.print(f"  {key}: {value[:100]}... ({len(value)} chars)", style="dim", markup=False)
        else:
            _stderr.print(f"  {key}: {value}", style="dim", markup=False)
