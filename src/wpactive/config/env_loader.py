"""Environment variable and configuration file loading."""

from pathlib import Path
from typing import Any

import yaml


def global_config_path() -> Path:
    """Return the path of the global ~/.wpactive/config.yml file."""
    return Path.home() / ".wpactive" / "config.yml"


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.wpactive/config.yml."""
    config_path = global_config_path()
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


def load_local_config(work_dir: Path | None = None) -> dict[str, str]:
    """Load the .env file from the working directory."""
    base = work_dir if work_dir is not None else Path.cwd()
    return load_env_file(base / ".env")
