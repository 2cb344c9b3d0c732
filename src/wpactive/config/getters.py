"""Configuration getter functions."""

import os
from pathlib import Path
from typing import Any

from .env_loader import load_global_config, load_local_config


def get_config(key: str, work_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. .env file in the working directory
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        work_dir: Optional directory holding the .env file
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check local .env file
    local_config = load_local_config(work_dir)
    if key in local_config:
        return local_config[key]

    # 3. Check global config
    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    # 4. Return default
    return default


def get_bool(key: str, work_dir: Path | None = None, default: bool = False) -> bool:
    """Interpret a configuration value as a boolean flag."""
    value = get_config(key, work_dir)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
