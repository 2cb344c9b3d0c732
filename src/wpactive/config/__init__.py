"""
Configuration management for wpactive.

Supports multiple configuration sources in order of priority:
1. Command-line options
2. Environment variables
3. .env file in the working directory
4. Global config file (~/.wpactive/config.yml)
5. Default values (lowest priority)
"""

from .env_loader import (
    global_config_path,
    load_env_file,
    load_global_config,
    load_local_config,
)
from .getters import get_bool, get_config
from .settings import (
    DEFAULT_NETWORK_ID,
    DEFAULT_SITE_LIMIT,
    DEFAULT_TABLE_PREFIX,
    ENV_KEYS,
    Settings,
    load_settings,
)
from .setup import ENV_TEMPLATE, create_env_template, create_global_config

__all__ = [
    # env_loader
    "global_config_path",
    "load_env_file",
    "load_global_config",
    "load_local_config",
    # getters
    "get_bool",
    "get_config",
    # settings
    "DEFAULT_NETWORK_ID",
    "DEFAULT_SITE_LIMIT",
    "DEFAULT_TABLE_PREFIX",
    "ENV_KEYS",
    "Settings",
    "load_settings",
    # setup
    "ENV_TEMPLATE",
    "create_env_template",
    "create_global_config",
]
