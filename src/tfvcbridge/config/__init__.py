"""Configuration management for tfvc-bridge.

Hierarchical YAML configuration:
- System-level config (/etc/tfvcbridge/ or %PROGRAMDATA%)
- User-level config (~/.config/tfvcbridge/, ~/.tfvc/ or %APPDATA%)
- Project-level config (<workspace root>/.tfvc/)
- Environment variable overrides (highest priority)

Example usage:
    from tfvcbridge.config import load_config

    config = load_config(workspace_root="/path/to/workspace")
    print(config.tfvc.location)
"""

from tfvcbridge.config.loader import (
    get_config,
    load_config,
    on_config_reload,
    reload_config,
    reset_config,
)
from tfvcbridge.config.paths import (
    get_config_paths,
    get_project_config_path,
    get_system_config_path,
    get_user_config_path,
)
from tfvcbridge.config.schema import Config, LoggingConfig, TfvcConfig
from tfvcbridge.config.secrets import clear_secret_cache, fetch_secret

__all__ = [
    # Main API
    "Config",
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    "on_config_reload",
    # Schema types
    "TfvcConfig",
    "LoggingConfig",
    # Secret management
    "fetch_secret",
    "clear_secret_cache",
    # Path utilities
    "get_config_paths",
    "get_system_config_path",
    "get_user_config_path",
    "get_project_config_path",
]
