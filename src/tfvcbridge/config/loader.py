"""Configuration file loading and caching.

Handles:
- YAML file parsing
- Environment variable overrides
- Config caching with reload support
- Conversion from dict to typed Config dataclass
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from tfvcbridge.config.merge import merge_configs
from tfvcbridge.config.paths import get_config_paths
from tfvcbridge.config.schema import Config, LoggingConfig, TfvcConfig

# Module logger (may not be configured yet at import time)
_log = logging.getLogger("tfvcbridge.config")

_cached_config: Config | None = None

_reload_callbacks: list[Callable[[Config], None]] = []

_TRUE_VALUES = {"1", "true", "yes", "on"}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning an empty dict if missing or invalid."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        _log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}


def env_overrides() -> dict[str, Any]:
    """Build a config dict from TFVC_* environment variables.

    Credentials are NOT read here; see fetch_secret().
    """
    overrides: dict[str, Any] = {}
    tfvc: dict[str, Any] = {}

    location = os.environ.get("TFVC_LOCATION")
    if location:
        tfvc["location"] = location

    proxy = os.environ.get("TFVC_PROXY")
    if proxy:
        tfvc["proxy"] = proxy

    restrict = os.environ.get("TFVC_RESTRICT_WORKSPACE")
    if restrict:
        tfvc["restrict_workspace"] = restrict.strip().lower() in _TRUE_VALUES

    if tfvc:
        overrides["tfvc"] = tfvc

    log_path = os.environ.get("TFVC_LOG")
    if log_path:
        overrides["logging"] = {"file": log_path}

    return overrides


def dict_to_config(data: dict[str, Any]) -> Config:
    """Convert a merged dict to the typed Config dataclass."""
    tfvc_data = data.get("tfvc") or {}
    tfvc = TfvcConfig(
        location=tfvc_data.get("location"),
        proxy=tfvc_data.get("proxy"),
        restrict_workspace=bool(tfvc_data.get("restrict_workspace", False)),
    )

    log_data = data.get("logging") or {}
    logging_config = LoggingConfig(
        level=log_data.get("level"),
        verbose=log_data.get("verbose"),
        file=log_data.get("file"),
    )

    known_keys = {"tfvc", "logging"}
    extra = {k: v for k, v in data.items() if k not in known_keys}

    return Config(tfvc=tfvc, logging=logging_config, extra=extra)


def load_config(workspace_root: str | None = None, reload: bool = False) -> Config:
    """Load and merge config from all sources.

    Priority order (highest to lowest):
    1. Environment variables
    2. Project config (<workspace_root>/.tfvc/config.yaml)
    3. User config
    4. System config

    Only the global config (no workspace_root) is cached.
    """
    global _cached_config

    if _cached_config is not None and not reload and workspace_root is None:
        return _cached_config

    layers: list[dict[str, Any]] = []
    for path in get_config_paths(workspace_root):
        data = load_yaml_file(path)
        if data:
            _log.debug("Loaded config from %s", path)
            layers.append(data)

    env_config = env_overrides()
    if env_config:
        layers.append(env_config)

    config = dict_to_config(merge_configs(*layers))

    if workspace_root is None:
        _cached_config = config

    return config


def get_config() -> Config:
    """Get the cached global config, loading it on first use."""
    if _cached_config is None:
        return load_config()
    return _cached_config


def reset_config() -> None:
    """Drop the cached config (tests, forced reloads)."""
    global _cached_config
    _cached_config = None


def reload_config(workspace_root: str | None = None) -> Config:
    """Reload config from files and notify callbacks."""
    config = load_config(workspace_root=workspace_root, reload=True)

    for callback in _reload_callbacks:
        try:
            callback(config)
        except Exception as e:
            _log.warning("Config reload callback error: %s", e)

    return config


def on_config_reload(callback: Callable[[Config], None]) -> Callable[[], None]:
    """Register a reload callback; returns a function that unregisters it."""
    _reload_callbacks.append(callback)

    def unregister() -> None:
        if callback in _reload_callbacks:
            _reload_callbacks.remove(callback)

    return unregister
