"""Credential lookup for tfvc-bridge.

The TF tool needs a username/password for ``-login:``. Those are never kept in
config.yaml; they come from the environment or a ``.env.secrets`` file next
to the workspace.

Priority order:
1. Environment variables (os.environ)
2. .env.secrets file (cached)
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import dotenv_values

SECRETS_FILE = ".env.secrets"


@lru_cache(maxsize=4)
def _load_secrets(secrets_path: Path | None = None) -> dict[str, str | None]:
    path = secrets_path or Path(SECRETS_FILE)
    if path.exists():
        return dotenv_values(path)
    return {}


def fetch_secret(
    key: str,
    default: str | None = None,
    secrets_path: Path | None = None,
) -> str | None:
    """Fetch a secret from the environment or .env.secrets.

    Environment variables win so tests can use monkeypatch and CI can inject
    credentials without touching files.

    Args:
        key: Variable name (e.g. "TFVC_PASSWORD").
        default: Value returned when the key is not found anywhere.
        secrets_path: Optional explicit .env.secrets path.
    """
    value = os.environ.get(key)
    if value is not None:
        return value

    secrets = _load_secrets(secrets_path)
    found = secrets.get(key)
    if found is not None:
        return found

    return default


def clear_secret_cache() -> None:
    """Forget cached .env.secrets contents (after edits, or between tests)."""
    _load_secrets.cache_clear()
