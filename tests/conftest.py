"""Root pytest configuration for all tests."""

from __future__ import annotations

import pytest

from tfvcbridge.config import reset_config
from tfvcbridge.config.secrets import clear_secret_cache

# Configure pytest-asyncio to use auto mode
# This is redundant with pyproject.toml but ensures it's set
pytest_plugins = ("pytest_asyncio",)

_TFVC_ENV = (
    "TFVC_LOCATION",
    "TFVC_PROXY",
    "TFVC_RESTRICT_WORKSPACE",
    "TFVC_LOG",
    "TFVC_USERNAME",
    "TFVC_PASSWORD",
    "TFVC_DOMAIN",
    "TFVC_COLLECTION_URL",
)


@pytest.fixture(scope="session")
def anyio_backend():
    """Set anyio backend to asyncio."""
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_tfvc_environment(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep the developer's TFVC_* settings, user config and cached config out of tests."""
    for name in _TFVC_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    reset_config()
    clear_secret_cache()
    yield
    reset_config()
    clear_secret_cache()


COLLECTION_URL = "http://java-tfs2015:8081/tfs/DefaultCollection"


@pytest.fixture
def server_context():
    """A server context with a collection URL and credentials."""
    from tfvcbridge.context import CredentialInfo, ServerContext

    return ServerContext(
        collection_url=COLLECTION_URL,
        credential_info=CredentialInfo(username="user1", password="pass1", domain="DOMAIN"),
    )
