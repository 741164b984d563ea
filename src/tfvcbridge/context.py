"""Server and credential context consumed by the argument builder.

These are narrow collaborator records: the engine only reads the collection
URL and the domain/username/password triple to build ``-collection:`` and
``-login:`` switches. Nothing here persists credentials.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tfvcbridge.config.secrets import fetch_secret


@dataclass(frozen=True)
class CredentialInfo:
    """Username/password credentials, optionally with an NT domain."""

    username: str
    password: str
    domain: str | None = None

    @property
    def login(self) -> str:
        """Value for the ``-login:`` switch (``domain\\user,password``)."""
        user = f"{self.domain}\\{self.username}" if self.domain else self.username
        return f"{user},{self.password}"

    def __repr__(self) -> str:
        return f"CredentialInfo(username={self.username!r}, domain={self.domain!r})"


@dataclass(frozen=True)
class ServerContext:
    """Collection URL plus optional credentials for one server."""

    collection_url: str | None = None
    credential_info: CredentialInfo | None = None

    @classmethod
    def from_secrets(cls, secrets_path: Path | None = None) -> ServerContext | None:
        """Build a context from TFVC_* secrets (environment or .env.secrets).

        Returns None when no collection URL is available.
        """
        url = fetch_secret("TFVC_COLLECTION_URL", secrets_path=secrets_path)
        if not url:
            return None
        username = fetch_secret("TFVC_USERNAME", secrets_path=secrets_path)
        password = fetch_secret("TFVC_PASSWORD", secrets_path=secrets_path)
        credentials = None
        if username and password is not None:
            credentials = CredentialInfo(
                username=username,
                password=password,
                domain=fetch_secret("TFVC_DOMAIN", secrets_path=secrets_path) or None,
            )
        return cls(collection_url=url, credential_info=credentials)
