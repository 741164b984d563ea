"""Argument assembly for one TF invocation, with secret redaction."""

from __future__ import annotations

import re

from tfvcbridge.context import ServerContext
from tfvcbridge.errors import TfvcError

REDACTED = "********"

_WHITESPACE = re.compile(r"\s")


class ArgumentBuilder:
    """Ordered argument list for a single command.

    The first argument is always the command verb. Secret arguments (the
    ``-login:`` switch) are tracked by index and replaced with a fixed token
    in every display form; only build() and build_command_line() expose them.

    Example:
        >>> ArgumentBuilder("status").add_switch("recursive").to_string()
        'status -noprompt -recursive'
    """

    def __init__(
        self,
        command: str,
        server_context: ServerContext | None = None,
        skip_collection: bool = False,
        is_exe: bool = False,
    ) -> None:
        if not command:
            raise TfvcError.argument_missing("command")

        self._arguments: list[str] = []
        self._secret_indexes: list[int] = []

        self.add(command)
        self.add_switch("prompt" if is_exe else "noprompt")

        if server_context is not None and server_context.collection_url:
            if not skip_collection:
                self.add_switch_with_value("collection", server_context.collection_url)
            credentials = server_context.credential_info
            if credentials is not None and not is_exe:
                self.add_switch_with_value("login", credentials.login, is_secret=True)

    def add(self, arg: str) -> ArgumentBuilder:
        self._arguments.append(arg)
        return self

    def add_all(self, args: list[str] | None) -> ArgumentBuilder:
        for arg in args or []:
            self.add(arg)
        return self

    def add_secret(self, arg: str) -> ArgumentBuilder:
        self.add(arg)
        self._secret_indexes.append(len(self._arguments) - 1)
        return self

    def add_switch(self, name: str) -> ArgumentBuilder:
        return self.add_switch_with_value(name, None)

    def add_switch_with_value(
        self, name: str, value: str | None, is_secret: bool = False
    ) -> ArgumentBuilder:
        arg = f"-{name}:{value}" if value else f"-{name}"
        if is_secret:
            return self.add_secret(arg)
        return self.add(arg)

    def remove_switch(self, name: str) -> ArgumentBuilder:
        """Remove the last ``-<name>`` argument, if present."""
        target = f"-{name}"
        for index in range(len(self._arguments) - 1, -1, -1):
            if self._arguments[index] == target:
                del self._arguments[index]
                self._secret_indexes = [
                    i if i < index else i - 1
                    for i in self._secret_indexes
                    if i != index
                ]
                break
        return self

    def add_proxy_switch(self, proxy: str) -> ArgumentBuilder:
        return self.add_switch_with_value("proxy", proxy)

    def get_command(self) -> str:
        return self._arguments[0] if self._arguments else ""

    def build(self) -> list[str]:
        """Raw argument list for argv-style execution (secrets included)."""
        return list(self._arguments)

    def build_command_line(self) -> str:
        """Response-file line written to the tool's stdin (secrets included)."""
        return "".join(f"{_escape(arg)} " for arg in self._arguments) + "\n"

    def to_string(self) -> str:
        """Display form, safe to log: secret arguments are redacted."""
        rendered = [
            REDACTED if index in self._secret_indexes else _escape(arg)
            for index, arg in enumerate(self._arguments)
        ]
        return " ".join(rendered)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<ArgumentBuilder {self.to_string()!r}>"


def _escape(arg: str) -> str:
    escaped = arg.replace('"', '""')
    if not escaped or _WHITESPACE.search(escaped):
        return f'"{escaped}"'
    return escaped
