"""Command contract shared by every TF verb.

Each command knows how to build its arguments and parse its output for both
tool variants. Most verbs only differ in the EXE switches (no collection URL,
``-prompt``), so the EXE hooks default to the CLC ones and commands override
just what differs. Callers dispatch with ``arguments_for``/``options_for``/
``parse_for`` instead of branching on the variant themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.context import ServerContext
from tfvcbridge.process.options import ExecOptions
from tfvcbridge.process.result import ExecutionResult
from tfvcbridge.process.variant import ToolVariant

T = TypeVar("T")


class TfvcCommand(ABC, Generic[T]):
    """One TF verb: build arguments, then parse the result into ``T``."""

    def __init__(self, server_context: ServerContext | None = None) -> None:
        self._server_context = server_context

    @abstractmethod
    def get_arguments(self) -> ArgumentBuilder:
        """Arguments for the CLC."""

    def get_options(self) -> ExecOptions:
        return ExecOptions()

    @abstractmethod
    def parse_output(self, result: ExecutionResult) -> T:
        """Parse CLC output, raising TfvcError on failure."""

    def get_exe_arguments(self) -> ArgumentBuilder:
        return self.get_arguments()

    def get_exe_options(self) -> ExecOptions:
        return self.get_options()

    def parse_exe_output(self, result: ExecutionResult) -> T:
        return self.parse_output(result)

    @property
    def command(self) -> str:
        """The verb sent to the CLC (e.g. "checkin")."""
        return self.get_arguments().get_command()

    def arguments_for(self, variant: ToolVariant) -> ArgumentBuilder:
        if variant is ToolVariant.BATCH:
            return self.get_exe_arguments()
        return self.get_arguments()

    def options_for(self, variant: ToolVariant) -> ExecOptions:
        if variant is ToolVariant.BATCH:
            return self.get_exe_options()
        return self.get_options()

    def parse_for(self, variant: ToolVariant, result: ExecutionResult) -> T:
        if variant is ToolVariant.BATCH:
            return self.parse_exe_output(result)
        return self.parse_output(result)

    def _builder(
        self, command: str, skip_collection: bool = False, is_exe: bool = False
    ) -> ArgumentBuilder:
        return ArgumentBuilder(command, self._server_context, skip_collection, is_exe)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.get_arguments().to_string()!r}>"
