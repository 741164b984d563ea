"""``tf resolve -auto:<type>``: resolve conflicts automatically."""

from __future__ import annotations

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.models import AutoResolveType, Conflict, ConflictType
from tfvcbridge.process.result import ExecutionResult


class ResolveConflicts(TfvcCommand[list[Conflict]]):
    """Returns one RESOLVED conflict per "Resolved <path> as <resolution>" line."""

    def __init__(
        self,
        server_context: ServerContext | None,
        item_paths: list[str],
        auto_resolve_type: AutoResolveType,
    ) -> None:
        parsing.require_string_array_argument(item_paths, "item_paths")
        parsing.require_argument(auto_resolve_type, "auto_resolve_type")
        super().__init__(server_context)
        self._item_paths = item_paths
        self._auto_resolve_type = auto_resolve_type

    def get_arguments(self) -> ArgumentBuilder:
        return (
            self._builder("resolve")
            .add_all(self._item_paths)
            .add_switch_with_value("auto", self._auto_resolve_type.value)
        )

    def get_exe_arguments(self) -> ArgumentBuilder:
        return (
            self._builder("resolve", skip_collection=True, is_exe=True)
            .add_all(self._item_paths)
            .add_switch_with_value("auto", self._auto_resolve_type.value)
        )

    def parse_output(self, result: ExecutionResult) -> list[Conflict]:
        if result.exit_code not in (0, 1):
            parsing.process_errors(self.command, result)

        conflicts: list[Conflict] = []
        for line in parsing.split_into_lines(result.stdout, True, True):
            start = line.find("Resolved ")
            end = line.rfind(" as ")
            if start >= 0 and end > start:
                conflicts.append(
                    Conflict(
                        local_path=line[start + len("Resolved ") : end],
                        type=ConflictType.RESOLVED,
                        message=line,
                    )
                )
        return conflicts
