"""``tf undo``: discard pending changes."""

from __future__ import annotations

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.process.result import ExecutionResult

NO_PENDING_CHANGES = "No pending changes were found for "


class Undo(TfvcCommand[list[str]]):
    """Returns the paths whose pending changes were undone.

    Exit codes:
        0   every target was undone
        1   some targets had no pending change (those lines are dropped)
        100 with only "No pending changes" lines: nothing to undo, returns []
        anything else is a failure
    """

    def __init__(self, server_context: ServerContext | None, item_paths: list[str]) -> None:
        parsing.require_string_array_argument(item_paths, "item_paths")
        super().__init__(server_context)
        self._item_paths = item_paths

    def get_arguments(self) -> ArgumentBuilder:
        return self._add_paths(self._builder("undo"))

    def get_exe_arguments(self) -> ArgumentBuilder:
        return self._add_paths(self._builder("undo", skip_collection=True, is_exe=True))

    def _add_paths(self, builder: ArgumentBuilder) -> ArgumentBuilder:
        # "*" means everything under the working directory
        if len(self._item_paths) == 1 and self._item_paths[0] == "*":
            return builder.add(".").add_switch("recursive")
        return builder.add_all(self._item_paths)

    def parse_output(self, result: ExecutionResult) -> list[str]:
        lines = parsing.split_into_lines(result.stdout, False, True)

        if result.exit_code != 0:
            lines = [line for line in lines if not line.startswith(NO_PENDING_CHANGES)]
            if result.exit_code == 100 and not lines:
                return []
            if result.exit_code != 1:
                parsing.process_errors(self.command, result)

        return parsing.collect_file_paths(lines, _file_from_line)


def _file_from_line(line: str) -> str:
    # "Undoing edit: file1.txt", "Undoing add: file1.txt", ...
    prefix = ": "
    index = line.find(prefix)
    if index > 0:
        return line[index + len(prefix) :]
    return line
