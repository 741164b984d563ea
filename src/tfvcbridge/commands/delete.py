"""``tf delete``: schedule items for deletion."""

from __future__ import annotations

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.process.result import ExecutionResult


class Delete(TfvcCommand[list[str]]):
    """Returns the deleted paths.

    Delete exits with 0 (success) or 100 (failure). Failures such as
    "TF203069: ... could not be deleted because that change conflicts ..."
    only make sense with the tool's own text, so it is surfaced verbatim.
    """

    def __init__(self, server_context: ServerContext | None, item_paths: list[str]) -> None:
        parsing.require_string_array_argument(item_paths, "item_paths")
        super().__init__(server_context)
        self._item_paths = item_paths

    def get_arguments(self) -> ArgumentBuilder:
        return self._builder("delete").add_all(self._item_paths)

    def get_exe_arguments(self) -> ArgumentBuilder:
        return self._builder("delete", skip_collection=True, is_exe=True).add_all(
            self._item_paths
        )

    def parse_output(self, result: ExecutionResult) -> list[str]:
        parsing.process_errors(self.command, result, show_first_raw_error=True)
        lines = parsing.split_into_lines(result.stdout, False, True)
        return parsing.collect_file_paths(lines)
