"""``tf rename``: rename or move one item."""

from __future__ import annotations

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.process.result import ExecutionResult


class Rename(TfvcCommand[str]):
    """Returns the new path of the renamed item, or "" if none was reported."""

    def __init__(
        self,
        server_context: ServerContext | None,
        source_path: str,
        destination_path: str,
    ) -> None:
        parsing.require_string_argument(source_path, "source_path")
        parsing.require_string_argument(destination_path, "destination_path")
        super().__init__(server_context)
        self._source_path = source_path
        self._destination_path = destination_path

    def get_arguments(self) -> ArgumentBuilder:
        return self._builder("rename").add(self._source_path).add(self._destination_path)

    def get_exe_arguments(self) -> ArgumentBuilder:
        return (
            self._builder("rename", skip_collection=True)
            .add(self._source_path)
            .add(self._destination_path)
        )

    def parse_output(self, result: ExecutionResult) -> str:
        parsing.process_errors(self.command, result)
        lines = parsing.split_into_lines(result.stdout, False, True)
        paths = parsing.collect_file_paths(lines)
        return paths[0] if paths else ""
