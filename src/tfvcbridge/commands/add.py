"""``tf add``: schedule files for addition."""

from __future__ import annotations

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.process.result import ExecutionResult


class Add(TfvcCommand[list[str]]):
    """Returns the paths that were added.

    Sample output::

        folder1:
        file1.txt
        file2.txt
    """

    def __init__(self, server_context: ServerContext | None, item_paths: list[str]) -> None:
        parsing.require_string_array_argument(item_paths, "item_paths")
        super().__init__(server_context)
        self._item_paths = item_paths

    def get_arguments(self) -> ArgumentBuilder:
        return self._builder("add").add_all(self._item_paths)

    def get_exe_arguments(self) -> ArgumentBuilder:
        return self._builder("add", skip_collection=True).add_all(self._item_paths)

    def parse_output(self, result: ExecutionResult) -> list[str]:
        # 1 means some arguments matched nothing; the rest were still added
        if result.exit_code not in (0, 1):
            parsing.process_errors(self.command, result)

        lines = parsing.split_into_lines(result.stdout, False, True)
        lines = [
            line
            for line in lines
            if not line.startswith("No arguments matched any files to add.")  # CLC
            and not line.endswith(" No file matches.")  # tf.exe
        ]
        return parsing.collect_file_paths(lines)
