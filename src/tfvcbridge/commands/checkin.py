"""``tf checkin``: commit pending changes."""

from __future__ import annotations

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.process.result import ExecutionResult


class Checkin(TfvcCommand[str]):
    """Returns the new changeset number as a string (e.g. "23")."""

    def __init__(
        self,
        server_context: ServerContext | None,
        files: list[str],
        comment: str | None = None,
        work_item_ids: list[int] | None = None,
    ) -> None:
        parsing.require_string_array_argument(files, "files")
        super().__init__(server_context)
        self._files = files
        self._comment = comment
        self._work_item_ids = work_item_ids or []

    def get_arguments(self) -> ArgumentBuilder:
        builder = self._builder("checkin").add_all(self._files)
        if self._comment:
            builder.add_switch_with_value("comment", self._flat_comment())
        if self._work_item_ids:
            builder.add_switch_with_value(
                "associate", ",".join(str(i) for i in self._work_item_ids)
            )
        return builder

    def get_exe_arguments(self) -> ArgumentBuilder:
        # tf.exe has no -associate switch
        builder = self._builder("checkin", skip_collection=True).add_all(self._files)
        if self._comment:
            builder.add_switch_with_value("comment", self._flat_comment())
        return builder

    def _flat_comment(self) -> str:
        return self._comment.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")

    def parse_output(self, result: ExecutionResult) -> str:
        if result.exit_code == 100:
            parsing.process_errors(self.command, result)
        return parsing.get_changeset_number(result.stdout)
