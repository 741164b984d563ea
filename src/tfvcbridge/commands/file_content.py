"""``tf print`` (CLC) / ``tf view`` (tf.exe): file contents at a version."""

from __future__ import annotations

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.process.result import ExecutionResult

_MISSING_FILE_ERRORS = (
    "The specified file does not exist at the specified version",  # CLC
    "No file matches",  # tf.exe
)


class GetFileContent(TfvcCommand[str]):
    """Returns the content of ``local_path`` at ``version_spec`` (default: workspace version)."""

    def __init__(
        self,
        server_context: ServerContext | None,
        local_path: str,
        version_spec: str | None = None,
        ignore_file_not_found: bool = False,
    ) -> None:
        parsing.require_string_argument(local_path, "local_path")
        super().__init__(server_context)
        self._local_path = local_path
        self._version_spec = version_spec
        self._ignore_file_not_found = ignore_file_not_found

    def get_arguments(self) -> ArgumentBuilder:
        return self._with_version(self._builder("print").add(self._local_path))

    def get_exe_arguments(self) -> ArgumentBuilder:
        return self._with_version(self._builder("view", is_exe=True).add(self._local_path))

    def _with_version(self, builder: ArgumentBuilder) -> ArgumentBuilder:
        if self._version_spec:
            builder.add_switch_with_value("version", self._version_spec)
        return builder

    def parse_output(self, result: ExecutionResult) -> str:
        if self._ignore_file_not_found and any(
            parsing.has_error(result, pattern) for pattern in _MISSING_FILE_ERRORS
        ):
            return ""

        parsing.process_errors(self.command, result)

        # Splitting drops leading WARN banners; rejoin with the tool's own newline
        lines = parsing.split_into_lines(result.stdout)
        return parsing.get_newline_character(result.stdout).join(lines)
