"""Read the TF tool's version from its help banner."""

from __future__ import annotations

import re

from tfvcbridge import messages
from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.errors import MessageOption, TfvcError, TfvcErrorCode
from tfvcbridge.process.result import ExecutionResult

# "Team Explorer Everywhere Command Line Client (Version 14.0.3.201603291047)"
_CLC_VERSION = re.compile(r"(.*\(version )([.\d]*)(\).*)", re.IGNORECASE)
# "Microsoft (R) TF - Team Foundation Version Control Tool, Version 14.102.25619.0"
_EXE_VERSION = re.compile(r"(.*version )([.\d]*)(.*)", re.IGNORECASE)


class GetVersion(TfvcCommand[str]):
    """Runs the harmless ``add -?`` and extracts the version from the first line.

    Returns "" when the tool printed nothing. Output that is not a recognizable
    banner (another locale, another tool) raises NOT_AN_ENU_TF_COMMAND_LINE.
    """

    def get_arguments(self) -> ArgumentBuilder:
        return ArgumentBuilder("add").add_switch("?")

    def parse_output(self, result: ExecutionResult) -> str:
        return self._parse(result, _CLC_VERSION)

    def parse_exe_output(self, result: ExecutionResult) -> str:
        return self._parse(result, _EXE_VERSION)

    def _parse(self, result: ExecutionResult, pattern: re.Pattern[str]) -> str:
        parsing.process_errors(self.command, result)

        lines = parsing.split_into_lines(result.stdout, True, True)
        if not lines:
            return ""

        match = pattern.match(lines[0])
        if match is None or not match.group(2):
            raise TfvcError(
                messages.NOT_AN_ENU_TF_COMMAND_LINE,
                TfvcErrorCode.NOT_AN_ENU_TF_COMMAND_LINE,
                stdout=result.stdout,
                stderr=result.stderr,
                exit_code=result.exit_code,
                command=self.command,
                message_options=[MessageOption(messages.MORE_DETAILS, messages.NON_ENU_TF_EXE_URL)],
            )
        return match.group(2)
