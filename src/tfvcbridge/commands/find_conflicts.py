"""``tf resolve -preview``: list conflicts without resolving them."""

from __future__ import annotations

import re

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.models import Conflict, ConflictType
from tfvcbridge.process.result import ExecutionResult

# First match wins
_CONFLICT_PHRASES: tuple[tuple[re.Pattern[str], ConflictType], ...] = (
    # tf.exe's ambiguous wording; treated as both name and content
    (re.compile(r"You have a conflicting pending change", re.I), ConflictType.NAME_AND_CONTENT),
    (re.compile(r"A newer version exists on the server", re.I), ConflictType.NAME_AND_CONTENT),
    (re.compile(r"The item name and content have changed", re.I), ConflictType.NAME_AND_CONTENT),
    (re.compile(r"The item name has changed", re.I), ConflictType.RENAME),
    (re.compile(r"The source and target both have changes", re.I), ConflictType.MERGE),
    (re.compile(r"The item has already been deleted", re.I), ConflictType.DELETE),
    (re.compile(r"The item has been deleted in the source branch", re.I), ConflictType.DELETE),
    (re.compile(r"The item has been deleted from the server", re.I), ConflictType.DELETE),
    (re.compile(r"The item has been deleted in the target branch", re.I), ConflictType.DELETE_TARGET),
)

JAVA_OPTIONS_BANNER = "_JAVA_OPTIONS"


def classify_conflict(line: str) -> ConflictType:
    for pattern, conflict_type in _CONFLICT_PHRASES:
        if pattern.search(line):
            return conflict_type
    return ConflictType.CONTENT


class FindConflicts(TfvcCommand[list[Conflict]]):
    """Conflicts under ``item_path``, one per "<path>: <description>" line.

    The tool writes the conflict list to stderr. When a ``_JAVA_OPTIONS``
    banner is printed and there are no conflicts, the real output moves to
    stdout instead.
    """

    def __init__(self, server_context: ServerContext | None, item_path: str) -> None:
        parsing.require_string_argument(item_path, "item_path")
        super().__init__(server_context)
        self._item_path = item_path

    def get_arguments(self) -> ArgumentBuilder:
        return self._preview(self._builder("resolve"))

    def get_exe_arguments(self) -> ArgumentBuilder:
        return self._preview(self._builder("resolve", skip_collection=True))

    def _preview(self, builder: ArgumentBuilder) -> ArgumentBuilder:
        return builder.add(self._item_path).add_switch("recursive").add_switch("preview")

    def parse_output(self, result: ExecutionResult) -> list[Conflict]:
        if result.exit_code not in (0, 1):
            parsing.process_errors(self.command, result)

        text = result.stderr
        if text and JAVA_OPTIONS_BANNER in text and result.stdout:
            text = result.stdout

        conflicts: list[Conflict] = []
        for line in parsing.split_into_lines(text, False, True):
            if JAVA_OPTIONS_BANNER in line:
                continue
            colon = line.rfind(":")
            if colon < 0:
                continue
            conflicts.append(
                Conflict(local_path=line[:colon], type=classify_conflict(line), message=line)
            )
        return conflicts
