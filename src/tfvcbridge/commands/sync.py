"""``tf get``: bring the workspace up to date."""

from __future__ import annotations

import re

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.models import SyncItemResult, SyncResults, SyncType
from tfvcbridge.process.result import ExecutionResult

# Slightly different wording between the CLC and tf.exe
_UP_TO_DATE = re.compile(r"All files( are)? up to date", re.IGNORECASE)

_VERB_TYPES = (
    ("Getting ", SyncType.NEW),
    ("Replacing ", SyncType.UPDATED),
    ("Deleting ", SyncType.DELETED),
)


class Sync(TfvcCommand[SyncResults]):
    """Sample stdout::

        D:\\tmp\\test:
        Getting addFold
        Replacing test3.txt

        D:\\tmp\\test\\addFold:
        Deleting old.txt
        Conflict test_renamed.txt - Unable to perform the get operation because you have a conflicting rename, edit

    Sample stderr (no folder headers)::

        Warning - Unable to refresh testHereRename.txt because you have a pending edit.
        Conflict TestAdd.txt - Unable to perform the get operation because you have a conflicting edit
        new4.txt - Unable to perform the get operation because you have a conflicting rename
        D:\\tmp\\folder1 cannot be deleted because it is not empty.
    """

    def __init__(
        self,
        server_context: ServerContext | None,
        item_paths: list[str],
        recursive: bool = False,
    ) -> None:
        parsing.require_string_array_argument(item_paths, "item_paths")
        super().__init__(server_context)
        self._item_paths = item_paths
        self._recursive = recursive

    def get_arguments(self) -> ArgumentBuilder:
        return self._get(self._builder("get"))

    def get_exe_arguments(self) -> ArgumentBuilder:
        return self._get(self._builder("get", skip_collection=True, is_exe=True))

    def _get(self, builder: ArgumentBuilder) -> ArgumentBuilder:
        builder.add_switch("nosummary").add_all(self._item_paths)
        if self._recursive:
            builder.add_switch("recursive")
        return builder

    def parse_output(self, result: ExecutionResult) -> SyncResults:
        if result.exit_code not in (0, 1):
            parsing.process_errors(self.command, result)

        if result.stdout and _UP_TO_DATE.search(result.stdout):
            return SyncResults()

        items = _item_results(result.stdout)
        errors = _error_results(result.stderr)
        return SyncResults(
            has_conflicts=any(e.sync_type is SyncType.CONFLICT for e in errors),
            has_errors=any(e.sync_type is not SyncType.CONFLICT for e in errors),
            item_results=items + errors,
        )


def _item_results(stdout: str | None) -> list[SyncItemResult]:
    results: list[SyncItemResult] = []
    folder = ""
    for line in parsing.split_into_lines(stdout, True, True):
        if parsing.is_file_path(line):
            folder = line
            continue
        item = parse_sync_line(folder, line)
        if item is not None:
            results.append(item)
    return results


def _error_results(stderr: str | None) -> list[SyncItemResult]:
    # stderr never carries folder headers, so paths stay as printed
    results: list[SyncItemResult] = []
    for line in parsing.split_into_lines(stderr, False, True):
        item = parse_sync_line("", line)
        if item is not None:
            results.append(item)
    return results


def parse_sync_line(folder: str, line: str) -> SyncItemResult | None:
    """Classify one ``get`` output line, or None if it is not recognizable."""
    if not line:
        return None

    for verb, sync_type in _VERB_TYPES:
        if line.startswith(verb):
            return SyncItemResult(
                sync_type, parsing.get_file_path(folder, line[len(verb) :].strip())
            )

    for verb, sync_type in (("Conflict ", SyncType.CONFLICT), ("Warning ", SyncType.WARNING)):
        if line.startswith(verb):
            path, message = _split_message(line[len(verb) :])
            return SyncItemResult(sync_type, parsing.get_file_path(folder, path), message)

    # "filename - message" or "path cannot be deleted because ..."
    if "-" in line:
        path, message = _split_message(line)
        return SyncItemResult(SyncType.ERROR, parsing.get_file_path(folder, path), message)
    index = line.find("cannot be deleted")
    if index >= 0:
        return SyncItemResult(
            SyncType.WARNING,
            parsing.get_file_path(folder, line[:index].strip()),
            line.strip(),
        )
    return None


def _split_message(text: str) -> tuple[str, str]:
    """Split ``path - message`` at the last spaced dash, else the last dash."""
    # padded so "- message" with no path still splits on the spaced form
    padded = f" {text} "
    separator = padded.rfind(" - ")
    if separator >= 0:
        return padded[:separator].strip(), padded[separator + 3 :].strip()
    dash = text.rfind("-")
    if dash >= 0:
        return text[:dash].strip(), text[dash + 1 :].strip()
    return text.strip(), ""
