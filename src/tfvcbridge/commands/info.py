"""``tf info``: local and server properties of items."""

from __future__ import annotations

from tfvcbridge import messages
from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.errors import TfvcError, TfvcErrorCode
from tfvcbridge.models import ItemInfo
from tfvcbridge.process.result import ExecutionResult

# Labels are prefixed with "server " once the server section starts
_PROPERTIES = {
    "server path": "server_item",
    "local path": "local_item",
    "server changeset": "server_version",
    "changeset": "local_version",
    "change": "change",
    "type": "type",
    "server lock": "lock",
    "server lock owner": "lock_owner",
    "server deletion id": "deletion_id",
    "server last modified": "last_modified",
    "server file type": "file_type",
    "server size": "file_size",
}


class GetInfo(TfvcCommand[list[ItemInfo]]):
    """One ItemInfo per requested path.

    Sample output::

        Local information:
        Local path:  D:\\tmp\\TFVC_1\\build.xml
        Server path: $/TFVC_1/build.xml
        Changeset:   18
        Change:      none
        Type:        file
        Server information:
        Server path:   $/TFVC_1/build.xml
        Changeset:     18
        Deletion ID:   0
        Lock:          none
        Lock owner:
        Last modified: Nov 18, 2016 11:10:20 AM
        Type:          file
        File type:     windows-1252
        Size:          1385

    A path the tool knows nothing about produces a "No items match" line
    instead of a section. If no item has a local path at all, NO_ITEMS_MATCH is
    raised even though the tool exited with 0.
    """

    def __init__(self, server_context: ServerContext | None, item_paths: list[str]) -> None:
        parsing.require_string_array_argument(item_paths, "item_paths")
        super().__init__(server_context)
        self._item_paths = item_paths

    def get_arguments(self) -> ArgumentBuilder:
        return self._builder("info").add_all(self._item_paths)

    def get_exe_arguments(self) -> ArgumentBuilder:
        return self._builder("info", skip_collection=True).add_all(self._item_paths)

    def parse_output(self, result: ExecutionResult) -> list[ItemInfo]:
        parsing.process_errors(self.command, result)

        items: list[ItemInfo] = []
        if not result.stdout:
            return items

        mode = ""  # "" for local properties, "server " for server properties
        current: ItemInfo | None = None
        for line in parsing.split_into_lines(result.stdout):
            if not line.strip():
                continue
            lowered = line.lower()
            if lowered.startswith("local information:") or lowered.startswith("no items match"):
                mode = ""
                if current is not None:
                    items.append(current)
                current = ItemInfo()
            elif lowered.startswith("server information:"):
                mode = "server "
            else:
                colon = line.find(":")
                if current is None or colon <= 0:
                    continue
                name = _PROPERTIES.get(mode + line[:colon].strip().lower())
                if name:
                    setattr(current, name, line[colon + 1 :].strip())

        if current is not None:
            items.append(current)

        if items and all(not item.local_item for item in items):
            raise TfvcError(
                messages.NO_ITEMS_MATCH,
                TfvcErrorCode.NO_ITEMS_MATCH,
                stdout=result.stdout,
                stderr=result.stderr,
                exit_code=result.exit_code,
                command=self.command,
            )
        return items
