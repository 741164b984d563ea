"""``tf status``: list pending and candidate changes."""

from __future__ import annotations

import os
from typing import Any

from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.context import ServerContext
from tfvcbridge.models import PendingChange
from tfvcbridge.process.result import ExecutionResult

# Labels used by ``-format:detailed`` mapped to PendingChange fields
_DETAILED_PROPERTIES = {
    "local item": "local_item",
    "source item": "source_item",
    "user": "owner",
    "date": "date",
    "lock": "lock",
    "change": "change_type",
    "workspace": "workspace",
}


class Status(TfvcCommand[list[PendingChange]]):
    """Pending changes, followed by candidate (detected, not yet pended) changes.

    The CLC is asked for ``-format:xml``. tf.exe has no usable XML mode here,
    so it is asked for ``-format:detailed`` and the text records are parsed.
    """

    def __init__(
        self,
        server_context: ServerContext | None,
        ignore_folders: bool = True,
        local_paths: list[str] | None = None,
    ) -> None:
        super().__init__(server_context)
        self._ignore_folders = ignore_folders
        self._local_paths = local_paths or []

    def get_arguments(self) -> ArgumentBuilder:
        return (
            self._builder("status")
            .add_switch_with_value("format", "xml")
            .add_switch("recursive")
            .add_all(self._local_paths)
        )

    def get_exe_arguments(self) -> ArgumentBuilder:
        return (
            self._builder("status")
            .add_switch_with_value("format", "detailed")
            .add_switch("recursive")
            .add_all(self._local_paths)
        )

    def parse_output(self, result: ExecutionResult) -> list[PendingChange]:
        """Parse ``-format:xml`` output.

        Sample::

            <?xml version="1.0" encoding="utf-8"?>
            <status>
            <pending-changes>
            <pending-change server-item="$/proj/a.java" version="217" change-type="rename" .../>
            </pending-changes>
            <candidate-pending-changes>
            <pending-change server-item="$/proj/test.txt" version="0" change-type="add" .../>
            </candidate-pending-changes>
            </status>
        """
        parsing.process_errors(self.command, result)

        changes: list[PendingChange] = []
        tree = parsing.parse_xml(parsing.trim_to_xml(result.stdout))
        status = (tree or {}).get("status")
        if not status:
            return changes

        for section, is_candidate in (("pendingchanges", False), ("candidatependingchanges", True)):
            for group in status.get(section, []):
                for entry in group.get("pendingchange", []):
                    change = _from_attributes(entry.get("$", {}), is_candidate)
                    self._add(changes, change)
        return changes

    def parse_exe_output(self, result: ExecutionResult) -> list[PendingChange]:
        """Parse ``-format:detailed`` output.

        Sample::

            $/jeyou/README.md;C19
            User       : Jeff Young (TFS)
            Change     : edit
            Local item : [JEYOU-DEV00] C:\\repos\\README.md

            ----------------------------------------
            Detected Changes:
            ----------------------------------------
            $/jeyou/therightstuff.txt
            Change     : add
            Local item : [JEYOU-DEV00] C:\\repos\\therightstuff.txt

            1 change(s), 0 detected change(s)
        """
        parsing.process_errors(self.command, result)

        changes: list[PendingChange] = []
        if not result.stdout:
            return changes

        detected = False
        current: PendingChange | None = None
        for line in parsing.split_into_lines(result.stdout, True, False):
            if line.find(" detected change(s)") > 0:
                break

            if not line.strip():
                if current is not None:
                    self._add(changes, current)
                    current = None
                continue

            if line.startswith("--------") or line.lower().startswith("detected changes:"):
                detected = True
                continue

            if line.startswith("$/"):
                if current is not None:
                    self._add(changes, current)
                server_item, _, version = line.partition(";C")
                current = PendingChange(
                    server_item=server_item,
                    version=version or "0",
                    is_candidate=detected,
                )
                continue

            colon = line.find(":")
            if current is None or colon <= 0:
                continue
            name = _DETAILED_PROPERTIES.get(line[:colon].strip().lower())
            if not name:
                continue
            value = line[colon + 1 :].strip()
            if name == "local_item" and value.startswith("["):
                # "[COMPUTER] C:\path\file"
                computer, _, value = value.partition("] ")
                current.computer = computer[1:]
            setattr(current, name, value)

        if current is not None:
            self._add(changes, current)
        return changes

    def _add(self, changes: list[PendingChange], change: PendingChange) -> None:
        # Deleted items no longer exist locally; they are always kept
        if self._ignore_folders and change.local_item and os.path.isdir(change.local_item):
            return
        changes.append(change)


def _from_attributes(attributes: dict[str, Any], is_candidate: bool) -> PendingChange:
    return PendingChange(
        change_type=attributes.get("changetype"),
        computer=attributes.get("computer"),
        date=attributes.get("date"),
        local_item=attributes.get("localitem"),
        source_item=attributes.get("sourceitem"),
        lock=attributes.get("lock"),
        owner=attributes.get("owner"),
        server_item=attributes.get("serveritem"),
        version=attributes.get("version"),
        workspace=attributes.get("workspace"),
        is_candidate=is_candidate,
    )
