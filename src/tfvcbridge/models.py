"""Typed results produced by TFVC command parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ConflictType(str, Enum):
    """Kind of conflict reported by ``resolve -preview``."""

    CONTENT = "content"
    RENAME = "rename"
    DELETE = "delete"
    DELETE_TARGET = "deleteTarget"
    NAME_AND_CONTENT = "nameAndContent"
    MERGE = "merge"
    RESOLVED = "resolved"


class AutoResolveType(Enum):
    """Resolution strategies accepted by ``resolve -auto:<name>``."""

    AUTO_MERGE = "AutoMerge"
    TAKE_THEIRS = "TakeTheirs"
    KEEP_YOURS = "KeepYours"
    OVERWRITE_LOCAL = "OverwriteLocal"
    DELETE_CONFLICT = "DeleteConflict"
    KEEP_YOURS_RENAME_THEIRS = "KeepYoursRenameTheirs"


class SyncType(str, Enum):
    """Outcome of one item in a ``get``."""

    UPDATED = "updated"
    NEW = "new"
    DELETED = "deleted"
    CONFLICT = "conflict"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class PendingChange:
    """A staged change, or a detected one when ``is_candidate`` is set."""

    change_type: str | None = None
    computer: str | None = None
    date: str | None = None
    local_item: str | None = None
    source_item: str | None = None
    lock: str | None = None
    owner: str | None = None
    server_item: str | None = None
    version: str | None = None
    workspace: str | None = None
    is_candidate: bool = False


@dataclass
class ItemInfo:
    """Local and server properties of one item, as reported by ``info``."""

    server_item: str | None = None
    local_item: str | None = None
    local_version: str | None = None
    server_version: str | None = None
    change: str | None = None
    type: str | None = None
    lock: str | None = None
    lock_owner: str | None = None
    deletion_id: str | None = None
    last_modified: str | None = None
    file_type: str | None = None
    file_size: str | None = None


@dataclass
class WorkspaceMapping:
    """A working-folder mapping. Cloaked mappings have no local path."""

    server_path: str
    local_path: str | None = None
    cloaked: bool = False


@dataclass
class Workspace:
    """Workspace descriptor parsed from ``workfold`` output."""

    name: str
    server: str
    default_team_project: str
    mappings: list[WorkspaceMapping] = field(default_factory=list)
    owner: str | None = None
    computer: str | None = None
    comment: str | None = None


@dataclass
class Conflict:
    local_path: str
    type: ConflictType
    message: str | None = None


@dataclass
class SyncItemResult:
    sync_type: SyncType
    item_path: str
    message: str | None = None


@dataclass
class SyncResults:
    """Aggregate result of a ``get``; conflicts/errors come from stderr."""

    has_errors: bool = False
    has_conflicts: bool = False
    item_results: list[SyncItemResult] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"<SyncResults {len(self.item_results)} items, "
            f"conflicts={self.has_conflicts}, errors={self.has_errors}>"
        )
