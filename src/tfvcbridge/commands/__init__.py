"""TF verbs: argument building and output parsing for both tool variants."""

from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.commands.add import Add
from tfvcbridge.commands.checkin import Checkin
from tfvcbridge.commands.delete import Delete
from tfvcbridge.commands.file_content import GetFileContent
from tfvcbridge.commands.find_conflicts import FindConflicts
from tfvcbridge.commands.find_workspace import FindWorkspace
from tfvcbridge.commands.get_version import GetVersion
from tfvcbridge.commands.info import GetInfo
from tfvcbridge.commands.rename import Rename
from tfvcbridge.commands.resolve_conflicts import ResolveConflicts
from tfvcbridge.commands.status import Status
from tfvcbridge.commands.sync import Sync
from tfvcbridge.commands.undo import Undo

__all__ = [
    "ArgumentBuilder",
    "TfvcCommand",
    "Add",
    "Checkin",
    "Delete",
    "GetFileContent",
    "FindConflicts",
    "FindWorkspace",
    "GetVersion",
    "GetInfo",
    "Rename",
    "ResolveConflicts",
    "Status",
    "Sync",
    "Undo",
]
