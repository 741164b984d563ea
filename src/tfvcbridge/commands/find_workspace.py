"""``tf workfold``: find the workspace that maps a local folder."""

from __future__ import annotations

import os

from tfvcbridge import messages
from tfvcbridge.commands import parsing
from tfvcbridge.commands.arguments import ArgumentBuilder
from tfvcbridge.commands.base import TfvcCommand
from tfvcbridge.errors import MessageOption, TfvcError, TfvcErrorCode
from tfvcbridge.models import Workspace, WorkspaceMapping
from tfvcbridge.process.options import ExecOptions
from tfvcbridge.process.result import ExecutionResult


class FindWorkspace(TfvcCommand[Workspace]):
    """Workspace name, collection and mappings for ``local_path``.

    Sample output::

        Access denied connecting to TFS server https://account.visualstudio.com/ (...)  <- optional
        ===============================================================================
        Workspace:  MyNewWorkspace2
        Collection: http://java-tfs2015:8081/tfs/
        $/tfsTest_01: D:\\tmp\\test
        (cloaked) $/tfsTest_01/hidden:

    tf.exe prints "Workspace : name (owner)" instead of "Workspace:  name".

    With ``restrict_workspace`` the default team project comes from the
    mapping that contains ``local_path``, not simply the first mapping.
    """

    def __init__(self, local_path: str, restrict_workspace: bool = False) -> None:
        parsing.require_string_argument(local_path, "local_path")
        super().__init__(None)
        self._local_path = local_path
        self._restrict_workspace = restrict_workspace

    def get_arguments(self) -> ArgumentBuilder:
        builder = ArgumentBuilder("workfold")
        if self._restrict_workspace:
            builder.add(self._local_path)
        return builder

    def get_options(self) -> ExecOptions:
        return ExecOptions(cwd=self._local_path)

    def parse_output(self, result: ExecutionResult) -> Workspace:
        parsing.process_errors(self.command, result)

        name = ""
        collection_url = ""
        mappings: list[WorkspaceMapping] = []
        past_banner = False
        for line in parsing.split_into_lines(result.stdout):
            if not line:
                continue
            if line.startswith("=========="):
                past_banner = True
                continue
            if not past_banner:
                continue

            if line.startswith("Workspace:") or line.startswith("Workspace :"):
                name = _get_value(line)
            elif line.startswith("Collection:") or line.startswith("Collection :"):
                collection_url = _get_value(line)
            else:
                mapping = _get_mapping(line)
                if mapping is not None:
                    mappings.append(mapping)

        if not mappings:
            raise TfvcError(
                messages.NO_WORKSPACE_MAPPINGS,
                TfvcErrorCode.NOT_A_TFVC_REPOSITORY,
                stdout=result.stdout,
                stderr=result.stderr,
                exit_code=result.exit_code,
                command=self.command,
            )

        # Mappings without a workspace label: the tool is not speaking English
        if not name:
            raise TfvcError(
                messages.NOT_AN_ENU_TF_COMMAND_LINE,
                TfvcErrorCode.NOT_AN_ENU_TF_COMMAND_LINE,
                stdout=result.stdout,
                stderr=result.stderr,
                exit_code=result.exit_code,
                command=self.command,
                message_options=[MessageOption(messages.MORE_DETAILS, messages.NON_ENU_TF_EXE_URL)],
            )

        return Workspace(
            name=name,
            server=collection_url,
            default_team_project=self._team_project(mappings),
            mappings=mappings,
        )

    def parse_exe_output(self, result: ExecutionResult) -> Workspace:
        workspace = self.parse_output(result)
        # "jeyou-dev00-tfexe-OnPrem (Jeff Young (TFS))"
        paren = workspace.name.find(" (")
        if paren > 0:
            workspace.name = workspace.name[:paren]
        return workspace

    def _team_project(self, mappings: list[WorkspaceMapping]) -> str:
        if self._restrict_workspace:
            # The deepest mapping that contains the folder wins
            current = _normalize(self._local_path)
            best: WorkspaceMapping | None = None
            for mapping in mappings:
                if mapping.cloaked or not mapping.local_path:
                    continue
                root = _normalize(mapping.local_path)
                if current == root or current.startswith(root.rstrip("/") + "/"):
                    if best is None or len(root) > len(_normalize(best.local_path)):
                        best = mapping
            if best is not None:
                return get_team_project(best.server_path)
        return get_team_project(mappings[0].server_path)


def get_team_project(server_path: str) -> str:
    """First folder of a server path ("$/Proj/src" -> "Proj"), or ""."""
    if server_path and server_path.startswith("$/") and len(server_path) > 2:
        end = server_path.find("/", 2)
        return server_path[2:end] if end > 0 else server_path[2:]
    return ""


def _get_value(line: str) -> str:
    index = line.find(":")
    if 0 <= index < len(line) - 1:
        return line[index + 1 :].strip()
    return ""


def _get_mapping(line: str) -> WorkspaceMapping | None:
    """Parse "$/TFVC_11/folder1: D:\\tmp\\folder1" or "(cloaked) $/TFVC_11/folder1:"."""
    cloaked = line.strip().lower().startswith("(cloaked)")
    end = line.find(":")
    if end < 0:
        return None
    start = line.find(")") + 1 if cloaked else 0
    server_path = line[start:end].strip()
    if not server_path.startswith("$/"):
        return None
    local_path = line[end + 1 :].strip()
    if not cloaked and not local_path:
        return None
    return WorkspaceMapping(
        server_path=server_path,
        local_path=local_path or None,
        cloaked=cloaked,
    )


def _normalize(path: str) -> str:
    return os.path.normpath(path).replace("\\", "/").lower()
