"""Repository facade: one method per version-control operation.

A Repository binds a workspace root, an optional server context and the
resolved TF tool to the command set. Every call builds a command, runs it
through the ProcessRunner with the repository's environment and parses the
result for whichever tool variant is configured.

Example:
    repo = Repository(TfvcConfig(location="/opt/tee/tf"), "/src/project")
    await repo.check_version()
    changes = await repo.get_status()
    await repo.dispose()
"""

from __future__ import annotations

from typing import TypeVar

from tfvcbridge.commands import (
    Add,
    Checkin,
    Delete,
    FindConflicts,
    FindWorkspace,
    GetFileContent,
    GetInfo,
    GetVersion,
    Rename,
    ResolveConflicts,
    Status,
    Sync,
    TfvcCommand,
    Undo,
)
from tfvcbridge.config.schema import TfvcConfig
from tfvcbridge.context import ServerContext
from tfvcbridge.logging import get_logger
from tfvcbridge.models import (
    AutoResolveType,
    Conflict,
    ItemInfo,
    PendingChange,
    SyncResults,
    Workspace,
)
from tfvcbridge.process import CommandLine, ExecOptions, ProcessPool, ProcessRunner

log = get_logger("repository")

T = TypeVar("T")

# Keep the tool's output in English and its telemetry off
DEFAULT_ENVIRONMENT = {
    "TF_NOTELEMETRY": "TRUE",
    "TF_ADDITIONAL_JAVA_ARGS": "-Duser.country=US -Duser.language=en",
}


class Repository:
    """Version-control operations for one workspace root.

    Args:
        config: Tool location, proxy and workspace restriction.
        workspace_root: Folder the commands run in.
        server_context: Collection URL and credentials, if known.
        pool: Process pool to share between repositories.
        runner: Runner to use instead of building one around ``pool``.
        environment: Extra variables layered over DEFAULT_ENVIRONMENT.
        command_line: Pre-resolved tool; resolved from ``config`` otherwise.

    Raises:
        TfvcError: TF_LOCATION_MISSING / TF_NOT_FOUND when the tool can't be located.
    """

    def __init__(
        self,
        config: TfvcConfig,
        workspace_root: str,
        server_context: ServerContext | None = None,
        *,
        pool: ProcessPool | None = None,
        runner: ProcessRunner | None = None,
        environment: dict[str, str] | None = None,
        command_line: CommandLine | None = None,
    ) -> None:
        self._config = config
        self._root = workspace_root
        self._server_context = server_context
        self._runner = runner or ProcessRunner(pool)
        self._command_line = command_line or ProcessRunner.get_command_line(config)
        self._environment = {**DEFAULT_ENVIRONMENT, **(environment or {})}
        self._version_checked = False

    @property
    def tfvc_location(self) -> str:
        return self._command_line.path

    @property
    def has_context(self) -> bool:
        return self._server_context is not None and bool(self._server_context.collection_url)

    @property
    def is_exe(self) -> bool:
        return self._command_line.is_exe

    @property
    def path(self) -> str:
        return self._root

    @property
    def restrict_workspace(self) -> bool:
        return self._config.restrict_workspace

    @property
    def runner(self) -> ProcessRunner:
        return self._runner

    # -- operations ---------------------------------------------------------

    async def add(self, item_paths: list[str]) -> list[str]:
        return await self.run_command(Add(self._server_context, item_paths))

    async def checkin(
        self,
        files: list[str],
        comment: str | None = None,
        work_item_ids: list[int] | None = None,
    ) -> str:
        """Check in ``files`` and return the new changeset number."""
        return await self.run_command(
            Checkin(self._server_context, files, comment, work_item_ids)
        )

    async def delete(self, item_paths: list[str]) -> list[str]:
        return await self.run_command(Delete(self._server_context, item_paths))

    async def find_conflicts(self, item_path: str | None = None) -> list[Conflict]:
        return await self.run_command(
            FindConflicts(self._server_context, item_path or self._root)
        )

    async def find_workspace(self, local_path: str) -> Workspace:
        return await self.run_command(FindWorkspace(local_path, self.restrict_workspace))

    async def get_info(self, item_paths: list[str]) -> list[ItemInfo]:
        return await self.run_command(GetInfo(self._server_context, item_paths))

    async def get_file_content(self, item_path: str, version_spec: str | None = None) -> str:
        """Content of ``item_path`` at ``version_spec``; "" when the file doesn't exist there."""
        return await self.run_command(
            GetFileContent(
                self._server_context, item_path, version_spec, ignore_file_not_found=True
            )
        )

    async def get_status(self, ignore_files: bool = True) -> list[PendingChange]:
        local_paths = [self._root] if self.restrict_workspace else None
        return await self.run_command(
            Status(self._server_context, ignore_files, local_paths)
        )

    async def rename(self, source_path: str, destination_path: str) -> str:
        return await self.run_command(
            Rename(self._server_context, source_path, destination_path)
        )

    async def resolve_conflicts(
        self, item_paths: list[str], auto_resolve_type: AutoResolveType
    ) -> list[Conflict]:
        return await self.run_command(
            ResolveConflicts(self._server_context, item_paths, auto_resolve_type)
        )

    async def sync(self, item_paths: list[str], recursive: bool = False) -> SyncResults:
        return await self.run_command(Sync(self._server_context, item_paths, recursive))

    async def undo(self, item_paths: list[str]) -> list[str]:
        return await self.run_command(Undo(self._server_context, item_paths))

    async def check_version(self) -> str | None:
        """Verify the tool meets the minimum version, once per repository.

        Returns the detected version, or None if it was already checked.
        """
        if self._version_checked:
            return None
        # A failed check is not repeated
        self._version_checked = True
        version = await self.run_command(GetVersion())
        ProcessRunner.check_version(self._command_line, version)
        return version

    # -- execution ----------------------------------------------------------

    async def run_command(self, command: TfvcCommand[T]) -> T:
        """Run ``command`` with the variant-specific arguments, options and parser."""
        variant = self._command_line.variant
        options = command.options_for(variant).with_environment(self._environment)
        log.debug("TFVC: running %r", command)
        result = await self._runner.exec(
            self._command_line, self._root, command.arguments_for(variant), options
        )
        return command.parse_for(variant, result)

    async def warm(self) -> None:
        """Start the cached tool process so the first command doesn't pay for the spawn."""
        options = ExecOptions(environment_overrides=dict(self._environment))
        await self._runner.warm(self._command_line, self._root, options)

    async def dispose(self) -> None:
        await self._runner.dispose()

    async def __aenter__(self) -> Repository:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.dispose()

    def __repr__(self) -> str:
        variant = "exe" if self.is_exe else "clc"
        return f"<Repository {self._root!r} ({variant}: {self._command_line.path})>"
