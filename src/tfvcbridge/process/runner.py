"""Locating, version-checking and executing the TF tool."""

from __future__ import annotations

import asyncio
import os
import re
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tfvcbridge import messages
from tfvcbridge.errors import MessageOption, TfvcError, TfvcErrorCode
from tfvcbridge.logging import OUTPUT_LOGGER, get_logger
from tfvcbridge.process.options import ExecOptions
from tfvcbridge.process.pool import ProcessPool
from tfvcbridge.process.result import ExecutionResult
from tfvcbridge.process.variant import ToolVariant
from tfvcbridge.version import TfvcVersion

if TYPE_CHECKING:
    from tfvcbridge.commands.arguments import ArgumentBuilder
    from tfvcbridge.config.schema import TfvcConfig

log = get_logger("process")
output = get_logger(OUTPUT_LOGGER)

CLC_MIN_VERSION = "14.0.4"
EXE_MIN_VERSION = "14.102.0"

_PROMPT_SWITCH = re.compile(r"-(?:no)?prompt\b")


@dataclass(frozen=True)
class CommandLine:
    """Resolved location and flavour of the TF tool.

    Attributes:
        path: Full path to the executable.
        min_version: Lowest supported version for this flavour.
        proxy: Optional TFS proxy (only sent to the CLC).
        is_exe: True for tf.exe (batch variant), False for the CLC.
    """

    path: str
    min_version: str
    proxy: str | None = None
    is_exe: bool = False

    @property
    def variant(self) -> ToolVariant:
        return ToolVariant.for_exe(self.is_exe)


class ProcessRunner:
    """Runs TF commands, reusing a pre-spawned process from a ProcessPool."""

    def __init__(self, pool: ProcessPool | None = None) -> None:
        self._pool = pool or ProcessPool()

    @property
    def pool(self) -> ProcessPool:
        return self._pool

    @staticmethod
    def get_command_line(config: TfvcConfig, location: str | None = None) -> CommandLine:
        """Resolve the configured tool location into a CommandLine.

        Args:
            config: TFVC settings (location and proxy).
            location: Explicit path that takes precedence over the config.

        Raises:
            TfvcError: TF_LOCATION_MISSING when nothing is configured,
                TF_NOT_FOUND when the path is not an existing file or symlink.
        """
        log.debug("Using TFS proxy: %s", config.proxy)
        tf_path = location or config.location
        if not tf_path:
            log.warning("TFVC: couldn't find where the TF command lives on disk")
            raise TfvcError(messages.TF_LOCATION_MISSING, TfvcErrorCode.TF_LOCATION_MISSING)

        tf_path = os.path.expanduser(tf_path)
        if not os.path.lexists(tf_path):
            log.warning("TFVC: %s does not exist", tf_path)
            raise TfvcError(messages.TF_MISSING, TfvcErrorCode.TF_NOT_FOUND)
        if not (os.path.isfile(tf_path) or os.path.islink(tf_path)):
            log.warning("TFVC: %s exists but isn't a file or symlink", tf_path)
            raise TfvcError(messages.TF_MISSING, TfvcErrorCode.TF_NOT_FOUND)

        is_exe = os.path.splitext(tf_path)[1].lower() == ".exe"
        return CommandLine(
            path=tf_path,
            min_version=EXE_MIN_VERSION if is_exe else CLC_MIN_VERSION,
            proxy=config.proxy or None,
            is_exe=is_exe,
        )

    @staticmethod
    def check_version(command_line: CommandLine, version: str | None) -> None:
        """Raise TF_MIN_VERSION if ``version`` is below the tool's minimum.

        An empty version (banner not captured) is not an error.
        """
        if not version:
            log.debug("TFVC: check_version called without a version")
            return

        log.debug("TFVC minimum required version: %s", command_line.min_version)
        log.debug("TFVC (tf, tf.cmd, tf.exe) version: %s", version)
        minimum = TfvcVersion.from_string(command_line.min_version)
        current = TfvcVersion.from_string(version)
        if current < minimum:
            log.warning("TFVC %s is less than the min version of %s", version, minimum)
            options = []
            if command_line.is_exe:
                options.append(MessageOption(messages.VS2015_UPDATE, messages.VS2015_UPDATE_URL))
            raise TfvcError(
                f"{messages.TF_VERSION_WARNING}{minimum}",
                TfvcErrorCode.TF_MIN_VERSION,
                message_options=options,
            )

    async def exec(
        self,
        command_line: CommandLine,
        cwd: str | None,
        args: ArgumentBuilder,
        options: ExecOptions | None = None,
    ) -> ExecutionResult:
        """Run one command and capture its exit code and output.

        Args:
            command_line: The resolved tool.
            cwd: Default working directory; a cwd in ``options`` wins.
            args: The command's arguments. A proxy switch is appended for the CLC.
            options: Per-invocation options.
        """
        options = (options or ExecOptions()).with_cwd(cwd)

        if command_line.proxy and not command_line.is_exe:
            args.add_proxy_switch(command_line.proxy)

        display = args.to_string()
        log.debug("TFVC: tf %s", display)
        if not options.suppress_logging:
            output.info("tf %s", display)

        start_time = time.perf_counter()
        try:
            if options.direct:
                result = await self._run_direct(command_line, args, options)
            else:
                process = await self._pool.acquire(command_line.path, options)
                result = await _run_command(
                    args.build_command_line(), process, command_line.is_exe
                )
        except OSError as e:
            raise _spawn_error(e, args.get_command()) from e

        result.duration_ms = (time.perf_counter() - start_time) * 1000
        log.debug(
            "TFVC: %s exit code: %d (duration: %dms)",
            args.get_command(),
            result.exit_code,
            result.duration_ms,
        )
        if not options.suppress_logging:
            output.info(
                "%s exit code: %d (%dms)", args.get_command(), result.exit_code, result.duration_ms
            )
        return result

    async def _run_direct(
        self, command_line: CommandLine, args: ArgumentBuilder, options: ExecOptions
    ) -> ExecutionResult:
        env = os.environ.copy()
        env.update(options.environment_overrides)
        process = await asyncio.create_subprocess_exec(
            command_line.path,
            *args.build(),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=options.cwd,
            env=env,
        )
        stdout_data, stderr_data = await process.communicate()
        return ExecutionResult(
            exit_code=process.returncode if process.returncode is not None else -1,
            stdout=_decode(stdout_data),
            stderr=_decode(stderr_data),
        )

    async def warm(self, command_line: CommandLine, cwd: str | None, options: ExecOptions | None = None) -> None:
        """Spawn the cached process ahead of the first command."""
        options = (options or ExecOptions()).with_cwd(cwd)
        try:
            await self._pool.warm(command_line.path, options)
        except OSError as e:
            raise _spawn_error(e) from e

    async def dispose(self) -> None:
        """Kill the cached process and wait for any in-flight spawn. Idempotent."""
        self._pool.dispose()
        await self._pool.drain()


def _spawn_error(error: OSError, command: str | None = None) -> TfvcError:
    if isinstance(error, FileNotFoundError):
        return TfvcError(
            messages.TF_MISSING, TfvcErrorCode.TF_NOT_FOUND, command=command, cause=error
        )
    wrapped = TfvcError.unknown(error)
    wrapped.command = command
    return wrapped


async def _run_command(
    command_line: str, process: asyncio.subprocess.Process, is_exe: bool
) -> ExecutionResult:
    """Feed one command line to a waiting ``tf @`` process and collect its output."""
    stdout_data, stderr_data = await process.communicate(command_line.encode("utf-8"))
    stdout = _decode(stdout_data)
    if is_exe:
        stdout = strip_echoed_command_line(stdout)
    return ExecutionResult(
        exit_code=process.returncode if process.returncode is not None else -1,
        stdout=stdout,
        stderr=_decode(stderr_data),
    )


def strip_echoed_command_line(stdout: str) -> str:
    """Drop tf.exe's echo of the response-file line.

    tf.exe repeats the command line it read from ``@`` on stdout; everything
    up to the end of the line holding the ``-noprompt``/``-prompt`` switch is
    that echo.
    """
    match = _PROMPT_SWITCH.search(stdout)
    if match is None:
        return stdout
    end = stdout.find("\n", match.end())
    return stdout[end + 1 :] if end >= 0 else ""


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""
