"""Shared test utilities for tfvc-bridge tests."""

from __future__ import annotations

import asyncio
import os
import stat
import sys
from pathlib import Path

from tfvcbridge.process import ExecOptions, ExecutionResult


def make_result(exit_code: int = 0, stdout: str | None = None, stderr: str | None = None) -> ExecutionResult:
    """Create an ExecutionResult as a command parser would receive it."""
    return ExecutionResult(exit_code=exit_code, stdout=stdout, stderr=stderr)


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process as seen by ProcessPool."""

    def __init__(self, pid: int) -> None:
        self.pid = pid
        self.returncode: int | None = None
        self.killed = False

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    async def wait(self) -> int:
        await asyncio.sleep(0)
        return self.returncode if self.returncode is not None else 0


class FakeSpawner:
    """Spawn function for ProcessPool that records every spawn.

    Set ``gate`` to an asyncio.Event to hold spawns in flight, and
    ``failures`` to a list of exceptions raised by the next spawns.
    """

    def __init__(self) -> None:
        self.processes: list[FakeProcess] = []
        self.calls: list[tuple[str, ExecOptions]] = []
        self.gate: asyncio.Event | None = None
        self.failures: list[BaseException] = []

    async def __call__(self, location: str, options: ExecOptions) -> FakeProcess:
        self.calls.append((location, options))
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.failures:
            raise self.failures.pop(0)
        process = FakeProcess(pid=1000 + len(self.processes))
        self.processes.append(process)
        return process


# Behaves like "tf @": reads one command line from stdin. Named *.exe it
# echoes that line first, like tf.exe does with response files.
_FAKE_TOOL = r'''#!{python}
import os
import sys


def main():
    if len(sys.argv) > 1 and sys.argv[1] == "@":
        line = sys.stdin.readline()
    else:
        line = " ".join(sys.argv[1:])
    is_exe = os.path.basename(sys.argv[0]).lower().endswith(".exe")
    if is_exe:
        sys.stdout.write(line.rstrip("\n") + "\n")

    args = line.split()
    command = args[0] if args else ""
    version = os.environ.get("FAKE_TF_VERSION")
    if "-?" in args:
        if is_exe:
            version = version or "14.102.25619.0"
            print("Microsoft (R) TF - Team Foundation Version Control Tool, Version " + version)
        else:
            version = version or "14.0.3.201603291047"
            print("Team Explorer Everywhere Command Line Client (Version " + version + ")")
        return 0
    if command == "fail":
        sys.stderr.write("An argument error occurred: unknown command\n")
        return 100
    print("cwd=" + os.getcwd())
    print("telemetry=" + os.environ.get("TF_NOTELEMETRY", ""))
    print("language=" + os.environ.get("TF_ADDITIONAL_JAVA_ARGS", ""))
    print("args=" + line.strip())
    return 0


sys.exit(main())
'''


def write_fake_tool(directory: Path, name: str = "tf") -> Path:
    """Write an executable fake TF tool into ``directory`` (POSIX only)."""
    path = directory / name
    path.write_text(_FAKE_TOOL.replace("{python}", sys.executable), encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def output_values(stdout: str) -> dict[str, str]:
    """Parse the fake tool's "key=value" lines."""
    values = {}
    for line in stdout.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            values[key] = value
    return values


def real_path(path: Path | str) -> str:
    return os.path.realpath(str(path))
