"""TF process execution.

ProcessRunner turns an ArgumentBuilder into an ExecutionResult, either via a
cached ``tf @`` process fed on stdin (ProcessPool) or via direct argv exec.
"""

from tfvcbridge.process.result import ExecutionResult
from tfvcbridge.process.options import ExecOptions
from tfvcbridge.process.variant import ToolVariant
from tfvcbridge.process.pool import ProcessPool, spawn_tf_process
from tfvcbridge.process.runner import (
    CLC_MIN_VERSION,
    EXE_MIN_VERSION,
    CommandLine,
    ProcessRunner,
    strip_echoed_command_line,
)

__all__ = [
    "ExecutionResult",
    "ExecOptions",
    "ToolVariant",
    "ProcessPool",
    "spawn_tf_process",
    "CommandLine",
    "ProcessRunner",
    "strip_echoed_command_line",
    "CLC_MIN_VERSION",
    "EXE_MIN_VERSION",
]
