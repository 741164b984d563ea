"""Raw result of one TF tool invocation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ExecutionResult:
    """Exit code and captured streams of one tool run.

    Attributes:
        exit_code: Process exit code. 0 success, 1 partial/advisory and
            100 failure, with per-command exceptions.
        stdout: Captured stdout (already corrected for the EXE echo quirk).
        stderr: Captured stderr.
        duration_ms: Wall time of the invocation in milliseconds.
    """

    exit_code: int
    stdout: str | None = None
    stderr: str | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        """True if the tool exited with code 0."""
        return self.exit_code == 0

    def __repr__(self) -> str:
        if self.success:
            lines = self.stdout.count("\n") + 1 if self.stdout else 0
            return f"<ExecutionResult ok, {lines} lines>"
        return f"<ExecutionResult exit={self.exit_code}>"
