"""Typed errors raised by the TFVC command engine.

Every failure surfaced to a caller is a TfvcError whose ``error_code`` comes
from the closed TfvcErrorCode taxonomy. The code is derived from tool output
(stderr patterns), never from the exit code alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tfvcbridge import messages


class TfvcErrorCode(str, Enum):
    """Closed set of error codes attached to every TfvcError."""

    ARGUMENT_MISSING = "ArgumentMissing"
    AUTHENTICATION_FAILED = "AuthenticationFailed"
    NOT_A_TFVC_REPOSITORY = "NotATfvcRepository"
    REPOSITORY_NOT_FOUND = "RepositoryNotFound"
    TF_NOT_FOUND = "TfvcNotFound"
    TF_LOCATION_MISSING = "TfvcLocationMissing"
    TF_MIN_VERSION = "TfvcMinVersionWarning"
    FILE_NOT_IN_MAPPINGS = "FileNotInMappings"
    FILE_NOT_IN_WORKSPACE = "FileNotInWorkspace"
    NO_ITEMS_MATCH = "NoItemsMatch"
    NOT_AN_ENU_TF_COMMAND_LINE = "NotAnEnuTfCommandLine"
    INVALID_STATE = "InvalidState"
    UNKNOWN = "UnknownError"


@dataclass(frozen=True)
class MessageOption:
    """An actionable link a presentation layer may render next to an error."""

    title: str
    url: str


class TfvcError(Exception):
    """Error raised for any failed TFVC operation.

    Attributes:
        message: Human-readable message (never empty).
        error_code: Code from the TfvcErrorCode taxonomy.
        stdout: Raw tool stdout, when the failure came from a tool run.
        stderr: Raw tool stderr, when the failure came from a tool run.
        exit_code: Tool exit code, when known.
        command: The command verb that failed (e.g. "checkin").
        cause: Underlying exception for failures below the tool boundary.
        message_options: Links with remediation guidance.
    """

    def __init__(
        self,
        message: str | None = None,
        error_code: TfvcErrorCode = TfvcErrorCode.UNKNOWN,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
        exit_code: int | None = None,
        command: str | None = None,
        cause: BaseException | None = None,
        message_options: list[MessageOption] | None = None,
    ) -> None:
        if not message and cause is not None:
            message = str(cause)
        self.message = message or messages.TF_EXEC_FAILED
        self.error_code = error_code
        self.stdout = stdout
        self.stderr = stderr
        self.exit_code = exit_code
        self.command = command
        self.cause = cause
        self.message_options = message_options or []
        super().__init__(self.message)

    @classmethod
    def argument_missing(cls, name: str) -> TfvcError:
        return cls(
            messages.ARGUMENT_REQUIRED.format(name=name),
            TfvcErrorCode.ARGUMENT_MISSING,
        )

    @classmethod
    def invalid_state(cls) -> TfvcError:
        return cls(messages.INVALID_STATE, TfvcErrorCode.INVALID_STATE)

    @classmethod
    def unknown(cls, cause: BaseException) -> TfvcError:
        return cls(str(cause), TfvcErrorCode.UNKNOWN, cause=cause)

    def details(self) -> str:
        """Multi-line diagnostic dump (message plus whatever the tool produced)."""
        parts = [self.message, f"  error code: {self.error_code.value}"]
        if self.command:
            parts.append(f"  command: {self.command}")
        if self.exit_code is not None:
            parts.append(f"  exit code: {self.exit_code}")
        if self.stdout:
            parts.append(f"  stdout: {self.stdout.strip()}")
        if self.stderr:
            parts.append(f"  stderr: {self.stderr.strip()}")
        if self.cause is not None:
            parts.append(f"  cause: {self.cause!r}")
        return "\n".join(parts)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"<TfvcError {self.error_code.value}: {self.message!r}>"
