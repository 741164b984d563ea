"""Stateless helpers shared by every command parser.

The TF tool speaks human-readable text: warning banners above the payload,
"folder header" lines followed by bare file names, and error conditions
that are only distinguishable by their stderr wording. These helpers turn
that text into lines, paths, XML trees and typed errors.
"""

from __future__ import annotations

import os
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any

from tfvcbridge import messages
from tfvcbridge.errors import TfvcError, TfvcErrorCode
from tfvcbridge.logging import get_logger
from tfvcbridge.process.result import ExecutionResult

log = get_logger("commands")


@dataclass(frozen=True)
class _ErrorPattern:
    pattern: re.Pattern[str]
    code: TfvcErrorCode
    message: str | None = None
    in_stdout: bool = False
    include_output: bool = False


# Order matters: the first matching pattern decides the error code.
_ERROR_PATTERNS: tuple[_ErrorPattern, ...] = (
    _ErrorPattern(re.compile(r"Authentication failed"), TfvcErrorCode.AUTHENTICATION_FAILED),
    _ErrorPattern(
        re.compile(
            r"workspace could not be determined|Unable to determine the source control server",
            re.IGNORECASE,
        ),
        TfvcErrorCode.NOT_A_TFVC_REPOSITORY,
        messages.NO_WORKSPACE_MAPPINGS,
    ),
    _ErrorPattern(
        re.compile(r"Repository not found", re.IGNORECASE),
        TfvcErrorCode.REPOSITORY_NOT_FOUND,
    ),
    _ErrorPattern(
        re.compile(r"project collection URL to use could not be determined", re.IGNORECASE),
        TfvcErrorCode.NOT_A_TFVC_REPOSITORY,
        messages.NOT_A_TFVC_REPOSITORY,
    ),
    _ErrorPattern(
        re.compile(r"Access denied connecting.*authenticating as OAuth", re.IGNORECASE),
        TfvcErrorCode.AUTHENTICATION_FAILED,
        messages.TOKEN_NOT_ALL_SCOPES,
    ),
    _ErrorPattern(
        re.compile(r"'java' is not recognized as an internal or external command", re.IGNORECASE),
        TfvcErrorCode.TF_NOT_FOUND,
        messages.TF_INITIALIZE_FAILURE,
    ),
    # The JVM reports heap reservation failures on stdout
    _ErrorPattern(
        re.compile(r"Error occurred during initialization of VM", re.IGNORECASE),
        TfvcErrorCode.TF_NOT_FOUND,
        messages.TF_INITIALIZE_FAILURE,
        in_stdout=True,
        include_output=True,
    ),
    _ErrorPattern(
        re.compile(r"There is no working folder mapping", re.IGNORECASE),
        TfvcErrorCode.FILE_NOT_IN_MAPPINGS,
    ),
    _ErrorPattern(
        re.compile(
            r"could not be found in your workspace, or you do not have permission to access it\.",
            re.IGNORECASE,
        ),
        TfvcErrorCode.FILE_NOT_IN_WORKSPACE,
    ),
)


# ---------------------------------------------------------------------------
# Argument guards
# ---------------------------------------------------------------------------


def require_argument(argument: Any, name: str) -> None:
    if argument is None or argument == "":
        raise TfvcError.argument_missing(name)


def require_string_argument(argument: str | None, name: str) -> None:
    if not argument or not argument.strip():
        raise TfvcError.argument_missing(name)


def require_string_array_argument(argument: list[str] | None, name: str) -> None:
    if not argument:
        raise TfvcError.argument_missing(name)


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------


def has_error(result: ExecutionResult | None, pattern: str) -> bool:
    """True if stderr matches ``pattern`` (case-insensitive)."""
    if result is None or not result.stderr or not pattern:
        return False
    return re.search(pattern, result.stderr, re.IGNORECASE) is not None


def process_errors(
    command: str, result: ExecutionResult, show_first_raw_error: bool = False
) -> None:
    """Raise a TfvcError if ``result`` carries a non-zero exit code.

    The error code is chosen by the first stderr (or, for JVM start-up
    failures, stdout) pattern that matches. Without a match the code is
    UNKNOWN and the message is either the raw tool output (when
    ``show_first_raw_error`` is set) or a generic failure string.
    """
    if not result.exit_code:
        return

    code = TfvcErrorCode.UNKNOWN
    message: str | None = None
    for entry in _ERROR_PATTERNS:
        text = result.stdout if entry.in_stdout else result.stderr
        if text and entry.pattern.search(text):
            code = entry.code
            message = entry.message
            if entry.include_output:
                message = f"{message} ({_flatten(text)})"
            break
    else:
        if show_first_raw_error:
            message = (result.stderr or "").strip() or (result.stdout or "").strip() or None

    if result.stderr:
        log.debug("TFVC errors (via stderr): %s", result.stderr)
    if result.stdout:
        log.debug("TFVC errors (via stdout): %s", result.stdout)

    raise TfvcError(
        message,
        code,
        stdout=result.stdout,
        stderr=result.stderr,
        exit_code=result.exit_code,
        command=command,
    )


def _flatten(text: str) -> str:
    return " ".join(line.strip() for line in text.splitlines() if line.strip())


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def get_changeset_number(stdout: str | None) -> str:
    """Extract "23" from "Changeset #23 checked in." (empty string if absent)."""
    if not stdout:
        return ""
    prefix = "Changeset #"
    start = stdout.find(prefix)
    if start < 0:
        return ""
    start += len(prefix)
    end = stdout.find(" ", start)
    if end > start:
        return stdout[start:end]
    return ""


def get_newline_character(stdout: str | None) -> str:
    if stdout and "\r\n" in stdout:
        return "\r\n"
    return "\n"


def split_into_lines(
    stdout: str | None, skip_warnings: bool = True, filter_empty_lines: bool = False
) -> list[str]:
    """Split tool output into lines.

    Args:
        stdout: Raw output; None or "" yields [].
        skip_warnings: Drop the leading run of lines starting with "WARN".
        filter_empty_lines: Drop empty and whitespace-only lines.
    """
    if not stdout:
        return []
    lines = stdout.replace("\r\n", "\n").split("\n")

    if skip_warnings:
        index = 0
        while index < len(lines) and lines[index].startswith("WARN"):
            index += 1
        lines = lines[index:]

    if filter_empty_lines:
        lines = [line for line in lines if line.strip()]

    return lines


def trim_to_xml(text: str | None) -> str | None:
    """Cut banner text before ``<?xml`` and anything after the last ``>``."""
    if text:
        start = text.find("<?xml")
        end = text.rfind(">")
        if start >= 0 and end > start:
            return text[start : end + 1]
    return text


def parse_xml(xml: str | None) -> dict[str, Any] | None:
    """Parse XML into nested dicts with normalized names.

    Tag and attribute names lose hyphens and are lower-cased, so
    ``<pending-change change-type="add"/>`` is reached as
    ``node["pendingchange"][0]["$"]["changetype"]``. Attributes live under
    ``"$"``, stripped text under ``"_"`` and children are lists keyed by tag.
    """
    if not xml:
        return None
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as e:
        raise TfvcError(f"Unable to parse TFVC output as XML: {e}", cause=e) from e
    return {_normalize_name(root.tag): _element_to_dict(root)}


def _element_to_dict(element: ET.Element) -> dict[str, Any]:
    node: dict[str, Any] = {}
    if element.attrib:
        node["$"] = {_normalize_name(k): v for k, v in element.attrib.items()}
    text = (element.text or "").strip()
    if text:
        node["_"] = text
    for child in element:
        node.setdefault(_normalize_name(child.tag), []).append(_element_to_dict(child))
    return node


def _normalize_name(name: str) -> str:
    return name.replace("-", "").lower()


# ---------------------------------------------------------------------------
# Folder header + file name reconstruction
# ---------------------------------------------------------------------------


def is_file_path(line: str | None) -> bool:
    """True for folder header lines such as ``folder1\\folder2:`` or ``D:\\tmp:``."""
    return bool(line) and line.endswith(":")


def get_file_path(
    file_path: str | None, filename: str | None, path_root: str | None = None
) -> str | None:
    """Join a folder header and a bare file name into a path.

    Args:
        file_path: Header line, optionally ending in ":".
        filename: Bare file name listed under the header.
        path_root: Root for relative headers.
    """
    folder_path = file_path
    if folder_path and folder_path.endswith(":"):
        folder_path = folder_path[:-1]

    if folder_path and not os.path.isabs(folder_path) and path_root:
        folder_path = os.path.join(path_root, folder_path)
    elif not folder_path and path_root:
        folder_path = path_root

    if folder_path and filename:
        return os.path.join(folder_path, filename)
    if filename:
        return filename
    return folder_path


def collect_file_paths(lines: list[str], file_from_line=None) -> list[str]:
    """Walk header/file-name lines and return the reconstructed paths.

    ``file_from_line`` extracts the file name from a listing line (default:
    the line itself) and may return None to skip the line.
    """
    paths: list[str] = []
    header = ""
    for line in lines:
        if is_file_path(line):
            header = line
        elif line:
            filename = file_from_line(line) if file_from_line else line
            if filename:
                paths.append(get_file_path(header, filename))
    return paths
