"""Tests for the shared output parsing helpers."""

from __future__ import annotations

import os

import pytest

from tfvcbridge import messages
from tfvcbridge.commands import parsing
from tfvcbridge.errors import TfvcError, TfvcErrorCode
from tests.utils import make_result


class TestArgumentGuards:
    """Tests for require_* guards."""

    def test_require_argument(self):
        parsing.require_argument(0, "count")
        with pytest.raises(TfvcError) as exc_info:
            parsing.require_argument(None, "count")
        assert exc_info.value.error_code == TfvcErrorCode.ARGUMENT_MISSING
        assert "count" in exc_info.value.message

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_require_string_argument(self, value):
        with pytest.raises(TfvcError):
            parsing.require_string_argument(value, "path")

    @pytest.mark.parametrize("value", [None, []])
    def test_require_string_array_argument(self, value):
        with pytest.raises(TfvcError):
            parsing.require_string_array_argument(value, "paths")

    def test_valid_arguments_pass(self):
        parsing.require_string_argument("a", "path")
        parsing.require_string_array_argument(["a"], "paths")


class TestProcessErrors:
    """Tests for process_errors classification."""

    def test_zero_exit_returns(self):
        parsing.process_errors("add", make_result(0, stderr="Authentication failed"))

    def test_authentication_failed(self):
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("add", make_result(100, stderr="Authentication failed"))
        error = exc_info.value
        assert error.error_code == TfvcErrorCode.AUTHENTICATION_FAILED
        assert error.command == "add"
        assert error.exit_code == 100
        assert error.stderr == "Authentication failed"

    def test_workspace_could_not_be_determined(self):
        result = make_result(100, stderr="An argument error occurred: The workspace could not be determined.")
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("status", result)
        assert exc_info.value.error_code == TfvcErrorCode.NOT_A_TFVC_REPOSITORY
        assert exc_info.value.message == messages.NO_WORKSPACE_MAPPINGS

    def test_repository_not_found(self):
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("status", make_result(100, stderr="error: Repository not found"))
        assert exc_info.value.error_code == TfvcErrorCode.REPOSITORY_NOT_FOUND

    def test_collection_could_not_be_determined(self):
        result = make_result(
            100, stderr="The project collection URL to use could not be determined."
        )
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("status", result)
        assert exc_info.value.error_code == TfvcErrorCode.NOT_A_TFVC_REPOSITORY
        assert exc_info.value.message == messages.NOT_A_TFVC_REPOSITORY

    def test_oauth_scopes(self):
        result = make_result(
            100,
            stderr="Access denied connecting to TFS server https://x/ (authenticating as OAuth Access Token)",
        )
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("status", result)
        assert exc_info.value.error_code == TfvcErrorCode.AUTHENTICATION_FAILED
        assert exc_info.value.message == messages.TOKEN_NOT_ALL_SCOPES

    def test_java_missing(self):
        result = make_result(
            1, stderr="'java' is not recognized as an internal or external command"
        )
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("add", result)
        assert exc_info.value.error_code == TfvcErrorCode.TF_NOT_FOUND
        assert exc_info.value.message == messages.TF_INITIALIZE_FAILURE

    def test_vm_initialization_reported_on_stdout(self):
        result = make_result(
            1,
            stdout="Error occurred during initialization of VM\nCould not reserve enough space",
        )
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("add", result)
        error = exc_info.value
        assert error.error_code == TfvcErrorCode.TF_NOT_FOUND
        assert error.message.startswith(messages.TF_INITIALIZE_FAILURE)
        assert "Could not reserve enough space" in error.message

    def test_no_working_folder_mapping(self):
        result = make_result(100, stderr="There is no working folder mapping for /tmp/x.")
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("info", result)
        assert exc_info.value.error_code == TfvcErrorCode.FILE_NOT_IN_MAPPINGS

    def test_not_in_workspace(self):
        result = make_result(
            100,
            stderr="/tmp/x could not be found in your workspace, or you do not have permission to access it.",
        )
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("info", result)
        assert exc_info.value.error_code == TfvcErrorCode.FILE_NOT_IN_WORKSPACE

    def test_first_pattern_wins(self):
        result = make_result(
            100, stderr="Authentication failed\nThere is no working folder mapping for /tmp/x."
        )
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("info", result)
        assert exc_info.value.error_code == TfvcErrorCode.AUTHENTICATION_FAILED

    def test_unknown_uses_generic_message(self):
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("add", make_result(42, stderr="something odd"))
        assert exc_info.value.error_code == TfvcErrorCode.UNKNOWN
        assert exc_info.value.message == messages.TF_EXEC_FAILED

    def test_unknown_shows_first_raw_error(self):
        result = make_result(100, stderr="  TF203069: $/proj/file could not be deleted.\n")
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("delete", result, show_first_raw_error=True)
        assert exc_info.value.message == "TF203069: $/proj/file could not be deleted."

    def test_raw_error_falls_back_to_stdout(self):
        result = make_result(100, stdout="only on stdout\n")
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("delete", result, show_first_raw_error=True)
        assert exc_info.value.message == "only on stdout"

    def test_raw_error_never_empty(self):
        with pytest.raises(TfvcError) as exc_info:
            parsing.process_errors("delete", make_result(100), show_first_raw_error=True)
        assert exc_info.value.message == messages.TF_EXEC_FAILED

    def test_has_error(self):
        result = make_result(100, stderr="No file matches.")
        assert parsing.has_error(result, "no file matches")
        assert not parsing.has_error(result, "Authentication failed")
        assert not parsing.has_error(None, "x")


class TestTextHelpers:
    """Tests for line, changeset and XML helpers."""

    def test_split_into_lines_empty(self):
        assert parsing.split_into_lines(None) == []
        assert parsing.split_into_lines("") == []

    def test_split_skips_leading_warnings(self):
        stdout = "WARN 1\nWARN 2\nline1\nWARN 3\n"
        assert parsing.split_into_lines(stdout) == ["line1", "WARN 3", ""]

    def test_split_keeps_warnings_when_asked(self):
        assert parsing.split_into_lines("WARN 1\nline1", False) == ["WARN 1", "line1"]

    def test_split_filters_empty_lines(self):
        stdout = "line1\r\n\r\n   \nline2\n"
        assert parsing.split_into_lines(stdout, True, True) == ["line1", "line2"]

    def test_changeset_number(self):
        assert parsing.get_changeset_number("/tmp/file.txt\nChangeset #23 checked in.\n") == "23"
        assert parsing.get_changeset_number("no changeset here") == ""
        assert parsing.get_changeset_number(None) == ""

    def test_newline_character(self):
        assert parsing.get_newline_character("a\r\nb") == "\r\n"
        assert parsing.get_newline_character("a\nb") == "\n"
        assert parsing.get_newline_character(None) == "\n"

    def test_trim_to_xml(self):
        text = 'banner\n<?xml version="1.0"?><status/>\ntrailer'
        assert parsing.trim_to_xml(text) == '<?xml version="1.0"?><status/>'
        assert parsing.trim_to_xml("no xml") == "no xml"
        assert parsing.trim_to_xml(None) is None

    def test_parse_xml_normalizes_names(self):
        tree = parsing.parse_xml(
            '<?xml version="1.0" encoding="utf-8"?>'
            '<status><pending-changes><pending-change server-item="$/a" change-type="add"/>'
            "</pending-changes></status>"
        )
        change = tree["status"]["pendingchanges"][0]["pendingchange"][0]
        assert change["$"] == {"serveritem": "$/a", "changetype": "add"}

    def test_parse_xml_text(self):
        tree = parsing.parse_xml("<root><name> value </name></root>")
        assert tree["root"]["name"][0]["_"] == "value"

    def test_parse_xml_invalid(self):
        with pytest.raises(TfvcError):
            parsing.parse_xml("<status><unclosed></status>")

    def test_parse_xml_empty(self):
        assert parsing.parse_xml(None) is None


class TestFilePaths:
    """Tests for folder header handling."""

    def test_is_file_path(self):
        assert parsing.is_file_path("folder1:")
        assert parsing.is_file_path("D:\\tmp\\test:")
        assert not parsing.is_file_path("file1.txt")
        assert not parsing.is_file_path("")

    def test_get_file_path(self):
        assert parsing.get_file_path("/tmp/folder:", "file.txt") == os.path.join("/tmp/folder", "file.txt")
        assert parsing.get_file_path("", "file.txt") == "file.txt"
        assert parsing.get_file_path("/tmp/folder:", "") == "/tmp/folder"

    def test_get_file_path_with_root(self):
        assert parsing.get_file_path("sub:", "a.txt", "/root") == os.path.join("/root", "sub", "a.txt")
        assert parsing.get_file_path(None, "a.txt", "/root") == os.path.join("/root", "a.txt")

    def test_collect_file_paths(self):
        lines = ["folder1:", "file1.txt", "file2.txt", "folder2:", "file3.txt"]
        assert parsing.collect_file_paths(lines) == [
            os.path.join("folder1", "file1.txt"),
            os.path.join("folder1", "file2.txt"),
            os.path.join("folder2", "file3.txt"),
        ]

    def test_embedded_spaces_survive(self):
        assert parsing.get_file_path("/tmp/my folder:", "my file.txt") == os.path.join(
            "/tmp/my folder", "my file.txt"
        )
        assert parsing.collect_file_paths(["my folder:", "my file.txt", " spaced .txt"]) == [
            os.path.join("my folder", "my file.txt"),
            os.path.join("my folder", " spaced .txt"),
        ]

    def test_collect_file_paths_without_header(self):
        assert parsing.collect_file_paths(["file1.txt"]) == ["file1.txt"]

    def test_collect_file_paths_extractor(self):
        lines = ["folder1:", "Undoing edit: file1.txt", "skip"]
        paths = parsing.collect_file_paths(
            lines, lambda line: line.split(": ", 1)[1] if ": " in line else None
        )
        assert paths == [os.path.join("folder1", "file1.txt")]
