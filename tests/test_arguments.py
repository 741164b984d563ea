"""Tests for ArgumentBuilder."""

from __future__ import annotations

import pytest

from tfvcbridge.commands.arguments import REDACTED, ArgumentBuilder
from tfvcbridge.context import CredentialInfo, ServerContext
from tfvcbridge.errors import TfvcError, TfvcErrorCode

COLLECTION_URL = "https://myaccount.visualstudio.com/myproject"


@pytest.fixture
def context() -> ServerContext:
    return ServerContext(
        collection_url=COLLECTION_URL,
        credential_info=CredentialInfo(username="user1", password="pass1", domain="DOMAIN"),
    )


class TestConstruction:
    """Tests for the switches added by the constructor."""

    def test_command_only(self):
        builder = ArgumentBuilder("mycmd")
        assert builder.build() == ["mycmd", "-noprompt"]
        assert builder.get_command() == "mycmd"

    def test_exe_uses_prompt(self):
        builder = ArgumentBuilder("mycmd", is_exe=True)
        assert builder.build() == ["mycmd", "-prompt"]

    def test_missing_command(self):
        with pytest.raises(TfvcError) as exc_info:
            ArgumentBuilder("")
        assert exc_info.value.error_code == TfvcErrorCode.ARGUMENT_MISSING
        assert "Argument is required" in exc_info.value.message

    def test_context_adds_collection_and_login(self, context):
        builder = ArgumentBuilder("mycmd", context)
        assert builder.build() == [
            "mycmd",
            "-noprompt",
            f"-collection:{COLLECTION_URL}",
            "-login:DOMAIN\\user1,pass1",
        ]

    def test_skip_collection_keeps_login(self, context):
        builder = ArgumentBuilder("mycmd", context, skip_collection=True)
        assert builder.build() == ["mycmd", "-noprompt", "-login:DOMAIN\\user1,pass1"]

    def test_exe_never_sends_login(self, context):
        builder = ArgumentBuilder("mycmd", context, skip_collection=True, is_exe=True)
        assert builder.build() == ["mycmd", "-prompt"]

    def test_context_without_url_adds_nothing(self):
        context = ServerContext(credential_info=CredentialInfo("user1", "pass1"))
        assert ArgumentBuilder("mycmd", context).build() == ["mycmd", "-noprompt"]

    def test_login_without_domain(self):
        context = ServerContext(COLLECTION_URL, CredentialInfo("user1", "pass1"))
        assert ArgumentBuilder("mycmd", context).build()[-1] == "-login:user1,pass1"


class TestDisplay:
    """Tests for the redacted display form."""

    def test_secret_is_redacted(self, context):
        builder = ArgumentBuilder("mycmd", context).add("file1.txt")
        assert builder.to_string() == (
            f"mycmd -noprompt -collection:{COLLECTION_URL} {REDACTED} file1.txt"
        )
        assert "pass1" not in str(builder)
        assert "pass1" not in repr(builder)

    def test_secret_survives_in_command_line(self, context):
        builder = ArgumentBuilder("mycmd", context)
        assert "-login:DOMAIN\\user1,pass1" in builder.build_command_line()

    def test_add_secret(self):
        builder = ArgumentBuilder("mycmd").add_secret("token").add("visible")
        assert builder.to_string() == f"mycmd -noprompt {REDACTED} visible"

    def test_switch_with_secret_value(self):
        builder = ArgumentBuilder("mycmd").add_switch_with_value("key", "abc", is_secret=True)
        assert builder.to_string() == f"mycmd -noprompt {REDACTED}"

    def test_whitespace_is_quoted(self):
        builder = ArgumentBuilder("checkin").add_switch_with_value("comment", "fix the bug")
        assert builder.to_string() == 'checkin -noprompt "-comment:fix the bug"'

    def test_quotes_are_doubled(self):
        builder = ArgumentBuilder("checkin").add('say "hi"')
        assert builder.to_string() == 'checkin -noprompt "say ""hi"""'


class TestBuild:
    """Tests for the argument list and stdin command line."""

    def test_add_all(self):
        builder = ArgumentBuilder("add").add_all(["a.txt", "b.txt"]).add_all(None)
        assert builder.build() == ["add", "-noprompt", "a.txt", "b.txt"]

    def test_switch_without_value(self):
        builder = ArgumentBuilder("status").add_switch("recursive").add_switch_with_value("format", "")
        assert builder.build() == ["status", "-noprompt", "-recursive", "-format"]

    def test_build_returns_copy(self):
        builder = ArgumentBuilder("add")
        builder.build().append("mutated")
        assert builder.build() == ["add", "-noprompt"]

    def test_command_line_format(self):
        builder = ArgumentBuilder("add").add("my file.txt")
        assert builder.build_command_line() == 'add -noprompt "my file.txt" \n'

    def test_empty_argument_quoted(self):
        builder = ArgumentBuilder("add").add("")
        assert builder.build_command_line() == 'add -noprompt "" \n'
        assert builder.to_string() == 'add -noprompt ""'

    def test_proxy_switch(self):
        builder = ArgumentBuilder("add").add_proxy_switch("http://proxy:8081")
        assert builder.build()[-1] == "-proxy:http://proxy:8081"


class TestRemoveSwitch:
    """Tests for remove_switch and secret index bookkeeping."""

    def test_remove_switch(self):
        builder = ArgumentBuilder("status").add_switch("recursive").add("path")
        builder.remove_switch("recursive")
        assert builder.build() == ["status", "-noprompt", "path"]

    def test_remove_missing_switch_is_noop(self):
        builder = ArgumentBuilder("status").add("path")
        builder.remove_switch("recursive")
        assert builder.build() == ["status", "-noprompt", "path"]

    def test_remove_before_secret_keeps_redaction(self, context):
        builder = ArgumentBuilder("mycmd", context)
        builder.remove_switch("noprompt")
        assert builder.to_string() == f"mycmd -collection:{COLLECTION_URL} {REDACTED}"
