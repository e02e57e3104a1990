"""Tests for command file parsing and the capability whitelist."""

from __future__ import annotations

import pytest

from claude_cmd.commands import CommandParser, is_allowed_tool, split_frontmatter
from claude_cmd.errors import CommandParseError, CommandSecurityError, ErrorKind


@pytest.fixture()
def parser() -> CommandParser:
    return CommandParser()


def _file(header: str, body: str = "Do the thing with $ARGUMENTS.\n") -> str:
    return f"---\n{header}\n---\n\n{body}"


class TestFrontmatter:
    def test_no_header(self):
        assert split_frontmatter("# Title\n") == (None, "# Title\n")

    def test_header_and_body(self):
        header, body = split_frontmatter("---\ndescription: x\n---\nbody")
        assert header == "description: x"
        assert body == "body"

    def test_bom_and_crlf(self):
        header, _ = split_frontmatter("\ufeff---\r\ndescription: x\r\n---\r\nbody")
        assert header.strip() == "description: x"

    def test_unterminated(self):
        with pytest.raises(CommandParseError):
            split_frontmatter("---\ndescription: x\nbody")


class TestParse:
    """Parsing command files into Command objects."""

    def test_allowed_tools_string(self, parser: CommandParser):
        command = parser.parse(
            _file('description: Commit changes\nallowed-tools: "Bash(git:*), Read"'),
            "commit.md",
        )
        assert command.name == "commit"
        assert command.description == "Commit changes"
        assert command.allowed_tools == ["Bash(git:*)", "Read"]
        assert command.file == "commit.md"
        assert command.namespace is None

    def test_allowed_tools_list_deduplicated(self, parser: CommandParser):
        command = parser.parse(
            _file("description: d\nallowed-tools:\n  - Read\n  - Grep\n  - Read\n  - ''"),
            "x.md",
        )
        assert command.allowed_tools == ["Read", "Grep"]

    def test_bash_with_inner_commas(self, parser: CommandParser):
        command = parser.parse(
            _file("description: d\nallowed-tools: Bash(git add:*, git commit:*), Edit"),
            "x.md",
        )
        assert command.allowed_tools == ["Bash(git add:*, git commit:*)", "Edit"]

    def test_mcp_tool(self, parser: CommandParser):
        command = parser.parse(_file("description: d\nallowed-tools: mcp__github__create_issue"), "x.md")
        assert command.allowed_tools == ["mcp__github__create_issue"]

    def test_no_header(self, parser: CommandParser):
        command = parser.parse("Just do it.\n", "tools/quick.md")
        assert command.name == "tools:quick"
        assert command.description == "Custom slash command: tools:quick"
        assert command.allowed_tools == []
        assert command.namespace == "tools"

    def test_empty_header(self, parser: CommandParser):
        command = parser.parse("---\n---\nbody", "empty.md")
        assert command.description == "Custom slash command: empty"

    def test_argument_hint(self, parser: CommandParser):
        command = parser.parse(_file("description: d\nargument-hint: [message]"), "x.md")
        assert command.argument_hint == "[message]"
        command = parser.parse(_file('description: d\nargument-hint: "<file> [--force]"'), "x.md")
        assert command.argument_hint == "<file> [--force]"

    def test_nested_namespace(self, parser: CommandParser):
        command = parser.parse(_file("description: d"), "./frontend/react/component.md")
        assert command.name == "frontend:react:component"
        assert command.namespace == "frontend:react"
        assert command.file == "frontend/react/component.md"

    def test_missing_description(self, parser: CommandParser):
        with pytest.raises(CommandParseError) as exc_info:
            parser.parse(_file("allowed-tools: Read"), "x.md")
        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert exc_info.value.command_name == "x"

    @pytest.mark.parametrize(
        "content",
        [
            "---\ndescription: [unclosed\n---\n",
            "---\n- just\n- a list\n---\n",
            "---\ndescription: x\n",
            _file("description: d\nallowed-tools: 42"),
            _file("description: d\nargument-hint: 2024-13-45"),
        ],
    )
    def test_malformed(self, parser: CommandParser, content: str):
        with pytest.raises(CommandParseError):
            parser.parse(content, "bad.md")

    @pytest.mark.parametrize("relative_path", [".md", "frontend/.md"])
    def test_empty_file_name(self, parser: CommandParser, relative_path: str):
        with pytest.raises(CommandParseError, match="empty"):
            parser.parse(_file("description: d"), relative_path)

    @pytest.mark.parametrize("tool", ["rm -rf /", "Bash", "Bash(rm -rf /)", "mcp__server", "read", "Shell(ls)"])
    def test_disallowed_tool(self, parser: CommandParser, tool: str):
        with pytest.raises(CommandSecurityError) as exc_info:
            parser.parse(_file(f'description: d\nallowed-tools: "{tool}"'), "evil.md")
        assert exc_info.value.kind is ErrorKind.SECURITY
        assert exc_info.value.entry == tool
        assert "evil" in exc_info.value.message

    @pytest.mark.parametrize("path", ["../../etc/passwd", "/etc/passwd", "\\\\server\\share", "C:\\x.md"])
    def test_file_field_rejected(self, parser: CommandParser, path: str):
        with pytest.raises(CommandSecurityError):
            parser.parse(_file(f"description: d\nfile: '{path}'"), "x.md")

    def test_validate(self, parser: CommandParser):
        assert parser.validate(_file("description: ok"))
        assert parser.validate("no header at all")
        assert not parser.validate(_file('description: d\nallowed-tools: "rm -rf /"'))


class TestWhitelist:
    @pytest.mark.parametrize(
        "tool",
        ["Read", "Write", "TodoWrite", "Bash(git:*)", "Bash(npm run test:*)", "mcp__a__b", "mcp__my_srv__do_it"],
    )
    def test_allowed(self, tool: str):
        assert is_allowed_tool(tool)

    @pytest.mark.parametrize("tool", ["", "read", "Bash()", "Bash(ls; rm)", "mcp__a", "mcp__a__b-c", "Bash(git:*) "])
    def test_rejected(self, tool: str):
        assert not is_allowed_tool(tool)
