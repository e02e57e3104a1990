"""Parse and security-check slash command definition files.

A command file is Markdown with an optional YAML frontmatter header::

    ---
    description: Create a git commit
    allowed-tools: Bash(git add:*), Bash(git commit:*), Read
    argument-hint: [message]
    ---

    Commit the staged changes with message $ARGUMENTS.

Files without a header are accepted with a generated description and no
tools. A header, when present, must carry ``description`` and may only
declare tools from the capability whitelist.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from claude_cmd.commands.namespace import locate_command
from claude_cmd.errors import ClaudeCmdError, CommandParseError, CommandSecurityError
from claude_cmd.manifest.models import Command, is_safe_relative_path, normalize_allowed_tools

logger = logging.getLogger(__name__)

CORE_TOOLS = frozenset(
    {
        "Edit",
        "Glob",
        "Grep",
        "LS",
        "MultiEdit",
        "NotebookEdit",
        "NotebookRead",
        "Read",
        "Task",
        "TodoWrite",
        "WebFetch",
        "WebSearch",
        "Write",
    }
)

# mcp__<server>__<tool>
MCP_TOOL_RE = re.compile(r"^mcp__[a-zA-Z0-9_]+__[a-zA-Z0-9_]+$")
# Bash(git:*) or Bash(git add:*, npm:*)
BASH_TOOL_RE = re.compile(r"^Bash\([a-zA-Z0-9_\-,:*\s]+\)$")

FRONTMATTER_DELIMITER = "---"


def is_allowed_tool(tool: str) -> bool:
    """Return True when *tool* matches one of the three permitted shapes."""
    return tool in CORE_TOOLS or bool(MCP_TOOL_RE.match(tool)) or bool(BASH_TOOL_RE.match(tool))


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split *content* into (frontmatter text, body).

    Returns ``(None, content)`` when the file has no header.

    Raises:
        CommandParseError: the opening delimiter is never closed
    """
    text = content.lstrip("\ufeff")
    lines = text.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None, content

    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            return "\n".join(lines[1:index]), "\n".join(lines[index + 1 :])

    raise CommandParseError("Unterminated frontmatter block")


def _render_argument_hint(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        # ``argument-hint: [message]`` loads as a YAML list.
        return " ".join(f"[{item}]" for item in value) or None
    text = str(value).strip()
    return text or None


class CommandParser:
    """Turns command file content into :class:`Command` objects."""

    def __init__(self) -> None:
        self._yaml = YAML(typ="safe")

    def _load_header(self, content: str, command_name: str) -> dict[str, Any]:
        try:
            header_text, _body = split_frontmatter(content)
        except CommandParseError as exc:
            raise CommandParseError(exc.message, command_name) from exc

        if header_text is None or not header_text.strip():
            return {}

        try:
            data = self._yaml.load(header_text)
        except (YAMLError, ValueError) as exc:
            # Timestamp-shaped values that are not real dates raise ValueError.
            raise CommandParseError("Invalid YAML frontmatter", command_name, cause=str(exc)) from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CommandParseError("Frontmatter must be a key/value mapping", command_name)
        return data

    def parse(self, content: str, relative_path: str) -> Command:
        """Parse one command file found at *relative_path* inside a commands directory.

        Raises:
            CommandParseError: malformed header or missing description
            CommandSecurityError: a path or tool outside the whitelist
        """
        location = locate_command(relative_path)
        name = location.name
        if not location.base_name:
            raise CommandParseError("Command file name is empty", location.file)

        if not is_safe_relative_path(location.file):
            raise CommandSecurityError("Security violation: file path must be relative", name, location.file)

        data = self._load_header(content, name)

        if not data:
            return Command(
                name=name,
                description=f"Custom slash command: {name}",
                file=location.file,
                allowed_tools=[],
                namespace=location.namespace,
            )

        description = data.get("description")
        if description is None or not str(description).strip():
            raise CommandParseError("Command file missing required 'description' field", name)

        self._validate_file_field(data.get("file"), name)

        raw_tools = data.get("allowed-tools", data.get("allowedTools"))
        try:
            allowed_tools = normalize_allowed_tools(raw_tools)
        except ValueError as exc:
            raise CommandParseError(str(exc), name) from exc

        if allowed_tools:
            self._validate_allowed_tools(allowed_tools, name)

        return Command(
            name=name,
            description=str(description).strip(),
            file=location.file,
            allowed_tools=allowed_tools,
            argument_hint=_render_argument_hint(data.get("argument-hint", data.get("argumentHint"))),
            namespace=location.namespace,
        )

    def validate(self, content: str) -> bool:
        """Return True when *content* would parse as a command file."""
        try:
            self.parse(content, "validation-test.md")
        except ClaudeCmdError:
            return False
        return True

    @staticmethod
    def _validate_file_field(value: Any, command_name: str) -> None:
        if not value:
            return
        path = str(value)
        if ".." in path:
            raise CommandSecurityError(
                "Security violation: file path contains path traversal", command_name, path
            )
        if not is_safe_relative_path(path):
            raise CommandSecurityError("Security violation: file path must be relative", command_name, path)

    @staticmethod
    def _validate_allowed_tools(tools: list[str], command_name: str) -> None:
        for tool in tools:
            if not is_allowed_tool(tool):
                logger.debug("Rejected tool %r in command %s", tool, command_name)
                raise CommandSecurityError(
                    f"Security violation: tool '{tool}' is not allowed in command '{command_name}'",
                    command_name,
                    tool,
                )


__all__ = [
    "BASH_TOOL_RE",
    "CORE_TOOLS",
    "CommandParser",
    "MCP_TOOL_RE",
    "is_allowed_tool",
    "split_frontmatter",
]
