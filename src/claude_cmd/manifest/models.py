"""Command and manifest data models.

The wire format mirrors the remote repository's ``manifest.json``:

.. code-block:: json

    {
      "version": "1.0.0",
      "updated": "2025-01-01T00:00:00Z",
      "commands": [
        {
          "name": "debug-help",
          "description": "Systematic debugging assistance",
          "file": "debug-help.md",
          "allowed-tools": ["Read", "Bash(git:*)"],
          "argument-hint": "[issue]"
        }
      ]
    }
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DRIVE_LETTER_RE = re.compile(r"^[A-Za-z]:")


def _split_top_level(value: str) -> list[str]:
    """Split on commas that are not inside parentheses.

    ``"Bash(git add:*, git commit:*), Read"`` -> two entries.
    """
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in value:
        if char == "(":
            depth += 1
        elif char == ")" and depth:
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def normalize_allowed_tools(value: Any) -> list[str]:
    """Normalize ``allowed-tools`` into a deduplicated, order-preserving list.

    Accepts a comma-separated string or a list; empty entries are dropped.

    Raises:
        ValueError: if *value* is neither a string nor a list
    """
    if value is None:
        return []
    if isinstance(value, str):
        tools = [tool.strip() for tool in _split_top_level(value)]
    elif isinstance(value, (list, tuple)):
        tools = [str(tool).strip() for tool in value]
    else:
        raise ValueError("allowed-tools must be a string or a list")
    return list(dict.fromkeys(tool for tool in tools if tool))


def is_safe_relative_path(path: str) -> bool:
    """Return False for paths with ``..`` or an absolute/drive-letter prefix."""
    return not (
        ".." in path
        or path.startswith("/")
        or path.startswith("\\")
        or _DRIVE_LETTER_RE.match(path)
    )


class Command(BaseModel):
    """One installable slash command."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str = Field(..., min_length=1, description="Unique command name (e.g. 'frontend:component')")
    description: str = Field(..., description="Human-readable description")
    file: str = Field(..., min_length=1, description="Relative path to the command file")
    allowed_tools: list[str] = Field(
        default_factory=list,
        alias="allowed-tools",
        description="Capabilities the command may use",
    )
    argument_hint: Optional[str] = Field(None, alias="argument-hint")
    namespace: Optional[str] = Field(None, description="Colon-separated namespace, if nested")

    @field_validator("allowed_tools", mode="before")
    @classmethod
    def validate_allowed_tools(cls, v: Any) -> list[str]:
        return normalize_allowed_tools(v)

    @field_validator("file")
    @classmethod
    def validate_file(cls, v: str) -> str:
        """Reject path traversal and absolute paths."""
        if not is_safe_relative_path(v):
            raise ValueError(f"file must be a relative path without '..': {v!r}")
        return v

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Manifest(BaseModel):
    """Versioned catalog of commands for one language or one machine."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    version: str = Field("", description="Manifest format version")
    updated: str = Field("", description="ISO-8601 timestamp of the last update")
    commands: list[Command] = Field(..., description="Every command in the catalog")

    def find(self, name: str) -> Command | None:
        """Return the command called *name*, if any."""
        for command in self.commands:
            if command.name == name:
                return command
        return None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["Command", "Manifest", "is_safe_relative_path", "normalize_allowed_tools"]
