"""Structural comparison between two manifest snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Optional

from claude_cmd.manifest.models import Command, Manifest


class ChangeType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


# Wire name -> model attribute, in reporting order.
_COMPARED_FIELDS = (
    ("description", "description"),
    ("file", "file"),
    ("argument-hint", "argument_hint"),
    ("namespace", "namespace"),
    ("allowed-tools", "allowed_tools"),
)


@dataclass(frozen=True)
class CommandChangeDetails:
    fields: tuple[str, ...]
    old_values: dict[str, Any]
    new_values: dict[str, Any]


@dataclass(frozen=True)
class CommandChange:
    type: ChangeType
    name: str
    old_command: Optional[Command] = None
    new_command: Optional[Command] = None
    details: Optional[CommandChangeDetails] = None


@dataclass(frozen=True)
class ChangeSummary:
    total: int = 0
    added: int = 0
    removed: int = 0
    modified: int = 0

    @property
    def has_changes(self) -> bool:
        return self.total > 0


@dataclass(frozen=True)
class ComparisonResult:
    old_manifest: Optional[Manifest]
    new_manifest: Manifest
    summary: ChangeSummary
    changes: tuple[CommandChange, ...] = ()
    compared_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def by_type(self, change_type: ChangeType) -> list[CommandChange]:
        return [change for change in self.changes if change.type is change_type]


def _index(commands: Iterable[Command]) -> dict[str, Command]:
    return {command.name: command for command in commands}


def _field_equal(attr: str, old: Command, new: Command) -> bool:
    old_value = getattr(old, attr)
    new_value = getattr(new, attr)
    if attr == "allowed_tools":
        # Tool order carries no meaning.
        return sorted(old_value) == sorted(new_value)
    return old_value == new_value


def command_change_details(old: Command, new: Command) -> CommandChangeDetails:
    """Describe which fields differ between two versions of a command."""
    fields: list[str] = []
    old_values: dict[str, Any] = {}
    new_values: dict[str, Any] = {}
    for wire_name, attr in _COMPARED_FIELDS:
        if not _field_equal(attr, old, new):
            fields.append(wire_name)
            old_values[wire_name] = getattr(old, attr)
            new_values[wire_name] = getattr(new, attr)
    return CommandChangeDetails(tuple(fields), old_values, new_values)


def commands_equal(old: Command, new: Command) -> bool:
    return old.name == new.name and all(_field_equal(attr, old, new) for _, attr in _COMPARED_FIELDS)


def compare_manifests(old_manifest: Manifest | None, new_manifest: Manifest) -> ComparisonResult:
    """Compute added/removed/modified commands between two manifests.

    When there is no previous manifest (first fetch), every command in
    *new_manifest* counts as added.
    """
    old_commands = _index(old_manifest.commands) if old_manifest is not None else {}
    new_commands = _index(new_manifest.commands)

    changes: list[CommandChange] = []
    for name, new_command in new_commands.items():
        old_command = old_commands.get(name)
        if old_command is None:
            changes.append(CommandChange(ChangeType.ADDED, name, new_command=new_command))
        elif not commands_equal(old_command, new_command):
            changes.append(
                CommandChange(
                    ChangeType.MODIFIED,
                    name,
                    old_command=old_command,
                    new_command=new_command,
                    details=command_change_details(old_command, new_command),
                )
            )

    for name, old_command in old_commands.items():
        if name not in new_commands:
            changes.append(CommandChange(ChangeType.REMOVED, name, old_command=old_command))

    counts = {change_type: 0 for change_type in ChangeType}
    for change in changes:
        counts[change.type] += 1

    summary = ChangeSummary(
        total=len(changes),
        added=counts[ChangeType.ADDED],
        removed=counts[ChangeType.REMOVED],
        modified=counts[ChangeType.MODIFIED],
    )
    return ComparisonResult(
        old_manifest=old_manifest,
        new_manifest=new_manifest,
        summary=summary,
        changes=tuple(changes),
    )


def manifests_identical(old_manifest: Manifest, new_manifest: Manifest) -> bool:
    """Return True when version, timestamp and every command match."""
    if len(old_manifest.commands) != len(new_manifest.commands):
        return False
    if old_manifest.version != new_manifest.version or old_manifest.updated != new_manifest.updated:
        return False
    new_commands = _index(new_manifest.commands)
    for old_command in old_manifest.commands:
        new_command = new_commands.get(old_command.name)
        if new_command is None or not commands_equal(old_command, new_command):
            return False
    return True


__all__ = [
    "ChangeSummary",
    "ChangeType",
    "CommandChange",
    "CommandChangeDetails",
    "ComparisonResult",
    "command_change_details",
    "commands_equal",
    "compare_manifests",
    "manifests_identical",
]
