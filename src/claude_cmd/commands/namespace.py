"""Namespace helpers: ``frontend/react`` <-> ``frontend:react``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from claude_cmd.core.config import COMMAND_FILE_SUFFIX
from claude_cmd.errors import NamespaceError

MIN_DEPTH = 1
MAX_DEPTH = 5
_SEGMENT_RE = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?$")


@dataclass(frozen=True)
class ParsedNamespace:
    original: str
    segments: tuple[str, ...]

    @property
    def path(self) -> str:
        return "/".join(self.segments)

    @property
    def colon_separated(self) -> str:
        return ":".join(self.segments)

    @property
    def depth(self) -> int:
        return len(self.segments)


def parse_namespace(namespace: str) -> ParsedNamespace:
    """Split a colon- or slash-separated namespace into its segments."""
    trimmed = (namespace or "").strip()
    if not trimmed:
        raise NamespaceError(namespace, "Namespace cannot be empty")

    separator = ":" if ":" in trimmed else "/"
    segments = tuple(segment for segment in trimmed.replace("\\", "/").split(separator) if segment.strip())
    if not segments:
        raise NamespaceError(namespace, "No valid segments found")
    return ParsedNamespace(original=trimmed, segments=segments)


def validate_namespace(namespace: str, *, min_depth: int = MIN_DEPTH, max_depth: int = MAX_DEPTH) -> ParsedNamespace:
    parsed = parse_namespace(namespace)
    if parsed.depth < min_depth:
        raise NamespaceError(namespace, f"depth {parsed.depth} is below the minimum of {min_depth}")
    if parsed.depth > max_depth:
        raise NamespaceError(namespace, f"depth {parsed.depth} exceeds the maximum of {max_depth}")
    for segment in parsed.segments:
        if not _SEGMENT_RE.match(segment):
            raise NamespaceError(namespace, f'Invalid segment "{segment}"')
    return parsed


def to_colon_separated(path_based: str) -> str:
    return parse_namespace(path_based).colon_separated


def to_path(colon_separated: str) -> str:
    return parse_namespace(colon_separated).path


def qualified_name(namespace: str | None, base_name: str) -> str:
    """``qualified_name("frontend:react", "component")`` -> ``frontend:react:component``."""
    return f"{namespace}:{base_name}" if namespace else base_name


@dataclass(frozen=True)
class CommandLocation:
    """Name, namespace and normalized file path derived from a relative path."""

    name: str
    base_name: str
    namespace: str | None
    file: str


def locate_command(relative_path: str) -> CommandLocation:
    """Derive a command's identity from its path inside a commands directory.

    ``frontend/react/component.md`` -> name ``frontend:react:component``,
    namespace ``frontend:react``. Files at the root have no namespace.
    """
    normalized = relative_path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    path = PurePosixPath(normalized)
    base_name = path.name[: -len(COMMAND_FILE_SUFFIX)] if path.name.endswith(COMMAND_FILE_SUFFIX) else path.name

    namespace: str | None = None
    directory = str(path.parent)
    if directory not in {"", ".", "/"}:
        try:
            namespace = to_colon_separated(directory)
        except NamespaceError:
            namespace = None

    return CommandLocation(
        name=qualified_name(namespace, base_name),
        base_name=base_name,
        namespace=namespace,
        file=path.as_posix(),
    )


__all__ = [
    "CommandLocation",
    "ParsedNamespace",
    "locate_command",
    "parse_namespace",
    "qualified_name",
    "to_colon_separated",
    "to_path",
    "validate_namespace",
]
