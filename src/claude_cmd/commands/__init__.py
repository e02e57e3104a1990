"""Command file parsing and namespaces."""

from .namespace import (
    CommandLocation,
    ParsedNamespace,
    locate_command,
    parse_namespace,
    qualified_name,
    to_colon_separated,
    to_path,
    validate_namespace,
)
from .parser import CORE_TOOLS, CommandParser, is_allowed_tool, split_frontmatter

__all__ = [
    "CORE_TOOLS",
    "CommandLocation",
    "CommandParser",
    "ParsedNamespace",
    "is_allowed_tool",
    "locate_command",
    "parse_namespace",
    "qualified_name",
    "split_frontmatter",
    "to_colon_separated",
    "to_path",
    "validate_namespace",
]
