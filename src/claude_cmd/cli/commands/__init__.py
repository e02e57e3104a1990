"""CLI command modules for claude-cmd."""

from .cache_cmd import app as cache_app
from .catalog_cmd import info, installed, list_commands, search, show, update
from .language_cmd import app as language_app

__all__ = [
    "cache_app",
    "info",
    "installed",
    "language_app",
    "list_commands",
    "search",
    "show",
    "update",
]
