"""Command-line interface for claude-cmd."""

from .app import app, main
from .state import CliState

__all__ = ["CliState", "app", "main"]
