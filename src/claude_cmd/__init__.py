"""claude-cmd: discover, cache and inspect Claude slash commands.

Usage:
    claude-cmd list
    claude-cmd search <query>
    claude-cmd info <name>
    claude-cmd language set <code>
"""

__version__ = "0.1.0"

from claude_cmd.cli import app, main

__all__ = ["__version__", "app", "main"]
