"""Filesystem locations used by claude-cmd.

Provides the canonical functions for locating:
- The manifest cache directory (``~/.cache/claude-cmd/pages``)
- The user and project configuration files
- The personal and project command directories
"""

from __future__ import annotations

import os
from pathlib import Path

from claude_cmd.core.config import CACHE_DIR_ENV_VAR, CONFIG_DIR_ENV_VAR, CONFIG_FILENAME


def _is_windows() -> bool:
    """Return True when running on Windows."""
    return os.name == "nt"


def get_cache_dir() -> Path:
    """Return the directory holding cached manifests.

    Resolution order:
    1. CLAUDE_CMD_CACHE_DIR environment variable (all platforms)
    2. ~/.cache/claude-cmd/pages on macOS/Linux
    3. %LOCALAPPDATA%\\claude-cmd\\Cache\\pages on Windows (via platformdirs)
    """
    if env_dir := os.environ.get(CACHE_DIR_ENV_VAR):
        return Path(env_dir)

    if _is_windows():
        from platformdirs import user_cache_dir

        return Path(user_cache_dir("claude-cmd")) / "pages"

    return Path.home() / ".cache" / "claude-cmd" / "pages"


def get_user_config_path() -> Path:
    """Return the path of the user-scoped configuration document.

    Resolution order:
    1. CLAUDE_CMD_CONFIG_DIR environment variable
    2. ~/.config/claude-cmd/ on macOS/Linux
    3. %APPDATA%\\claude-cmd\\ on Windows (via platformdirs)
    """
    if env_dir := os.environ.get(CONFIG_DIR_ENV_VAR):
        return Path(env_dir) / CONFIG_FILENAME

    if _is_windows():
        from platformdirs import user_config_dir

        return Path(user_config_dir("claude-cmd")) / CONFIG_FILENAME

    return Path.home() / ".config" / "claude-cmd" / CONFIG_FILENAME


def get_project_config_path(project_root: Path | None = None) -> Path:
    """Return the path of the project-scoped configuration document."""
    root = project_root if project_root is not None else Path.cwd()
    return root / ".claude" / CONFIG_FILENAME


def get_personal_commands_dir() -> Path:
    """Return ``~/.claude/commands``."""
    return Path.home() / ".claude" / "commands"


def get_project_commands_dir(project_root: Path | None = None) -> Path:
    """Return ``<project>/.claude/commands``."""
    root = project_root if project_root is not None else Path.cwd()
    return root / ".claude" / "commands"
