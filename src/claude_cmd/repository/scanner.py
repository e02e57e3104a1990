"""Iterative discovery of command files under a commands directory.

The walk uses an explicit stack instead of recursion, lists directories
through the injected :class:`FileService` (which does not report
symlinked directories) and stops descending past ``max_depth``. Problems
along the way (unreadable directories, depth cut-offs, unusable file
names) are collected as :class:`ScanWarning` entries instead of aborting
the scan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from claude_cmd.core.config import COMMAND_FILE_SUFFIX, MAX_SCAN_DEPTH
from claude_cmd.errors import ClaudeCmdError
from claude_cmd.services.files import FileService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanWarning:
    """Something under a commands directory that could not be used."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


@dataclass(frozen=True)
class NamespacedFile:
    """A command file and where it sits below the scanned root."""

    file_path: Path
    relative_path: str  # POSIX-style, relative to the scanned root
    namespace_path: str  # "" at the root, else e.g. "frontend/react"
    file_name: str
    depth: int


@dataclass
class TreeScan:
    root: Path
    files: list[NamespacedFile] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)


async def scan_command_tree(
    root: Path,
    file_service: FileService,
    max_depth: int = MAX_SCAN_DEPTH,
) -> TreeScan:
    """Collect every ``*.md`` file below *root*, in sorted order.

    Files directly in *root* are at depth 0. A missing root yields an empty
    result without warnings.
    """
    root = Path(root)
    result = TreeScan(root=root)
    if not await file_service.exists(root):
        return result

    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        directory, depth = stack.pop()
        try:
            file_names = await file_service.list_files(directory)
            dir_names = await file_service.list_dirs(directory)
        except ClaudeCmdError as exc:
            logger.warning("Cannot read command directory %s: %s", directory, exc.message)
            result.warnings.append(ScanWarning(str(directory), f"unreadable directory: {exc.message}"))
            continue

        for name in file_names:
            if not name.endswith(COMMAND_FILE_SUFFIX):
                continue
            file_path = directory / name
            if name == COMMAND_FILE_SUFFIX:
                result.warnings.append(ScanWarning(str(file_path), "skipped: empty command name"))
                continue
            relative = file_path.relative_to(root)
            namespace_path = relative.parent.as_posix()
            result.files.append(
                NamespacedFile(
                    file_path=file_path,
                    relative_path=relative.as_posix(),
                    namespace_path="" if namespace_path == "." else namespace_path,
                    file_name=name,
                    depth=depth,
                )
            )

        subdirectories: list[Path] = []
        for name in dir_names:
            subdirectory = directory / name
            if depth + 1 > max_depth:
                result.warnings.append(ScanWarning(str(subdirectory), f"skipped: deeper than {max_depth} levels"))
                continue
            subdirectories.append(subdirectory)

        # Reversed so the next pop visits subdirectories in name order.
        stack.extend((subdirectory, depth + 1) for subdirectory in reversed(subdirectories))

    return result


__all__ = ["NamespacedFile", "ScanWarning", "TreeScan", "scan_command_tree"]
