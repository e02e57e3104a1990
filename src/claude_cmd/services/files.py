"""File-service capability.

Components never touch the filesystem directly for documents they own
(configuration, cache entries, command files); they go through a
:class:`FileService` so tests and alternative backends can substitute it.
"""

from __future__ import annotations

import errno
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from claude_cmd.errors import FileIOError, FilePermissionError, MissingFileError

logger = logging.getLogger(__name__)

PathLike = str | Path


@runtime_checkable
class FileService(Protocol):
    """Asynchronous file operations consumed by the core."""

    async def read_file(self, path: PathLike) -> str: ...

    async def write_file(self, path: PathLike, content: str) -> None: ...

    async def exists(self, path: PathLike) -> bool: ...

    async def mkdir(self, path: PathLike) -> None: ...

    async def delete_file(self, path: PathLike) -> None: ...

    async def list_files(self, path: PathLike) -> list[str]: ...

    async def list_dirs(self, path: PathLike) -> list[str]: ...

    async def list_files_recursive(self, path: PathLike) -> list[str]: ...


def _map_os_error(exc: OSError, path: PathLike, operation: str) -> Exception:
    target = str(path)
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return MissingFileError(target)
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
        return FilePermissionError(target, operation)
    return FileIOError(target, operation, exc.strerror or str(exc))


class LocalFileService:
    """:class:`FileService` backed by the local filesystem."""

    async def read_file(self, path: PathLike) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise FileIOError(str(path), "read", f"not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise _map_os_error(exc, path, "read") from exc

    async def write_file(self, path: PathLike, content: str) -> None:
        """Write *content* atomically (temp file + rename in the same directory)."""
        target = Path(path)
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
            )
        except OSError as exc:
            raise _map_os_error(exc, target, "write") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_path, target)  # Atomic on POSIX
        except OSError as exc:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise _map_os_error(exc, target, "write") from exc
        logger.debug("Wrote %s (%d bytes)", target, len(content))

    async def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    async def mkdir(self, path: PathLike) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise _map_os_error(exc, path, "mkdir") from exc

    async def delete_file(self, path: PathLike) -> None:
        try:
            Path(path).unlink()
        except OSError as exc:
            raise _map_os_error(exc, path, "delete") from exc

    async def list_files(self, path: PathLike) -> list[str]:
        """Return the names of regular files directly inside *path*."""
        try:
            return sorted(entry.name for entry in Path(path).iterdir() if entry.is_file())
        except OSError as exc:
            raise _map_os_error(exc, path, "list") from exc

    async def list_dirs(self, path: PathLike) -> list[str]:
        """Return the names of subdirectories directly inside *path*.

        Symbolic links to directories are not reported.
        """
        try:
            return sorted(
                entry.name for entry in Path(path).iterdir() if entry.is_dir() and not entry.is_symlink()
            )
        except OSError as exc:
            raise _map_os_error(exc, path, "list") from exc

    async def list_files_recursive(self, path: PathLike) -> list[str]:
        """Return POSIX-style paths of every file under *path*, relative to it."""
        root = Path(path)
        if not root.is_dir():
            raise MissingFileError(str(root))
        files: list[str] = []
        for current, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for filename in sorted(filenames):
                files.append((Path(current) / filename).relative_to(root).as_posix())
        return files


__all__ = ["FileService", "LocalFileService", "PathLike"]
