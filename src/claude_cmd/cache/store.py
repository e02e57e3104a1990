"""Per-language manifest cache on disk.

Layout under the cache directory::

    <cache_dir>/<language>/manifest.json          {"manifest": {...}, "timestamp": <ms>}
    <cache_dir>/<language>/commands/<key>.json    {"content": "...", "timestamp": <ms>}

A missing, empty or corrupt entry always reads as a cache miss; corruption
is never reported to the caller. Entries are cleared by writing empty
content so the store only needs read/write/exists from the file service.
"""

from __future__ import annotations

import hashlib
import json
import logging
import re
import time
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from claude_cmd.core.config import MANIFEST_CACHE_FILENAME, MANIFEST_CACHE_MAX_AGE_MS
from claude_cmd.errors import CacheError, ClaudeCmdError, ErrorKind
from claude_cmd.language import is_valid_language_code, sanitize_language_code
from claude_cmd.manifest.models import Manifest
from claude_cmd.services.files import FileService

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

_UNSAFE_KEY_CHARS_RE = re.compile(r"[./\\:\x00]")


def now_ms() -> int:
    return int(time.time() * 1000)


def content_cache_key(command_name: str) -> str:
    """Turn a command name into a filename that cannot escape its directory.

    Names that needed rewriting get a short digest of the original name
    appended, so ``frontend:component`` and ``frontend-component`` do not
    share an entry.
    """
    key = _UNSAFE_KEY_CHARS_RE.sub("-", command_name).strip()
    if not key:
        raise ValueError(f"Command name {command_name!r} is empty after sanitization")
    if key != command_name:
        digest = hashlib.sha256(command_name.encode("utf-8")).hexdigest()[:8]
        key = f"{key}-{digest}"
    if len(key) > 255:
        raise ValueError(f"Command name {command_name!r} is too long (max 255 characters)")
    return key


class CacheStore:
    """TTL-keyed JSON cache of manifests and command content."""

    def __init__(
        self,
        cache_dir: Path,
        file_service: FileService,
        *,
        max_age_ms: int = MANIFEST_CACHE_MAX_AGE_MS,
        clock: Clock = now_ms,
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self.max_age_ms = max_age_ms
        self._files = file_service
        self._clock = clock

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _validate_language(self, language: str) -> str:
        code = sanitize_language_code(language)
        if not code or not is_valid_language_code(code):
            raise CacheError(
                f'Invalid language code format: "{language}". Expected format: "en", "es", etc.',
                str(language),
                kind=ErrorKind.VALIDATION,
            )
        return code

    def cache_path(self, language: str) -> Path:
        return self.cache_dir / self._validate_language(language) / MANIFEST_CACHE_FILENAME

    def content_path(self, language: str, command_name: str) -> Path:
        try:
            key = content_cache_key(command_name)
        except ValueError as exc:
            raise CacheError(str(exc), str(language), kind=ErrorKind.VALIDATION) from exc
        return self.cache_dir / self._validate_language(language) / "commands" / f"{key}.json"

    # ------------------------------------------------------------------
    # Raw entry access
    # ------------------------------------------------------------------

    async def _read_entry(self, path: Path) -> dict[str, Any] | None:
        try:
            raw = await self._files.read_file(path)
        except ClaudeCmdError as exc:
            if exc.kind is not ErrorKind.NOT_FOUND:
                logger.warning("Unreadable cache entry %s: %s", path, exc)
            return None

        if not raw.strip():
            return None

        try:
            entry = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("Corrupt cache entry %s", path)
            return None

        if not isinstance(entry, dict):
            return None
        timestamp = entry.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return None
        return entry

    async def _write_entry(self, path: Path, entry: dict[str, Any], language: str) -> None:
        try:
            await self._files.mkdir(path.parent)
            await self._files.write_file(path, json.dumps(entry, indent=2, ensure_ascii=False))
        except ClaudeCmdError as exc:
            raise CacheError(
                f'Failed to store cache for language "{language}"',
                language,
                cause=exc.message,
            ) from exc

    def _is_stale(self, timestamp: float, max_age_ms: int) -> bool:
        return self._clock() - timestamp > max_age_ms

    @staticmethod
    def _manifest_from_entry(entry: dict[str, Any]) -> Manifest | None:
        payload = entry.get("manifest")
        if not isinstance(payload, dict):
            return None
        try:
            return Manifest.model_validate(payload)
        except ValidationError:
            return None

    # ------------------------------------------------------------------
    # Manifest cache
    # ------------------------------------------------------------------

    async def get(self, language: str) -> Manifest | None:
        """Return the cached manifest, or None on miss, corruption or expiry."""
        path = self.cache_path(language)
        entry = await self._read_entry(path)
        if entry is None:
            return None
        if self._is_stale(entry["timestamp"], self.max_age_ms):
            logger.debug("Cache expired for %s", language)
            return None
        return self._manifest_from_entry(entry)

    async def peek(self, language: str) -> Manifest | None:
        """Return the cached manifest regardless of its age."""
        entry = await self._read_entry(self.cache_path(language))
        if entry is None:
            return None
        return self._manifest_from_entry(entry)

    async def set(self, language: str, manifest: Manifest, timestamp: int | None = None) -> None:
        code = self._validate_language(language)
        entry = {
            "manifest": manifest.to_wire(),
            "timestamp": self._clock() if timestamp is None else timestamp,
        }
        await self._write_entry(self.cache_path(code), entry, code)
        logger.debug("Cached %d commands for %s", len(manifest.commands), code)

    async def is_expired(self, language: str, max_age_ms: int | None = None) -> bool:
        """True when no usable entry exists or it is older than *max_age_ms*."""
        entry = await self._read_entry(self.cache_path(language))
        if entry is None or self._manifest_from_entry(entry) is None:
            return True
        effective_max_age = self.max_age_ms if max_age_ms is None else max_age_ms
        return self._is_stale(entry["timestamp"], effective_max_age)

    async def clear(self, language: str) -> None:
        """Logically delete the manifest entry; a missing entry is fine."""
        path = self.cache_path(language)
        if not await self._files.exists(path):
            return
        try:
            await self._files.write_file(path, "")
        except ClaudeCmdError as exc:
            if exc.kind is ErrorKind.NOT_FOUND:
                return
            raise CacheError(f'Failed to clear cache for language "{language}"', language, cause=exc.message) from exc

    # ------------------------------------------------------------------
    # Command content cache
    # ------------------------------------------------------------------

    async def get_content(self, language: str, command_name: str) -> str | None:
        entry = await self._read_entry(self.content_path(language, command_name))
        if entry is None or self._is_stale(entry["timestamp"], self.max_age_ms):
            return None
        content = entry.get("content")
        if not isinstance(content, str) or not content:
            return None
        return content

    async def set_content(self, language: str, command_name: str, content: str) -> None:
        code = self._validate_language(language)
        entry = {"content": content, "timestamp": self._clock()}
        await self._write_entry(self.content_path(code, command_name), entry, code)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    async def cached_languages(self) -> list[tuple[str, int]]:
        """Return ``(language, command_count)`` for every readable cached manifest."""
        if not await self._files.exists(self.cache_dir):
            return []
        try:
            directories = await self._files.list_dirs(self.cache_dir)
        except ClaudeCmdError as exc:
            logger.debug("Cannot list cache directory %s: %s", self.cache_dir, exc)
            return []

        languages: list[tuple[str, int]] = []
        for name in directories:
            if not is_valid_language_code(name):
                continue
            manifest = await self.peek(name)
            if manifest is None:
                logger.debug("Skipping language %s: no readable manifest", name)
                continue
            languages.append((name, len(manifest.commands)))
        return languages


__all__ = ["CacheStore", "Clock", "content_cache_key", "now_ms"]
