"""Catalog operations on top of a repository: list, search, info, update."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from claude_cmd.cache.store import CacheStore
from claude_cmd.errors import CacheError, CommandNotFoundError, InvalidArgumentError
from claude_cmd.manifest.diff import ComparisonResult, compare_manifests
from claude_cmd.manifest.models import Command, Manifest
from claude_cmd.repository.base import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an explicit cache refresh."""

    language: str
    manifest: Manifest
    comparison: ComparisonResult
    had_previous: bool
    updated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def command_count(self) -> int:
        return len(self.manifest.commands)

    @property
    def has_changes(self) -> bool:
        return self.comparison.summary.has_changes

    @property
    def added(self) -> int:
        return self.comparison.summary.added

    @property
    def removed(self) -> int:
        return self.comparison.summary.removed

    @property
    def modified(self) -> int:
        return self.comparison.summary.modified


def _require_text(value: str, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{what} cannot be empty or whitespace", str(value))
    return value.strip()


class Catalog:
    """Read-side operations a CLI needs from a command repository."""

    def __init__(self, repository: Repository, cache_store: CacheStore | None = None) -> None:
        self.repository = repository
        self._cache = cache_store

    async def list_commands(self, language: str, force_refresh: bool = False) -> list[Command]:
        manifest = await self.repository.get_manifest(language, force_refresh)
        return list(manifest.commands)

    async def search_commands(self, query: str, language: str, force_refresh: bool = False) -> list[Command]:
        """Case-insensitive substring match over name and description.

        Raises:
            InvalidArgumentError: *query* is empty or whitespace
        """
        needle = _require_text(query, "Search query").lower()
        commands = await self.list_commands(language, force_refresh)
        return [
            command
            for command in commands
            if needle in command.name.lower() or needle in command.description.lower()
        ]

    async def get_command_info(self, name: str, language: str, force_refresh: bool = False) -> Command:
        command_name = _require_text(name, "Command name")
        manifest = await self.repository.get_manifest(language, force_refresh)
        command = manifest.find(command_name)
        if command is None:
            raise CommandNotFoundError(command_name, language)
        return command

    async def get_command_content(self, name: str, language: str, force_refresh: bool = False) -> str:
        command_name = _require_text(name, "Command name")
        return await self.repository.get_command(command_name, language, force_refresh)

    async def update_cache_with_changes(self, language: str) -> UpdateResult:
        """Force-refresh *language* and report what changed since the cached copy.

        The previous snapshot is read regardless of its age. With no previous
        snapshot every command counts as added.
        """
        previous = await self._previous_snapshot(language)
        manifest = await self.repository.get_manifest(language, force_refresh=True)
        comparison = compare_manifests(previous, manifest)
        logger.info(
            "Updated %s: %d added, %d removed, %d modified",
            language,
            comparison.summary.added,
            comparison.summary.removed,
            comparison.summary.modified,
        )
        return UpdateResult(
            language=language,
            manifest=manifest,
            comparison=comparison,
            had_previous=previous is not None,
        )

    async def _previous_snapshot(self, language: str) -> Manifest | None:
        if self._cache is None:
            return None
        try:
            return await self._cache.peek(language)
        except CacheError as exc:
            # Invalid language codes are reported by the repository.
            logger.debug("No previous snapshot for %r: %s", language, exc.message)
            return None


__all__ = ["Catalog", "UpdateResult"]
