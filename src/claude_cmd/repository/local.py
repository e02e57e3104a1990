"""Installed commands on this machine.

Two roots are scanned, personal (``~/.claude/commands``) before project
(``./.claude/commands``). When both define the same command name the
personal one wins. Language arguments are accepted for interface parity
and ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from claude_cmd.commands.parser import CommandParser
from claude_cmd.core.config import FALLBACK_LANGUAGE, LOCAL_MANIFEST_VERSION, MAX_SCAN_DEPTH, language_name
from claude_cmd.errors import ClaudeCmdError, CommandNotFoundError
from claude_cmd.manifest.models import Command, Manifest
from claude_cmd.repository.base import LanguageInfo
from claude_cmd.repository.scanner import ScanWarning, scan_command_tree
from claude_cmd.services.files import FileService

logger = logging.getLogger(__name__)

LOCAL_LANGUAGE_LABEL = "local"


@dataclass(frozen=True)
class LocalScanResult:
    manifest: Manifest
    warnings: tuple[ScanWarning, ...] = ()


@dataclass(frozen=True)
class _Found:
    command: Command
    path: Path


class LocalRepository:
    """Repository over the personal and project command directories."""

    def __init__(
        self,
        parser: CommandParser,
        file_service: FileService,
        personal_root: Path,
        project_root: Path,
        *,
        max_depth: int = MAX_SCAN_DEPTH,
    ) -> None:
        self.personal_root = Path(personal_root)
        self.project_root = Path(project_root)
        self.max_depth = max_depth
        self._parser = parser
        self._files = file_service

    @property
    def roots(self) -> tuple[Path, Path]:
        return (self.personal_root, self.project_root)

    async def _collect(self) -> tuple[list[_Found], list[ScanWarning]]:
        found: dict[str, _Found] = {}
        warnings: list[ScanWarning] = []

        for root in self.roots:
            tree = await scan_command_tree(root, self._files, self.max_depth)
            warnings.extend(tree.warnings)
            for command_file in tree.files:
                try:
                    content = await self._files.read_file(command_file.file_path)
                    command = self._parser.parse(content, command_file.relative_path)
                except ClaudeCmdError as exc:
                    logger.debug("Skipping command file %s: %s", command_file.file_path, exc.message)
                    warnings.append(ScanWarning(str(command_file.file_path), exc.message))
                    continue

                if command.name in found:
                    logger.debug(
                        "Command %s in %s shadowed by %s",
                        command.name,
                        command_file.file_path,
                        found[command.name].path,
                    )
                    continue
                found[command.name] = _Found(command=command, path=command_file.file_path)

        return list(found.values()), warnings

    async def scan(self) -> LocalScanResult:
        """Scan both roots; never raises for individual bad files."""
        found, warnings = await self._collect()
        manifest = Manifest(
            version=LOCAL_MANIFEST_VERSION,
            updated=datetime.now(timezone.utc).isoformat(),
            commands=[entry.command for entry in found],
        )
        return LocalScanResult(manifest=manifest, warnings=tuple(warnings))

    async def get_manifest(self, language: str = "", force_refresh: bool = False) -> Manifest:
        result = await self.scan()
        if result.warnings:
            logger.info("Local scan finished with %d warning(s)", len(result.warnings))
        return result.manifest

    async def get_command(self, name: str, language: str = "", force_refresh: bool = False) -> str:
        """Return the raw content of the installed command *name*.

        Raises:
            CommandNotFoundError: no installed file parses to *name*
        """
        found, _warnings = await self._collect()
        for entry in found:
            if entry.command.name == name:
                return await self._files.read_file(entry.path)
        raise CommandNotFoundError(name, language or LOCAL_LANGUAGE_LABEL)

    async def get_available_languages(self) -> list[LanguageInfo]:
        manifest = await self.get_manifest()
        return [
            LanguageInfo(
                code=FALLBACK_LANGUAGE,
                name=language_name(FALLBACK_LANGUAGE),
                command_count=len(manifest.commands),
            )
        ]


__all__ = ["LocalRepository", "LocalScanResult"]
