"""The repository capability shared by remote and local catalogs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from claude_cmd.manifest.models import Manifest


@dataclass(frozen=True)
class LanguageInfo:
    code: str
    name: str
    command_count: int


class Repository(Protocol):
    """Anything that can serve manifests and command content."""

    async def get_manifest(self, language: str, force_refresh: bool = False) -> Manifest: ...

    async def get_command(self, name: str, language: str, force_refresh: bool = False) -> str: ...

    async def get_available_languages(self) -> list[LanguageInfo]: ...


__all__ = ["LanguageInfo", "Repository"]
