"""JSON configuration documents.

Two documents exist at runtime, each handled by its own :class:`ConfigStore`:

- user scope: ``~/.config/claude-cmd/config.claude-cmd.json``
- project scope: ``.claude/config.claude-cmd.json``

Only ``preferredLanguage`` and ``repositoryURL`` are validated; any other
key is preserved verbatim so newer versions can add settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from claude_cmd.errors import ClaudeCmdError, ConfigValidationError, ConfigWriteError
from claude_cmd.language import sanitize_language_code
from claude_cmd.services.files import FileService

logger = logging.getLogger(__name__)

PREFERRED_LANGUAGE_KEY = "preferredLanguage"
REPOSITORY_URL_KEY = "repositoryURL"

_URL_ADAPTER = TypeAdapter(AnyUrl)


def is_valid_url(value: Any) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_config(config: Any) -> bool:
    """Return True when *config* is a mapping whose recognized keys are valid."""
    if not isinstance(config, dict):
        return False

    if PREFERRED_LANGUAGE_KEY in config:
        language = config[PREFERRED_LANGUAGE_KEY]
        if not isinstance(language, str) or not sanitize_language_code(language):
            return False

    if REPOSITORY_URL_KEY in config:
        if not is_valid_url(config[REPOSITORY_URL_KEY]):
            return False

    return True


class ConfigStore:
    """Read and write one configuration document at a fixed path."""

    def __init__(self, config_path: Path, file_service: FileService) -> None:
        self._config_path = Path(config_path)
        self._files = file_service

    @property
    def config_path(self) -> Path:
        return self._config_path

    async def get_config(self) -> dict[str, Any] | None:
        """Return the document, or None if it is missing, unparsable or invalid."""
        try:
            raw = await self._files.read_file(self._config_path)
        except ClaudeCmdError as exc:
            logger.debug("No usable config at %s: %s", self._config_path, exc)
            return None

        try:
            config = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring malformed config %s: %s", self._config_path, exc)
            return None

        if not validate_config(config):
            logger.warning("Ignoring invalid config %s", self._config_path)
            return None
        return config

    async def set_config(self, config: dict[str, Any]) -> None:
        """Validate and persist *config*, replacing the previous document.

        Raises:
            ConfigValidationError: *config* is not valid; nothing is written
            ConfigWriteError: the document could not be written
        """
        if not validate_config(config):
            raise ConfigValidationError(str(self._config_path))

        payload = json.dumps(config, indent=2, ensure_ascii=False) + "\n"
        try:
            await self._files.mkdir(self._config_path.parent)
            await self._files.write_file(self._config_path, payload)
        except ClaudeCmdError as exc:
            raise ConfigWriteError(str(self._config_path), exc.message) from exc
        logger.info("Saved configuration to %s", self._config_path)

    async def get_preferred_language(self) -> str:
        """Return the stored ``preferredLanguage`` or ``""``."""
        config = await self.get_config()
        if not config:
            return ""
        return sanitize_language_code(config.get(PREFERRED_LANGUAGE_KEY, ""))

    async def set_preferred_language(self, language: str) -> None:
        """Update ``preferredLanguage`` while keeping every other key."""
        config = await self.get_config() or {}
        config[PREFERRED_LANGUAGE_KEY] = sanitize_language_code(language) or language
        await self.set_config(config)


__all__ = [
    "ConfigStore",
    "PREFERRED_LANGUAGE_KEY",
    "REPOSITORY_URL_KEY",
    "is_valid_url",
    "validate_config",
]
