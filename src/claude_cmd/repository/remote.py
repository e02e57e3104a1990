"""Manifests and command files served by the public commands repository.

URL layout (``base`` defaults to the GitHub raw URL of the commands repo)::

    {base}/commands/{language}/manifest.json
    {base}/commands/{language}/{file}

Manifests are read through the :class:`CacheStore` unless a refresh is
forced. Concurrent fetches of the same language share one request.
"""

from __future__ import annotations

import asyncio
import json
import logging
from urllib.parse import quote

from pydantic import ValidationError

from claude_cmd.cache.store import CacheStore
from claude_cmd.core.config import DEFAULT_REPOSITORY_URL, language_name
from claude_cmd.errors import (
    CacheError,
    ClaudeCmdError,
    CommandContentError,
    CommandNotFoundError,
    ManifestError,
)
from claude_cmd.language import sanitize_language_code
from claude_cmd.manifest.models import Manifest
from claude_cmd.repository.base import LanguageInfo
from claude_cmd.services.http import HTTPGetter

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "manifest"
    return f"Invalid manifest structure: {location}: {first.get('msg', 'invalid value')}"


def parse_manifest_body(body: str, language: str) -> Manifest:
    """Decode and validate a manifest response body.

    Raises:
        ManifestError: empty body, invalid JSON or an invalid document
    """
    if not body or not body.strip():
        raise ManifestError(language, "Empty response body")
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise ManifestError(language, f"Invalid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise ManifestError(language, "Invalid manifest structure: expected a JSON object")
    try:
        return Manifest.model_validate(payload)
    except ValidationError as exc:
        raise ManifestError(language, _describe_validation_error(exc)) from exc


class RemoteRepository:
    """Repository backed by HTTP with an on-disk manifest cache."""

    def __init__(
        self,
        http_client: HTTPGetter,
        cache_store: CacheStore,
        *,
        base_url: str = DEFAULT_REPOSITORY_URL,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http_client
        self._cache = cache_store
        self._inflight: dict[str, asyncio.Task[Manifest]] = {}

    def manifest_url(self, language: str) -> str:
        return f"{self.base_url}/commands/{language}/manifest.json"

    def command_url(self, language: str, file: str) -> str:
        return f"{self.base_url}/commands/{language}/{quote(file)}"

    @staticmethod
    def _language_or_error(language: str) -> str:
        code = sanitize_language_code(language)
        if not code:
            raise ManifestError(
                str(language),
                f'Invalid language code format: "{language}". Expected format: "en", "es", etc.',
            )
        return code

    async def get_manifest(self, language: str, force_refresh: bool = False) -> Manifest:
        """Return the manifest for *language*, from cache when fresh.

        Raises:
            ManifestError: the manifest could not be fetched or parsed
        """
        code = self._language_or_error(language)
        if not force_refresh:
            cached = await self._cache.get(code)
            if cached is not None:
                logger.debug("Manifest cache hit for %s", code)
                return cached
        return await self._fetch_shared(code)

    async def _fetch_shared(self, language: str) -> Manifest:
        task = self._inflight.get(language)
        if task is None:
            task = asyncio.ensure_future(self._fetch_manifest(language))
            self._inflight[language] = task
            task.add_done_callback(lambda done, code=language: self._release(code, done))
        else:
            logger.debug("Joining in-flight manifest fetch for %s", language)
        # One caller being cancelled must not cancel the fetch for the others.
        return await asyncio.shield(task)

    def _release(self, language: str, task: asyncio.Task[Manifest]) -> None:
        if self._inflight.get(language) is task:
            del self._inflight[language]

    async def _fetch_manifest(self, language: str) -> Manifest:
        url = self.manifest_url(language)
        try:
            response = await self._http.get(url, timeout=self.timeout)
        except ClaudeCmdError as exc:
            raise ManifestError(language, exc.message) from exc

        manifest = parse_manifest_body(response.body, language)
        try:
            await self._cache.set(language, manifest)
        except CacheError as exc:
            logger.warning("Could not cache manifest for %s: %s", language, exc.message)
        logger.debug("Fetched %d commands for %s", len(manifest.commands), language)
        return manifest

    async def get_command(self, name: str, language: str, force_refresh: bool = False) -> str:
        """Return the raw Markdown of command *name*.

        Raises:
            ManifestError: the manifest could not be resolved
            CommandNotFoundError: *name* is not in the manifest
            CommandContentError: the command file could not be fetched
        """
        code = self._language_or_error(language)
        manifest = await self.get_manifest(code, force_refresh)
        command = manifest.find(name)
        if command is None:
            raise CommandNotFoundError(name, code)

        if not force_refresh:
            try:
                cached = await self._cache.get_content(code, name)
            except CacheError as exc:
                logger.debug("Content cache unavailable for %s: %s", name, exc.message)
                cached = None
            if cached is not None:
                return cached

        try:
            response = await self._http.get(self.command_url(code, command.file), timeout=self.timeout)
        except ClaudeCmdError as exc:
            raise CommandContentError(name, code, exc.message) from exc

        try:
            await self._cache.set_content(code, name, response.body)
        except CacheError as exc:
            logger.warning("Could not cache content of %s: %s", name, exc.message)
        return response.body

    async def get_available_languages(self) -> list[LanguageInfo]:
        """Languages with a cached manifest, most commands first."""
        languages = [
            LanguageInfo(code=code, name=language_name(code), command_count=count)
            for code, count in await self._cache.cached_languages()
        ]
        return sorted(languages, key=lambda info: (-info.command_count, info.code))


__all__ = ["RemoteRepository", "parse_manifest_body"]
