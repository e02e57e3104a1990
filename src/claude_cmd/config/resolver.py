"""Effective configuration across CLI, environment, project, user and locale.

Precedence, highest first:

1. CLI flag (supplied by the caller, never stored)
2. ``CLAUDE_CMD_LANG`` environment variable
3. Project configuration
4. User configuration
5. POSIX locale (``LC_ALL``, ``LC_MESSAGES``, ``LANG``)
6. Fallback to English
"""

from __future__ import annotations

import asyncio
import copy
import logging
import os
from typing import Any, Mapping

from claude_cmd.config.store import PREFERRED_LANGUAGE_KEY, REPOSITORY_URL_KEY, ConfigStore
from claude_cmd.core.config import LANGUAGE_ENV_VAR, LOCALE_ENV_VARS
from claude_cmd.language import DetectionContext, detect

logger = logging.getLogger(__name__)


def merge_configs(
    base: Mapping[str, Any] | None,
    override: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Deep-merge two documents; *override* wins key by key at every depth.

    Nested mappings are merged recursively. Lists and scalars from *override*
    replace those in *base*. Neither input is mutated.
    """
    result: dict[str, Any] = copy.deepcopy(dict(base)) if base else {}
    if not override:
        return result

    for key, value in override.items():
        existing = result.get(key)
        if isinstance(value, Mapping) and isinstance(existing, Mapping):
            result[key] = merge_configs(existing, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def posix_locale_from_env(environ: Mapping[str, str]) -> str:
    """Return the first non-empty of LC_ALL, LC_MESSAGES, LANG."""
    for name in LOCALE_ENV_VARS:
        value = environ.get(name, "")
        if value:
            return value
    return ""


class ConfigResolver:
    """Combine user and project configuration with the environment."""

    def __init__(
        self,
        user_store: ConfigStore,
        project_store: ConfigStore,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.user_store = user_store
        self.project_store = project_store
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    async def _load_both(self) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
        project_config, user_config = await asyncio.gather(
            self.project_store.get_config(),
            self.user_store.get_config(),
        )
        return project_config, user_config

    async def detection_context(self, cli_flag: str = "") -> DetectionContext:
        project_config, user_config = await self._load_both()
        return DetectionContext(
            cli_flag=cli_flag or "",
            env_var=self.environ.get(LANGUAGE_ENV_VAR, ""),
            project_config=(project_config or {}).get(PREFERRED_LANGUAGE_KEY, "") or "",
            user_config=(user_config or {}).get(PREFERRED_LANGUAGE_KEY, "") or "",
            posix_locale=posix_locale_from_env(self.environ),
        )

    async def effective_language(self, cli_flag: str = "") -> str:
        """Return the language to operate in. Never raises."""
        context = await self.detection_context(cli_flag)
        language = detect(context)
        logger.debug("Effective language %s from %s", language, context)
        return language

    async def effective_config(self) -> dict[str, Any]:
        """Return the user document overlaid with the project document."""
        project_config, user_config = await self._load_both()
        return merge_configs(user_config, project_config)

    async def repository_url(self) -> str | None:
        """Return the effective ``repositoryURL``, if one is configured."""
        config = await self.effective_config()
        url = config.get(REPOSITORY_URL_KEY)
        return url if isinstance(url, str) and url else None


__all__ = ["ConfigResolver", "merge_configs", "posix_locale_from_env"]
