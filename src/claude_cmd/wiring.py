"""Explicit construction of the service graph.

Nothing in claude-cmd is a module-level singleton; the CLI (and tests)
call :func:`build_services` once per invocation and pass the pieces down.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from claude_cmd.cache.store import CacheStore
from claude_cmd.catalog import Catalog
from claude_cmd.commands.parser import CommandParser
from claude_cmd.config.resolver import ConfigResolver
from claude_cmd.config.store import ConfigStore
from claude_cmd.core.config import DEFAULT_REPOSITORY_URL
from claude_cmd.core.paths import (
    get_cache_dir,
    get_personal_commands_dir,
    get_project_commands_dir,
    get_project_config_path,
    get_user_config_path,
)
from claude_cmd.repository.local import LocalRepository
from claude_cmd.repository.remote import RemoteRepository
from claude_cmd.services.files import FileService, LocalFileService
from claude_cmd.services.http import HTTPClient, HTTPGetter

logger = logging.getLogger(__name__)


@dataclass
class Services:
    files: FileService
    http: HTTPGetter
    user_config: ConfigStore
    project_config: ConfigStore
    resolver: ConfigResolver
    cache: CacheStore
    parser: CommandParser
    remote: RemoteRepository
    local: LocalRepository
    catalog: Catalog


async def build_services(
    project_root: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    file_service: FileService | None = None,
    http_client: HTTPGetter | None = None,
    cache_dir: Path | None = None,
) -> Services:
    """Wire every component for one invocation rooted at *project_root*."""
    root = Path(project_root) if project_root is not None else Path.cwd()
    files = file_service if file_service is not None else LocalFileService()
    http = http_client if http_client is not None else HTTPClient()

    user_config = ConfigStore(get_user_config_path(), files)
    project_config = ConfigStore(get_project_config_path(root), files)
    resolver = ConfigResolver(user_config, project_config, environ)

    cache = CacheStore(cache_dir if cache_dir is not None else get_cache_dir(), files)
    base_url = await resolver.repository_url() or DEFAULT_REPOSITORY_URL
    if base_url != DEFAULT_REPOSITORY_URL:
        logger.info("Using repository %s", base_url)

    parser = CommandParser()
    remote = RemoteRepository(http, cache, base_url=base_url)
    local = LocalRepository(parser, files, get_personal_commands_dir(), get_project_commands_dir(root))

    return Services(
        files=files,
        http=http,
        user_config=user_config,
        project_config=project_config,
        resolver=resolver,
        cache=cache,
        parser=parser,
        remote=remote,
        local=local,
        catalog=Catalog(remote, cache),
    )


__all__ = ["Services", "build_services"]
