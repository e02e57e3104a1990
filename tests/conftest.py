from __future__ import annotations

from pathlib import Path

import pytest

from claude_cmd.cache.store import CacheStore
from claude_cmd.services.files import LocalFileService
from tests.helpers import FakeClock


@pytest.fixture()
def files() -> LocalFileService:
    return LocalFileService()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache_store(tmp_path: Path, files: LocalFileService, clock: FakeClock) -> CacheStore:
    return CacheStore(tmp_path / "cache", files, clock=clock)


@pytest.fixture()
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every claude-cmd location at *tmp_path* and clear language env vars."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("CLAUDE_CMD_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("CLAUDE_CMD_CONFIG_DIR", str(tmp_path / "config"))
    for name in ("CLAUDE_CMD_LANG", "LC_ALL", "LC_MESSAGES", "LANG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(project)
    return tmp_path
