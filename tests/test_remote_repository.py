"""Tests for the HTTP-backed command repository."""

from __future__ import annotations

import asyncio
import json

import pytest

from claude_cmd.cache.store import CacheStore
from claude_cmd.errors import (
    CacheError,
    CommandContentError,
    CommandNotFoundError,
    ErrorKind,
    ManifestError,
)
from claude_cmd.repository.remote import RemoteRepository
from tests.helpers import FakeClock, FakeHTTP, make_command, make_manifest, manifest_json, network_down

BASE = "https://repo.example.com"
EN_MANIFEST_URL = f"{BASE}/commands/en/manifest.json"

MANIFEST = make_manifest(
    make_command("debug-help", allowed_tools=["Read"]),
    make_command("frontend:component", file="frontend/component.md", namespace="frontend"),
)


def _repo(http: FakeHTTP, cache_store: CacheStore) -> RemoteRepository:
    return RemoteRepository(http, cache_store, base_url=BASE + "/")


class TestGetManifest:
    """Cache-first manifest retrieval."""

    def test_fetches_then_caches(self, cache_store: CacheStore):
        http = FakeHTTP({EN_MANIFEST_URL: manifest_json(MANIFEST)})
        repo = _repo(http, cache_store)

        assert asyncio.run(repo.get_manifest("en")) == MANIFEST
        assert asyncio.run(repo.get_manifest("EN")) == MANIFEST
        assert http.calls == [EN_MANIFEST_URL]
        assert asyncio.run(cache_store.get("en")) == MANIFEST

    def test_force_refresh_bypasses_cache(self, cache_store: CacheStore):
        asyncio.run(cache_store.set("en", make_manifest()))
        http = FakeHTTP({EN_MANIFEST_URL: manifest_json(MANIFEST)})

        assert asyncio.run(_repo(http, cache_store).get_manifest("en", force_refresh=True)) == MANIFEST
        assert http.calls == [EN_MANIFEST_URL]

    def test_expired_cache_refetches(self, cache_store: CacheStore, clock: FakeClock):
        asyncio.run(cache_store.set("en", make_manifest()))
        clock.advance(60 * 60 * 1000 + 1)
        http = FakeHTTP({EN_MANIFEST_URL: manifest_json(MANIFEST)})

        assert asyncio.run(_repo(http, cache_store).get_manifest("en")) == MANIFEST
        assert len(http.calls) == 1

    @pytest.mark.parametrize(
        "body, cause_fragment",
        [
            ("", "Empty response body"),
            ("   ", "Empty response body"),
            ("{oops", "Invalid JSON"),
            ("[1, 2]", "Invalid manifest structure"),
            (json.dumps({"version": "1"}), "Invalid manifest structure"),
            (json.dumps({"commands": [{"name": "x", "description": "d"}]}), "Invalid manifest structure"),
            (json.dumps({"commands": [{"name": "x", "description": "d", "file": "../x.md"}]}), "Invalid manifest"),
        ],
    )
    def test_bad_bodies(self, cache_store: CacheStore, body: str, cause_fragment: str):
        repo = _repo(FakeHTTP({EN_MANIFEST_URL: body}), cache_store)
        with pytest.raises(ManifestError) as exc_info:
            asyncio.run(repo.get_manifest("en"))
        assert cause_fragment in exc_info.value.cause
        assert exc_info.value.kind is ErrorKind.TRANSPORT
        assert asyncio.run(cache_store.peek("en")) is None

    def test_transport_failures(self, cache_store: CacheStore):
        repo = _repo(FakeHTTP({EN_MANIFEST_URL: network_down(EN_MANIFEST_URL)}), cache_store)
        with pytest.raises(ManifestError) as exc_info:
            asyncio.run(repo.get_manifest("en"))
        assert "Connection refused" in exc_info.value.message

        repo = _repo(FakeHTTP({EN_MANIFEST_URL: 500}), cache_store)
        with pytest.raises(ManifestError, match="HTTP 500"):
            asyncio.run(repo.get_manifest("en"))

    def test_invalid_language(self, cache_store: CacheStore):
        http = FakeHTTP()
        with pytest.raises(ManifestError):
            asyncio.run(_repo(http, cache_store).get_manifest("../../etc"))
        assert http.calls == []

    def test_cache_write_failure_is_not_fatal(self, cache_store: CacheStore, monkeypatch):
        async def failing_set(*args, **kwargs):
            raise CacheError("disk full", "en")

        monkeypatch.setattr(cache_store, "set", failing_set)
        repo = _repo(FakeHTTP({EN_MANIFEST_URL: manifest_json(MANIFEST)}), cache_store)
        assert asyncio.run(repo.get_manifest("en")) == MANIFEST

    def test_concurrent_fetches_are_shared(self, cache_store: CacheStore):
        http = FakeHTTP({EN_MANIFEST_URL: manifest_json(MANIFEST)}, delay=0.05)
        repo = _repo(http, cache_store)

        async def fetch_many():
            return await asyncio.gather(*(repo.get_manifest("en", force_refresh=True) for _ in range(5)))

        results = asyncio.run(fetch_many())

        assert all(result == MANIFEST for result in results)
        assert http.calls == [EN_MANIFEST_URL]
        assert repo._inflight == {}

    def test_concurrent_failures_are_shared(self, cache_store: CacheStore):
        http = FakeHTTP({EN_MANIFEST_URL: 503}, delay=0.05)
        repo = _repo(http, cache_store)

        async def fetch_many():
            return await asyncio.gather(
                *(repo.get_manifest("en") for _ in range(3)),
                return_exceptions=True,
            )

        results = asyncio.run(fetch_many())

        assert all(isinstance(result, ManifestError) for result in results)
        assert len(http.calls) == 1


class TestGetCommand:
    """Content retrieval always resolves the manifest first."""

    def test_unknown_command_never_fetches_content(self, cache_store: CacheStore):
        http = FakeHTTP({EN_MANIFEST_URL: manifest_json(MANIFEST)})
        with pytest.raises(CommandNotFoundError) as exc_info:
            asyncio.run(_repo(http, cache_store).get_command("missing", "en"))
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert http.calls == [EN_MANIFEST_URL]

    def test_fetches_and_caches_content(self, cache_store: CacheStore):
        content_url = f"{BASE}/commands/en/frontend/component.md"
        http = FakeHTTP({EN_MANIFEST_URL: manifest_json(MANIFEST), content_url: "# Component"})
        repo = _repo(http, cache_store)

        assert asyncio.run(repo.get_command("frontend:component", "en")) == "# Component"
        assert asyncio.run(repo.get_command("frontend:component", "en")) == "# Component"
        assert http.calls == [EN_MANIFEST_URL, content_url]

    def test_content_failure(self, cache_store: CacheStore):
        http = FakeHTTP({EN_MANIFEST_URL: manifest_json(MANIFEST)})
        with pytest.raises(CommandContentError) as exc_info:
            asyncio.run(_repo(http, cache_store).get_command("debug-help", "en"))
        assert exc_info.value.resource == "debug-help"
        assert "HTTP 404" in exc_info.value.cause

    def test_manifest_failure_propagates(self, cache_store: CacheStore):
        with pytest.raises(ManifestError):
            asyncio.run(_repo(FakeHTTP(), cache_store).get_command("debug-help", "en"))


class TestAvailableLanguages:
    def test_from_cache_sorted_by_count(self, cache_store: CacheStore):
        asyncio.run(cache_store.set("fr", make_manifest(make_command("a"))))
        asyncio.run(cache_store.set("en", MANIFEST))
        asyncio.run(cache_store.set("xx", make_manifest(make_command("a"), make_command("b"), make_command("c"))))
        http = FakeHTTP()

        languages = asyncio.run(_repo(http, cache_store).get_available_languages())

        assert [(info.code, info.name, info.command_count) for info in languages] == [
            ("xx", "XX", 3),
            ("en", "English", 2),
            ("fr", "Français", 1),
        ]
        assert http.calls == []
