"""Tests for catalog operations and cache updates with change reports."""

from __future__ import annotations

import asyncio

import pytest

from claude_cmd.cache.store import CacheStore
from claude_cmd.catalog import Catalog
from claude_cmd.errors import CommandNotFoundError, ErrorKind, InvalidArgumentError, ManifestError
from claude_cmd.manifest.diff import ChangeType
from claude_cmd.repository.remote import RemoteRepository
from tests.helpers import FakeClock, FakeHTTP, make_command, make_manifest, manifest_json

BASE = "https://repo.example.com"
MANIFEST_URL = f"{BASE}/commands/en/manifest.json"

MANIFEST = make_manifest(
    make_command("debug-help", "Systematic debugging assistance"),
    make_command("code-review", "Review a pull request"),
    make_command("frontend:component", "Scaffold a React component", file="frontend/component.md"),
)


def _catalog(cache_store: CacheStore, http: FakeHTTP) -> Catalog:
    return Catalog(RemoteRepository(http, cache_store, base_url=BASE), cache_store)


class TestQueries:
    def test_list(self, cache_store: CacheStore):
        catalog = _catalog(cache_store, FakeHTTP({MANIFEST_URL: manifest_json(MANIFEST)}))
        assert [c.name for c in asyncio.run(catalog.list_commands("en"))] == [
            "debug-help",
            "code-review",
            "frontend:component",
        ]

    @pytest.mark.parametrize(
        "query, expected",
        [
            ("DEBUG", ["debug-help"]),
            ("review", ["code-review"]),
            ("react", ["frontend:component"]),
            ("  frontend ", ["frontend:component"]),
            ("zzz", []),
        ],
    )
    def test_search(self, cache_store: CacheStore, query: str, expected: list[str]):
        catalog = _catalog(cache_store, FakeHTTP({MANIFEST_URL: manifest_json(MANIFEST)}))
        assert [c.name for c in asyncio.run(catalog.search_commands(query, "en"))] == expected

    @pytest.mark.parametrize("query", ["", "   "])
    def test_empty_search_rejected(self, cache_store: CacheStore, query: str):
        http = FakeHTTP()
        with pytest.raises(InvalidArgumentError) as exc_info:
            asyncio.run(_catalog(cache_store, http).search_commands(query, "en"))
        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert http.calls == []

    def test_info(self, cache_store: CacheStore):
        catalog = _catalog(cache_store, FakeHTTP({MANIFEST_URL: manifest_json(MANIFEST)}))
        assert asyncio.run(catalog.get_command_info("code-review", "en")).description == "Review a pull request"
        with pytest.raises(CommandNotFoundError):
            asyncio.run(catalog.get_command_info("nope", "en"))

    def test_content(self, cache_store: CacheStore):
        http = FakeHTTP({MANIFEST_URL: manifest_json(MANIFEST), f"{BASE}/commands/en/code-review.md": "# Review"})
        assert asyncio.run(_catalog(cache_store, http).get_command_content("code-review", "en")) == "# Review"


class TestUpdateCacheWithChanges:
    """Explicit refresh with a change report."""

    def test_first_update_reports_everything_added(self, cache_store: CacheStore):
        http = FakeHTTP({MANIFEST_URL: manifest_json(MANIFEST)})

        result = asyncio.run(_catalog(cache_store, http).update_cache_with_changes("en"))

        assert not result.had_previous
        assert result.command_count == 3
        assert result.comparison.summary.added == 3
        assert result.has_changes
        assert asyncio.run(cache_store.get("en")) == MANIFEST

    def test_diff_against_stale_cache(self, cache_store: CacheStore, clock: FakeClock):
        old = make_manifest(make_command("debug-help", "Old text"), make_command("legacy"))
        asyncio.run(cache_store.set("en", old))
        clock.advance(5 * 60 * 60 * 1000)  # older than the TTL still counts as "before"
        http = FakeHTTP({MANIFEST_URL: manifest_json(MANIFEST)})

        result = asyncio.run(_catalog(cache_store, http).update_cache_with_changes("en"))

        assert result.had_previous
        summary = result.comparison.summary
        assert (summary.added, summary.removed, summary.modified) == (2, 1, 1)
        assert [c.name for c in result.comparison.by_type(ChangeType.REMOVED)] == ["legacy"]
        assert http.calls == [MANIFEST_URL]

    def test_always_refetches(self, cache_store: CacheStore):
        asyncio.run(cache_store.set("en", MANIFEST))
        http = FakeHTTP({MANIFEST_URL: manifest_json(MANIFEST)})

        result = asyncio.run(_catalog(cache_store, http).update_cache_with_changes("en"))

        assert not result.has_changes
        assert http.calls == [MANIFEST_URL]

    def test_invalid_language(self, cache_store: CacheStore):
        with pytest.raises(ManifestError):
            asyncio.run(_catalog(cache_store, FakeHTTP()).update_cache_with_changes("not a language"))
