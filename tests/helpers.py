"""Shared fakes for claude-cmd tests."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Mapping

from claude_cmd.errors import HTTPNetworkError, HTTPStatusError
from claude_cmd.manifest.models import Command, Manifest
from claude_cmd.services.http import HTTPResponse


def make_command(name: str, description: str | None = None, **fields: Any) -> Command:
    data: dict[str, Any] = {
        "name": name,
        "description": description if description is not None else f"{name} command",
        "file": fields.pop("file", f"{name}.md"),
    }
    data.update(fields)
    return Command.model_validate(data)


def make_manifest(*commands: Command, version: str = "1.0.0", updated: str = "2025-01-01T00:00:00Z") -> Manifest:
    return Manifest(version=version, updated=updated, commands=list(commands))


def manifest_json(manifest: Manifest) -> str:
    return json.dumps(manifest.to_wire())


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeHTTP:
    """HTTP getter serving canned bodies by URL and recording every call.

    A value may be a string body, an int status code, or an exception
    instance to raise.
    """

    def __init__(self, routes: Mapping[str, Any] | None = None, delay: float = 0.0) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[str] = []
        self.delay = delay

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HTTPResponse:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if url not in self.routes:
            raise HTTPStatusError(url, 404, "Not Found")
        value = self.routes[url]
        if isinstance(value, Exception):
            raise value
        if isinstance(value, int):
            raise HTTPStatusError(url, value, "Error")
        return HTTPResponse(status=200, status_text="OK", body=value, final_url=url)


def network_down(url: str) -> HTTPNetworkError:
    return HTTPNetworkError(url, "Connection refused")
