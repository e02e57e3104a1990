"""Per-invocation CLI state and helpers shared by command modules."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Coroutine, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from claude_cmd.errors import ClaudeCmdError
from claude_cmd.services.http import HTTPGetter
from claude_cmd.wiring import Services, build_services

T = TypeVar("T")

console = Console(width=120)


@dataclass
class CliState:
    """Options from the root callback, handed to subcommands via ``ctx.obj``."""

    language: str = ""
    verbose: bool = False
    project_root: Path = field(default_factory=Path.cwd)
    http_client: Optional[HTTPGetter] = None


def get_state(ctx: typer.Context) -> CliState:
    root = ctx.find_root()
    if root.obj is None:
        root.obj = CliState()
    return root.obj


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=verbose)],
        force=True,
    )


async def load_services(state: CliState) -> Services:
    return await build_services(state.project_root, http_client=state.http_client)


async def resolve_language(services: Services, state: CliState, override: str = "") -> str:
    """Language for this command: explicit option, then the root --lang flag, then detection."""
    return await services.resolver.effective_language(override or state.language)


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Drive *coro* to completion, turning domain errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except ClaudeCmdError as exc:
        console.print(f"[red]Error:[/red] {escape(exc.message)}")
        raise typer.Exit(1) from exc


__all__ = ["CliState", "configure_logging", "console", "get_state", "load_services", "resolve_language", "run"]
