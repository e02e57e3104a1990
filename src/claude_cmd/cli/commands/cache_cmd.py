"""``claude-cmd cache`` commands."""

from __future__ import annotations

import typer

from claude_cmd.cli.state import console, get_state, load_services, resolve_language, run

app = typer.Typer(help="Manage the local manifest cache")


@app.command("clear")
def clear_cache(
    ctx: typer.Context,
    lang: str = typer.Option("", "--lang", "-l", help="Language to clear; defaults to the detected language"),
) -> None:
    """Drop the cached manifest for one language."""
    state = get_state(ctx)

    async def _clear() -> str:
        services = await load_services(state)
        language = await resolve_language(services, state, lang)
        await services.cache.clear(language)
        return language

    language = run(_clear())
    console.print(f"[green]Cleared cache for[/green] {language}")
