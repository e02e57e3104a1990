"""``claude-cmd language`` commands."""

from __future__ import annotations

import typer
from rich.table import Table

from claude_cmd.cli.state import console, get_state, load_services, run
from claude_cmd.config.store import ConfigStore
from claude_cmd.core.config import language_name
from claude_cmd.errors import InvalidLanguageCodeError
from claude_cmd.language import sanitize_language_code
from claude_cmd.repository.base import LanguageInfo

app = typer.Typer(help="Show or change the command language")


@app.command("show")
def show_language(ctx: typer.Context) -> None:
    """Print the effective language."""
    state = get_state(ctx)

    async def _show() -> str:
        services = await load_services(state)
        return await services.resolver.effective_language(state.language)

    language = run(_show())
    console.print(f"{language} ({language_name(language)})")


@app.command("set")
def set_language(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Two- or three-letter language code"),
    project: bool = typer.Option(False, "--project", help="Store in the project config instead of the user config"),
) -> None:
    """Persist the preferred language."""
    state = get_state(ctx)

    async def _set() -> ConfigStore:
        language = sanitize_language_code(code)
        if not language:
            raise InvalidLanguageCodeError(f'Invalid language code "{code}". Expected format: "en", "es", etc.', code)
        services = await load_services(state)
        store = services.project_config if project else services.user_config
        await store.set_preferred_language(language)
        return store

    store = run(_set())
    console.print(f"[green]Language set to[/green] {sanitize_language_code(code)} [dim]({store.config_path})[/dim]")


@app.command("list")
def list_languages(ctx: typer.Context) -> None:
    """List languages with a cached manifest."""
    state = get_state(ctx)

    async def _list() -> list[LanguageInfo]:
        services = await load_services(state)
        return await services.remote.get_available_languages()

    languages = run(_list())
    if not languages:
        console.print("[yellow]No cached languages yet. Run 'claude-cmd update' first.[/yellow]")
        return

    table = Table(title="Cached languages")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Commands", justify="right")
    for info in languages:
        table.add_row(info.code, info.name, str(info.command_count))
    console.print(table)
