"""Catalog browsing commands: list, search, info, show, update, installed."""

from __future__ import annotations

import json as json_lib

import typer
from rich.markup import escape
from rich.table import Table

from claude_cmd.catalog import UpdateResult
from claude_cmd.cli.state import console, get_state, load_services, resolve_language, run
from claude_cmd.manifest.diff import ChangeType
from claude_cmd.manifest.models import Command
from claude_cmd.repository.local import LocalScanResult

LANG_OPTION_HELP = "Language code (e.g. en, fr); defaults to the detected language"

_CHANGE_MARKERS = {
    ChangeType.ADDED: "[green]+[/green]",
    ChangeType.REMOVED: "[red]-[/red]",
    ChangeType.MODIFIED: "[yellow]~[/yellow]",
}


def _commands_table(commands: list[Command], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Allowed tools", style="dim")
    for command in sorted(commands, key=lambda c: c.name):
        table.add_row(
            escape(command.name),
            escape(command.description),
            escape(", ".join(command.allowed_tools)),
        )
    return table


def _print_json(payload: object) -> None:
    typer.echo(json_lib.dumps(payload, indent=2, ensure_ascii=False))


def list_commands(
    ctx: typer.Context,
    lang: str = typer.Option("", "--lang", "-l", help=LANG_OPTION_HELP),
    refresh: bool = typer.Option(False, "--refresh", help="Bypass the manifest cache"),
    json_output: bool = typer.Option(False, "--json", help="Print the commands as JSON"),
) -> None:
    """List the commands available in the repository."""
    state = get_state(ctx)

    async def _list() -> tuple[str, list[Command]]:
        services = await load_services(state)
        language = await resolve_language(services, state, lang)
        return language, await services.catalog.list_commands(language, refresh)

    language, commands = run(_list())
    if json_output:
        _print_json([command.to_wire() for command in commands])
        return
    if not commands:
        console.print(f"[yellow]No commands available for '{language}'.[/yellow]")
        return
    console.print(_commands_table(commands, f"Commands ({language})"))


def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Text to look for in names and descriptions"),
    lang: str = typer.Option("", "--lang", "-l", help=LANG_OPTION_HELP),
    json_output: bool = typer.Option(False, "--json", help="Print the matches as JSON"),
) -> None:
    """Search commands by name or description."""
    state = get_state(ctx)

    async def _search() -> list[Command]:
        services = await load_services(state)
        language = await resolve_language(services, state, lang)
        return await services.catalog.search_commands(query, language)

    matches = run(_search())
    if json_output:
        _print_json([command.to_wire() for command in matches])
        return
    if not matches:
        console.print(f"[yellow]No commands match '{escape(query)}'.[/yellow]")
        return
    console.print(_commands_table(matches, f"Matches for '{escape(query)}'"))


def info(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Command name"),
    lang: str = typer.Option("", "--lang", "-l", help=LANG_OPTION_HELP),
    json_output: bool = typer.Option(False, "--json", help="Print the command as JSON"),
) -> None:
    """Show the metadata of one command."""
    state = get_state(ctx)

    async def _info() -> Command:
        services = await load_services(state)
        language = await resolve_language(services, state, lang)
        return await services.catalog.get_command_info(name, language)

    command = run(_info())
    if json_output:
        _print_json(command.to_wire())
        return

    console.print(f"[bold cyan]{escape(command.name)}[/bold cyan]")
    console.print(f"  Description:   {escape(command.description)}")
    console.print(f"  File:          {escape(command.file)}")
    if command.namespace:
        console.print(f"  Namespace:     {escape(command.namespace)}")
    if command.argument_hint:
        console.print(f"  Arguments:     {escape(command.argument_hint)}")
    tools = ", ".join(command.allowed_tools) if command.allowed_tools else "none"
    console.print(f"  Allowed tools: {escape(tools)}")


def show(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Command name"),
    lang: str = typer.Option("", "--lang", "-l", help=LANG_OPTION_HELP),
    refresh: bool = typer.Option(False, "--refresh", help="Bypass the cache"),
) -> None:
    """Print the raw Markdown of one command."""
    state = get_state(ctx)

    async def _show() -> str:
        services = await load_services(state)
        language = await resolve_language(services, state, lang)
        return await services.catalog.get_command_content(name, language, refresh)

    typer.echo(run(_show()))


def update(
    ctx: typer.Context,
    lang: str = typer.Option("", "--lang", "-l", help=LANG_OPTION_HELP),
) -> None:
    """Refresh the cached manifest and report what changed."""
    state = get_state(ctx)

    async def _update() -> UpdateResult:
        services = await load_services(state)
        language = await resolve_language(services, state, lang)
        return await services.catalog.update_cache_with_changes(language)

    result = run(_update())
    summary = result.comparison.summary
    console.print(f"[green]Updated[/green] {result.language}: {result.command_count} commands")
    if not result.has_changes:
        console.print("No changes since the last update.")
        return

    console.print(f"  {summary.added} added, {summary.removed} removed, {summary.modified} modified")
    for change in result.comparison.changes:
        line = f"  {_CHANGE_MARKERS[change.type]} {escape(change.name)}"
        if change.details is not None:
            line += f" [dim]({', '.join(change.details.fields)})[/dim]"
        console.print(line)


def installed(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print the commands as JSON"),
) -> None:
    """List commands installed in ~/.claude/commands and ./.claude/commands."""
    state = get_state(ctx)

    async def _scan() -> LocalScanResult:
        services = await load_services(state)
        return await services.local.scan()

    result = run(_scan())
    commands = list(result.manifest.commands)
    if json_output:
        _print_json(
            {
                "commands": [command.to_wire() for command in commands],
                "warnings": [str(warning) for warning in result.warnings],
            }
        )
        return

    if commands:
        console.print(_commands_table(commands, "Installed commands"))
    else:
        console.print("[yellow]No installed commands found.[/yellow]")
    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(str(warning))}")
