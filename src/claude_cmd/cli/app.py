"""Root ``claude-cmd`` Typer application."""

from __future__ import annotations

import typer

from claude_cmd.cli.commands import (
    cache_app,
    info,
    installed,
    language_app,
    list_commands,
    search,
    show,
    update,
)
from claude_cmd.cli.state import configure_logging, get_state

app = typer.Typer(
    name="claude-cmd",
    help="Browse and inspect Claude slash commands",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def callback(
    ctx: typer.Context,
    lang: str = typer.Option("", "--lang", "-l", help="Language code for every subcommand"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Record global options for subcommands."""
    state = get_state(ctx)
    state.language = lang
    state.verbose = verbose
    configure_logging(verbose)


app.command("list")(list_commands)
app.command()(search)
app.command()(info)
app.command()(show)
app.command()(update)
app.command()(installed)
app.add_typer(language_app, name="language")
app.add_typer(cache_app, name="cache")


def main() -> None:
    app()
