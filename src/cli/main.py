"""CLI principal (Typer).

Capa fina: parsea argumentos, abre un `MarvelClient`, y delega el render en
`cli.ui_components`. Toda la lógica de consulta vive en `core`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_json
from cli import doctor
from cli.ui_components import (
    build_characters_table,
    build_event_panel,
    build_events_table,
    print_banner,
)
from core.config import AppSettings, load_settings
from core.errors import ConfigurationError, MarvelError
from core.logging import configure_logging
from core.services.marvel_client import MarvelClient

app = typer.Typer(
    no_args_is_help=True,
    help="Explore Marvel characters and the events they share.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

OutputOption = typer.Option(
    None,
    "--output",
    "-o",
    help="Also write the result as JSON to this path.",
    dir_okay=False,
)


def open_client(settings: AppSettings) -> MarvelClient:
    return MarvelClient.from_settings(settings)


def _fail(exc: MarvelError) -> typer.Exit:
    _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
    return typer.Exit(code=1)


def _settings() -> AppSettings:
    try:
        return load_settings()
    except ConfigurationError as exc:
        raise _fail(exc) from exc


def _run(action: Callable[[MarvelClient], Awaitable[Any]]) -> Any:
    settings = _settings()

    async def _go() -> Any:
        async with open_client(settings) as client:
            return await action(client)

    try:
        return asyncio.run(_go())
    except MarvelError as exc:
        raise _fail(exc) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    banner: bool = typer.Option(False, "--banner", help="Show the welcome banner."),
) -> None:
    settings = _settings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    if banner:
        print_banner(_console)


@app.command()
def search(
    prefix: str = typer.Argument(..., help="Beginning of the character name."),
    output: Path | None = OutputOption,
) -> None:
    """Search characters whose name starts with PREFIX."""

    characters = _run(lambda client: client.search_characters(prefix))
    _console.print(build_characters_table(characters))
    if output:
        export_json(payload=characters, output_path=output)


@app.command()
def events(
    character_id: int = typer.Argument(..., help="Character id (see `search`)."),
    output: Path | None = OutputOption,
) -> None:
    """List the events a character appears in, oldest first."""

    results = _run(lambda client: client.events_by_character(character_id))
    _console.print(build_events_table(results))
    if output:
        export_json(payload=results, output_path=output)


@app.command(name="first-event")
def first_event(
    name1: str = typer.Argument(..., help="Exact name of the first character."),
    name2: str = typer.Argument(..., help="Exact name of the second character."),
    output: Path | None = OutputOption,
) -> None:
    """Show the earliest event in which both characters appear."""

    event = _run(lambda client: client.earliest_shared_event(name1, name2))
    if event is None:
        _console.print(f"[yellow]No shared event found for {name1} and {name2}.[/yellow]")
    else:
        _console.print(build_event_panel(event, name1=name1, name2=name2))
    if output:
        export_json(payload=event, output_path=output)


def run() -> None:
    app()
