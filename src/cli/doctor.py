"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.http_client import HttpJsonFetcher, build_async_client
from adapters.signer import RequestSigner
from adapters.uri_builder import UriBuilder
from core.config import AppSettings, load_settings, write_user_env_vars
from core.domain.models import Credentials
from core.errors import ConfigurationError, MarvelError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings, credentials: Credentials) -> tuple[bool, str]:
    """Signed request against the characters endpoint; validates keys and connectivity."""

    uris = UriBuilder(RequestSigner(credentials), settings.api_base)
    try:
        async with build_async_client(settings) as client:
            value = await HttpJsonFetcher(client).fetch(uris.build("characters", {"limit": 1}))
    except MarvelError as exc:
        return False, str(exc)

    if not isinstance(value, dict):
        return False, "Unexpected response shape"
    code = value.get("code")
    if code == 200:
        return True, "Authenticated request OK"
    return False, f"{code}: {value.get('message') or value.get('status') or 'unknown error'}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Marvel Explorer Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Public key", "OK" if settings.key else "MISSING", "MARVEL_KEY")
    table.add_row("Private key", "OK" if settings.secret_key else "MISSING", "MARVEL_SECRET_KEY")
    table.add_row("API base", "OK", settings.api_base)

    try:
        credentials = settings.credentials()
    except ConfigurationError as exc:
        table.add_row("API access", "SKIPPED", str(exc))
        _console.print(table)
        _console.print("\n[yellow]Note:[/yellow] run `marvel-explorer doctor setup-keys` to store your keys.")
        raise typer.Exit(code=1)

    ok_api, detail_api = asyncio.run(_check_api(settings, credentials))
    table.add_row("API access", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)
    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="setup-keys")
def setup_keys() -> None:
    """Interactive key setup (stores config in the user config .env)."""

    public_key = typer.prompt("Public key").strip()
    private_key = typer.prompt("Private key", hide_input=True, confirmation_prompt=False).strip()

    if not public_key or not private_key:
        raise typer.BadParameter("both keys are required")

    env_path = write_user_env_vars(
        {
            "MARVEL_KEY": public_key,
            "MARVEL_SECRET_KEY": private_key,
        }
    )

    _console.print(f"[green]Saved API keys to:[/green] {env_path}")
