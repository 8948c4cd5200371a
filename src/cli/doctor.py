"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.users_api import USERS_ME_PATH
from cli.ui_components import build_settings_table
from core.config import DEFAULT_API_URL, AppSettings, normalize_api_url, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(USERS_ME_PATH)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return False, str(exc) or type(exc).__name__
    return response.is_success, f"HTTP {response.status_code}"


def _config_error_text(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


@app.command()
def run() -> None:
    """Show the effective config and check the users API is reachable."""

    table = Table(title="userdata-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    try:
        settings = AppSettings()
    except ValidationError as exc:
        table.add_row("Config", "FAIL", escape(_config_error_text(exc)))
        _console.print(table)
        raise typer.Exit(code=1) from exc

    _console.print(build_settings_table(settings))
    table.add_row("Config", "OK", settings.api_url)

    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row(f"GET {USERS_ME_PATH}", "OK" if ok_http else "FAIL", escape(detail_http))

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] set USERDATA_API_URL or run `userdata doctor setup` "
            "to point at another server."
        )
        raise typer.Exit(code=1)


@app.command()
def setup(
    reset: bool = typer.Option(False, "--reset", help="Forget the stored URL and use the default again."),
) -> None:
    """Interactive setup (stores the API URL in the user config .env)."""

    if reset:
        env_path = write_user_env_vars({"USERDATA_API_URL": None})
        _console.print(f"[green]Removed USERDATA_API_URL from:[/green] {env_path}")
        return

    api_url = typer.prompt("API base URL", default=DEFAULT_API_URL, show_default=True)
    try:
        api_url = normalize_api_url(api_url)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    env_path = write_user_env_vars({"USERDATA_API_URL": api_url})
    _console.print(f"[green]Saved config to:[/green] {env_path}")
