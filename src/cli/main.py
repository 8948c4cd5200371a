"""CLI entry point (Typer)."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_snapshot_json
from adapters.users_api import UsersApiClient
from cli import doctor
from cli.ui_components import print_banner
from core.config import AppSettings
from core.domain.models import UserDataSnapshot
from core.log_config import configure_logging

app = typer.Typer(no_args_is_help=True, help="Fetch the current user from the users API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING...). Defaults to USERDATA_LOG_LEVEL.",
    ),
) -> None:
    configure_logging(log_level)


@app.command()
def me(
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Override the API base URL (default: USERDATA_API_URL or http://localhost:3000).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the payload (with source URL and timestamp) to this JSON file.",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print only the JSON payload."),
) -> None:
    """Fetch `/users/me` and print the response body."""

    overrides = {"api_url": base_url} if base_url else {}
    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        if base_url:
            raise typer.BadParameter(str(exc.errors()[0]["msg"]), param_hint="--base-url") from exc
        _err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if not quiet:
        print_banner(_console)

    source = UsersApiClient(settings)
    try:
        data = asyncio.run(source.get_user_data())
    except httpx.HTTPStatusError as exc:
        _err_console.print(
            f"[red]Request failed:[/red] HTTP {exc.response.status_code} from {exc.request.url}"
        )
        raise typer.Exit(code=1) from exc
    except httpx.RequestError as exc:
        _err_console.print(f"[red]Could not reach {source.source_url}:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        _err_console.print(f"[red]Malformed response from {source.source_url}:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    _console.print_json(json.dumps(data, ensure_ascii=False))

    if output is not None:
        snapshot = UserDataSnapshot(source_url=source.source_url, data=data)
        path = export_snapshot_json(snapshot=snapshot, output_path=output)
        logger.info("Exported user data to %s", path)
        if not quiet:
            _console.print(f"[green]Saved:[/green] {path}")


def run() -> None:
    app()
