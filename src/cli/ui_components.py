"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Lets `me` and `doctor` share the same banner/tables.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import AppSettings


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped with `--quiet` for JSON pipelines)."""

    title = Text("userdata-client", style="bold cyan")
    subtitle = Text("Current user • /users/me", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_settings_table(settings: AppSettings) -> Table:
    table = Table(title="Effective configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("api_url", settings.api_url)
    table.add_row("http_timeout_seconds", f"{settings.http_timeout_seconds:g}")
    table.add_row("user_agent", settings.user_agent)
    table.add_row("log_level", settings.log_level)
    return table
