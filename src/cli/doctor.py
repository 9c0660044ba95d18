"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client, send_request
from core.config import GoogleOptions, SlackOptions, TelegramOptions, get_user_env_file
from core.errors import TransportError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(url: str, *, timeout: float = 10.0, client: httpx.Client | None = None) -> tuple[bool, str]:
    """Round trip to `url`; any HTTP status counts as reachable."""

    http = client or build_client(timeout=timeout)
    try:
        send_request(http, "GET", url)
        return True, "reachable"
    except TransportError as exc:
        return False, str(exc)
    finally:
        if client is None:
            http.close()


def _host(url: str) -> str:
    u = httpx.URL(url)
    return f"{u.scheme}://{u.host}/"


def collect_checks(
    telegram: TelegramOptions,
    slack: SlackOptions,
    google: GoogleOptions,
    *,
    client: httpx.Client | None = None,
) -> list[tuple[str, str, str]]:
    """Rows `(check, status, details)` for the doctor table."""

    rows: list[tuple[str, str, str]] = []

    # Config
    if telegram.url:
        rows.append(("Telegram URL", "OK", _host(telegram.url)))
    else:
        rows.append(("Telegram URL", "MISSING", "Set TELEGRAM_URL or --telegram-url"))
    rows.append(("Slack token", "OK" if slack.token else "MISSING", "SLACK_TOKEN"))
    google_ready = bool(google.oauth_client_id and google.oauth_client_secret and google.refresh_token)
    rows.append(
        (
            "Google OAuth",
            "OK" if google_ready else "MISSING",
            "GOOGLE_OAUTH_CLIENT_ID, GOOGLE_OAUTH_CLIENT_SECRET, GOOGLE_REFRESH_TOKEN",
        )
    )

    # Connectivity (best-effort)
    targets = [
        ("Slack API", slack.url, slack.timeout),
        ("Google OAuth", google.oauth_url, google.timeout),
    ]
    if telegram.url:
        targets.append(("Telegram API", _host(telegram.url), telegram.timeout))
    for name, url, timeout in targets:
        ok, detail = _check_http(url, timeout=timeout, client=client)
        rows.append((f"{name} connectivity", "OK" if ok else "FAIL", detail))
    return rows


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    table = Table(title="Tools Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    rows = collect_checks(TelegramOptions(), SlackOptions(), GoogleOptions())
    for row in rows:
        table.add_row(*row)

    _console.print(table)
    _console.print(f"\n[dim]User config file:[/dim] {get_user_env_file()}")
