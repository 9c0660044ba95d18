"""CLI raíz (`tools`).

Por qué Typer:
- Cada vendor es un sub-Typer con sus flags de grupo (`--telegram-*`, ...).
- Los flags no pasados caen a las variables de entorno vía pydantic-settings.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

import typer

from cli import doctor, google, slack, telegram
from cli.common import load_settings
from core.config import APP_NAME, StdoutOptions
from core.log import setup_logging


def get_version() -> str:
    try:
        return version(APP_NAME)
    except PackageNotFoundError:
        return "unknown"


app = typer.Typer(no_args_is_help=True, help="Tools")
app.add_typer(telegram.app, name="telegram")
app.add_typer(slack.app, name="slack")
app.add_typer(google.app, name="google")
app.add_typer(doctor.app, name="doctor")


@app.callback()
def main(
    stdout_format: str | None = typer.Option(None, "--stdout-format", help="Stdout format: json, text."),
    stdout_level: str | None = typer.Option(None, "--stdout-level", help="Stdout level: info, warn, error, debug, panic."),
    stdout_timestamp_format: str | None = typer.Option(
        None, "--stdout-timestamp-format", help="Stdout timestamp format (strftime)."
    ),
    stdout_text_colors: bool | None = typer.Option(
        None, "--stdout-text-colors/--stdout-no-colors", help="Stdout text colors."
    ),
    stdout_debug: bool | None = typer.Option(None, "--stdout-debug/--no-stdout-debug", help="Stdout debug."),
) -> None:
    options = load_settings(
        StdoutOptions,
        format=stdout_format,
        level=stdout_level,
        timestamp_format=stdout_timestamp_format,
        text_colors=stdout_text_colors,
        debug=stdout_debug,
    )
    log = setup_logging(options)
    log.debug("Booting %s %s...", APP_NAME, get_version())


@app.command("version")
def print_version() -> None:
    """Print the version number."""

    typer.echo(get_version())


def run() -> None:
    app(prog_name="tools")


if __name__ == "__main__":
    run()
