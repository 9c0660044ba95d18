"""Telegram command group."""

from __future__ import annotations

from dataclasses import dataclass

import typer

from adapters.vendors import Telegram
from cli.common import debug_options, execute, fatal, load_settings, notify
from core.config import TelegramOptions, TelegramOutput
from core.content import default_filename, resolve_content, resolve_text
from core.errors import ContentResolutionError
from core.log import get_logger

app = typer.Typer(no_args_is_help=True, help="Telegram tools.")

_log = get_logger("telegram")


@dataclass(frozen=True)
class TelegramContext:
    options: TelegramOptions
    output: TelegramOutput


@app.callback()
def telegram(
    ctx: typer.Context,
    url: str | None = typer.Option(None, "--telegram-url", help="Telegram URL (sendMessage, with chat_id)."),
    timeout: int | None = typer.Option(None, "--telegram-timeout", help="Telegram timeout (seconds)."),
    insecure: bool | None = typer.Option(
        None,
        "--telegram-insecure/--no-telegram-insecure",
        help="Telegram insecure (skip TLS verification).",
    ),
    disable_notification: bool | None = typer.Option(
        None,
        "--telegram-disable-notification/--no-telegram-disable-notification",
        help="Telegram disable notification.",
    ),
    message: str | None = typer.Option(None, "--telegram-message", help="Telegram message (text, file or URL)."),
    filename: str | None = typer.Option(None, "--telegram-filename", help="Telegram file name."),
    content: str | None = typer.Option(None, "--telegram-content", help="Telegram content (text, file or URL)."),
    output: str | None = typer.Option(None, "--telegram-output", help="Telegram output file (default stdout)."),
    output_query: str | None = typer.Option(None, "--telegram-output-query", help="Telegram output query (JMESPath)."),
) -> None:
    ctx.obj = TelegramContext(
        options=load_settings(
            TelegramOptions,
            url=url,
            timeout=timeout,
            insecure=insecure,
            disable_notification=disable_notification,
            message=message,
            filename=filename,
            content=content,
        ),
        output=load_settings(TelegramOutput, output=output, output_query=output_query),
    )


def telegram_new(state: TelegramContext) -> Telegram:
    o = state.options
    debug_options("Telegram", o, state.output)
    try:
        message = resolve_text(o.message, timeout=o.timeout, insecure=o.insecure)
        content = resolve_content(o.content, timeout=o.timeout, insecure=o.insecure)
    except ContentResolutionError as exc:
        fatal(exc)

    filename = o.filename or default_filename(o.content)
    return Telegram(o.model_copy(update={"message": message, "content": content, "filename": filename}))


@app.command("send-message")
def send_message(ctx: typer.Context) -> None:
    """Send text message."""

    _log.debug("Telegram sending message...")
    state: TelegramContext = ctx.obj
    with telegram_new(state) as client:
        notify(client, state.output)


@app.command("send-photo")
def send_photo(ctx: typer.Context) -> None:
    """Send photo."""

    _log.debug("Telegram sending photo...")
    state: TelegramContext = ctx.obj
    with telegram_new(state) as client:
        execute(client.send_photo, state.output)


@app.command("send-document")
def send_document(ctx: typer.Context) -> None:
    """Send document."""

    _log.debug("Telegram sending document...")
    state: TelegramContext = ctx.obj
    with telegram_new(state) as client:
        execute(client.send_document, state.output)
