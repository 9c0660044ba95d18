"""Slack command group."""

from __future__ import annotations

from dataclasses import dataclass

import typer

from adapters.vendors import Slack
from adapters.vendors.slack import usergroup_from_options
from cli.common import debug_options, execute, fatal, load_settings, notify
from core.config import (
    SlackOptions,
    SlackOutput,
    SlackReactionOptions,
    SlackUsergroupOptions,
    SlackUserOptions,
)
from core.content import default_filename, resolve_content, resolve_text
from core.errors import ContentResolutionError
from core.log import get_logger

app = typer.Typer(no_args_is_help=True, help="Slack tools.")

_log = get_logger("slack")


@dataclass(frozen=True)
class SlackContext:
    options: SlackOptions
    output: SlackOutput


@app.callback()
def slack(
    ctx: typer.Context,
    url: str | None = typer.Option(None, "--slack-url", help="Slack API base URL."),
    timeout: int | None = typer.Option(None, "--slack-timeout", help="Slack timeout (seconds)."),
    insecure: bool | None = typer.Option(
        None,
        "--slack-insecure/--no-slack-insecure",
        help="Slack insecure (skip TLS verification).",
    ),
    token: str | None = typer.Option(None, "--slack-token", help="Slack token."),
    channel: str | None = typer.Option(None, "--slack-channel", help="Slack channel."),
    title: str | None = typer.Option(None, "--slack-title", help="Slack title."),
    message: str | None = typer.Option(None, "--slack-message", help="Slack message (text, file or URL)."),
    filename: str | None = typer.Option(None, "--slack-filename", help="Slack file name."),
    file: str | None = typer.Option(None, "--slack-file", help="Slack file (content, path or URL)."),
    image_url: str | None = typer.Option(None, "--slack-image-url", help="Slack image URL."),
    parent_ts: str | None = typer.Option(None, "--slack-parent-ts", help="Slack parent message timestamp."),
    quote_color: str | None = typer.Option(None, "--slack-quote-color", help="Slack quote color."),
    output: str | None = typer.Option(None, "--slack-output", help="Slack output file (default stdout)."),
    output_query: str | None = typer.Option(None, "--slack-output-query", help="Slack output query (JMESPath)."),
) -> None:
    ctx.obj = SlackContext(
        options=load_settings(
            SlackOptions,
            url=url,
            timeout=timeout,
            insecure=insecure,
            token=token,
            channel=channel,
            title=title,
            message=message,
            filename=filename,
            file=file,
            image_url=image_url,
            parent_ts=parent_ts,
            quote_color=quote_color,
        ),
        output=load_settings(SlackOutput, output=output, output_query=output_query),
    )


def slack_new(state: SlackContext) -> Slack:
    o = state.options
    debug_options("Slack", o, state.output)
    try:
        message = resolve_text(o.message, timeout=o.timeout, insecure=o.insecure)
        file = resolve_content(o.file, timeout=o.timeout, insecure=o.insecure)
    except ContentResolutionError as exc:
        fatal(exc)

    filename = o.filename or default_filename(o.file)
    return Slack(o.model_copy(update={"message": message, "file": file, "filename": filename}))


@app.command("send")
def send(ctx: typer.Context) -> None:
    """Send content as a snippet."""

    _log.debug("Slack sending snippet...")
    state: SlackContext = ctx.obj
    with slack_new(state) as client:
        notify(client, state.output)


@app.command("send-file")
def send_file(ctx: typer.Context) -> None:
    """Send file."""

    _log.debug("Slack sending file...")
    state: SlackContext = ctx.obj
    with slack_new(state) as client:
        execute(client.send_file, state.output)


@app.command("send-message")
def send_message(ctx: typer.Context) -> None:
    """Send message."""

    _log.debug("Slack sending message...")
    state: SlackContext = ctx.obj
    with slack_new(state) as client:
        execute(client.send_message, state.output)


@app.command("add-reaction")
def add_reaction(
    ctx: typer.Context,
    name: str | None = typer.Option(None, "--slack-reaction-name", help="Slack reaction name (emoji)."),
) -> None:
    """Add reaction to the message at --slack-parent-ts."""

    state: SlackContext = ctx.obj
    reaction = load_settings(SlackReactionOptions, name=name)
    debug_options("Slack", reaction)
    with slack_new(state) as client:
        execute(lambda: client.add_reaction(reaction), state.output)


@app.command("get-user")
def get_user(
    ctx: typer.Context,
    email: str | None = typer.Option(None, "--slack-user-email", help="Slack user email."),
) -> None:
    """Lookup user by email."""

    state: SlackContext = ctx.obj
    user = load_settings(SlackUserOptions, email=email)
    debug_options("Slack", user)
    with slack_new(state) as client:
        execute(lambda: client.lookup_user_by_email(user), state.output)


@app.command("update-usergroup")
def update_usergroup(
    ctx: typer.Context,
    usergroup: str | None = typer.Option(None, "--slack-usergroup-id", help="Slack usergroup ID."),
    users: str | None = typer.Option(None, "--slack-usergroup-users", help="Slack user IDs, comma separated."),
) -> None:
    """Replace the users of a usergroup."""

    state: SlackContext = ctx.obj
    group = load_settings(SlackUsergroupOptions, id=usergroup, users=users)
    debug_options("Slack", group)
    payload = usergroup_from_options(group.id, group.users)
    with slack_new(state) as client:
        execute(lambda: client.update_usergroup(payload), state.output)
