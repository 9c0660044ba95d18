"""Google command group (Calendar)."""

from __future__ import annotations

from dataclasses import dataclass

import typer

from adapters.vendors import Google
from cli.common import debug_options, execute, fatal, load_settings
from core.config import (
    GoogleCalendarGetEventsOptions,
    GoogleCalendarInsertEventOptions,
    GoogleCalendarOptions,
    GoogleOptions,
    GoogleOutput,
)
from core.content import resolve_text
from core.errors import ContentResolutionError
from core.log import get_logger

app = typer.Typer(no_args_is_help=True, help="Google tools.")

_log = get_logger("google")


@dataclass(frozen=True)
class GoogleContext:
    options: GoogleOptions
    calendar: GoogleCalendarOptions
    output: GoogleOutput


@app.callback()
def google(
    ctx: typer.Context,
    timeout: int | None = typer.Option(None, "--google-timeout", help="Google timeout (seconds)."),
    insecure: bool | None = typer.Option(
        None,
        "--google-insecure/--no-google-insecure",
        help="Google insecure (skip TLS verification).",
    ),
    oauth_client_id: str | None = typer.Option(None, "--google-oauth-client-id", help="Google OAuth client ID."),
    oauth_client_secret: str | None = typer.Option(
        None, "--google-oauth-client-secret", help="Google OAuth client secret."
    ),
    refresh_token: str | None = typer.Option(None, "--google-refresh-token", help="Google OAuth refresh token."),
    scope: str | None = typer.Option(None, "--google-scope", help="Google OAuth scope."),
    calendar_id: str | None = typer.Option(None, "--google-calendar-id", help="Google calendar ID."),
    output: str | None = typer.Option(None, "--google-output", help="Google output file (default stdout)."),
    output_query: str | None = typer.Option(None, "--google-output-query", help="Google output query (JMESPath)."),
) -> None:
    ctx.obj = GoogleContext(
        options=load_settings(
            GoogleOptions,
            timeout=timeout,
            insecure=insecure,
            oauth_client_id=oauth_client_id,
            oauth_client_secret=oauth_client_secret,
            refresh_token=refresh_token,
            scope=scope,
        ),
        calendar=load_settings(GoogleCalendarOptions, id=calendar_id),
        output=load_settings(GoogleOutput, output=output, output_query=output_query),
    )


def google_new(state: GoogleContext) -> Google:
    debug_options("Google", state.options, state.calendar, state.output)
    return Google(state.options)


@app.command("calendar-get-events")
def calendar_get_events(
    ctx: typer.Context,
    time_min: str | None = typer.Option(None, "--google-calendar-time-min", help="Lower bound (RFC3339) for event end."),
    time_max: str | None = typer.Option(None, "--google-calendar-time-max", help="Upper bound (RFC3339) for event start."),
    always_include_email: bool | None = typer.Option(
        None,
        "--google-calendar-always-include-email/--no-google-calendar-always-include-email",
        help="Always include organizer/attendee email.",
    ),
    order_by: str | None = typer.Option(None, "--google-calendar-order-by", help="startTime or updated."),
    q: str | None = typer.Option(None, "--google-calendar-q", help="Free text search."),
    single_events: bool | None = typer.Option(
        None,
        "--google-calendar-single-events/--no-google-calendar-single-events",
        help="Expand recurring events into instances.",
    ),
) -> None:
    """Get calendar events."""

    state: GoogleContext = ctx.obj
    filters = load_settings(
        GoogleCalendarGetEventsOptions,
        time_min=time_min,
        time_max=time_max,
        always_include_email=always_include_email,
        order_by=order_by,
        q=q,
        single_events=single_events,
    )
    debug_options("Google", filters)
    _log.debug("Google getting calendar events...")
    with google_new(state) as client:
        execute(lambda: client.get_events(state.calendar, filters), state.output)


@app.command("calendar-insert-event")
def calendar_insert_event(
    ctx: typer.Context,
    summary: str | None = typer.Option(None, "--google-calendar-summary", help="Event summary."),
    description: str | None = typer.Option(
        None, "--google-calendar-description", help="Event description (text, file or URL)."
    ),
    start: str | None = typer.Option(None, "--google-calendar-start", help="Event start (RFC3339)."),
    end: str | None = typer.Option(None, "--google-calendar-end", help="Event end (RFC3339)."),
    time_zone: str | None = typer.Option(None, "--google-calendar-time-zone", help="Event time zone."),
    visibility: str | None = typer.Option(None, "--google-calendar-visibility", help="default, public, private."),
    send_updates: str | None = typer.Option(None, "--google-calendar-send-updates", help="all, externalOnly, none."),
    supports_attachments: bool | None = typer.Option(
        None,
        "--google-calendar-supports-attachments/--no-google-calendar-supports-attachments",
        help="Client supports event attachments.",
    ),
    source_title: str | None = typer.Option(None, "--google-calendar-source-title", help="Event source title."),
    source_url: str | None = typer.Option(None, "--google-calendar-source-url", help="Event source URL."),
) -> None:
    """Insert calendar event."""

    state: GoogleContext = ctx.obj
    fields = load_settings(
        GoogleCalendarInsertEventOptions,
        summary=summary,
        description=description,
        start=start,
        end=end,
        time_zone=time_zone,
        visibility=visibility,
        send_updates=send_updates,
        supports_attachments=supports_attachments,
        source_title=source_title,
        source_url=source_url,
    )
    o = state.options
    try:
        text = resolve_text(fields.description, timeout=o.timeout, insecure=o.insecure)
    except ContentResolutionError as exc:
        fatal(exc)
    fields = fields.model_copy(update={"description": text})

    debug_options("Google", fields)
    _log.debug("Google inserting calendar event...")
    with google_new(state) as client:
        execute(lambda: client.insert_event(state.calendar, fields), state.output)
