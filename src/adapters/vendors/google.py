"""Vendor: Google Calendar API v3.

Flujo de cada operación:
1. Refresh-token grant contra `<oauth_url>/token` (multipart).
2. Llamada a la API de Calendar con `Authorization: Bearer <access_token>`.

El token NO se cachea: cada operación vuelve a autenticarse.
"""

from __future__ import annotations

import json
from urllib.parse import quote

import httpx
from pydantic import ValidationError as ModelValidationError

from adapters.http_client import FormPart, bearer, form_field, http_get_raw, http_post_raw
from adapters.vendors.base import VendorClient
from core.config import (
    GoogleCalendarGetEventsOptions,
    GoogleCalendarInsertEventOptions,
    GoogleCalendarOptions,
    GoogleOptions,
)
from core.domain.models import (
    GoogleCalendarEvent,
    GoogleCalendarEventDateTime,
    GoogleCalendarEventSource,
    GoogleTokenResponse,
)
from core.errors import AuthError, TransportError, ValidationError
from core.log import get_logger


GRANT_TYPE = "refresh_token"
ORDER_BY_START_TIME = "startTime"
CALENDAR_EVENTS = "/calendars/{id}/events"

_log = get_logger("google")


def _bool(value: bool) -> str:
    return "true" if value else "false"


def build_token_form(options: GoogleOptions) -> list[FormPart]:
    form: list[FormPart] = []
    if options.oauth_client_id:
        form.append(form_field("client_id", options.oauth_client_id))
    if options.oauth_client_secret:
        form.append(form_field("client_secret", options.oauth_client_secret))
    if options.refresh_token:
        form.append(form_field("refresh_token", options.refresh_token))
    form.append(form_field("grant_type", GRANT_TYPE))
    return form


def parse_token_response(raw: bytes) -> GoogleTokenResponse:
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise AuthError(f"google token response is not JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise AuthError("google token response is not a JSON object")
    if not data.get("access_token"):
        # p.ej. {"error": "invalid_grant", "error_description": "Bad Request"}
        reason = data.get("error_description") or data.get("error") or "no access_token"
        raise AuthError(f"google token refresh failed: {reason}")
    try:
        return GoogleTokenResponse.model_validate(data)
    except ModelValidationError as exc:
        raise AuthError(f"google token response is malformed: {exc}") from exc


def build_events_params(filters: GoogleCalendarGetEventsOptions) -> dict[str, str]:
    """Query de `events.list`.

    `orderBy=startTime` solo es válido con `singleEvents=true`.
    """

    if filters.order_by == ORDER_BY_START_TIME and not filters.single_events:
        raise ValidationError("if orderBy=startTime singleEvents must be true")

    params: dict[str, str] = {}
    if filters.time_min:
        params["timeMin"] = filters.time_min
    if filters.time_max:
        params["timeMax"] = filters.time_max
    params["singleEvents"] = _bool(filters.single_events)
    if filters.order_by:
        params["orderBy"] = filters.order_by
    if filters.q:
        params["q"] = filters.q
    params["alwaysIncludeEmail"] = _bool(filters.always_include_email)
    return params


def build_event(fields: GoogleCalendarInsertEventOptions) -> GoogleCalendarEvent:
    source = None
    if fields.source_title or fields.source_url:
        source = GoogleCalendarEventSource(title=fields.source_title, url=fields.source_url)

    time_zone = fields.time_zone or None
    return GoogleCalendarEvent(
        summary=fields.summary,
        description=fields.description,
        start=GoogleCalendarEventDateTime(date_time=fields.start or None, time_zone=time_zone),
        end=GoogleCalendarEventDateTime(date_time=fields.end or None, time_zone=time_zone),
        event_type="default",
        transparency="transparent",
        visibility=fields.visibility or None,
        attendees=[],
        guests_can_invite_others=True,
        guests_can_modify=False,
        guests_can_see_other_guests=True,
        source=source,
    )


def build_insert_params(fields: GoogleCalendarInsertEventOptions) -> dict[str, str]:
    params: dict[str, str] = {}
    if fields.send_updates:
        params["sendUpdates"] = fields.send_updates
    params["supportsAttachments"] = _bool(fields.supports_attachments)
    return params


class Google(VendorClient):
    name = "google"

    def __init__(self, options: GoogleOptions, *, client: httpx.Client | None = None) -> None:
        super().__init__(timeout=options.timeout, insecure=options.insecure, client=client)
        self._options = options

    @property
    def options(self) -> GoogleOptions:
        return self._options

    def _events_url(self, options: GoogleOptions, calendar: GoogleCalendarOptions) -> str:
        if not calendar.id:
            raise ValidationError("google calendar id is empty")
        return options.calendar_url.rstrip("/") + CALENDAR_EVENTS.format(id=quote(calendar.id, safe="@"))

    def refresh_access_token(self, options: GoogleOptions | None = None) -> GoogleTokenResponse:
        o = options or self._options
        url = o.oauth_url.rstrip("/") + "/token"
        try:
            raw = http_post_raw(self._client, url, files=build_token_form(o))
        except TransportError as exc:
            raise AuthError(f"google token refresh failed: {exc}") from exc

        token = parse_token_response(raw)
        _log.debug("Access token refreshed (expires in %ss, scope=%s)", token.expires_in, token.scope)
        return token

    def get_events(
        self,
        calendar: GoogleCalendarOptions,
        filters: GoogleCalendarGetEventsOptions,
        options: GoogleOptions | None = None,
    ) -> bytes:
        """https://developers.google.com/calendar/api/v3/reference/events/list"""

        o = options or self._options
        # Validar antes de tocar la red.
        params = build_events_params(filters)
        url = self._events_url(o, calendar)

        token = self.refresh_access_token(o)
        return http_get_raw(self._client, url, params=params, authorization=bearer(token.access_token))

    def insert_event(
        self,
        calendar: GoogleCalendarOptions,
        fields: GoogleCalendarInsertEventOptions,
        options: GoogleOptions | None = None,
    ) -> bytes:
        """https://developers.google.com/calendar/api/v3/reference/events/insert"""

        o = options or self._options
        url = self._events_url(o, calendar)
        data = build_event(fields).to_json()

        token = self.refresh_access_token(o)
        _log.debug("Event payload => %s", data)
        return http_post_raw(
            self._client,
            url,
            params=build_insert_params(fields),
            content_type="application/json",
            content=data.encode("utf-8"),
            authorization=bearer(token.access_token),
        )
