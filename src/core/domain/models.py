"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Son estructuras efímeras: se construyen por llamada a partir de las
  opciones, se serializan (JSON o multipart) y se descartan.
- `model_dump_json(by_alias=True)` produce exactamente el payload del vendor.

Nota:
- Estos modelos describen *qué* se envía, no *cómo* se envía.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class SlackMessage(BaseModel):
    """Mensaje/fichero a publicar en Slack.

    `token` vacío => se usa el token por defecto del cliente.
    """

    token: str = ""
    channel: str = ""
    parent_ts: str = ""
    title: str = ""
    message: str = ""
    image_url: str = ""
    filename: str = ""
    file_content: str | bytes = b""
    quote_color: str = ""


class SlackUsergroupUsers(BaseModel):
    usergroup: str
    users: list[str] = Field(default_factory=list)


class GoogleTokenResponse(BaseModel):
    """Respuesta del endpoint `/token` (refresh-token grant). No se cachea."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., min_length=1)
    expires_in: int = 0
    scope: str = ""
    token_type: str = ""


class GoogleCalendarEventDateTime(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str | None = Field(default=None)
    date_time: str | None = Field(default=None, alias="dateTime")
    time_zone: str | None = Field(default=None, alias="timeZone")


class GoogleCalendarEventAttendee(BaseModel):
    email: str
    optional: bool | None = None


class GoogleCalendarEventSource(BaseModel):
    title: str = ""
    url: str = ""


class GoogleCalendarEvent(BaseModel):
    """Payload de `events.insert`.

    https://developers.google.com/calendar/api/v3/reference/events/insert
    """

    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    description: str = ""
    event_type: str = Field(default="default", alias="eventType")
    location: str | None = None
    transparency: str | None = "transparent"
    visibility: str | None = None
    start: GoogleCalendarEventDateTime
    end: GoogleCalendarEventDateTime
    attendees: list[GoogleCalendarEventAttendee] = Field(default_factory=list)
    guests_can_invite_others: bool = Field(default=True, alias="guestsCanInviteOthers")
    guests_can_modify: bool = Field(default=False, alias="guestsCanModify")
    guests_can_see_other_guests: bool = Field(default=True, alias="guestsCanSeeOtherGuests")
    source: GoogleCalendarEventSource | None = None

    def to_json(self) -> str:
        # Los campos opcionales vacíos no viajan (equivalente a `omitempty`).
        return self.model_dump_json(by_alias=True, exclude_none=True)
