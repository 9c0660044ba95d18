"""Vendor: Slack Web API.

Responsabilidad:
- Traducir intents ("enviar mensaje", "subir fichero", "reaccionar", ...)
  en llamadas HTTP autenticadas con bearer token.
- El payload de `chat.postMessage` se renderiza con un template Jinja2
  (`templates/slack_message.json.j2`).

Regla de autorización común: token de las opciones/mensaje de la llamada si
existe; si no, el token por defecto del cliente; si tampoco, no se envía
credencial y Slack rechaza la petición.
"""

from __future__ import annotations

from pathlib import Path

import httpx
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from adapters.http_client import (
    FormPart,
    bearer,
    form_field,
    form_file,
    http_get_raw,
    http_post_raw,
)
from adapters.vendors.base import VendorClient
from core.config import (
    SlackOptions,
    SlackReactionOptions,
    SlackUserOptions,
    split_list,
)
from core.domain.models import SlackMessage, SlackUsergroupUsers
from core.errors import ValidationError
from core.log import get_logger


FILES_UPLOAD = "files.upload"
CHAT_POST_MESSAGE = "chat.postMessage"
REACTIONS_ADD = "reactions.add"
USERS_LOOKUP_BY_EMAIL = "users.lookupByEmail"
USERGROUPS_USERS_UPDATE = "usergroups.users.update"

TITLE_MAX_LENGTH = 150
NO_TITLE = "No title"

_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
_MESSAGE_TEMPLATE = "slack_message.json.j2"

_log = get_logger("slack")


def _get_env() -> Environment:
    # Salida JSON, no HTML: el escapado lo hace el filtro `tojson`.
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit]


def derive_title(message: str) -> str:
    """Primera línea no vacía del mensaje, tal cual, recortada a 150 caracteres.

    Solo el salto de línea LF separa líneas.
    """

    for line in message.split("\n"):
        if line.strip():
            return truncate(line, TITLE_MAX_LENGTH)
    return NO_TITLE


def render_message(message: SlackMessage) -> str:
    template = _get_env().get_template(_MESSAGE_TEMPLATE)
    return template.render(
        channel=message.channel,
        parent_ts=message.parent_ts,
        title=message.title,
        message=message.message,
        image_url=message.image_url,
        quote_color=message.quote_color,
    )


def build_snippet_form(message: SlackMessage) -> list[FormPart]:
    content = message.file_content
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    return [
        form_field("initial_comment", message.message),
        form_field("title", message.title),
        form_field("content", content),
    ]


def build_file_form(message: SlackMessage) -> list[FormPart]:
    """Form de `files.upload`: campos opcionales solo si no están vacíos."""

    form: list[FormPart] = []
    if message.message:
        form.append(form_field("initial_comment", message.message))
    if message.title:
        form.append(form_field("title", message.title))
    if message.parent_ts:
        form.append(form_field("thread_ts", message.parent_ts))
    form.append(form_file("file", message.filename, message.file_content))
    return form


def build_reaction_form(channel: str, name: str, timestamp: str) -> list[FormPart]:
    return [
        form_field("channel", channel),
        form_field("name", name),
        form_field("timestamp", timestamp),
    ]


def usergroup_from_options(usergroup: str, users: str) -> SlackUsergroupUsers:
    return SlackUsergroupUsers(usergroup=usergroup, users=split_list(users))


class Slack(VendorClient):
    name = "slack"

    def __init__(self, options: SlackOptions, *, client: httpx.Client | None = None) -> None:
        super().__init__(timeout=options.timeout, insecure=options.insecure, client=client)
        self._options = options

    @property
    def options(self) -> SlackOptions:
        return self._options

    def api_url(self, method: str) -> str:
        return self._options.url.rstrip("/") + "/" + method

    def _auth(self, token: str = "") -> str:
        return bearer(token or self._options.token)

    def message_from_options(self) -> SlackMessage:
        o = self._options
        return SlackMessage(
            token=o.token,
            channel=o.channel,
            parent_ts=o.parent_ts,
            title=o.title,
            message=o.message,
            image_url=o.image_url,
            filename=o.filename,
            file_content=o.file,
            quote_color=o.quote_color,
        )

    def send(self, message: SlackMessage | None = None) -> bytes:
        """Sube `file_content` como snippet al canal configurado."""

        m = message or self.message_from_options()
        return http_post_raw(
            self._client,
            self.api_url(FILES_UPLOAD),
            params={"channels": self._options.channel},
            files=build_snippet_form(m),
            authorization=self._auth(m.token),
        )

    def send_file(self, message: SlackMessage | None = None) -> bytes:
        m = message or self.message_from_options()
        return http_post_raw(
            self._client,
            self.api_url(FILES_UPLOAD),
            params={"channels": m.channel},
            files=build_file_form(m),
            authorization=self._auth(m.token),
        )

    def send_message(self, message: SlackMessage | None = None) -> bytes:
        m = message or self.message_from_options()
        if m.message == "":
            raise ValidationError("slack message is empty")
        if not m.title:
            m = m.model_copy(update={"title": derive_title(m.message)})

        payload = render_message(m)
        _log.debug("Slack payload => %s", payload)
        return http_post_raw(
            self._client,
            self.api_url(CHAT_POST_MESSAGE),
            content_type="application/json; charset=utf-8",
            content=payload.encode("utf-8"),
            authorization=self._auth(m.token),
        )

    def add_reaction(self, reaction: SlackReactionOptions, options: SlackOptions | None = None) -> bytes:
        o = options or self._options
        return http_post_raw(
            self._client,
            self.api_url(REACTIONS_ADD),
            files=build_reaction_form(o.channel, reaction.name, o.parent_ts),
            authorization=self._auth(o.token),
        )

    def lookup_user_by_email(self, user: SlackUserOptions, options: SlackOptions | None = None) -> bytes:
        o = options or self._options
        return http_get_raw(
            self._client,
            self.api_url(USERS_LOOKUP_BY_EMAIL),
            params={"email": user.email},
            content_type="application/x-www-form-urlencoded",
            authorization=self._auth(o.token),
        )

    def update_usergroup(self, usergroup: SlackUsergroupUsers, options: SlackOptions | None = None) -> bytes:
        o = options or self._options
        return http_post_raw(
            self._client,
            self.api_url(USERGROUPS_USERS_UPDATE),
            content_type="application/json",
            content=usergroup.model_dump_json(),
            authorization=self._auth(o.token),
        )
