"""Vendor: Telegram Bot API.

`TelegramOptions.url` apunta a `.../bot<token>/sendMessage?chat_id=<id>`;
las operaciones de ficheros reutilizan esa URL cambiando el método final
(`sendPhoto`, `sendDocument`) y conservando la query.
"""

from __future__ import annotations

import httpx

from adapters.http_client import FormPart, form_field, form_file, http_post_raw
from adapters.vendors.base import VendorClient
from core.config import TelegramOptions
from core.errors import ValidationError
from core.log import get_logger


SEND_MESSAGE = "sendMessage"
SEND_PHOTO = "sendPhoto"
SEND_DOCUMENT = "sendDocument"

_log = get_logger("telegram")


def method_url(url: str, method: str) -> str:
    """Sustituye el último segmento del path por `method`."""

    u = httpx.URL(url)
    base = u.path.rsplit("/", 1)[0]
    return str(u.copy_with(path=f"{base}/{method}"))


def _bool(value: bool) -> str:
    return "true" if value else "false"


def build_message_form(options: TelegramOptions) -> list[FormPart]:
    return [
        form_field("text", options.message),
        form_field("parse_mode", "HTML"),
        form_field("disable_web_page_preview", "true"),
        form_field("disable_notification", _bool(options.disable_notification)),
    ]


def build_file_form(options: TelegramOptions, part: str) -> list[FormPart]:
    form: list[FormPart] = []
    if options.message:
        form.append(form_field("caption", options.message))
    form.append(form_field("parse_mode", "HTML"))
    form.append(form_field("disable_notification", _bool(options.disable_notification)))
    form.append(form_file(part, options.filename, options.content))
    return form


class Telegram(VendorClient):
    name = "telegram"

    def __init__(self, options: TelegramOptions, *, client: httpx.Client | None = None) -> None:
        super().__init__(timeout=options.timeout, insecure=options.insecure, client=client)
        self._options = options

    @property
    def options(self) -> TelegramOptions:
        return self._options

    def _require_url(self) -> str:
        if not self._options.url:
            raise ValidationError("telegram url is empty")
        return self._options.url

    def send(self) -> bytes:
        """Envía `options.message` como texto HTML."""

        url = self._require_url()
        if not self._options.message:
            raise ValidationError("telegram message is empty")
        return http_post_raw(self._client, url, files=build_message_form(self._options))

    def _send_file(self, method: str, part: str) -> bytes:
        url = method_url(self._require_url(), method)
        if not self._options.content:
            raise ValidationError(f"telegram {part} content is empty")
        _log.debug("Uploading %s %r", part, self._options.filename)
        return http_post_raw(self._client, url, files=build_file_form(self._options, part))

    def send_photo(self) -> bytes:
        return self._send_file(SEND_PHOTO, "photo")

    def send_document(self) -> bytes:
        return self._send_file(SEND_DOCUMENT, "document")
