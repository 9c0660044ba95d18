"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Cada vendor tiene su propio prefijo (`TELEGRAM_`, `SLACK_`, `GOOGLE_`).

Precedencia: flags de la CLI > variables de entorno / `.env` > defaults.
Los objetos son inmutables: se construyen una vez por invocación y se pasan
explícitamente a los clientes.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "vendor-tools"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _settings_config(prefix: str) -> SettingsConfigDict:
    return SettingsConfigDict(
        env_prefix=prefix,
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )


def split_list(value: str) -> list[str]:
    """`"U1, U2,,U3"` -> `["U1", "U2", "U3"]`."""

    return [item.strip() for item in value.split(",") if item.strip()]


class StdoutOptions(BaseSettings):
    """Opciones de logging (stderr) para toda la CLI."""

    model_config = _settings_config("STDOUT_")

    format: str = Field(default="text", pattern="^(text|json)$", description="text o json.")
    level: str = Field(default="info", description="debug, info, warning, error, critical.")
    timestamp_format: str = Field(default="%Y-%m-%dT%H:%M:%S%z")
    text_colors: bool = Field(default=True)
    debug: bool = Field(default=False, description="Imprime las opciones efectivas antes de cada llamada.")


class OutputOptions(BaseSettings):
    """Destino de la respuesta JSON: stdout o fichero, opcionalmente filtrada."""

    model_config = _settings_config("TOOLS_")

    output: str = Field(default="", description="Ruta de salida; vacío => stdout.")
    output_query: str = Field(default="", description="Expresión JMESPath aplicada a la respuesta.")


class TelegramOutput(OutputOptions):
    model_config = _settings_config("TELEGRAM_")


class SlackOutput(OutputOptions):
    model_config = _settings_config("SLACK_")


class GoogleOutput(OutputOptions):
    model_config = _settings_config("GOOGLE_")


class TelegramOptions(BaseSettings):
    """Conexión y mensaje para la Bot API de Telegram.

    `url` es la URL completa de `sendMessage`, incluido `chat_id`, p.ej.
    `https://api.telegram.org/bot<token>/sendMessage?chat_id=<id>`.
    """

    model_config = _settings_config("TELEGRAM_")

    url: str = ""
    timeout: int = Field(default=30, gt=0)
    insecure: bool = False
    disable_notification: bool = False
    message: str = ""
    filename: str = ""
    content: str | bytes = Field(default="", description="Contenido, ruta a fichero o URL.")


class SlackOptions(BaseSettings):
    model_config = _settings_config("SLACK_")

    url: str = Field(default="https://slack.com/api/", min_length=8)
    timeout: int = Field(default=30, gt=0)
    insecure: bool = False
    token: str = ""
    channel: str = ""
    title: str = ""
    message: str = ""
    filename: str = ""
    file: str | bytes = Field(default="", description="Contenido, ruta a fichero o URL.")
    image_url: str = ""
    parent_ts: str = ""
    quote_color: str = ""


class SlackReactionOptions(BaseSettings):
    model_config = _settings_config("SLACK_REACTION_")

    name: str = ""


class SlackUserOptions(BaseSettings):
    model_config = _settings_config("SLACK_USER_")

    email: str = ""


class SlackUsergroupOptions(BaseSettings):
    model_config = _settings_config("SLACK_USERGROUP_")

    id: str = ""
    users: str = Field(default="", description="IDs de usuario separados por comas.")


class GoogleOptions(BaseSettings):
    """Credenciales OAuth2 (refresh token) para las APIs de Google.

    Para obtener un refresh token:
    - https://developers.google.com/oauthplayground con tu Client ID/Secret.
    - Access type => Online.
    - Scopes: calendar y calendar.events.
    """

    model_config = _settings_config("GOOGLE_")

    timeout: int = Field(default=30, gt=0)
    insecure: bool = False
    oauth_client_id: str = ""
    oauth_client_secret: str = ""
    refresh_token: str = ""
    scope: str = ""
    oauth_url: str = Field(default="https://oauth2.googleapis.com", min_length=8)
    calendar_url: str = Field(default="https://www.googleapis.com/calendar/v3", min_length=8)


class GoogleCalendarOptions(BaseSettings):
    model_config = _settings_config("GOOGLE_CALENDAR_")

    id: str = ""


class GoogleCalendarGetEventsOptions(BaseSettings):
    model_config = _settings_config("GOOGLE_CALENDAR_")

    time_min: str = ""
    time_max: str = ""
    always_include_email: bool = False
    order_by: str = ""
    q: str = ""
    single_events: bool = False


class GoogleCalendarInsertEventOptions(BaseSettings):
    model_config = _settings_config("GOOGLE_CALENDAR_")

    summary: str = ""
    description: str = ""
    start: str = ""
    end: str = ""
    time_zone: str = ""
    visibility: str = ""
    send_updates: str = ""
    supports_attachments: bool = False
    source_title: str = ""
    source_url: str = ""
