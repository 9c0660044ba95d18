"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Las tablas se imprimen en stderr: stdout es para la respuesta JSON.
"""

from __future__ import annotations

import re

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table


_SECRET_FIELDS = ("token", "secret", "password")
_TELEGRAM_BOT_RE = re.compile(r"/bot[^/]+/")


def mask(value: str) -> str:
    if not value:
        return ""
    if len(value) <= 8:
        return "*" * len(value)
    return value[:4] + "*" * 8


def display_value(field: str, value: object) -> str:
    if isinstance(value, bytes):
        return f"<{len(value)} bytes>"
    text = str(value)
    if any(secret in field for secret in _SECRET_FIELDS):
        return mask(text)
    if field == "url":
        # La URL de Telegram lleva el token del bot en el path.
        return _TELEGRAM_BOT_RE.sub("/bot********/", text)
    return text


def build_options_table(title: str, options: BaseModel) -> Table:
    """Tabla con las opciones efectivas de un comando (secretos enmascarados)."""

    table = Table(title=title)
    table.add_column("Option", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for field, value in options.model_dump().items():
        table.add_row(field, display_value(field, value))
    return table


def print_options(console: Console, title: str, *options: BaseModel) -> None:
    for opts in options:
        console.print(build_options_table(f"{title} {type(opts).__name__}", opts))
