"""Resolución de contenido configurable.

Un valor de `--*-message`, `--*-content` o `--*-file` puede ser:
- una ruta a un fichero existente -> se leen sus bytes,
- una URL `http(s)://` -> se descarga el cuerpo,
- cualquier otra cosa -> el propio texto (UTF-8).
"""

from __future__ import annotations

from pathlib import Path

import httpx

from core.errors import ContentResolutionError
from core.log import get_logger


_log = get_logger("content")


def _as_path(value: str) -> Path | None:
    try:
        path = Path(value)
        return path if path.is_file() else None
    except (OSError, ValueError):
        # Nombres demasiado largos o con NUL no son rutas.
        return None


def is_url(value: str) -> bool:
    lowered = value.strip().lower()
    return lowered.startswith("http://") or lowered.startswith("https://")


def resolve_content(value: str | bytes, *, timeout: float = 30.0, insecure: bool = False) -> bytes:
    """Devuelve los bytes del contenido referenciado por `value`."""

    if isinstance(value, bytes):
        return value
    if not value:
        return b""

    path = _as_path(value)
    if path is not None:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ContentResolutionError(f"cannot read {path}: {exc}") from exc

    if is_url(value):
        _log.debug("Fetching content from %s", value)
        try:
            response = httpx.get(
                value.strip(),
                timeout=timeout,
                verify=not insecure,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ContentResolutionError(f"cannot fetch {value}: {exc}") from exc
        return response.content

    return value.encode("utf-8")


def resolve_text(value: str | bytes, *, timeout: float = 30.0, insecure: bool = False) -> str:
    raw = resolve_content(value, timeout=timeout, insecure=insecure)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ContentResolutionError(f"content is not valid UTF-8 text: {exc}") from exc


def default_filename(value: str | bytes) -> str:
    """Nombre base si `value` apunta a un fichero local; si no, cadena vacía."""

    if isinstance(value, bytes) or not value:
        return ""
    path = _as_path(value)
    return path.name if path is not None else ""
