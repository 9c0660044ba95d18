"""Wrapper de httpx (transporte).

Por qué un wrapper:
- Estandariza timeout, verificación TLS y cabecera de autorización.
- Facilita testeo: se inyecta un `httpx.Client` con `httpx.MockTransport`.

Contrato:
- Una petición = un round trip bloqueante, sin reintentos.
- Se devuelve el cuerpo para CUALQUIER status HTTP (no se inspecciona);
  solo los fallos de red se convierten en `TransportError`.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import httpx

from core.errors import TransportError
from core.log import get_logger


USER_AGENT = "vendor-tools/0.1"

# (nombre, (filename | None, valor)); filename None => campo de texto.
FormPart = tuple[str, tuple[str | None, str | bytes]]

_log = get_logger("http")


def build_client(
    *,
    timeout: float,
    insecure: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con el timeout y la política TLS del vendor."""

    return httpx.Client(
        timeout=httpx.Timeout(timeout),
        verify=not insecure,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )


def bearer(token: str) -> str:
    """`Authorization` para un token; vacío si no hay token."""

    return f"Bearer {token}" if token else ""


def form_field(name: str, value: str) -> FormPart:
    return (name, (None, value))


def form_file(name: str, filename: str, content: str | bytes) -> FormPart:
    if isinstance(content, str):
        content = content.encode("utf-8")
    # Sin filename httpx lo enviaría como campo de texto.
    return (name, (filename or name, content))


def send_request(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    content: str | bytes | None = None,
    files: Sequence[FormPart] | None = None,
    authorization: str | None = None,
) -> bytes:
    """Ejecuta una petición y devuelve el cuerpo completo de la respuesta.

    - `files` produce un cuerpo `multipart/form-data` (httpx fija el boundary).
    - `authorization` None => sin cabecera (p.ej. el grant de OAuth); cadena
      vacía => `Authorization` vacía, el vendor rechazará la llamada.
    """

    request_headers: dict[str, str] = dict(headers or {})
    if authorization is not None:
        request_headers["Authorization"] = authorization

    try:
        response = client.request(
            method,
            url,
            params=params,
            headers=request_headers,
            content=content,
            files=list(files) if files is not None else None,
        )
    except httpx.TransportError as exc:
        raise TransportError(f"{method} {url}: {exc}") from exc

    _log.debug("%s %s -> HTTP %s", method, response.request.url.host, response.status_code)
    return response.content


def http_get_raw(
    client: httpx.Client,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    content_type: str = "",
    authorization: str | None = None,
) -> bytes:
    headers = {"Content-Type": content_type} if content_type else None
    return send_request(client, "GET", url, params=params, headers=headers, authorization=authorization)


def http_post_raw(
    client: httpx.Client,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    content_type: str = "",
    content: str | bytes | None = None,
    files: Sequence[FormPart] | None = None,
    authorization: str | None = None,
) -> bytes:
    headers = {"Content-Type": content_type} if content_type else None
    return send_request(
        client,
        "POST",
        url,
        params=params,
        headers=headers,
        content=content,
        files=files,
        authorization=authorization,
    )
