"""Salida de la respuesta JSON del vendor.

Por qué JSON crudo:
- Interoperabilidad con otras herramientas y pipelines (`jq`, scripts).
- Los errores de la API del vendor viajan en ese mismo cuerpo; no se
  interpretan aquí, se muestran tal cual.

Con `output_query` la respuesta se filtra con una expresión JMESPath.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import jmespath
from jmespath.exceptions import JMESPathError

from core.config import OutputOptions
from core.errors import ValidationError


def apply_query(raw: bytes, query: str) -> bytes:
    """Filtra `raw` (JSON) con `query`; sin query devuelve `raw` intacto."""

    if not query:
        return raw
    try:
        data: Any = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError(f"response is not JSON, cannot apply query: {exc}") from exc
    try:
        result = jmespath.search(query, data)
    except JMESPathError as exc:
        raise ValidationError(f"invalid output query {query!r}: {exc}") from exc
    return (json.dumps(result, ensure_ascii=False) + "\n").encode("utf-8")


def output_json(options: OutputOptions, raw: bytes) -> Path | None:
    """Escribe la respuesta en `options.output` o en stdout.

    Devuelve la ruta escrita, o None si fue a stdout.
    """

    data = apply_query(raw, options.output_query)
    if options.output:
        output_path = Path(options.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
        return output_path

    sys.stdout.buffer.write(data)
    if data and not data.endswith(b"\n"):
        sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()
    return None
