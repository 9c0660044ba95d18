"""Contrato de envío compartido por los vendors de mensajería.

Por qué Protocol:
- Telegram y Slack exponen la misma capacidad ("enviar el mensaje
  configurado") sin heredar de una clase base común.
- La CLI y los tests pueden tratarlos de forma intercambiable.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MessageSender(Protocol):
    """Contrato mínimo para un cliente de mensajería.

    Reglas de diseño:
    - `send` es síncrono: una única petición HTTP bloqueante.
    - Devuelve el cuerpo crudo de la respuesta, sea cual sea el status HTTP.
    - Los fallos de red se propagan como `core.errors.TransportError`.
    """

    def send(self) -> bytes:
        """Envía el mensaje configurado y devuelve la respuesta cruda."""

        ...
