"""Clientes por vendor.

Por qué un paquete:
- Cada módulo encapsula todas las operaciones contra una API SaaS.
- Telegram y Slack implementan `core.interfaces.sender.MessageSender`.
"""

from adapters.vendors.google import Google
from adapters.vendors.slack import Slack
from adapters.vendors.telegram import Telegram

__all__ = [
    "Google",
    "Slack",
    "Telegram",
]
