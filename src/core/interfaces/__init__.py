"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los clientes de cada vendor.
"""

from core.interfaces.sender import MessageSender

__all__ = ["MessageSender"]
