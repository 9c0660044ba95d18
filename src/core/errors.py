"""Taxonomía de errores de la herramienta.

- Los errores HTTP del vendor (4xx/5xx) NO son errores: su cuerpo JSON se
  devuelve tal cual y la capa de salida lo muestra.
- Ninguno de estos errores se reintenta.
"""

from __future__ import annotations


class ToolsError(Exception):
    """Base de todos los errores propios de la CLI."""


class ValidationError(ToolsError):
    """Combinación de parámetros inválida según una regla de negocio."""


class ContentResolutionError(ToolsError):
    """Un mensaje/contenido que debía leerse de fichero o URL no se pudo resolver."""


class AuthError(ToolsError):
    """Fallo al refrescar el token OAuth (credenciales, red o respuesta malformada)."""


class TransportError(ToolsError):
    """Fallo de red (DNS, conexión, TLS, timeout) durante una llamada HTTP."""
