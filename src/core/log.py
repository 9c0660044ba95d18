"""Configuración de logging para la CLI.

Todo el logging va a stderr: stdout queda reservado para la respuesta JSON
del vendor, que puede encadenarse con otras herramientas.

Formatos:
- `text`: `rich.logging.RichHandler`.
- `json`: structlog `ProcessorFormatter` sobre los registros de `logging`,
  una línea JSON por registro.
"""

from __future__ import annotations

import logging
import sys

import structlog
from rich.console import Console
from rich.logging import RichHandler

from core.config import StdoutOptions


LOGGER_NAME = "tools"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "panic": logging.CRITICAL,
    "critical": logging.CRITICAL,
}


def parse_level(level: str) -> int:
    return _LEVELS.get(level.strip().lower(), logging.INFO)


def json_formatter(timestamp_format: str) -> structlog.stdlib.ProcessorFormatter:
    """Formatter JSON para registros de `logging` (no hay loggers structlog)."""

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt=timestamp_format, utc=True, key="time"),
        structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ),
        structlog.processors.format_exc_info,
    ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
    )


def setup_logging(options: StdoutOptions) -> logging.Logger:
    """Configura el logger raíz de la herramienta y lo devuelve.

    Idempotente: reemplaza los handlers previos (útil en tests con CliRunner).
    """

    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if options.debug else parse_level(options.level)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler: logging.Handler
    if options.format == "json":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(json_formatter(options.timestamp_format))
    else:
        console = Console(stderr=True, no_color=not options.text_colors)
        handler = RichHandler(
            console=console,
            show_path=True,
            markup=False,
            rich_tracebacks=False,
            log_time_format=options.timestamp_format,
        )
    logger.addHandler(handler)
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)
