"""Plumbing compartido por los grupos de comandos de cada vendor.

- `load_settings`: flags explícitos > entorno; errores de config son fatales.
- `execute`: una llamada al vendor + salida JSON; los errores por llamada se
  registran y el comando termina sin salida.
"""

from __future__ import annotations

import logging
from typing import Callable, NoReturn, TypeVar

import typer
from pydantic import BaseModel
from pydantic import ValidationError as SettingsValidationError
from rich.console import Console

from adapters.json_exporter import output_json
from cli.ui_components import print_options
from core.config import OutputOptions
from core.errors import ToolsError
from core.interfaces import MessageSender
from core.log import get_logger


T = TypeVar("T", bound=BaseModel)

_log = get_logger("cli")
_stderr = Console(stderr=True)


def fatal(message: object) -> NoReturn:
    _log.critical("%s", message)
    raise typer.Exit(code=1)


def given(**flags: object) -> dict[str, object]:
    """Solo los flags que el usuario pasó; el resto cae al entorno.

    Los booleanos son `--x/--no-x`: None significa "no pasado", False se respeta.
    """

    return {key: value for key, value in flags.items() if value is not None}


def load_settings(cls: type[T], **flags: object) -> T:
    try:
        return cls(**given(**flags))
    except SettingsValidationError as exc:
        fatal(f"invalid {cls.__name__}: {exc}")


def debug_options(title: str, *options: BaseModel) -> None:
    if _log.isEnabledFor(logging.DEBUG):
        print_options(_stderr, title, *options)


def execute(call: Callable[[], bytes], output: OutputOptions) -> None:
    try:
        raw = call()
    except ToolsError as exc:
        _log.error("%s", exc)
        return

    try:
        path = output_json(output, raw)
    except (ToolsError, OSError) as exc:
        _log.error("%s", exc)
        return
    if path is not None:
        _log.info("Output written to %s", path)


def notify(sender: MessageSender, output: OutputOptions) -> None:
    execute(sender.send, output)
