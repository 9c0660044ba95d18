"""Entry point de desarrollo (sin instalar el paquete).

Uso: `python -m main telegram send-message --telegram-message "hola"`.

El código vive en `src/`; sin `pip install -e .` Python no encuentra
`cli`, `core`, etc. Instalado, el mismo CLI es el script `tools`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    # Terminales Windows (cp1252): los mensajes pueden llevar emojis.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
