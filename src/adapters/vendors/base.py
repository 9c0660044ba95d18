"""Ciclo de vida común de los clientes de vendor.

Cada instancia posee un único `httpx.Client` (timeout + política TLS del
vendor). No hay estado compartido entre instancias.
"""

from __future__ import annotations

import httpx

from adapters.http_client import build_client


class VendorClient:
    name = "vendor"

    def __init__(self, *, timeout: float, insecure: bool, client: httpx.Client | None = None) -> None:
        self._client = client or build_client(timeout=timeout, insecure=insecure)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
