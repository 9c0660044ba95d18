"""Shared fixtures: isolated environment and a recording fake transport."""

from __future__ import annotations

import json
import os
import re
from typing import Callable

import httpx
import pytest


_ENV_PREFIXES = ("TELEGRAM_", "SLACK_", "GOOGLE_", "STDOUT_", "TOOLS_")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No vendor env vars, no `.env` files from the developer machine."""

    for key in list(os.environ):
        if key.upper().startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


class Recorder:
    """Records every request and answers with a canned response."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(200, json={"ok": True}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_recorder():
    return Recorder


def multipart_fields(request: httpx.Request) -> dict[str, tuple[str | None, bytes]]:
    """`{name: (filename, value)}` parsed from a multipart/form-data request."""

    content_type = request.headers["Content-Type"]
    assert content_type.startswith("multipart/form-data")
    boundary = content_type.split("boundary=", 1)[1].encode()

    fields: dict[str, tuple[str | None, bytes]] = {}
    for chunk in request.content.split(b"--" + boundary):
        # A part sits between a leading CRLF and the CRLF before the next boundary.
        chunk = chunk.removeprefix(b"\r\n")
        if chunk.endswith(b"\r\n"):
            chunk = chunk[:-2]
        if not chunk or chunk == b"--":
            continue
        head, _, body = chunk.partition(b"\r\n\r\n")
        disposition = head.decode()
        name = re.search(r'name="([^"]*)"', disposition).group(1)
        filename_match = re.search(r'filename="([^"]*)"', disposition)
        fields[name] = (filename_match.group(1) if filename_match else None, body)
    return fields


def json_body(request: httpx.Request) -> dict:
    return json.loads(request.content)
