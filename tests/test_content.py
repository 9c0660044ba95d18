"""Content resolution: file, URL or literal text."""

import httpx
import pytest

from core.content import default_filename, is_url, resolve_content, resolve_text
from core.errors import ContentResolutionError


class TestResolveContent:
    def test_empty(self):
        assert resolve_content("") == b""

    def test_literal(self):
        assert resolve_content("Hello <b>world</b>") == b"Hello <b>world</b>"

    def test_bytes_passthrough(self):
        assert resolve_content(b"\x00\x01") == b"\x00\x01"

    def test_file(self, tmp_path):
        path = tmp_path / "message.txt"
        path.write_bytes(b"from file\n")
        assert resolve_content(str(path)) == b"from file\n"

    def test_url(self, monkeypatch):
        def fake_get(url, **kwargs):
            assert kwargs["verify"] is True
            return httpx.Response(200, content=b"remote", request=httpx.Request("GET", url))

        monkeypatch.setattr("core.content.httpx.get", fake_get)
        assert resolve_content("https://example.com/message.txt") == b"remote"

    def test_url_failure(self, monkeypatch):
        def fake_get(url, **kwargs):
            return httpx.Response(404, request=httpx.Request("GET", url))

        monkeypatch.setattr("core.content.httpx.get", fake_get)
        with pytest.raises(ContentResolutionError):
            resolve_content("https://example.com/missing.txt")

    def test_url_network_failure(self, monkeypatch):
        def fake_get(url, **kwargs):
            raise httpx.ConnectError("refused")

        monkeypatch.setattr("core.content.httpx.get", fake_get)
        with pytest.raises(ContentResolutionError, match="refused"):
            resolve_content("http://unreachable.test/x")


class TestResolveText:
    def test_not_utf8(self, tmp_path):
        path = tmp_path / "binary.bin"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(ContentResolutionError):
            resolve_text(str(path))


class TestHelpers:
    def test_is_url(self):
        assert is_url("HTTPS://example.com")
        assert not is_url("/tmp/file")

    def test_default_filename(self, tmp_path):
        path = tmp_path / "chart.png"
        path.write_bytes(b"png")
        assert default_filename(str(path)) == "chart.png"
        assert default_filename("just text") == ""
        assert default_filename(b"bytes") == ""
