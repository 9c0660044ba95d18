"""Transport: raw body for any status, TransportError only on network failure."""

import httpx
import pytest

from adapters.http_client import bearer, form_field, form_file, http_get_raw, http_post_raw, send_request
from core.errors import TransportError
from conftest import Recorder, multipart_fields


class TestBearer:
    def test_token(self):
        assert bearer("xoxb-1") == "Bearer xoxb-1"

    def test_empty(self):
        assert bearer("") == ""


class TestSendRequest:
    def test_returns_body_for_error_status(self):
        recorder = Recorder(lambda request: httpx.Response(404, content=b'{"ok":false,"error":"not_found"}'))
        raw = send_request(recorder.client(), "GET", "https://api.example.com/x")
        assert raw == b'{"ok":false,"error":"not_found"}'

    def test_returns_body_for_server_error(self):
        recorder = Recorder(lambda request: httpx.Response(500, content=b"boom"))
        assert send_request(recorder.client(), "POST", "https://api.example.com/x") == b"boom"

    def test_authorization_header(self, recorder):
        http_post_raw(recorder.client(), "https://api.example.com/x", authorization="Bearer abc")
        assert recorder.last.headers["Authorization"] == "Bearer abc"

    def test_no_authorization_by_default(self, recorder):
        http_get_raw(recorder.client(), "https://api.example.com/x")
        assert "Authorization" not in recorder.last.headers

    def test_empty_authorization_is_sent_empty(self, recorder):
        http_get_raw(recorder.client(), "https://api.example.com/x", authorization=bearer(""))
        assert recorder.last.headers["Authorization"] == ""

    def test_query_params(self, recorder):
        http_get_raw(recorder.client(), "https://api.example.com/x", params={"email": "a@b.c"})
        assert recorder.last.url.params["email"] == "a@b.c"

    def test_connect_error_is_transport_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(refuse))
        with pytest.raises(TransportError, match="connection refused"):
            send_request(client, "GET", "https://api.example.com/x")

    def test_timeout_is_transport_error(self):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = httpx.Client(transport=httpx.MockTransport(slow))
        with pytest.raises(TransportError):
            send_request(client, "GET", "https://api.example.com/x")


class TestMultipart:
    def test_fields_have_no_filename_and_files_do(self, recorder):
        http_post_raw(
            recorder.client(),
            "https://api.example.com/upload",
            files=[form_field("title", "Report"), form_file("file", "report.txt", b"hello")],
        )
        fields = multipart_fields(recorder.last)
        assert fields["title"] == (None, b"Report")
        assert fields["file"] == ("report.txt", b"hello")

    def test_trailing_newlines_kept(self, recorder):
        http_post_raw(
            recorder.client(),
            "https://api.example.com/upload",
            files=[form_file("file", "notes.txt", b"one\r\ntwo\n\n")],
        )
        assert multipart_fields(recorder.last)["file"] == ("notes.txt", b"one\r\ntwo\n\n")

    def test_file_without_name_keeps_file_part(self):
        assert form_file("document", "", "text") == ("document", ("document", b"text"))
