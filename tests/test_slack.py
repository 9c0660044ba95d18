"""Unit tests for the Slack client and its request builders."""

import json

import httpx
import pytest

from adapters.vendors.slack import (
    NO_TITLE,
    Slack,
    build_file_form,
    build_reaction_form,
    derive_title,
    render_message,
    usergroup_from_options,
)
from core.config import SlackOptions, SlackReactionOptions, SlackUserOptions
from core.domain.models import SlackMessage, SlackUsergroupUsers
from core.errors import ValidationError
from core.interfaces import MessageSender
from conftest import json_body, multipart_fields


@pytest.fixture
def options():
    return SlackOptions(token="xoxb-default", channel="C1", url="https://slack.test/api/")


@pytest.fixture
def slack(options, recorder):
    return Slack(options, client=recorder.client())


class TestDeriveTitle:
    def test_first_line(self):
        assert derive_title("Hello\n\nWorld") == "Hello"

    def test_skips_blank_lines(self):
        assert derive_title("\n   \nDeploy finished\nmore") == "Deploy finished"

    def test_all_blank(self):
        assert derive_title("\n  \n\t\n") == NO_TITLE

    def test_truncated_to_150(self):
        title = derive_title("x" * 400 + "\nsecond")
        assert title == "x" * 150

    def test_short_line_untouched(self):
        assert derive_title("a" * 150) == "a" * 150

    def test_indentation_kept(self):
        assert derive_title("  Hello world  \nnext") == "  Hello world  "

    def test_only_newline_splits(self):
        assert derive_title("a\rb\nc") == "a\rb"


class TestRenderMessage:
    def test_valid_json_with_escaping(self):
        m = SlackMessage(channel="C1", title='Say "hi"', message="line1\nline2 <b>&</b>")
        payload = json.loads(render_message(m))
        assert payload["channel"] == "C1"
        assert payload["text"] == 'Say "hi"'
        assert payload["attachments"][0]["blocks"][0]["text"]["text"] == "line1\nline2 <b>&</b>"
        assert "thread_ts" not in payload

    def test_thread_and_image(self):
        m = SlackMessage(channel="C1", title="t", message="m", parent_ts="123.456", image_url="https://img/x.png")
        payload = json.loads(render_message(m))
        assert payload["thread_ts"] == "123.456"
        blocks = payload["attachments"][0]["blocks"]
        assert blocks[-1] == {"type": "image", "image_url": "https://img/x.png", "alt_text": "t"}

    def test_quote_color(self):
        m = SlackMessage(channel="C1", title="t", message="m", quote_color="#ff0000")
        assert json.loads(render_message(m))["attachments"][0]["color"] == "#ff0000"


class TestSendMessage:
    def test_empty_message_fails_without_request(self, slack, recorder):
        with pytest.raises(ValidationError):
            slack.send_message(SlackMessage(channel="C1", message=""))
        assert recorder.requests == []

    def test_derives_title(self, slack, recorder):
        slack.send_message(SlackMessage(channel="C1", message="Hello\n\nWorld"))
        request = recorder.last
        assert str(request.url) == "https://slack.test/api/chat.postMessage"
        assert request.headers["Content-Type"] == "application/json; charset=utf-8"
        assert json_body(request)["text"] == "Hello"

    def test_whitespace_only_message_gets_placeholder(self, slack, recorder):
        slack.send_message(SlackMessage(channel="C1", message="  \n "))
        assert json_body(recorder.last)["text"] == NO_TITLE

    def test_explicit_title_kept(self, slack, recorder):
        slack.send_message(SlackMessage(channel="C1", title="Custom", message="Hello"))
        assert json_body(recorder.last)["text"] == "Custom"

    def test_uses_options_by_default(self, recorder):
        client = Slack(SlackOptions(channel="C9", message="From options"), client=recorder.client())
        client.send_message()
        assert json_body(recorder.last)["channel"] == "C9"

    def test_returns_raw_error_body(self, make_recorder):
        rec = make_recorder(lambda request: httpx.Response(200, content=b'{"ok":false,"error":"invalid_auth"}'))
        client = Slack(SlackOptions(), client=rec.client())
        assert client.send_message(SlackMessage(channel="C1", message="x")) == b'{"ok":false,"error":"invalid_auth"}'


class TestAuthorization:
    def test_per_call_token_wins(self, slack, recorder):
        slack.send_message(SlackMessage(token="xoxb-call", channel="C1", message="x"))
        assert recorder.last.headers["Authorization"] == "Bearer xoxb-call"

    def test_falls_back_to_client_token(self, slack, recorder):
        slack.send_message(SlackMessage(channel="C1", message="x"))
        assert recorder.last.headers["Authorization"] == "Bearer xoxb-default"

    def test_no_token_sends_empty_credential(self, recorder):
        client = Slack(SlackOptions(), client=recorder.client())
        client.send_message(SlackMessage(channel="C1", message="x"))
        assert recorder.last.headers["Authorization"] == ""

    def test_options_override_for_reaction(self, slack, recorder, options):
        override = options.model_copy(update={"token": "xoxb-other"})
        slack.add_reaction(SlackReactionOptions(name="eyes"), override)
        assert recorder.last.headers["Authorization"] == "Bearer xoxb-other"


class TestSendFile:
    def test_omits_empty_optional_fields(self):
        form = build_file_form(SlackMessage(channel="C1", filename="a.txt", file_content=b"data"))
        assert [name for name, _ in form] == ["file"]
        assert form[0] == ("file", ("a.txt", b"data"))

    def test_includes_optional_fields(self):
        m = SlackMessage(message="comment", title="Title", parent_ts="1.2", filename="a.txt", file_content=b"x")
        names = [name for name, _ in build_file_form(m)]
        assert names == ["initial_comment", "title", "thread_ts", "file"]

    def test_posts_to_files_upload(self, slack, recorder):
        slack.send_file(SlackMessage(channel="C1", filename="log.txt", file_content=b"content", title="Log"))
        request = recorder.last
        assert request.url.path == "/api/files.upload"
        assert request.url.params["channels"] == "C1"
        fields = multipart_fields(request)
        assert fields["file"] == ("log.txt", b"content")
        assert fields["title"] == (None, b"Log")
        assert "initial_comment" not in fields


class TestSend:
    def test_snippet_fields(self, recorder):
        client = Slack(
            SlackOptions(channel="C1", title="T", message="M", file="snippet body"),
            client=recorder.client(),
        )
        client.send()
        fields = multipart_fields(recorder.last)
        assert fields == {
            "initial_comment": (None, b"M"),
            "title": (None, b"T"),
            "content": (None, b"snippet body"),
        }
        assert recorder.last.url.params["channels"] == "C1"

    def test_is_message_sender(self, slack):
        assert isinstance(slack, MessageSender)


class TestReaction:
    def test_form_has_exactly_three_fields(self):
        form = build_reaction_form("C1", "thumbsup", "123.456")
        assert form == [
            ("channel", (None, "C1")),
            ("name", (None, "thumbsup")),
            ("timestamp", (None, "123.456")),
        ]

    def test_wire_body(self, recorder):
        client = Slack(SlackOptions(channel="C1", parent_ts="123.456"), client=recorder.client())
        client.add_reaction(SlackReactionOptions(name="thumbsup"))
        assert recorder.last.url.path.endswith("/reactions.add")
        assert multipart_fields(recorder.last) == {
            "channel": (None, b"C1"),
            "name": (None, b"thumbsup"),
            "timestamp": (None, b"123.456"),
        }


class TestLookupUser:
    def test_get_with_email_query(self, slack, recorder):
        slack.lookup_user_by_email(SlackUserOptions(email="dev@example.com"))
        request = recorder.last
        assert request.method == "GET"
        assert request.url.path.endswith("/users.lookupByEmail")
        assert request.url.params["email"] == "dev@example.com"


class TestUpdateUsergroup:
    def test_json_payload(self, slack, recorder):
        slack.update_usergroup(SlackUsergroupUsers(usergroup="S1", users=["U1", "U2"]))
        request = recorder.last
        assert request.url.path.endswith("/usergroups.users.update")
        assert request.headers["Content-Type"] == "application/json"
        assert json_body(request) == {"usergroup": "S1", "users": ["U1", "U2"]}

    def test_from_comma_separated(self):
        assert usergroup_from_options("S1", "U1, U2,,U3 ") == SlackUsergroupUsers(usergroup="S1", users=["U1", "U2", "U3"])
