"""Tests for roost.server.sender response emission rules."""

import pytest

from roost.http.response import Response
from roost.server.sender import send_response


async def _send(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    async def test_200_preserves_body(self) -> None:
        messages = await _send(Response("ok"))
        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert headers[b"content-type"] == b"text/html; charset=utf-8"
        assert messages[1] == {"type": "http.response.body", "body": b"ok"}

    @pytest.mark.parametrize("status", [101, 204, 304])
    async def test_no_body_statuses(self, status: int) -> None:
        messages = await _send(Response("unexpected-body").with_status(status))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_empty_content_type_is_omitted(self) -> None:
        messages = await _send(Response.empty())
        names = [name for name, _ in messages[0]["headers"]]
        assert b"content-type" not in names

    async def test_extra_headers_are_lowercased(self) -> None:
        messages = await _send(Response("x").with_header("X-Queue", "mail"))
        assert (b"x-queue", b"mail") in messages[0]["headers"]

    async def test_utf8_length(self) -> None:
        messages = await _send(Response("é"))
        assert dict(messages[0]["headers"])[b"content-length"] == b"2"
