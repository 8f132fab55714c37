"""Tests for QontakClient."""

import json

import httpx
import pytest

from carebot.messaging import INTERACTIVE_ENDPOINT, TEXT_ENDPOINT, QontakClient
from carebot.models import Button, ButtonsMessage, ListMessage, ListRow, ListSection, TextMessage

BASE_URL = "https://qontak.test/api/open/v1"


class Recorder:
    """MockTransport handler that records requests."""

    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"status": "success"})

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


def _client(handler) -> QontakClient:
    return QontakClient(
        access_token="secret",
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )


class TestQontakClientSend:
    """Tests for message delivery."""

    @pytest.mark.asyncio
    async def test_text_message(self):
        recorder = Recorder()
        client = _client(recorder)

        assert await client.send("room1", TextMessage(body="Halo"))
        await client.aclose()

        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/open/v1" + TEXT_ENDPOINT
        assert request.headers["Authorization"] == "Bearer secret"
        assert recorder.last_body == {"room_id": "room1", "type": "text", "text": "Halo"}

    @pytest.mark.asyncio
    async def test_button_message(self):
        recorder = Recorder()
        client = _client(recorder)

        await client.send("room1", ButtonsMessage(body="Pilih", buttons=[Button(id="a", title="A")]))
        await client.aclose()

        assert recorder.requests[0].url.path.endswith(INTERACTIVE_ENDPOINT)
        assert recorder.last_body == {
            "room_id": "room1",
            "type": "button",
            "interactive": {"body": "Pilih", "buttons": [{"id": "a", "title": "A"}]},
        }

    @pytest.mark.asyncio
    async def test_list_message(self):
        recorder = Recorder()
        client = _client(recorder)
        message = ListMessage(
            body="Menu",
            button_label="Lihat",
            sections=[ListSection(title="S", rows=[ListRow(id="r", title="R", description="d")])],
        )

        await client.send("room1", message)
        await client.aclose()

        body = recorder.last_body
        assert body["type"] == "list"
        assert body["interactive"]["lists"]["button"] == "Lihat"
        assert body["interactive"]["lists"]["sections"][0]["rows"][0]["id"] == "r"

    @pytest.mark.asyncio
    async def test_http_error_returns_false(self):
        """Rejected deliveries are reported, not raised, and not retried."""
        recorder = Recorder(status_code=401)
        client = _client(recorder)

        assert await client.send("room1", TextMessage(body="Halo")) is False
        await client.aclose()

        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_transport_error_returns_false(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        client = _client(handler)

        assert await client.send("room1", TextMessage(body="Halo")) is False
        await client.aclose()

    def test_endpoint_selection(self):
        assert QontakClient.endpoint_for(TextMessage(body="x")) == TEXT_ENDPOINT
        assert QontakClient.endpoint_for(ButtonsMessage(body="x")) == INTERACTIVE_ENDPOINT
