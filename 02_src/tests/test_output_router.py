"""Tests for OutputRouter."""

from datetime import datetime, timezone

import pytest

from carebot.models import Button, ButtonsMessage, BusMessage, Topic
from carebot.output_router import OutputRouter


@pytest.fixture
async def router(event_bus, mock_messenger, tracker):
    output_router = OutputRouter(event_bus, mock_messenger, tracker)
    await output_router.start()
    yield output_router
    await output_router.stop()


def _outbound(message) -> BusMessage:
    return BusMessage(
        id="out1",
        topic=Topic.OUTBOUND,
        payload={"room_id": "room1", "state_id": "greeting", "message": message.to_payload()},
        source="dialogue_agent",
        timestamp=datetime.now(timezone.utc),
    )


class TestOutputRouter:
    """Tests for delivering OUTBOUND messages."""

    @pytest.mark.asyncio
    async def test_sends_rebuilt_message(self, router, event_bus, mock_messenger, storage):
        message = ButtonsMessage(body="Pilih", buttons=[Button(id="a", title="A")])

        await event_bus.publish(_outbound(message))

        mock_messenger.send.assert_awaited_once_with("room1", message)
        events = await storage.get_trace_events(event_types=["message_delivered"])
        assert events[0].data["message_type"] == "button"
        assert events[0].data["state_id"] == "greeting"

    @pytest.mark.asyncio
    async def test_tracks_failed_delivery(self, router, event_bus, mock_messenger, storage):
        mock_messenger.send.return_value = False

        await event_bus.publish(_outbound(ButtonsMessage(body="x", buttons=[])))

        events = await storage.get_trace_events(event_types=["delivery_failed"])
        assert len(events) == 1
        assert events[0].data["room_id"] == "room1"

    @pytest.mark.asyncio
    async def test_ignores_inbound(self, router, event_bus, mock_messenger):
        await event_bus.publish(
            BusMessage(
                id="in1",
                topic=Topic.INBOUND,
                payload={"room_id": "room1", "text": "halo"},
                source="test",
                timestamp=datetime.now(timezone.utc),
            )
        )

        mock_messenger.send.assert_not_awaited()
