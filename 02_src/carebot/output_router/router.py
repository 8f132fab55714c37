"""OutputRouter implementation."""

from typing import Protocol

from ..event_bus import IEventBus
from ..logging_config import get_logger
from ..messaging import IMessenger
from ..models import BusMessage, Topic, message_from_payload
from ..tracker import ITracker

logger = get_logger(__name__)


class IOutputRouter(Protocol):
    """Delivery of resolved replies to the messaging platform."""

    async def start(self) -> None:
        """Subscribe to EventBus topic: OUTBOUND."""
        ...

    async def stop(self) -> None:
        """Unsubscribe from EventBus."""
        ...


class OutputRouter:
    """Sends every OUTBOUND bus message through the messenger."""

    def __init__(self, event_bus: IEventBus, messenger: IMessenger, tracker: ITracker):
        self._event_bus = event_bus
        self._messenger = messenger
        self._tracker = tracker

    async def start(self) -> None:
        self._event_bus.subscribe(Topic.OUTBOUND, self._handle_output)

    async def stop(self) -> None:
        self._event_bus.unsubscribe(Topic.OUTBOUND, self._handle_output)

    async def _handle_output(self, bus_message: BusMessage) -> None:
        payload = bus_message.payload
        room_id = payload["room_id"]
        message = message_from_payload(payload["message"])

        delivered = await self._messenger.send(room_id, message)

        await self._tracker.track(
            event_type="message_delivered" if delivered else "delivery_failed",
            actor="output_router",
            data={
                "room_id": room_id,
                "message_type": message.kind.value,
                "state_id": payload.get("state_id"),
            },
        )
        if not delivered:
            logger.warning("Reply not delivered", extra={"room_id": room_id})
