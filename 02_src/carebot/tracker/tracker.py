"""Tracker implementation for creating TraceEvents."""

import uuid
from datetime import datetime, timezone
from typing import Protocol

from ..event_bus import IEventBus
from ..models import BusMessage, Topic, TraceEvent
from ..storage import IStorage


class ITracker(Protocol):
    """Creating TraceEvents. Two channels: EventBus subscription + direct calls."""

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create TraceEvent and save to Storage."""
        ...

    async def stop(self) -> None:
        """Stop tracker."""
        ...


class Tracker:
    """Creates TraceEvents via EventBus subscription and direct track() calls."""

    def __init__(self, event_bus: IEventBus, storage: IStorage):
        self._event_bus = event_bus
        self._storage = storage

    async def start(self) -> None:
        """Subscribe to all EventBus topics."""
        for topic in Topic:
            self._event_bus.subscribe(topic, self._handle_bus_message)

    async def stop(self) -> None:
        for topic in Topic:
            self._event_bus.unsubscribe(topic, self._handle_bus_message)

    async def _handle_bus_message(self, bus_message: BusMessage) -> None:
        payload = bus_message.payload
        await self.track(
            event_type="bus_message_published",
            actor="event_bus",
            data={
                "topic": bus_message.topic.value,
                "source": bus_message.source,
                "room_id": payload.get("room_id"),
                "payload_summary": str(payload)[:100],
            },
        )

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        trace_event = TraceEvent(
            id=str(uuid.uuid4()),
            event_type=event_type,
            actor=actor,
            data=data,
            timestamp=datetime.now(timezone.utc),
        )
        await self._storage.save_trace_event(trace_event)
