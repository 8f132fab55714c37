"""EventBus implementation for pub/sub messaging."""

import asyncio
import uuid
from typing import Awaitable, Callable, Protocol

from ..logging_config import get_logger
from ..models import BusMessage, Topic
from ..storage import IStorage

logger = get_logger(__name__)


TopicHandler = Callable[[BusMessage], Awaitable[None]]


class IEventBus(Protocol):
    """In-memory pub/sub for exchanging BusMessages."""

    def subscribe(self, topic: Topic, handler: TopicHandler) -> None:
        """Subscribe a handler to a topic."""
        ...

    def unsubscribe(self, topic: Topic, handler: TopicHandler) -> None:
        """Remove a previously subscribed handler."""
        ...

    async def publish(self, message: BusMessage) -> None:
        """Publish BusMessage: calls subscriber callbacks, persists to Storage."""
        ...


class EventBus:
    """In-memory pub/sub event bus.

    Handlers of one topic run concurrently; a failing handler is logged and
    does not affect the others or the publisher.
    """

    def __init__(self, storage: IStorage):
        self._storage = storage
        self._subscribers: dict[Topic, list[TopicHandler]] = {topic: [] for topic in Topic}

    def subscribe(self, topic: Topic, handler: TopicHandler) -> None:
        self._subscribers[topic].append(handler)

    def unsubscribe(self, topic: Topic, handler: TopicHandler) -> None:
        handlers = self._subscribers[topic]
        if handler in handlers:
            handlers.remove(handler)

    async def publish(self, message: BusMessage) -> None:
        """Publish BusMessage: calls subscriber callbacks, persists to Storage."""
        if not message.id:
            message.id = str(uuid.uuid4())

        handlers = list(self._subscribers.get(message.topic, []))

        if handlers:
            results = await asyncio.gather(
                *[handler(message) for handler in handlers],
                return_exceptions=True,
            )

            for handler, result in zip(handlers, results):
                if isinstance(result, Exception):
                    logger.error(
                        "Error in %s handler %s: %s",
                        message.topic.value,
                        getattr(handler, "__qualname__", handler),
                        result,
                        extra={"room_id": message.payload.get("room_id")},
                    )

        await self._storage.save_bus_message(message)
