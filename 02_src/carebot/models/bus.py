"""EventBus data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Topic(str, Enum):
    """EventBus topics."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"


@dataclass
class BusMessage:
    """A message exchanged through EventBus."""

    id: str
    topic: Topic
    payload: dict  # {"room_id": ..., plus topic-specific keys}
    source: str  # component that published
    timestamp: datetime
