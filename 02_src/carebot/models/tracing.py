"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event (message received, delivered, ...)."""

    id: str
    event_type: str  # e.g. "message_received", "delivery_failed"
    actor: str  # component that recorded the event
    data: dict
    timestamp: datetime
