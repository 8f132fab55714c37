"""Conversation transcript data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


@dataclass
class TranscriptEntry:
    """One inbound or outbound message of a conversation room."""

    id: str
    room_id: str
    direction: Literal["inbound", "outbound"]
    content: str
    timestamp: datetime
    state_id: str | None = None
