"""SQLite storage implementation."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import BusMessage, Topic, TraceEvent, TranscriptEntry

SCHEMA = """
CREATE TABLE IF NOT EXISTS transcript (
    id TEXT PRIMARY KEY,
    room_id TEXT NOT NULL,
    direction TEXT NOT NULL,
    content TEXT NOT NULL,
    state_id TEXT,
    timestamp TIMESTAMP NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_transcript_room ON transcript (room_id, timestamp);

CREATE TABLE IF NOT EXISTS trace_events (
    id TEXT PRIMARY KEY,
    event_type TEXT NOT NULL,
    actor TEXT NOT NULL,
    data TEXT NOT NULL,
    timestamp TIMESTAMP NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_trace_events_ts ON trace_events (timestamp);

CREATE TABLE IF NOT EXISTS bus_messages (
    id TEXT PRIMARY KEY,
    topic TEXT NOT NULL,
    payload TEXT NOT NULL,
    source TEXT NOT NULL,
    timestamp TIMESTAMP NOT NULL
);
"""

TABLES = ("transcript", "trace_events", "bus_messages")


def _parse_ts(value: str) -> datetime:
    ts = datetime.fromisoformat(value)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class IStorage(Protocol):
    """Persistent storage for transcripts and observability data (SQLite).

    Conversation positions, forms and FAQ history are never stored here.
    """

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # Transcript
    async def save_transcript_entry(self, entry: TranscriptEntry) -> None:
        """Append one message to a room's transcript."""
        ...

    async def get_transcript(self, room_id: str, limit: int | None = None) -> list[TranscriptEntry]:
        """Transcript of a room, oldest first; ``limit`` keeps the most recent."""
        ...

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        ...

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        ...

    # BusMessages
    async def save_bus_message(self, message: BusMessage) -> None:
        """Save a bus message."""
        ...

    async def get_bus_messages(self, limit: int = 100) -> list[BusMessage]:
        """Get bus messages (newest first)."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)
        await self._conn.executescript(SCHEMA)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    # Transcript
    async def save_transcript_entry(self, entry: TranscriptEntry) -> None:
        conn = self._require_conn()
        await conn.execute(
            """
            INSERT INTO transcript (id, room_id, direction, content, state_id, timestamp)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                entry.id or str(uuid.uuid4()),
                entry.room_id,
                entry.direction,
                entry.content,
                entry.state_id,
                entry.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_transcript(self, room_id: str, limit: int | None = None) -> list[TranscriptEntry]:
        """Transcript of a room, oldest first; ``limit`` keeps the most recent."""
        conn = self._require_conn()
        cursor = await conn.execute(
            """
            SELECT id, room_id, direction, content, state_id, timestamp
            FROM transcript
            WHERE room_id = ?
            ORDER BY timestamp DESC, rowid DESC
            LIMIT ?
            """,
            (room_id, -1 if limit is None else limit),
        )
        rows = await cursor.fetchall()

        entries = [
            TranscriptEntry(
                id=row[0],
                room_id=row[1],
                direction=row[2],
                content=row[3],
                state_id=row[4],
                timestamp=_parse_ts(row[5]),
            )
            for row in rows
        ]
        entries.reverse()
        return entries

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        conn = self._require_conn()
        await conn.execute(
            """
            INSERT INTO trace_events (id, event_type, actor, data, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id or str(uuid.uuid4()),
                event.event_type,
                event.actor,
                json.dumps(event.data, ensure_ascii=False, default=str),
                event.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters (newest first)."""
        conn = self._require_conn()

        conditions = []
        params: list = []

        if after:
            conditions.append("timestamp > ?")
            params.append(after.isoformat())
        if event_types:
            placeholders = ",".join("?" * len(event_types))
            conditions.append(f"event_type IN ({placeholders})")
            params.extend(event_types)
        if actor:
            conditions.append("actor = ?")
            params.append(actor)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            {where_clause}
            ORDER BY timestamp DESC, rowid DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await conn.execute(query, params)
        rows = await cursor.fetchall()

        return [
            TraceEvent(
                id=row[0],
                event_type=row[1],
                actor=row[2],
                data=json.loads(row[3]),
                timestamp=_parse_ts(row[4]),
            )
            for row in rows
        ]

    # BusMessages
    async def save_bus_message(self, message: BusMessage) -> None:
        conn = self._require_conn()
        await conn.execute(
            """
            INSERT INTO bus_messages (id, topic, payload, source, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                message.id or str(uuid.uuid4()),
                message.topic.value,
                json.dumps(message.payload, ensure_ascii=False, default=str),
                message.source,
                message.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_bus_messages(self, limit: int = 100) -> list[BusMessage]:
        conn = self._require_conn()
        cursor = await conn.execute(
            """
            SELECT id, topic, payload, source, timestamp
            FROM bus_messages
            ORDER BY timestamp DESC, rowid DESC
            LIMIT ?
            """,
            (limit,),
        )
        rows = await cursor.fetchall()

        return [
            BusMessage(
                id=row[0],
                topic=Topic(row[1]),
                payload=json.loads(row[2]),
                source=row[3],
                timestamp=_parse_ts(row[4]),
            )
            for row in rows
        ]

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        conn = self._require_conn()
        for table in TABLES:
            await conn.execute(f"DELETE FROM {table}")
        await conn.commit()
