"""Observability API routes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication


class TraceEventResponse(BaseModel):
    """Response model for trace event."""

    id: str
    event_type: str
    actor: str
    data: dict[str, Any]
    timestamp: datetime


class TranscriptEntryResponse(BaseModel):
    id: str
    room_id: str
    direction: str
    content: str
    state_id: str | None = None
    timestamp: datetime


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: str | None = Query(None, description="Filter by event type"),
        actor: str | None = Query(None, description="Filter by actor"),
    ) -> list[dict]:
        """Get trace events with optional filters."""
        after_dt = None
        if after:
            try:
                after_dt = datetime.fromisoformat(after)
            except ValueError:
                raise HTTPException(status_code=400, detail="Invalid after timestamp format")

        try:
            events = await app.storage.get_trace_events(
                after=after_dt,
                event_types=[event_type] if event_type else None,
                actor=actor,
                limit=limit,
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return [
            {
                "id": e.id,
                "event_type": e.event_type,
                "actor": e.actor,
                "data": e.data,
                "timestamp": e.timestamp.isoformat(),
            }
            for e in events
        ]

    @router.get("/transcripts/{room_id}", response_model=list[TranscriptEntryResponse])
    async def get_transcript(
        room_id: str,
        limit: int | None = Query(None, ge=1, le=1000, description="Most recent N entries"),
    ) -> list[dict]:
        """Conversation transcript of a room, oldest first."""
        try:
            entries = await app.storage.get_transcript(room_id, limit=limit)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return [
            {
                "id": entry.id,
                "room_id": entry.room_id,
                "direction": entry.direction,
                "content": entry.content,
                "state_id": entry.state_id,
                "timestamp": entry.timestamp.isoformat(),
            }
            for entry in entries
        ]

    return router
