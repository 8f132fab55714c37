"""DialogueAgent implementation."""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Protocol

from ..conversation import ConversationResolver, Resolution
from ..event_bus import IEventBus
from ..llm import ILLMProvider
from ..logging_config import get_logger
from ..models import BusMessage, OutboundMessage, TextMessage, Topic, TranscriptEntry
from ..storage import IStorage
from ..tracker import ITracker

logger = get_logger(__name__)

HISTORY_WINDOW = 5
DEFAULT_LLM_TIMEOUT = 15.0

SYSTEM_PROMPT = (
    "Kamu adalah asisten layanan pelanggan WhatsApp untuk produk kesehatan. "
    "Jawab dalam Bahasa Indonesia yang ramah, singkat dan jelas. "
    "Jangan memberikan diagnosis medis."
)


class IDialogueAgent(Protocol):
    """Turns one inbound customer message into one outbound reply."""

    async def handle_message(self, room_id: str, text: str) -> OutboundMessage:
        """Resolve the message, record it, publish the reply. Return the reply."""
        ...


class DialogueAgent:
    """Runs the conversation pipeline for every inbound message.

    The reply is produced by the resolver; states of type ``ai_generated``
    are rewritten by the LLM when one is configured.
    """

    def __init__(
        self,
        resolver: ConversationResolver,
        event_bus: IEventBus,
        storage: IStorage,
        tracker: ITracker,
        llm_provider: ILLMProvider | None = None,
        llm_timeout: float = DEFAULT_LLM_TIMEOUT,
    ):
        self._resolver = resolver
        self._event_bus = event_bus
        self._storage = storage
        self._tracker = tracker
        self._llm = llm_provider
        self._llm_timeout = llm_timeout

    async def handle_message(self, room_id: str, text: str) -> OutboundMessage:
        logger.info("Message received: %s", text[:100], extra={"room_id": room_id})
        try:
            return await self._handle(room_id, text)
        except Exception as e:
            logger.error("Pipeline error: %s", e, exc_info=True, extra={"room_id": room_id})
            message = TextMessage(body=self._resolver.definition.fallback_responses.error)
            try:
                await self._publish(
                    Topic.OUTBOUND,
                    {"room_id": room_id, "state_id": None, "message": message.to_payload()},
                )
            except Exception as publish_error:
                logger.error(
                    "Failed to publish error reply: %s",
                    publish_error,
                    extra={"room_id": room_id},
                )
            return message

    async def _handle(self, room_id: str, text: str) -> OutboundMessage:
        await self._record(room_id, "inbound", text, self._resolver.current_state(room_id))
        await self._tracker.track(
            event_type="message_received",
            actor="dialogue_agent",
            data={"room_id": room_id, "text": text},
        )
        await self._publish(Topic.INBOUND, {"room_id": room_id, "text": text})

        resolution = await asyncio.to_thread(self._resolver.resolve_turn, room_id, text)
        message = resolution.message
        if resolution.ai_context is not None:
            message = await self._generate(room_id, text, resolution)

        await self._record(room_id, "outbound", message.body, resolution.state_id)
        await self._tracker.track(
            event_type="message_resolved",
            actor="dialogue_agent",
            data={
                "room_id": room_id,
                "state_id": resolution.state_id,
                "message_type": message.kind.value,
            },
        )
        if resolution.end_conversation:
            logger.info("Conversation ended", extra={"room_id": room_id})
            await self._tracker.track(
                event_type="conversation_ended",
                actor="dialogue_agent",
                data={"room_id": room_id, "state_id": resolution.state_id},
            )

        await self._publish(
            Topic.OUTBOUND,
            {
                "room_id": room_id,
                "state_id": resolution.state_id,
                "message": message.to_payload(),
            },
        )
        return message

    async def _generate(self, room_id: str, text: str, resolution: Resolution) -> OutboundMessage:
        """LLM reply for an ai_generated state; the canned text on any failure."""
        if self._llm is None:
            return resolution.message

        history = await self._storage.get_transcript(room_id, limit=HISTORY_WINDOW + 1)
        # The newest entry is the message being answered
        history = history[:-1][-HISTORY_WINDOW:]
        system = (
            f"{SYSTEM_PROMPT}\n\nState percakapan: {resolution.state_id}"
            f"\nKonteks: {resolution.ai_context}"
        )
        if history:
            lines = "\n".join(
                f"{'User' if entry.direction == 'inbound' else 'Bot'}: {entry.content}"
                for entry in history
            )
            system += f"\n\nPercakapan sebelumnya:\n{lines}"

        try:
            reply = await asyncio.wait_for(
                self._llm.complete(messages=[{"role": "user", "content": text}], system=system),
                timeout=self._llm_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("LLM timed out, using canned reply", extra={"room_id": room_id})
            return resolution.message
        except Exception as e:
            logger.warning("LLM failed, using canned reply: %s", e, extra={"room_id": room_id})
            return resolution.message

        await self._tracker.track(
            event_type="ai_reply_generated",
            actor="dialogue_agent",
            data={"room_id": room_id, "state_id": resolution.state_id},
        )
        return TextMessage(body=reply)

    async def _record(self, room_id: str, direction: str, content: str, state_id: str | None) -> None:
        await self._storage.save_transcript_entry(
            TranscriptEntry(
                id=str(uuid.uuid4()),
                room_id=room_id,
                direction=direction,
                content=content,
                timestamp=datetime.now(timezone.utc),
                state_id=state_id,
            )
        )

    async def _publish(self, topic: Topic, payload: dict) -> None:
        await self._event_bus.publish(
            BusMessage(
                id=str(uuid.uuid4()),
                topic=topic,
                payload=payload,
                source="dialogue_agent",
                timestamp=datetime.now(timezone.utc),
            )
        )
