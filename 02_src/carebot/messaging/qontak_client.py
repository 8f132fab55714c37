"""Qontak WhatsApp messaging client."""

import os
from typing import Protocol

import httpx

from ..config import DEFAULT_QONTAK_BASE_URL
from ..logging_config import get_logger
from ..models import MessageKind, OutboundMessage

logger = get_logger(__name__)

TEXT_ENDPOINT = "/messages/whatsapp/bot"
INTERACTIVE_ENDPOINT = "/messages/whatsapp/interactive_message/bot"


class IMessenger(Protocol):
    """Delivers outbound messages to a chat room."""

    async def send(self, room_id: str, message: OutboundMessage) -> bool:
        """Send a message. Returns False when delivery failed."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...


class QontakClient:
    """Sends text, button and list messages through the Qontak open API."""

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        token = access_token if access_token is not None else os.getenv("QONTAK_ACCESS_TOKEN", "")
        if not token:
            logger.warning("QONTAK_ACCESS_TOKEN not set, deliveries will be rejected")

        self._client = httpx.AsyncClient(
            base_url=base_url or os.getenv("QONTAK_BASE_URL") or DEFAULT_QONTAK_BASE_URL,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def endpoint_for(message: OutboundMessage) -> str:
        return TEXT_ENDPOINT if message.kind is MessageKind.TEXT else INTERACTIVE_ENDPOINT

    async def send(self, room_id: str, message: OutboundMessage) -> bool:
        body = {"room_id": room_id, **message.to_payload()}
        endpoint = self.endpoint_for(message)

        try:
            response = await self._client.post(endpoint, json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Qontak rejected %s message: %s %s",
                message.kind.value,
                e.response.status_code,
                e.response.text[:200],
                extra={"room_id": room_id},
            )
            return False
        except httpx.HTTPError as e:
            logger.error(
                "Error sending %s message: %s",
                message.kind.value,
                e,
                extra={"room_id": room_id},
            )
            return False

        logger.info("%s message sent", message.kind.value, extra={"room_id": room_id})
        return True

    async def aclose(self) -> None:
        await self._client.aclose()
