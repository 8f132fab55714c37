"""SIM implementation - scripted customer conversations against /webhook."""

import asyncio
import random
from typing import Protocol

import httpx

from carebot.api.routes.webhook import (
    CUSTOMER_DATA_EVENT,
    CUSTOMER_PARTICIPANT,
    CUSTOMER_WEBHOOK_EVENT,
)
from carebot.logging_config import get_logger
from carebot.tracker import ITracker

logger = get_logger(__name__)

# room_id -> messages typed by that customer, in order
SCENARIOS: dict[str, list[str]] = {
    "sim_room_faq": ["halo", "SilverStream", "Pertanyaan Umum", "Apa manfaat utama?", "Kembali"],
    "sim_room_form": [
        "beli",
        "individu",
        "Budi Santoso",
        "35",
        "L",
        "Jakarta",
        "1",
    ],
    "sim_room_unknown": ["halo", "xyz_nonexistent", "menu"],
}


def webhook_payload(room_id: str, text: str) -> dict:
    """Body Qontak posts for a customer message."""
    return {
        "data_event": CUSTOMER_DATA_EVENT,
        "webhook_event": CUSTOMER_WEBHOOK_EVENT,
        "participant_type": CUSTOMER_PARTICIPANT,
        "room_id": room_id,
        "text": text,
    }


class ISim(Protocol):
    """Generate test traffic from scripted scenarios."""

    async def start(self) -> None:
        ...

    async def stop(self) -> None:
        ...


class Sim:
    """Replays SCENARIOS as webhook calls, rooms interleaved."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        tracker: ITracker | None = None,
        scenarios: dict[str, list[str]] | None = None,
        delay: tuple[float, float] = (1.0, 3.0),
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_url = api_url
        self._tracker = tracker
        self._scenarios = scenarios or SCENARIOS
        self._delay = delay
        self._transport = transport
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(base_url=self._api_url, transport=self._transport)
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def wait(self) -> None:
        """Wait for the scenario run to finish."""
        if self._task:
            await asyncio.shield(self._task)

    async def _run_scenario(self) -> None:
        summary = {
            "room_count": len(self._scenarios),
            "message_count": sum(len(m) for m in self._scenarios.values()),
        }
        sent = 0
        try:
            if self._tracker:
                await self._tracker.track("sim_started", "sim", summary)

            rounds = max((len(m) for m in self._scenarios.values()), default=0)
            for i in range(rounds):
                for room_id, messages in self._scenarios.items():
                    if not self._running:
                        return
                    if i < len(messages):
                        if await self._send_message(room_id, messages[i]):
                            sent += 1
                        await asyncio.sleep(random.uniform(*self._delay))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e, exc_info=True)
        finally:
            self._running = False
            if self._tracker:
                await self._tracker.track("sim_completed", "sim", {**summary, "sent": sent})

    async def _send_message(self, room_id: str, text: str) -> bool:
        if not self._client:
            return False

        try:
            response = await self._client.post(
                "/webhook", json=webhook_payload(room_id, text), timeout=30.0
            )
        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send message: %s", e)
            return False

        if response.status_code != 200:
            logger.error("SIM: Error sending message: %s", response.status_code)
            return False

        logger.info("SIM: %s -> %s", room_id, text)
        return True
