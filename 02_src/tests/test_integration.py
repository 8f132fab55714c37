"""Integration tests for Care Bot end-to-end flow."""

import asyncio
import os
import tempfile

import httpx
import pytest

from carebot.app import Application
from carebot.messaging import QontakClient
from sim import Sim


@pytest.fixture
def delivered():
    return []


@pytest.fixture
async def app(delivered):
    """Application on a temporary database, Qontak mocked at the HTTP layer."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    def qontak(request: httpx.Request) -> httpx.Response:
        delivered.append(request)
        return httpx.Response(200, json={"status": "success"})

    messenger = QontakClient(
        access_token="token",
        base_url="https://qontak.test/api/open/v1",
        transport=httpx.MockTransport(qontak),
    )
    application = Application(db_path=db_path, messenger=messenger, llm_provider=None)
    await application.start()

    yield application

    await application.stop()
    await messenger.aclose()
    os.unlink(db_path)


@pytest.mark.asyncio
async def test_full_flow(app: Application, delivered):
    """Inbound text -> resolution -> Qontak delivery -> traces."""
    for text in ["halo", "SilverStream", "Pertanyaan Umum", "Apa manfaat utama?", "Kembali"]:
        await app.dialogue_agent.handle_message("room_it", text)

    assert len(delivered) == 5
    assert delivered[0].url.path.endswith("/interactive_message/bot")
    assert app.resolver.current_state("room_it") == "silverstream_menu"

    events = await app.storage.get_trace_events(limit=200)
    event_types = {e.event_type for e in events}
    assert {"message_received", "message_resolved", "message_delivered", "bus_message_published"} <= event_types

    transcript = await app.storage.get_transcript("room_it")
    assert len(transcript) == 10


@pytest.mark.asyncio
async def test_sim_drives_webhook(app: Application, delivered):
    """The simulator's scripted rooms run through the real API."""
    from carebot.api import create_fastapi_app

    fastapi_app = create_fastapi_app(app)
    transport = httpx.ASGITransport(app=fastapi_app)
    scenarios = {"sim_a": ["halo", "xyz_nonexistent"], "sim_b": ["beli", "batal"]}
    sim = Sim(api_url="http://carebot.test", scenarios=scenarios, delay=(0, 0), transport=transport)
    sim.set_tracker(app._tracker)

    await sim.start()
    await asyncio.wait_for(sim.wait(), timeout=10)
    await sim.stop()

    assert len(delivered) == 4
    assert app.resolver.current_state("sim_a") == "greeting"
    assert not app.forms.has_active_form("sim_b")
    events = await app.storage.get_trace_events(event_types=["sim_started", "sim_completed"])
    completed = [e for e in events if e.event_type == "sim_completed"]
    assert completed[0].data["sent"] == 4
