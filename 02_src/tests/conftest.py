"""Pytest configuration and fixtures."""

import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeClock:
    """Manually advanced clock for form timeouts."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from carebot.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def event_bus(storage):
    """Create EventBus with storage."""
    from carebot.event_bus import EventBus

    return EventBus(storage)


@pytest.fixture
def tracker(storage, event_bus):
    """Create Tracker with storage and event bus."""
    from carebot.tracker import Tracker

    return Tracker(event_bus=event_bus, storage=storage)


@pytest.fixture
def mock_llm():
    """Create mock LLM provider."""
    llm = Mock()
    llm.complete = AsyncMock(return_value="Jawaban dari asisten")
    return llm


@pytest.fixture
def mock_messenger():
    """Messenger that accepts every message."""
    messenger = Mock()
    messenger.send = AsyncMock(return_value=True)
    messenger.aclose = AsyncMock()
    return messenger


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def definition():
    """The shipped conversation definition."""
    from carebot.app import FORM_TRIGGERS
    from carebot.config import DEFAULT_TREE_PATH
    from carebot.conversation import load_definition

    return load_definition(DEFAULT_TREE_PATH, extra_targets=FORM_TRIGGERS)


@pytest.fixture
def faq_repository():
    from carebot.faq import FAQRepository

    return FAQRepository.default()


@pytest.fixture
def faq_tracker(faq_repository):
    from carebot.faq import FAQRotationTracker

    return FAQRotationTracker(faq_repository, rng=random.Random(7))


@pytest.fixture
def form_engine(clock):
    from carebot.forms import PURCHASE_INQUIRY_FORM, FormSessionEngine

    return FormSessionEngine([PURCHASE_INQUIRY_FORM], clock=clock)


@pytest.fixture
def resolver(definition, form_engine, faq_repository, faq_tracker):
    """Fully featured resolver over the shipped definition."""
    from carebot.app import FORM_TRIGGERS
    from carebot.conversation import ConversationResolver
    from carebot.faq import FAQ_ENTRY_STATES

    return ConversationResolver(
        definition,
        forms=form_engine,
        form_triggers=FORM_TRIGGERS,
        faq_repository=faq_repository,
        faq_tracker=faq_tracker,
        faq_states=FAQ_ENTRY_STATES,
    )


@pytest.fixture
def dialogue_agent(resolver, storage, event_bus, tracker, mock_llm):
    """Create DialogueAgent for testing."""
    from carebot.dialogue import DialogueAgent

    return DialogueAgent(
        resolver=resolver,
        event_bus=event_bus,
        storage=storage,
        tracker=tracker,
        llm_provider=mock_llm,
    )


@pytest.fixture
def minimal_raw_definition():
    """Small valid definition document, copied per test."""
    return {
        "version": "1.0",
        "description": "test flow",
        "initial_state": "start",
        "states": {
            "start": {
                "type": "interactive_button",
                "message": {
                    "body": "Pilih",
                    "buttons": [
                        {"id": "a", "title": "Alpha"},
                        {"id": "b", "title": "Beta"},
                    ],
                },
                "transitions": {"Alpha": "alpha", "beta": "beta"},
            },
            "alpha": {
                "type": "text",
                "message": "Ini alpha",
                "transitions": {"kembali": "start"},
                "fallback": "start",
            },
            "beta": {
                "type": "text",
                "message": "Sampai jumpa",
                "transitions": {},
                "end_conversation": True,
            },
        },
        "keywords": {"halo": "start"},
        "fallback_responses": {"unknown_input": "Tidak paham", "error": "Ada kesalahan"},
    }
