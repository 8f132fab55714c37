"""Care Bot: WhatsApp conversation engine for healthcare products."""

from .app import Application, IApplication
from .conversation import ConversationResolver, DefinitionError, Resolution, load_definition
from .dialogue import DialogueAgent, IDialogueAgent
from .event_bus import EventBus, IEventBus
from .faq import FAQRepository, FAQRotationTracker
from .forms import FormSessionEngine, FormSessionSweeper
from .llm import ILLMProvider, LLMProvider
from .messaging import IMessenger, QontakClient
from .models import (
    BusMessage,
    ButtonsMessage,
    ConversationDefinition,
    ListMessage,
    OutboundMessage,
    TextMessage,
    Topic,
    TraceEvent,
    TranscriptEntry,
)
from .output_router import IOutputRouter, OutputRouter
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Conversation core
    "ConversationDefinition",
    "ConversationResolver",
    "DefinitionError",
    "Resolution",
    "load_definition",
    "FAQRepository",
    "FAQRotationTracker",
    "FormSessionEngine",
    "FormSessionSweeper",
    # Models
    "OutboundMessage",
    "TextMessage",
    "ButtonsMessage",
    "ListMessage",
    "BusMessage",
    "Topic",
    "TraceEvent",
    "TranscriptEntry",
    # Components
    "IStorage",
    "Storage",
    "IEventBus",
    "EventBus",
    "ITracker",
    "Tracker",
    "ILLMProvider",
    "LLMProvider",
    "IMessenger",
    "QontakClient",
    "IDialogueAgent",
    "DialogueAgent",
    "IOutputRouter",
    "OutputRouter",
]
