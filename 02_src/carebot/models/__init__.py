"""Core data models for Care Bot."""

from .bus import BusMessage, Topic
from .conversation import (
    ERROR_STATE,
    RESERVED_STATES,
    UNKNOWN_INPUT_STATE,
    ConversationDefinition,
    ConversationState,
    FallbackResponses,
)
from .faq import FAQEntryPoint, FAQQuestion, Product
from .forms import FormDefinition, FormField, FormSession
from .messages import (
    MAX_BUTTONS,
    MAX_LIST_ROWS,
    MAX_ROW_TITLE_LENGTH,
    Button,
    ButtonsMessage,
    ListMessage,
    ListRow,
    ListSection,
    MessageKind,
    OutboundMessage,
    TextMessage,
    message_from_payload,
    truncate_title,
)
from .tracing import TraceEvent
from .transcript import TranscriptEntry

__all__ = [
    # Outbound messages
    "MessageKind",
    "OutboundMessage",
    "TextMessage",
    "ButtonsMessage",
    "ListMessage",
    "Button",
    "ListRow",
    "ListSection",
    "MAX_BUTTONS",
    "MAX_LIST_ROWS",
    "MAX_ROW_TITLE_LENGTH",
    "message_from_payload",
    "truncate_title",
    # Conversation definition
    "ConversationDefinition",
    "ConversationState",
    "FallbackResponses",
    "UNKNOWN_INPUT_STATE",
    "ERROR_STATE",
    "RESERVED_STATES",
    # FAQ
    "Product",
    "FAQQuestion",
    "FAQEntryPoint",
    # Forms
    "FormField",
    "FormDefinition",
    "FormSession",
    # Bus / tracing / transcript
    "BusMessage",
    "Topic",
    "TraceEvent",
    "TranscriptEntry",
]
