"""Conversation definition data models."""

from dataclasses import dataclass, field
from typing import Any

# Targets that need no state entry in the definition.
UNKNOWN_INPUT_STATE = "unknown_input"
ERROR_STATE = "error"
RESERVED_STATES = frozenset({UNKNOWN_INPUT_STATE, ERROR_STATE})


@dataclass
class ConversationState:
    """A node of the static conversation graph.

    ``message`` keeps the raw payload from the definition document; its shape
    depends on ``type`` and is translated by ``render_state``.
    """

    id: str
    type: str  # "text", "interactive_button", "interactive_list", "ai_generated"
    message: Any
    transitions: dict[str, str] = field(default_factory=dict)
    fallback: str | None = None
    end_conversation: bool = False


@dataclass
class FallbackResponses:
    """Canned bodies used when resolution cannot produce a state message."""

    unknown_input: str
    error: str


@dataclass
class ConversationDefinition:
    """Immutable conversation graph loaded once at startup."""

    version: str
    description: str
    initial_state: str
    states: dict[str, ConversationState]
    keywords: dict[str, str]
    fallback_responses: FallbackResponses

    def get_state(self, state_id: str) -> ConversationState | None:
        return self.states.get(state_id)

    def info(self) -> dict:
        """Summary exposed by the admin surface."""
        return {
            "version": self.version,
            "description": self.description,
            "total_states": len(self.states),
        }
