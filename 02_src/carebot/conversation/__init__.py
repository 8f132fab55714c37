"""Conversation module."""

from .definition import (
    DefinitionError,
    build_definition,
    load_definition,
    render_state,
)
from .resolver import ConversationResolver, Resolution, normalize_input
from .sessions import UserSession, UserSessionStore

__all__ = [
    "ConversationResolver",
    "DefinitionError",
    "Resolution",
    "UserSession",
    "UserSessionStore",
    "build_definition",
    "load_definition",
    "normalize_input",
    "render_state",
]
