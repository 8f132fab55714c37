"""Dialogue module."""

from .agent import DialogueAgent, IDialogueAgent

__all__ = ["DialogueAgent", "IDialogueAgent"]
