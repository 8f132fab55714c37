"""Messaging module."""

from .qontak_client import INTERACTIVE_ENDPOINT, TEXT_ENDPOINT, IMessenger, QontakClient

__all__ = ["IMessenger", "INTERACTIVE_ENDPOINT", "QontakClient", "TEXT_ENDPOINT"]
