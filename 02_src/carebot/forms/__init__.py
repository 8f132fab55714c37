"""Forms module."""

from .engine import CANCEL_TOKENS, DEFAULT_TIMEOUT, FormSessionEngine
from .purchase_inquiry import PURCHASE_INQUIRY_FORM, START_TOKEN as PURCHASE_INQUIRY_START
from .sweeper import FormSessionSweeper

__all__ = [
    "CANCEL_TOKENS",
    "DEFAULT_TIMEOUT",
    "FormSessionEngine",
    "FormSessionSweeper",
    "PURCHASE_INQUIRY_FORM",
    "PURCHASE_INQUIRY_START",
]
