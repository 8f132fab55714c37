"""FAQ module."""

from .catalog import CATALOG, FAQ_ENTRY_STATES
from .repository import FAQ_ID_PREFIX, FAQRepository
from .rotation import FAQRotationTracker

__all__ = [
    "CATALOG",
    "FAQ_ENTRY_STATES",
    "FAQ_ID_PREFIX",
    "FAQRepository",
    "FAQRotationTracker",
]
