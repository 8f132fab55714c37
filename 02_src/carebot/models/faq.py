"""FAQ data models."""

from dataclasses import dataclass
from enum import Enum


class Product(str, Enum):
    """Product lines with their own FAQ set."""

    SILVERSTREAM = "silverstream"
    STIMEL = "stimel"
    AKUSEHAT = "akusehat"


@dataclass(frozen=True)
class FAQQuestion:
    """A single question/answer pair."""

    id: str
    question: str  # shown as a list row title, at most 24 characters
    answer: str


@dataclass(frozen=True)
class FAQEntryPoint:
    """A state whose message is a generated FAQ list for one product."""

    product: str
    intro: str
