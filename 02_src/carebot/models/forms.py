"""Form data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable


def _strip(value: str) -> Any:
    return value.strip()


@dataclass(frozen=True)
class FormField:
    """One step of a form: how to ask, check and store the answer."""

    name: str
    prompt: str
    validator: Callable[[str], bool]
    error_text: str
    normalizer: Callable[[str], Any] = _strip


@dataclass(frozen=True)
class FormDefinition:
    """An ordered list of fields plus the message built from the answers."""

    form_type: str
    fields: tuple[FormField, ...]
    build_completion: Callable[[dict[str, Any]], str]


@dataclass
class FormSession:
    """A user's progress through a form."""

    user_id: str
    form_type: str
    started_at: datetime
    last_activity_at: datetime
    current_step: int = 0
    data: dict[str, Any] = field(default_factory=dict)
