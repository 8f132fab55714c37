"""Outbound message data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

# Limits imposed by the WhatsApp interactive message API.
MAX_BUTTONS = 3
MAX_LIST_ROWS = 10
MAX_ROW_TITLE_LENGTH = 24


class MessageKind(str, Enum):
    """Kinds of outbound messages understood by the messaging platform."""

    TEXT = "text"
    BUTTONS = "button"
    LIST = "list"


@dataclass
class Button:
    """A reply button of an interactive button message."""

    id: str
    title: str


@dataclass
class ListRow:
    """A selectable row of an interactive list message."""

    id: str
    title: str
    description: str = ""


@dataclass
class ListSection:
    """A titled group of list rows."""

    title: str
    rows: list[ListRow] = field(default_factory=list)


@dataclass
class TextMessage:
    """Plain text reply."""

    kind: ClassVar[MessageKind] = MessageKind.TEXT

    body: str

    def to_payload(self) -> dict:
        return {"type": self.kind.value, "text": self.body}


@dataclass
class ButtonsMessage:
    """Interactive message with up to three reply buttons."""

    kind: ClassVar[MessageKind] = MessageKind.BUTTONS

    body: str
    buttons: list[Button] = field(default_factory=list)

    def to_payload(self) -> dict:
        return {
            "type": self.kind.value,
            "interactive": {
                "body": self.body,
                "buttons": [{"id": b.id, "title": b.title} for b in self.buttons],
            },
        }


@dataclass
class ListMessage:
    """Interactive list message opened by a single button."""

    kind: ClassVar[MessageKind] = MessageKind.LIST

    body: str
    button_label: str
    sections: list[ListSection] = field(default_factory=list)

    @property
    def rows(self) -> list[ListRow]:
        """All rows across sections, in display order."""
        return [row for section in self.sections for row in section.rows]

    def to_payload(self) -> dict:
        return {
            "type": self.kind.value,
            "interactive": {
                "body": self.body,
                "lists": {
                    "button": self.button_label,
                    "sections": [
                        {
                            "title": section.title,
                            "rows": [
                                {
                                    "id": row.id,
                                    "title": row.title,
                                    "description": row.description,
                                }
                                for row in section.rows
                            ],
                        }
                        for section in self.sections
                    ],
                },
            },
        }


OutboundMessage = Union[TextMessage, ButtonsMessage, ListMessage]


def truncate_title(text: str, limit: int = MAX_ROW_TITLE_LENGTH) -> str:
    """Fit a row title into the platform limit."""
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def message_from_payload(payload: dict) -> OutboundMessage:
    """Rebuild an outbound message from its ``to_payload()`` form."""
    kind = MessageKind(payload.get("type"))

    if kind is MessageKind.TEXT:
        return TextMessage(body=payload.get("text", ""))

    interactive = payload.get("interactive") or {}
    if kind is MessageKind.BUTTONS:
        return ButtonsMessage(
            body=interactive.get("body", ""),
            buttons=[
                Button(id=b["id"], title=b["title"])
                for b in interactive.get("buttons", [])
            ],
        )

    lists = interactive.get("lists") or {}
    return ListMessage(
        body=interactive.get("body", ""),
        button_label=lists.get("button", ""),
        sections=[
            ListSection(
                title=section.get("title", ""),
                rows=[
                    ListRow(
                        id=row["id"],
                        title=row["title"],
                        description=row.get("description", ""),
                    )
                    for row in section.get("rows", [])
                ],
            )
            for section in lists.get("sections", [])
        ],
    )
