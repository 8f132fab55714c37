"""Loading, validation and rendering of the conversation definition."""

import json
from pathlib import Path
from typing import Any, Iterable

from ..logging_config import get_logger
from ..models import (
    MAX_BUTTONS,
    MAX_LIST_ROWS,
    MAX_ROW_TITLE_LENGTH,
    RESERVED_STATES,
    Button,
    ButtonsMessage,
    ConversationDefinition,
    ConversationState,
    FallbackResponses,
    ListMessage,
    ListRow,
    ListSection,
    OutboundMessage,
    TextMessage,
)

logger = get_logger(__name__)

# Offered by the unknown-input message; always route back to the start.
UNKNOWN_INPUT_OPTIONS = ("menu", "bantuan")

DEFAULT_LIST_BUTTON = "Pilih"
DEFAULT_AI_CONTEXT = (
    "User sedang bertanya tentang produk kesehatan kami. "
    "Bantu jawab dengan ramah dan arahkan ke menu bila perlu."
)


class DefinitionError(Exception):
    """The conversation definition is malformed or inconsistent."""

    def __init__(self, problems: str | list[str]):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = problems
        super().__init__("; ".join(problems))


def normalize_key(key: str) -> str:
    return str(key).strip().lower()


def render_state(state: ConversationState) -> OutboundMessage:
    """Translate a state's raw payload into an outbound message.

    Raises:
        DefinitionError: unknown ``type`` or a payload that does not fit it.
    """
    try:
        return _render(state)
    except (KeyError, TypeError, AttributeError) as e:
        raise DefinitionError(f"state '{state.id}': malformed message ({e!r})") from e


def _render(state: ConversationState) -> OutboundMessage:
    payload = state.message

    if state.type == "text":
        if not isinstance(payload, str):
            raise DefinitionError(f"state '{state.id}': text message must be a string")
        return TextMessage(body=payload)

    if state.type == "ai_generated":
        # Canned text stands in whenever generation is unavailable
        if not isinstance(payload, dict) or not isinstance(payload.get("text", ""), str):
            raise DefinitionError(
                f"state '{state.id}': ai_generated message must be an object"
            )
        return TextMessage(body=payload.get("text", ""))

    if state.type == "interactive_button":
        body, buttons = _require(state, payload, "buttons")
        if not buttons or len(buttons) > MAX_BUTTONS:
            raise DefinitionError(
                f"state '{state.id}': {len(buttons)} buttons (1-{MAX_BUTTONS} allowed)"
            )
        return ButtonsMessage(
            body=body,
            buttons=[Button(id=str(b["id"]), title=str(b["title"])) for b in buttons],
        )

    if state.type == "interactive_list":
        body, lists = _require(state, payload, "lists")
        if not isinstance(lists, dict) or not lists.get("sections"):
            raise DefinitionError(f"state '{state.id}': list has no sections")
        sections = [
            ListSection(
                title=str(section.get("title", "")),
                rows=[
                    ListRow(
                        id=str(row["id"]),
                        title=str(row["title"]),
                        description=str(row.get("description", "")),
                    )
                    for row in section.get("rows", [])
                ],
            )
            for section in lists["sections"]
        ]
        message = ListMessage(
            body=body,
            button_label=str(lists.get("button") or DEFAULT_LIST_BUTTON),
            sections=sections,
        )
        total_rows = len(message.rows)
        if total_rows == 0 or total_rows > MAX_LIST_ROWS:
            raise DefinitionError(
                f"state '{state.id}': {total_rows} list items (1-{MAX_LIST_ROWS} allowed)"
            )
        too_long = [r.title for r in message.rows if len(r.title) > MAX_ROW_TITLE_LENGTH]
        if too_long:
            raise DefinitionError(
                f"state '{state.id}': row titles over {MAX_ROW_TITLE_LENGTH} chars: {too_long}"
            )
        return message

    raise DefinitionError(f"state '{state.id}': unknown type '{state.type}'")


def _require(state: ConversationState, payload: Any, key: str) -> tuple[str, Any]:
    if not isinstance(payload, dict) or "body" not in payload or key not in payload:
        raise DefinitionError(f"state '{state.id}': message needs 'body' and '{key}'")
    return str(payload["body"]), payload[key]


def ai_context_of(state: ConversationState) -> str | None:
    """Context string for generated replies, if the state asks for one."""
    if state.type != "ai_generated" or not isinstance(state.message, dict):
        return None
    return state.message.get("context") or DEFAULT_AI_CONTEXT


def build_definition(
    raw: dict, extra_targets: Iterable[str] = ()
) -> ConversationDefinition:
    """Build and validate a definition from its decoded document.

    Args:
        raw: Decoded definition document.
        extra_targets: Additional valid transition targets (form-start tokens).

    Raises:
        DefinitionError: listing every integrity problem found.
    """
    problems: list[str] = []

    if not isinstance(raw, dict):
        raise DefinitionError("definition document must be an object")
    for key in ("initial_state", "states", "fallback_responses"):
        if key not in raw:
            problems.append(f"missing '{key}'")
    if problems:
        raise DefinitionError(problems)
    for key in ("states", "fallback_responses"):
        if not isinstance(raw[key], dict):
            problems.append(f"'{key}' must be an object")
    if not isinstance(raw.get("keywords") or {}, dict):
        problems.append("'keywords' must be an object")
    if problems:
        raise DefinitionError(problems)

    states: dict[str, ConversationState] = {}
    for state_id, raw_state in raw["states"].items():
        if not isinstance(raw_state, dict):
            problems.append(f"state '{state_id}' is not an object")
            continue
        raw_transitions = raw_state.get("transitions") or {}
        if not isinstance(raw_transitions, dict):
            problems.append(f"state '{state_id}': transitions must be an object")
            raw_transitions = {}
        states[state_id] = ConversationState(
            id=state_id,
            type=raw_state.get("type", ""),
            message=raw_state.get("message"),
            transitions={normalize_key(k): v for k, v in raw_transitions.items()},
            fallback=raw_state.get("fallback"),
            end_conversation=bool(raw_state.get("end_conversation", False)),
        )

    initial_state = raw["initial_state"]
    if not isinstance(initial_state, str) or initial_state not in states:
        problems.append(f"initial_state '{initial_state}' is not a state")

    keywords = {option: initial_state for option in UNKNOWN_INPUT_OPTIONS}
    keywords.update(
        {normalize_key(k): v for k, v in (raw.get("keywords") or {}).items()}
    )

    valid_targets = set(states) | RESERVED_STATES | set(extra_targets)

    def is_valid_target(target: Any) -> bool:
        return isinstance(target, str) and target in valid_targets

    for state in states.values():
        try:
            render_state(state)
        except DefinitionError as e:
            problems.extend(e.problems)

        for key, target in state.transitions.items():
            if not is_valid_target(target):
                problems.append(
                    f"state '{state.id}': transition '{key}' -> unknown '{target}'"
                )
        if state.fallback is not None and not is_valid_target(state.fallback):
            problems.append(f"state '{state.id}': fallback -> unknown '{state.fallback}'")

    for key, target in keywords.items():
        if not is_valid_target(target):
            problems.append(f"keyword '{key}' -> unknown '{target}'")

    fallback_raw = raw["fallback_responses"]
    for key in ("unknown_input", "error"):
        if not fallback_raw.get(key):
            problems.append(f"fallback_responses.{key} is missing")

    if problems:
        raise DefinitionError(problems)

    return ConversationDefinition(
        version=str(raw.get("version", "")),
        description=str(raw.get("description", "")),
        initial_state=initial_state,
        states=states,
        keywords=keywords,
        fallback_responses=FallbackResponses(
            unknown_input=fallback_raw["unknown_input"],
            error=fallback_raw["error"],
        ),
    )


def load_definition(
    path: str | Path, extra_targets: Iterable[str] = ()
) -> ConversationDefinition:
    """Read a definition document from disk and validate it."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DefinitionError(f"cannot read {path}: {e}") from e

    definition = build_definition(raw, extra_targets)
    logger.info(
        "Loaded conversation definition %s (%d states) from %s",
        definition.version,
        len(definition.states),
        path,
    )
    return definition
