"""Conversation Resolver: (user, raw input) -> next state and reply."""

from dataclasses import dataclass

from ..faq import FAQRepository, FAQRotationTracker
from ..forms import FormSessionEngine
from ..logging_config import get_logger
from ..models import (
    ERROR_STATE,
    UNKNOWN_INPUT_STATE,
    Button,
    ButtonsMessage,
    ConversationDefinition,
    ConversationState,
    FAQEntryPoint,
    FAQQuestion,
    ListMessage,
    ListRow,
    ListSection,
    OutboundMessage,
    TextMessage,
    truncate_title,
)
from .definition import UNKNOWN_INPUT_OPTIONS, DefinitionError, ai_context_of, render_state
from .sessions import UserSession, UserSessionStore

logger = get_logger(__name__)

FAQ_BATCH_SIZE = 3
FAQ_FOLLOWUP_PROMPT = "Ada pertanyaan lain? Pilih di bawah ya 👇"
FAQ_LIST_BUTTON = "Lihat Pertanyaan"
FAQ_SECTION_TITLE = "Pertanyaan Lainnya"
NAV_SECTION_TITLE = "Navigasi"

BACK_ROW = ListRow(id="back", title="Kembali", description="Kembali ke menu sebelumnya")
MAIN_MENU_ROW = ListRow(id="main_menu", title="Menu Utama", description="Kembali ke menu utama")

BACK_TOKENS = frozenset({"back", "kembali"})
MAIN_MENU_TOKENS = frozenset({"main_menu", "main-menu", "menu utama"})


@dataclass
class Resolution:
    """Outcome of resolving one inbound message."""

    message: OutboundMessage
    state_id: str | None
    ai_context: str | None = None
    end_conversation: bool = False


def normalize_input(raw_input: str) -> str:
    """First line only, trimmed and lower-cased.

    List selections echo the row description on the following lines.
    """
    lines = (raw_input or "").splitlines()
    return lines[0].strip().lower() if lines else ""


def match_transition(transitions: dict[str, str], text: str) -> str | None:
    """Exact key match first, then substring containment in declaration order."""
    target = transitions.get(text)
    if target is not None:
        return target
    if not text:
        return None
    for key, candidate in transitions.items():
        if text in key or key in text:
            return candidate
    return None


class ConversationResolver:
    """Advances a user through the conversation graph.

    Form support and FAQ interception are enabled by passing a form engine
    and an FAQ repository/tracker respectively.
    """

    def __init__(
        self,
        definition: ConversationDefinition,
        forms: FormSessionEngine | None = None,
        form_triggers: dict[str, str] | None = None,
        faq_repository: FAQRepository | None = None,
        faq_tracker: FAQRotationTracker | None = None,
        faq_states: dict[str, FAQEntryPoint] | None = None,
    ):
        self._definition = definition
        self._sessions = UserSessionStore(definition.initial_state)
        self._forms = forms
        self._form_triggers = dict(form_triggers or {}) if forms is not None else {}
        self._faq_repository = faq_repository
        self._faq_tracker = faq_tracker if faq_repository is not None else None
        self._faq_states = dict(faq_states or {}) if self._faq_tracker is not None else {}

    @property
    def definition(self) -> ConversationDefinition:
        return self._definition

    def resolve(self, user_id: str, raw_input: str) -> OutboundMessage:
        return self.resolve_turn(user_id, raw_input).message

    def resolve_turn(self, user_id: str, raw_input: str) -> Resolution:
        """Resolve one message; always yields a renderable reply."""
        with self._sessions.lock(user_id) as session:
            try:
                return self._resolve(user_id, session, raw_input)
            except DefinitionError as e:
                logger.error(
                    "Conversation definition error: %s", e, extra={"room_id": user_id}
                )
                return Resolution(
                    message=TextMessage(body=self._definition.fallback_responses.error),
                    state_id=session.state_id,
                )

    def current_state(self, user_id: str) -> str:
        return self._sessions.current_state(user_id)

    def should_end_conversation(self, user_id: str) -> bool:
        state = self._definition.get_state(self.current_state(user_id))
        return bool(state and state.end_conversation)

    def available_transitions(self, user_id: str) -> list[str]:
        state = self._definition.get_state(self.current_state(user_id))
        return list(state.transitions) if state else []

    def reset(self, user_id: str) -> None:
        """Forget everything about the user: position, form, FAQ history."""
        self._sessions.clear(user_id)
        if self._forms is not None:
            self._forms.cancel_form(user_id)
        if self._faq_tracker is not None:
            self._faq_tracker.reset_all_history(user_id)
        logger.info("Conversation reset", extra={"room_id": user_id})

    def info(self) -> dict:
        return self._definition.info()

    def _resolve(self, user_id: str, session: UserSession, raw_input: str) -> Resolution:
        # An active form owns every input until it completes or is cancelled
        if self._forms is not None and self._forms.has_active_form(user_id):
            return Resolution(
                message=self._forms.process_input(user_id, raw_input),
                state_id=session.state_id,
            )

        text = normalize_input(raw_input)
        current = self._require_state(session.state_id)

        form_type = self._form_triggers.get(text) or self._form_triggers.get(
            current.transitions.get(text, "")
        )
        if form_type:
            return self._start_form(user_id, session, form_type)

        target = self._definition.keywords.get(text)
        if target is not None:
            return self._enter(user_id, session, target)

        if text in MAIN_MENU_TOKENS:
            return self._enter(user_id, session, self._definition.initial_state)
        if text in BACK_TOKENS and session.return_state_id:
            return self._enter(user_id, session, session.return_state_id)

        if self._faq_tracker is not None:
            faq = self._faq_repository.find(text)
            if faq is not None:
                return self._answer_faq(user_id, session, faq)

        target = match_transition(current.transitions, text)
        if target is not None:
            return self._enter(user_id, session, target)

        if current.fallback:
            return self._enter(user_id, session, current.fallback)

        return self._unknown_input(session)

    def _enter(self, user_id: str, session: UserSession, target: str) -> Resolution:
        """Move the user to ``target`` and render it."""
        form_type = self._form_triggers.get(target)
        if form_type:
            return self._start_form(user_id, session, form_type)
        if target == UNKNOWN_INPUT_STATE:
            return self._unknown_input(session)
        if target == ERROR_STATE:
            return Resolution(
                message=TextMessage(body=self._definition.fallback_responses.error),
                state_id=session.state_id,
            )

        state = self._require_state(target)

        entry = self._faq_states.get(target)
        if entry is not None:
            if session.state_id != target:
                session.return_state_id = session.state_id
            session.state_id = target
            return Resolution(
                message=self._faq_list(user_id, entry.product, entry.intro),
                state_id=target,
                end_conversation=state.end_conversation,
            )

        message = render_state(state)
        session.state_id = target
        session.return_state_id = None
        return Resolution(
            message=message,
            state_id=target,
            ai_context=ai_context_of(state),
            end_conversation=state.end_conversation,
        )

    def _start_form(self, user_id: str, session: UserSession, form_type: str) -> Resolution:
        return Resolution(
            message=self._forms.start_form(user_id, form_type),
            state_id=session.state_id,
        )

    def _answer_faq(self, user_id: str, session: UserSession, faq: FAQQuestion) -> Resolution:
        product = self._faq_repository.product_of(faq.id)
        self._faq_tracker.mark_as_asked(user_id, product, faq.id)
        if session.return_state_id is None:
            session.return_state_id = session.state_id

        logger.info(
            "FAQ %s answered", faq.id, extra={"room_id": user_id, "context": {"product": product}}
        )
        body = f"{faq.answer}\n\n{FAQ_FOLLOWUP_PROMPT}"
        return Resolution(
            message=self._faq_list(user_id, product, body),
            state_id=session.state_id,
        )

    def _faq_list(self, user_id: str, product: str, body: str) -> ListMessage:
        faqs = self._faq_tracker.get_random_faqs(user_id, product, FAQ_BATCH_SIZE)
        return ListMessage(
            body=body,
            button_label=FAQ_LIST_BUTTON,
            sections=[
                ListSection(
                    title=FAQ_SECTION_TITLE,
                    rows=[
                        ListRow(
                            id=faq.id,
                            title=truncate_title(faq.question),
                            description=faq.question,
                        )
                        for faq in faqs
                    ],
                ),
                ListSection(title=NAV_SECTION_TITLE, rows=[BACK_ROW, MAIN_MENU_ROW]),
            ],
        )

    def _unknown_input(self, session: UserSession) -> Resolution:
        return Resolution(
            message=ButtonsMessage(
                body=self._definition.fallback_responses.unknown_input,
                buttons=[
                    Button(id=option, title=option.capitalize())
                    for option in UNKNOWN_INPUT_OPTIONS
                ],
            ),
            state_id=session.state_id,
        )

    def _require_state(self, state_id: str) -> ConversationState:
        state = self._definition.get_state(state_id)
        if state is None:
            raise DefinitionError(f"state '{state_id}' does not exist")
        return state
