"""FormSessionEngine implementation."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable

from ..keyed_lock import KeyedLock
from ..logging_config import get_logger
from ..models import FormDefinition, FormSession, OutboundMessage, TextMessage

logger = get_logger(__name__)

DEFAULT_TIMEOUT = timedelta(minutes=10)
CANCEL_TOKENS = frozenset({"batal", "cancel", "stop"})

START_ACK = "Oke, aku bantuin prosesnya ya! 😊"
STEP_ACK = "Oke! ✅"
EXPIRED_TEXT = "Session kamu udah expired nih 😅\n\nKetik *menu* buat mulai lagi ya!"
CANCELLED_TEXT = "Oke, form dibatalin ya! 👌\n\nKetik *menu* kalau mau mulai lagi."


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FormSessionEngine:
    """Runs multi-step forms, one active session per user.

    Sessions expire after ``timeout`` without a valid answer. Expiry is
    enforced lazily by ``has_active_form``/``process_input``; ``sweep_expired``
    only bounds memory.
    """

    def __init__(
        self,
        forms: Iterable[FormDefinition],
        timeout: timedelta = DEFAULT_TIMEOUT,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._forms = {form.form_type: form for form in forms}
        self._timeout = timeout
        self._clock = clock
        self._sessions: dict[str, FormSession] = {}
        self._locks = KeyedLock()

    @property
    def form_types(self) -> list[str]:
        return list(self._forms)

    def start_form(self, user_id: str, form_type: str) -> OutboundMessage:
        """Start ``form_type`` at step 0, replacing any previous session."""
        form = self._forms.get(form_type)
        if form is None or not form.fields:
            raise ValueError(f"Unknown form type: {form_type}")

        now = self._clock()
        with self._locks.hold(user_id):
            self._sessions[user_id] = FormSession(
                user_id=user_id,
                form_type=form_type,
                started_at=now,
                last_activity_at=now,
            )

        logger.info("Form %s started", form_type, extra={"room_id": user_id})
        return TextMessage(body=f"{START_ACK}\n\n{form.fields[0].prompt}")

    def has_active_form(self, user_id: str) -> bool:
        """True if the user has a session that has not timed out."""
        with self._locks.hold(user_id):
            return self._live_session(user_id) is not None

    def process_input(self, user_id: str, text: str) -> OutboundMessage:
        """Apply one answer to the user's current step."""
        with self._locks.hold(user_id):
            session = self._live_session(user_id)
            if session is None:
                return TextMessage(body=EXPIRED_TEXT)

            if text.strip().lower() in CANCEL_TOKENS:
                del self._sessions[user_id]
                logger.info(
                    "Form %s cancelled", session.form_type, extra={"room_id": user_id}
                )
                return TextMessage(body=CANCELLED_TEXT)

            form = self._forms[session.form_type]
            field = form.fields[session.current_step]

            if not field.validator(text):
                return TextMessage(body=field.error_text)

            session.data[field.name] = field.normalizer(text)
            session.current_step += 1
            session.last_activity_at = self._clock()

            if session.current_step >= len(form.fields):
                del self._sessions[user_id]
                logger.info(
                    "Form %s completed",
                    session.form_type,
                    extra={"room_id": user_id, "context": {"fields": list(session.data)}},
                )
                return TextMessage(body=form.build_completion(dict(session.data)))

            next_field = form.fields[session.current_step]
            return TextMessage(body=f"{STEP_ACK}\n\n{next_field.prompt}")

    def cancel_form(self, user_id: str) -> None:
        with self._locks.hold(user_id):
            self._sessions.pop(user_id, None)

    def get_session(self, user_id: str) -> FormSession | None:
        """Current session (for debugging); expired sessions are dropped."""
        with self._locks.hold(user_id):
            return self._live_session(user_id)

    def sweep_expired(self) -> int:
        """Evict every expired session. Returns the number evicted."""
        evicted = 0
        for user_id in list(self._sessions):
            with self._locks.hold(user_id):
                session = self._sessions.get(user_id)
                if session is not None and self._is_expired(session):
                    del self._sessions[user_id]
                    evicted += 1
        if evicted:
            logger.info("Swept %d expired form sessions", evicted)
        return evicted

    def _live_session(self, user_id: str) -> FormSession | None:
        session = self._sessions.get(user_id)
        if session is None:
            return None
        if self._is_expired(session):
            del self._sessions[user_id]
            logger.info(
                "Form %s expired", session.form_type, extra={"room_id": user_id}
            )
            return None
        return session

    def _is_expired(self, session: FormSession) -> bool:
        return self._clock() - session.last_activity_at > self._timeout

    @property
    def session_count(self) -> int:
        """Stored sessions, expired ones included until swept."""
        return len(self._sessions)
