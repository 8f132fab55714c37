"""Per-user conversation position."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from ..keyed_lock import KeyedLock


@dataclass
class UserSession:
    """Where a user currently is in the conversation graph."""

    state_id: str
    # State to restore when the user leaves an FAQ list with "back"
    return_state_id: str | None = None


class UserSessionStore:
    """In-memory user sessions, created lazily at the initial state."""

    def __init__(self, initial_state: str):
        self._initial_state = initial_state
        self._sessions: dict[str, UserSession] = {}
        self._locks = KeyedLock()

    @contextmanager
    def lock(self, user_id: str) -> Iterator[UserSession]:
        """Hold the user's lock and yield their (possibly new) session."""
        with self._locks.hold(user_id):
            yield self._get_or_create(user_id)

    def _get_or_create(self, user_id: str) -> UserSession:
        session = self._sessions.get(user_id)
        if session is None:
            session = UserSession(state_id=self._initial_state)
            self._sessions[user_id] = session
        return session

    def current_state(self, user_id: str) -> str:
        with self._locks.hold(user_id):
            session = self._sessions.get(user_id)
            return session.state_id if session else self._initial_state

    def clear(self, user_id: str) -> None:
        with self._locks.hold(user_id):
            self._sessions.pop(user_id, None)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
