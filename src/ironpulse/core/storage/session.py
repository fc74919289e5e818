"""Session store — the persisted record of who is logged in."""

from __future__ import annotations

import logging

from ironpulse.core.storage.kv_store import AUTH_KEY, LocalStore
from ironpulse.core.storage.models import AuthState, UserProfile

logger = logging.getLogger(__name__)


class SessionStore:
    """Reads and writes the ``auth`` record."""

    def __init__(self, store: LocalStore) -> None:
        self._store = store
        self._key = store.key(AUTH_KEY)

    def get_auth_state(self) -> AuthState:
        data = self._store.get_json(self._key)
        if not isinstance(data, dict):
            return AuthState()
        try:
            return AuthState.from_dict(data)
        except (KeyError, TypeError) as exc:
            logger.warning("Corrupt session record treated as logged out: %s", exc)
            return AuthState()

    def get_session(self) -> UserProfile | None:
        """Return the logged-in profile, or None."""
        state = self.get_auth_state()
        return state.user if state.is_authenticated else None

    def set_session(self, profile: UserProfile) -> None:
        self._store.set_json(
            self._key, AuthState(is_authenticated=True, user=profile).to_dict()
        )

    def clear_session(self) -> None:
        self._store.remove(self._key)
