"""Sign-up, sign-in and the lifecycle of the current session.

A ``Session`` is created by sign-up or sign-in (or restored from the persisted
auth record at startup) and ended by sign-out. Handlers receive the session
object explicitly; nothing reads the logged-in user from module state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ironpulse.core.storage.accounts import AccountRegistry
from ironpulse.core.storage.models import UserProfile
from ironpulse.core.storage.session import SessionStore
from ironpulse.domains.fitness.domain_logic.errors import (
    InvalidCredentialsError,
    MissingRequiredFieldError,
    NotAuthenticatedError,
    ProfileNotFoundError,
    UsernameTakenError,
)

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Session:
    """The signed-in user. ``active`` turns False at sign-out."""

    profile: UserProfile
    started_at: str = field(default_factory=_now_iso)
    active: bool = True

    @property
    def username(self) -> str:
        return self.profile.username

    @property
    def needs_onboarding(self) -> bool:
        return not self.profile.onboarding_completed


class AuthService:
    """Couples the account registry and the persisted session record.

    Usage::

        auth = AuthService(registry, session_store)
        session = auth.sign_up("alice", "pw", "alice@example.com")
        auth.sign_out(session)
        session = auth.sign_in("alice", "pw")
    """

    def __init__(self, registry: AccountRegistry, sessions: SessionStore) -> None:
        self._registry = registry
        self._sessions = sessions
        self._current: Session | None = None

    @property
    def current(self) -> Session | None:
        return self._current

    def require_session(self) -> Session:
        """The active session.

        Raises:
            NotAuthenticatedError: If nobody is signed in.
        """
        if self._current is None or not self._current.active:
            raise NotAuthenticatedError()
        return self._current

    def restore(self) -> Session | None:
        """Resume the session persisted by a previous run, if any."""
        profile = self._sessions.get_session()
        if profile is None:
            self._current = None
            return None
        self._current = Session(profile=profile)
        logger.info("Restored session for %s", profile.username)
        return self._current

    def sign_up(self, username: str, password: str, email: str) -> Session:
        """Create an account with default goals and sign it in.

        Raises:
            MissingRequiredFieldError: If username, password or email is empty.
            UsernameTakenError: If the username is already registered.
        """
        missing = [
            name
            for name, value in (("username", username), ("password", password), ("email", email))
            if not value or not value.strip()
        ]
        if missing:
            raise MissingRequiredFieldError(missing)

        profile = UserProfile(
            username=username,
            email=email,
            joined_at=_now_iso(),
            onboarding_completed=False,
            activity_level="moderate",
            goal="fitness",
        )
        if not self._registry.register(profile, password):
            raise UsernameTakenError(username)
        return self._start(profile)

    def sign_in(self, username: str, password: str) -> Session:
        """
        Raises:
            InvalidCredentialsError: Unknown username or wrong password.
        """
        profile = self._registry.login(username, password)
        if profile is None:
            raise InvalidCredentialsError()
        return self._start(profile)

    def sign_out(self, session: Session | None = None) -> None:
        """End ``session`` (or the current one) and clear the persisted record."""
        session = session or self._current
        if session is not None:
            session.active = False
            logger.info("Signed out %s", session.username)
        self._sessions.clear_session()
        self._current = None

    def save_profile(self, session: Session, profile: UserProfile) -> None:
        """Write ``profile`` to the registry and the session record together.

        Raises:
            NotAuthenticatedError: If ``session`` has ended.
            ProfileNotFoundError: If the account no longer exists; nothing
                is written in that case.
            ValueError: If ``profile`` belongs to another user.
        """
        if not session.active:
            raise NotAuthenticatedError()
        if profile.username != session.username:
            raise ValueError("Usernames cannot be changed")
        if not self._registry.update_profile(profile):
            raise ProfileNotFoundError(profile.username)
        self._sessions.set_session(profile)
        session.profile = profile

    def _start(self, profile: UserProfile) -> Session:
        if self._current is not None:
            self._current.active = False
        self._sessions.set_session(profile)
        self._current = Session(profile=profile)
        logger.info("Signed in %s", profile.username)
        return self._current
