"""Account registry — username -> {profile, password} under a single key.

Passwords are stored and compared in plain text. This is a single-user,
local-only tracker; the registry is not an authentication system.
"""

from __future__ import annotations

import logging
from typing import Any

from ironpulse.core.storage.kv_store import USERS_KEY, LocalStore
from ironpulse.core.storage.models import StoredAccount, UserProfile

logger = logging.getLogger(__name__)


class AccountRegistry:
    """Keyed store of accounts with unique usernames.

    Usage::

        registry = AccountRegistry(store)
        registry.register(profile, "pw")        # True
        registry.register(profile, "other")     # False, username taken
        registry.login("alice", "pw")           # UserProfile
    """

    def __init__(self, store: LocalStore) -> None:
        self._store = store
        self._key = store.key(USERS_KEY)

    def _load(self) -> dict[str, Any]:
        registry = self._store.get_json(self._key, default={})
        if not isinstance(registry, dict):
            logger.warning("Account registry is not a mapping; treating as empty")
            return {}
        return registry

    def _save(self, registry: dict[str, Any]) -> None:
        self._store.set_json(self._key, registry)

    def get_account(self, username: str) -> StoredAccount | None:
        """Return the stored account for ``username``, or None."""
        record = self._load().get(username)
        if record is None:
            return None
        try:
            return StoredAccount.from_dict(record)
        except (KeyError, TypeError) as exc:
            logger.warning("Corrupt account record for %s treated as absent: %s", username, exc)
            return None

    def usernames(self) -> list[str]:
        return sorted(self._load())

    def register(self, profile: UserProfile, password: str) -> bool:
        """Insert a new account.

        Returns:
            False if the username is already registered (the existing account
            is left untouched), True otherwise.
        """
        registry = self._load()
        if profile.username in registry:
            logger.info("Registration refused: username %s already taken", profile.username)
            return False

        registry[profile.username] = StoredAccount(profile=profile, password=password).to_dict()
        self._save(registry)
        logger.info("Registered account %s", profile.username)
        return True

    def login(self, username: str, password: str) -> UserProfile | None:
        """Return the stored profile when ``password`` matches exactly.

        Unknown usernames and wrong passwords both return None.
        """
        account = self.get_account(username)
        if account is not None and account.password == password:
            return account.profile
        logger.warning("Failed login attempt for %s", username)
        return None

    def update_profile(self, profile: UserProfile) -> bool:
        """Replace the profile stored under ``profile.username``.

        Does nothing when the username is not registered; the return value
        tells the caller whether anything was written.
        """
        registry = self._load()
        record = registry.get(profile.username)
        if record is None:
            logger.warning("Profile update ignored: no account named %s", profile.username)
            return False

        record["profile"] = profile.to_dict()
        self._save(registry)
        logger.info("Updated profile for %s", profile.username)
        return True
