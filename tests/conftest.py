"""Shared test fixtures for IronPulse tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DB_PATH", ":memory:")
    monkeypatch.setenv("ENCRYPTION_KEY", "")
    monkeypatch.setenv("STORAGE_KEY_PREFIX", "ironpulse")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from ironpulse.core.storage.models import UserProfile  # noqa: E402


def _make_profile(username: str = "alice", **overrides) -> UserProfile:
    """Create a test profile with sensible defaults."""
    defaults = dict(
        username=username,
        email=f"{username}@example.com",
        joined_at="2026-01-01T08:00:00+00:00",
        activity_level="moderate",
        goal="fitness",
        onboarding_completed=False,
    )
    defaults.update(overrides)
    return UserProfile(**defaults)


@pytest.fixture
def make_profile():
    """Factory for UserProfile objects: ``make_profile("bob", weight=80.0)``."""
    return _make_profile


# ---------------------------------------------------------------------------
# In-memory storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tracker_db():
    """Create an in-memory TrackerDatabase for testing."""
    from ironpulse.core.storage.database import TrackerDatabase

    db = TrackerDatabase(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def record_encryptor():
    """Create a RecordEncryptor with a fresh key."""
    from ironpulse.core.storage.encryption import RecordEncryptor

    return RecordEncryptor(RecordEncryptor.generate_key())


@pytest.fixture
def local_store(tracker_db):
    """Create a plain-JSON LocalStore backed by in-memory SQLite."""
    from ironpulse.core.storage.kv_store import LocalStore

    return LocalStore(tracker_db)


@pytest.fixture
def account_registry(local_store):
    from ironpulse.core.storage.accounts import AccountRegistry

    return AccountRegistry(local_store)


@pytest.fixture
def session_store(local_store):
    from ironpulse.core.storage.session import SessionStore

    return SessionStore(local_store)


@pytest.fixture
def entry_log(local_store):
    from ironpulse.core.storage.entry_log import EntryLog

    return EntryLog(local_store)


# ---------------------------------------------------------------------------
# Domain service fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def auth_service(account_registry, session_store):
    from ironpulse.domains.fitness.domain_logic.auth import AuthService

    return AuthService(account_registry, session_store)


@pytest.fixture
def profile_service(auth_service, entry_log):
    from ironpulse.domains.fitness.domain_logic.profile_service import ProfileService

    return ProfileService(auth_service, entry_log)


@pytest.fixture
def signed_up(auth_service):
    """A freshly signed-up session for 'alice' (onboarding pending)."""
    return auth_service.sign_up("alice", "pw", "alice@example.com")
