"""Tests for SessionStore — the persisted auth record."""

from __future__ import annotations

from ironpulse.core.storage.session import SessionStore


class TestSessionStore:
    def test_no_record_means_logged_out(self, session_store: SessionStore):
        state = session_store.get_auth_state()
        assert state.is_authenticated is False
        assert state.user is None
        assert session_store.get_session() is None

    def test_set_session(self, session_store: SessionStore, local_store, make_profile):
        session_store.set_session(make_profile("alice", weight=70.0))

        profile = session_store.get_session()
        assert profile.username == "alice"
        assert profile.weight == 70.0

        raw = local_store.get_json("ironpulse_auth")
        assert raw["isAuthenticated"] is True
        assert raw["user"]["username"] == "alice"

    def test_set_session_replaces_previous(self, session_store: SessionStore, make_profile):
        session_store.set_session(make_profile("alice"))
        session_store.set_session(make_profile("bob"))
        assert session_store.get_session().username == "bob"

    def test_clear_session(self, session_store: SessionStore, local_store, make_profile):
        session_store.set_session(make_profile("alice"))
        session_store.clear_session()
        assert session_store.get_session() is None
        assert local_store.get_raw("ironpulse_auth") is None

    def test_clear_without_session(self, session_store: SessionStore):
        session_store.clear_session()
        assert session_store.get_session() is None

    def test_unauthenticated_record_has_no_session(self, session_store, local_store, make_profile):
        local_store.set_json(
            "ironpulse_auth",
            {"isAuthenticated": False, "user": make_profile("alice").to_dict()},
        )
        assert session_store.get_session() is None

    def test_corrupt_record_reads_as_logged_out(self, session_store, local_store, make_profile):
        local_store.set_raw("ironpulse_auth", "][")
        assert session_store.get_session() is None

        local_store.set_json("ironpulse_auth", {"isAuthenticated": True, "user": {"age": 3}})
        assert session_store.get_auth_state().is_authenticated is False
