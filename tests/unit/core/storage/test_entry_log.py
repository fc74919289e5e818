"""Tests for EntryLog — per-user, newest-first entry lists."""

from __future__ import annotations

import pytest

from ironpulse.core.storage.entry_log import EntryLog
from ironpulse.core.storage.models import BiometricEntry, HydrationEntry, WorkoutEntry


def _water(entry_id: str, timestamp: str = "2026-03-01T08:00:00+00:00", ml: int = 250):
    return HydrationEntry(id=entry_id, timestamp=timestamp, amount_ml=ml)


class TestAppend:
    def test_empty_log(self, entry_log: EntryLog):
        assert entry_log.get_entries("alice") == []

    def test_newest_first(self, entry_log: EntryLog):
        entry_log.append_entry("alice", _water("e1"))
        entry_log.append_entry("alice", _water("e2"))
        entry_log.append_entry("alice", _water("e3"))
        assert [e.id for e in entry_log.get_entries("alice")] == ["e3", "e2", "e1"]

    def test_append_returns_updated_list(self, entry_log: EntryLog):
        entry_log.append_entry("alice", _water("e1"))
        entries = entry_log.append_entry("alice", _water("e2"))
        assert [e.id for e in entries] == ["e2", "e1"]

    def test_mixed_types_share_one_list(self, entry_log: EntryLog):
        entry_log.append_entry("alice", _water("h1"))
        entry_log.append_entry(
            "alice",
            WorkoutEntry(id="w1", timestamp="2026-03-01T09:00:00+00:00",
                         exercise_type="running", duration=30, calories_burned=368),
        )
        entries = entry_log.get_entries("alice")
        assert [type(e) for e in entries] == [WorkoutEntry, HydrationEntry]

    def test_users_are_isolated(self, entry_log: EntryLog, local_store):
        entry_log.append_entry("alice", _water("a1"))
        entry_log.append_entry("bob", _water("b1"))
        assert [e.id for e in entry_log.get_entries("alice")] == ["a1"]
        assert [e.id for e in entry_log.get_entries("bob")] == ["b1"]
        assert set(local_store.keys()) == {"ironpulse_entries_alice", "ironpulse_entries_bob"}


class TestDelete:
    def test_delete_by_id(self, entry_log: EntryLog):
        entry_log.append_entry("alice", _water("e1"))
        entry_log.append_entry("alice", _water("e2"))
        assert entry_log.delete_entry("alice", "e1") is True
        assert [e.id for e in entry_log.get_entries("alice")] == ["e2"]

    def test_delete_unknown_id(self, entry_log: EntryLog):
        entry_log.append_entry("alice", _water("e1"))
        assert entry_log.delete_entry("alice", "nope") is False
        assert len(entry_log.get_entries("alice")) == 1

    def test_delete_at_timestamp_removes_all_matches(self, entry_log: EntryLog):
        shared = "2026-03-01T08:00:00+00:00"
        entry_log.append_entry("alice", _water("e1", shared))
        entry_log.append_entry("alice", _water("e2", "2026-03-01T09:00:00+00:00"))
        entry_log.append_entry("alice", _water("e3", shared))

        assert entry_log.delete_entries_at("alice", shared) == 2
        assert [e.id for e in entry_log.get_entries("alice")] == ["e2"]

    def test_delete_at_unknown_timestamp(self, entry_log: EntryLog):
        entry_log.append_entry("alice", _water("e1"))
        assert entry_log.delete_entries_at("alice", "1999-01-01T00:00:00Z") == 0

    def test_clear_entries(self, entry_log: EntryLog):
        entry_log.append_entry("alice", _water("e1"))
        entry_log.clear_entries("alice")
        assert entry_log.get_entries("alice") == []


class TestCorruptLog:
    def test_non_list_record_treated_as_empty(self, entry_log: EntryLog, local_store):
        local_store.set_json("ironpulse_entries_alice", {"oops": True})
        assert entry_log.get_entries("alice") == []

    def test_unreadable_entries_skipped(self, entry_log: EntryLog, local_store):
        local_store.set_json("ironpulse_entries_alice", [
            {"id": "ok", "timestamp": "2026-03-01T08:00:00Z", "type": "biometrics",
             "weight": 70.0, "bmi": "22.9"},
            {"id": "bad", "timestamp": "2026-03-01T08:00:00Z", "type": "teleport"},
            {"id": "short", "type": "hydration"},
            "not even a dict",
        ])
        entries = entry_log.get_entries("alice")
        assert [e.id for e in entries] == ["ok"]
        assert isinstance(entries[0], BiometricEntry)

    def test_unreadable_entries_survive_writes(self, entry_log: EntryLog, local_store):
        future = {"id": "f1", "timestamp": "2026-03-01T07:00:00Z", "type": "meal", "kcal": 600}
        local_store.set_json("ironpulse_entries_alice", [future])

        entry_log.append_entry("alice", _water("e1"))
        entry_log.append_entry("alice", _water("e2"))
        assert entry_log.delete_entry("alice", "e1") is True

        assert [e.id for e in entry_log.get_entries("alice")] == ["e2"]
        assert local_store.get_json("ironpulse_entries_alice")[-1] == future

    def test_unreadable_entry_can_be_deleted_by_id(self, entry_log: EntryLog, local_store):
        local_store.set_json("ironpulse_entries_alice", [{"id": "f1", "type": "meal"}])
        assert entry_log.delete_entry("alice", "f1") is True
        assert local_store.get_json("ironpulse_entries_alice") == []

    @pytest.mark.parametrize("raw", ["[", "null"])
    def test_garbage_record(self, entry_log: EntryLog, local_store, raw):
        local_store.set_raw("ironpulse_entries_alice", raw)
        assert entry_log.get_entries("alice") == []
