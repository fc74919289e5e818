"""Tests for TrackerDatabase — schema creation, versioning, lifecycle."""

from __future__ import annotations

import pytest

from ironpulse.core.storage.database import SCHEMA_VERSION, DatabaseError, TrackerDatabase


class TestInitialization:
    def test_in_memory_initialize(self):
        db = TrackerDatabase(":memory:")
        db.initialize()
        assert db.connection is not None
        db.close()

    def test_double_initialize_is_idempotent(self):
        db = TrackerDatabase(":memory:")
        db.initialize()
        conn1 = db.connection
        db.initialize()
        assert db.connection is conn1
        db.close()

    def test_connection_before_init_raises(self):
        db = TrackerDatabase(":memory:")
        with pytest.raises(DatabaseError, match="not initialized"):
            _ = db.connection

    def test_context_manager(self):
        with TrackerDatabase(":memory:") as db:
            assert db.connection is not None
        with pytest.raises(DatabaseError):
            _ = db.connection


class TestSchema:
    def test_schema_version_recorded(self):
        with TrackerDatabase(":memory:") as db:
            assert db.get_schema_version() == SCHEMA_VERSION

    def test_tables_created(self):
        with TrackerDatabase(":memory:") as db:
            cursor = db.connection.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            tables = {row[0] for row in cursor.fetchall()}
        assert {"kv_store", "schema_version"} <= tables

    def test_reopening_file_does_not_duplicate_version_rows(self, tmp_path):
        db_path = str(tmp_path / "ironpulse.db")
        with TrackerDatabase(db_path):
            pass
        with TrackerDatabase(db_path) as db:
            rows = db.connection.execute("SELECT COUNT(*) FROM schema_version").fetchone()
            assert rows[0] == 1
            assert db.get_schema_version() == SCHEMA_VERSION


class TestFileDatabase:
    def test_creates_parent_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "ironpulse.db"
        db = TrackerDatabase(str(db_path))
        db.initialize()
        assert db_path.exists()
        assert db.path == str(db_path)
        db.close()

    def test_data_survives_reopen(self, tmp_path):
        db_path = str(tmp_path / "ironpulse.db")
        with TrackerDatabase(db_path) as db:
            db.connection.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?)", ("k", "{}")
            )
            db.connection.commit()
        with TrackerDatabase(db_path) as db:
            row = db.connection.execute("SELECT value FROM kv_store WHERE key = 'k'").fetchone()
            assert row[0] == "{}"


class TestClose:
    def test_close_makes_connection_unavailable(self):
        db = TrackerDatabase(":memory:")
        db.initialize()
        db.close()
        with pytest.raises(DatabaseError, match="not initialized"):
            _ = db.connection

    def test_double_close_is_safe(self):
        db = TrackerDatabase(":memory:")
        db.initialize()
        db.close()
        db.close()
