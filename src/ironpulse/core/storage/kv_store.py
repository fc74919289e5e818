"""Keyed JSON store — the persistence contract every IronPulse record goes through.

Each key holds one JSON document. Reads never fail: a missing, corrupt, or
undecryptable record is reported as absent so the user is never blocked by a
damaged store. Writes replace the whole document (last write wins).
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ironpulse.core.storage.database import TrackerDatabase
from ironpulse.core.storage.encryption import EncryptionError, RecordEncryptor

logger = logging.getLogger(__name__)

AUTH_KEY = "auth"
USERS_KEY = "users"
ENTRIES_KEY = "entries"


class LocalStore:
    """Namespaced key-value store of JSON records on top of SQLite.

    Usage::

        db = TrackerDatabase(":memory:")
        db.initialize()
        store = LocalStore(db)

        store.set_json(store.key("users"), {})
        registry = store.get_json(store.key("users"), default={})
    """

    def __init__(
        self,
        database: TrackerDatabase,
        encryptor: RecordEncryptor | None = None,
        *,
        prefix: str = "ironpulse",
    ) -> None:
        self._db = database
        self._enc = encryptor
        self._prefix = prefix

    @property
    def encrypted(self) -> bool:
        return self._enc is not None

    def key(self, *parts: str) -> str:
        """Build a namespaced key, e.g. ``key("entries", "alice")`` -> ``ironpulse_entries_alice``."""
        return "_".join((self._prefix, *parts)) if self._prefix else "_".join(parts)

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def get_raw(self, key: str) -> str | None:
        row = self._db.connection.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row is not None else None

    def set_raw(self, key: str, value: str) -> None:
        conn = self._db.connection
        conn.execute(
            """INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, datetime('now'))
               ON CONFLICT(key) DO UPDATE SET
                   value = excluded.value,
                   updated_at = excluded.updated_at""",
            (key, value),
        )
        conn.commit()

    # ------------------------------------------------------------------
    # JSON records
    # ------------------------------------------------------------------

    def get_json(self, key: str, default: Any = None) -> Any:
        """Read and decode the record under ``key``.

        Returns ``default`` when the key is absent or the record cannot be
        decoded. Decoding problems are logged, never raised.
        """
        raw = self.get_raw(key)
        if raw is None:
            return default

        try:
            if self._enc is not None:
                return self._enc.decrypt(raw)
            return json.loads(raw)
        except EncryptionError as exc:
            logger.warning("Unreadable encrypted record under %s treated as absent: %s", key, exc)
        except json.JSONDecodeError as exc:
            logger.warning("Corrupt JSON record under %s treated as absent: %s", key, exc)
        return default

    def set_json(self, key: str, value: Any) -> None:
        """Encode ``value`` and replace the record under ``key``."""
        if self._enc is not None:
            payload = self._enc.encrypt(value)
        else:
            payload = json.dumps(value, separators=(",", ":"))
        self.set_raw(key, payload)
        logger.debug("Stored record %s (%d bytes)", key, len(payload))

    def remove(self, key: str) -> bool:
        """Delete the record under ``key``. Returns True if it existed."""
        conn = self._db.connection
        cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        conn.commit()
        return cursor.rowcount > 0

    def keys(self) -> list[str]:
        """List stored keys in this store's namespace."""
        rows = self._db.connection.execute(
            "SELECT key FROM kv_store ORDER BY key"
        ).fetchall()
        prefix = f"{self._prefix}_" if self._prefix else ""
        return [row[0] for row in rows if row[0].startswith(prefix)]
