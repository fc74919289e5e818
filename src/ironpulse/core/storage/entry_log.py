"""Entry log — one most-recent-first list of activity entries per user.

Entries of every kind share a single list; filtering by type is left to the
caller. Entries are never edited in place, only appended or deleted.
"""

from __future__ import annotations

import logging
from typing import Any

from ironpulse.core.storage.kv_store import ENTRIES_KEY, LocalStore
from ironpulse.core.storage.models import AppEntry, entry_from_dict

logger = logging.getLogger(__name__)


class EntryLog:
    """Append/list/delete operations over ``entries_<username>`` records.

    Usage::

        log = EntryLog(store)
        log.append_entry("alice", entry)
        log.get_entries("alice")  # newest first
    """

    def __init__(self, store: LocalStore) -> None:
        self._store = store

    def _key(self, username: str) -> str:
        return self._store.key(ENTRIES_KEY, username)

    def _load_raw(self, username: str) -> list[Any]:
        data = self._store.get_json(self._key(username), default=[])
        if not isinstance(data, list):
            logger.warning("Entry log for %s is not a list; treating as empty", username)
            return []
        return data

    def _save(self, username: str, records: list[Any]) -> None:
        self._store.set_json(self._key(username), records)

    def _decode(self, username: str, records: list[Any]) -> list[AppEntry]:
        entries: list[AppEntry] = []
        for record in records:
            try:
                entries.append(entry_from_dict(record))
            except (ValueError, AttributeError) as exc:
                logger.warning("Skipping unreadable entry for %s: %s", username, exc)
        return entries

    def get_entries(self, username: str) -> list[AppEntry]:
        """Return the user's entries, newest first.

        Unreadable entries are skipped here but left in storage untouched.
        """
        return self._decode(username, self._load_raw(username))

    def append_entry(self, username: str, entry: AppEntry) -> list[AppEntry]:
        """Prepend ``entry`` and persist. Returns the updated list."""
        records = [entry.to_dict(), *self._load_raw(username)]
        self._save(username, records)
        logger.info("Logged %s entry %s for %s", entry.type, entry.id, username)
        return self._decode(username, records)

    def _remove_where(self, username: str, field: str, value: str) -> int:
        records = self._load_raw(username)
        remaining = [
            r for r in records if not (isinstance(r, dict) and r.get(field) == value)
        ]
        removed = len(records) - len(remaining)
        if removed:
            self._save(username, remaining)
        return removed

    def delete_entry(self, username: str, entry_id: str) -> bool:
        """Delete the entry with ``entry_id``. Returns True if one was removed."""
        if not self._remove_where(username, "id", entry_id):
            return False
        logger.info("Deleted entry %s for %s", entry_id, username)
        return True

    def delete_entries_at(self, username: str, timestamp: str) -> int:
        """Delete every entry recorded at exactly ``timestamp``.

        Returns:
            Number of entries removed.
        """
        removed = self._remove_where(username, "timestamp", timestamp)
        if removed:
            logger.info("Deleted %d entries at %s for %s", removed, timestamp, username)
        return removed

    def clear_entries(self, username: str) -> None:
        """Remove the user's whole log."""
        if self._store.remove(self._key(username)):
            logger.warning("Cleared all entries for %s", username)
