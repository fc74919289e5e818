"""Fernet-based record encryption for the local store.

When an encryption key is configured, every JSON record written to the
``kv_store`` table is sealed with Fernet. Keys themselves stay readable so
records can be looked up without decrypting the whole table.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


class EncryptionError(Exception):
    """Raised when a record cannot be sealed or opened."""


class RecordEncryptor:
    """Seals JSON-serializable records with Fernet symmetric encryption.

    Usage::

        encryptor = RecordEncryptor(key=RecordEncryptor.generate_key())
        token = encryptor.encrypt({"isAuthenticated": False, "user": None})
        encryptor.decrypt(token)  # {"isAuthenticated": False, "user": None}
    """

    def __init__(self, key: str) -> None:
        """
        Args:
            key: A valid Fernet key string.

        Raises:
            EncryptionError: If the key is empty or invalid.
        """
        if not key or not key.strip():
            raise EncryptionError("Encryption key must not be empty")
        try:
            self._fernet = Fernet(key.encode())
        except ValueError as exc:
            raise EncryptionError(f"Invalid encryption key: {exc}") from exc

    def encrypt(self, record: Any) -> str:
        """Serialize ``record`` to compact JSON and return a Fernet token."""
        try:
            plaintext = json.dumps(record, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncryptionError(f"Record is not JSON-serializable: {exc}") from exc
        return self._fernet.encrypt(plaintext).decode("utf-8")

    def decrypt(self, token: str) -> Any:
        """Open a Fernet token and parse the JSON record inside it.

        Raises:
            EncryptionError: If the token is invalid, was sealed with another
                key, or does not contain JSON.
        """
        try:
            plaintext = self._fernet.decrypt(token.encode("utf-8"))
        except InvalidToken as exc:
            raise EncryptionError("Decryption failed: invalid token or wrong key") from exc
        try:
            return json.loads(plaintext)
        except json.JSONDecodeError as exc:
            raise EncryptionError(f"Decrypted record is not JSON: {exc}") from exc

    @staticmethod
    def generate_key() -> str:
        """Generate a new URL-safe base64-encoded Fernet key."""
        return Fernet.generate_key().decode("utf-8")
