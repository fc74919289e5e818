"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """IronPulse configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Logging
    ironpulse_log_level: str = "info"

    # Storage (local key-value store backed by SQLite)
    db_path: str = "~/.ironpulse/ironpulse.db"
    # Namespace for persisted keys: "<prefix>_auth", "<prefix>_users", ...
    storage_key_prefix: str = "ironpulse"

    # Encryption at rest. Empty means records are stored as plain JSON.
    encryption_key: str = ""

    # Dashboard
    hydration_target_ml: int = 2500


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
