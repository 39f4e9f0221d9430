"""Application settings from environment."""

import os
from functools import lru_cache
from typing import List, Optional

REQUIRED_KEYS = ("OPENAI_API_KEY", "ASSISTANT_ID")


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing."""


class Settings:
    """Central config. Values are properties so they read env at access time (after .env is loaded)."""

    @property
    def openai_api_key(self) -> str:
        return os.getenv("OPENAI_API_KEY", "").strip()

    @property
    def assistant_id(self) -> Optional[str]:
        return os.getenv("ASSISTANT_ID", "").strip() or None

    @property
    def log_level(self) -> str:
        return (os.getenv("LOG_LEVEL", "") or "INFO").strip().upper()

    def missing_keys(self) -> List[str]:
        """Names of required environment variables that are not set."""
        return [key for key in REQUIRED_KEYS if not os.getenv(key, "").strip()]

    def require_assistant_id(self) -> str:
        assistant_id = self.assistant_id
        if assistant_id is None:
            raise ConfigurationError("ASSISTANT_ID is not set")
        return assistant_id


@lru_cache
def get_settings() -> Settings:
    return Settings()
