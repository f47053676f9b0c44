"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass that can be constructed from the environment (and an
optional .env file) or passed explicitly in tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"

# Values shipped in sample configs that must not count as a real key.
PLACEHOLDER_API_KEYS = frozenset({
    "//",
    "your-api-key",
    "your_api_key",
    "your-openai-api-key",
    "your_openai_api_key",
    "sk-...",
    "changeme",
    "change-me",
})


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for the bar assistant.

    No module-level globals; construct via from_env() or pass explicitly
    in tests.
    """
    # ── Completion API ──────────────────────────────────────────
    openai_api_key: str = ""
    openai_base_url: str = DEFAULT_BASE_URL
    openai_model: str = DEFAULT_MODEL
    openai_timeout: float = 30.0

    # Database
    db_path: str = "recipez.db"

    # Logging
    log_level: str = "WARNING"

    @property
    def is_api_configured(self) -> bool:
        """True when a real (non-empty, non-placeholder) API key is present."""
        key = self.openai_api_key.strip()
        return bool(key) and key.lower() not in PLACEHOLDER_API_KEYS

    @classmethod
    def from_env(cls) -> Settings:
        """Build Settings from environment variables (after loading .env)."""
        from dotenv import load_dotenv
        load_dotenv()

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_base_url=os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL),
            openai_model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
            openai_timeout=float(os.getenv("OPENAI_TIMEOUT", "30")),
            db_path=os.getenv("DB_PATH", "recipez.db"),
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
        )
