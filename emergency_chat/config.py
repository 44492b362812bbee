from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables (and an optional .env)."""

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY")
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.gemini_base: str = os.getenv(
            "GEMINI_BASE", "https://generativelanguage.googleapis.com/v1beta"
        )
        self.gemini_timeout: float = float(os.getenv("GEMINI_TIMEOUT", "30"))
        self.greeting: bool = os.getenv("CHAT_GREETING", "1") != "0"

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
