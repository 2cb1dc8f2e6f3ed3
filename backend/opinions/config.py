"""
Application configuration with environment variable support.
"""
from __future__ import annotations

import os

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable with fallback."""
    try:
        return int(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_list(key: str, default: list[str], separator: str = ",") -> list[str]:
    """Get list value from environment variable with fallback."""
    value = os.getenv(key)
    if not value:
        return default
    return [item.strip() for item in value.split(separator) if item.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4.1"
    SYNTHESIS_MAX_TOKENS: int = 1200
    RECOMMEND_MAX_TOKENS: int = 600
    PORT: int = 8000


settings = Settings()

# Prompt Composition Settings
# Representative items per source block and per-item character budgets
PROMPT_MAX_ITEMS: int = _get_env_int("PROMPT_MAX_ITEMS", 3)
PROMPT_MAX_COMMENTS: int = _get_env_int("PROMPT_MAX_COMMENTS", 2)
PROMPT_TITLE_CHARS: int = _get_env_int("PROMPT_TITLE_CHARS", 150)
PROMPT_COMMENT_CHARS: int = _get_env_int("PROMPT_COMMENT_CHARS", 100)
PROMPT_POST_CHARS: int = _get_env_int("PROMPT_POST_CHARS", 150)
PROMPT_SNIPPET_CHARS: int = _get_env_int("PROMPT_SNIPPET_CHARS", 300)

# CORS Configuration
CORS_ALLOW_ORIGINS: list[str] = _get_env_list("CORS_ALLOW_ORIGINS", ["*"])

# Logging Configuration
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
