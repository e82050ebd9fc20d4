# /app/core/config.py

"""
Process-wide configuration, read once from the environment.

A `.env` file in the working directory is loaded first so local development
does not need exported variables. Everything else in the application asks
`get_settings()` instead of calling `os.getenv` directly, which keeps the
values substitutable in tests.
"""

import os
import secrets
import logging
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_ENCRYPTION_KEY = "default-dev-secret-key-change-me"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


class Settings(BaseModel):
    # --- Storage ---
    database_url: Optional[str] = None

    # --- Cipher ---
    encryption_key: str = DEFAULT_ENCRYPTION_KEY

    # --- Tokens ---
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60
    jwt_refresh_expire_days: int = 30

    # --- Generation ---
    gemini_model: str = DEFAULT_GEMINI_MODEL
    generation_temperature: float = 0.8

    # --- Service ---
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


def load_settings() -> Settings:
    """Builds a Settings object from the current process environment."""
    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret:
        jwt_secret = secrets.token_hex(32)
        logger.warning("JWT_SECRET not set! Generated a random secret; tokens will not survive a restart.")

    if not os.getenv("ENCRYPTION_KEY"):
        logger.warning("ENCRYPTION_KEY not set, falling back to the development key.")

    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    return Settings(
        database_url=os.getenv("DATABASE_URL") or None,
        encryption_key=os.getenv("ENCRYPTION_KEY") or DEFAULT_ENCRYPTION_KEY,
        jwt_secret=jwt_secret,
        jwt_expire_minutes=int(os.getenv("JWT_EXPIRE_MINUTES", "60")),
        jwt_refresh_expire_days=int(os.getenv("JWT_REFRESH_EXPIRE_DAYS", "30")),
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=origins or ["*"],
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
