"""
Application settings.

All configuration is read from the environment once, at startup. A `.env`
file in the project root is loaded first if present.

Environment variables:
- SUPABASE_URL: Supabase project URL
- SUPABASE_SERVICE_ROLE_KEY: service-role key (SUPABASE_KEY is accepted as a fallback)
- FRONTEND_URL: allowed cross-origin frontend (default http://localhost:3000)
- PORT: listening port (default 3001)
- STORE_TIMEOUT_SECONDS: timeout applied to every data call (default 10)
- LOG_LEVEL / LOG_FORMAT: see api.logging_config
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"


@dataclass(frozen=True, slots=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    frontend_url: str = "http://localhost:3000"
    port: int = 3001
    store_timeout_seconds: float = 10.0
    log_level: str = "INFO"
    log_format: str = "text"


def load_settings() -> Settings:
    """Load settings from the environment (and `.env`, without overriding real env vars)."""

    load_dotenv(dotenv_path=env_path)

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL") or None,
        supabase_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_KEY") or None,
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3000"),
        port=int(os.getenv("PORT", "3001")),
        store_timeout_seconds=float(os.getenv("STORE_TIMEOUT_SECONDS", "10")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "text"),
    )


__all__ = ["Settings", "load_settings"]
