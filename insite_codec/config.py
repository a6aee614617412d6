"""Runtime settings for the codec service, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent / ".env")


@dataclass
class Settings:
    cors_origins: list[str]
    log_level: str
    host: str
    port: int
    reload: bool


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _split_origins(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [o.strip() for o in raw.split(",") if o.strip()]


def load_settings() -> Settings:
    """Load settings from the environment with local-development defaults."""

    return Settings(
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "http://localhost:5173")),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        host=os.getenv("CODEC_HOST", "0.0.0.0"),
        port=int(os.getenv("CODEC_PORT", "8000")),
        reload=_env_bool("CODEC_RELOAD", False),
    )
