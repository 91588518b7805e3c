"""Configuration loaded from .env"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger("config")

DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8081",
]


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    timezone: str = "UTC"
    collaborator: str = "gemini"
    google_api_key: str = ""
    llm_model: str = "gemini/gemini-2.5-flash"
    llm_temperature: float = 0.7
    edge_function_url: str = ""
    edge_function_token: str = ""
    user_id: str = ""
    collaborator_timeout_sec: float = 30.0
    frontend_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))


def load_settings() -> Settings:
    """Read settings from the environment at call time."""
    origins_env = os.getenv("FRONTEND_ORIGINS", "")
    origins = [o.strip() for o in origins_env.split(",") if o.strip()] or list(DEFAULT_ORIGINS)
    return Settings(
        timezone=os.getenv("INSIGHTS_TIMEZONE", "UTC").strip() or "UTC",
        collaborator=os.getenv("INSIGHTS_COLLABORATOR", "gemini").strip().lower() or "gemini",
        google_api_key=os.getenv("GOOGLE_API_KEY", ""),
        llm_model=os.getenv("INSIGHTS_LLM_MODEL", "gemini/gemini-2.5-flash"),
        llm_temperature=_float_env("INSIGHTS_LLM_TEMPERATURE", 0.7),
        edge_function_url=os.getenv("INSIGHTS_EDGE_FUNCTION_URL", ""),
        edge_function_token=os.getenv("INSIGHTS_EDGE_FUNCTION_TOKEN", ""),
        user_id=os.getenv("INSIGHTS_USER_ID", ""),
        collaborator_timeout_sec=_float_env("INSIGHTS_COLLABORATOR_TIMEOUT_SEC", 30.0),
        frontend_origins=origins,
    )
