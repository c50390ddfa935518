# src/assignly/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- No secrets required at import time.
- Malformed numeric values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "ASSIGNLY"

DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_SIGNUP_PATH = "signup"
DEFAULT_JPEG_QUALITY = 100


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Backend API ----
    api_base_url: str
    signup_path: str
    # None means "wait forever", which is what the signup screen expects.
    http_timeout_seconds: Optional[float]

    # ---- Avatar encoding ----
    jpeg_quality: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "assignly").strip() or "assignly"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/assignly"))

        api_base_url = _env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).strip().rstrip("/")
        signup_path = _env(_k("SIGNUP_PATH"), DEFAULT_SIGNUP_PATH).strip().strip("/")
        http_timeout_seconds = _env_optional_float(_k("HTTP_TIMEOUT_SECONDS"))

        jpeg_quality = _env_int(_k("JPEG_QUALITY"), DEFAULT_JPEG_QUALITY)
        jpeg_quality = min(100, max(0, jpeg_quality))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_base_url=api_base_url or DEFAULT_API_BASE_URL,
            signup_path=signup_path or DEFAULT_SIGNUP_PATH,
            http_timeout_seconds=http_timeout_seconds,
            jpeg_quality=jpeg_quality,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
