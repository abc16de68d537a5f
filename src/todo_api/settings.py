from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

LEGACY_PATH_MODES = {"redirect", "rewrite"}
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - SEED_TODOS: 'true' (default) to start the store with three sample todos
    - LEGACY_PATH_MODE: 'redirect' (default) answers /tasks/... with a 302 to /todos/...;
      'rewrite' routes /tasks/... to /todos/... internally
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: logging level name (default: INFO)
    - HOST: bind address for the bundled server (default: 127.0.0.1)
    - PORT: bind port for the bundled server (default: 8000)
    """

    seed_todos: bool = True
    legacy_path_mode: str = "redirect"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        return "INFO"
    return level


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    mode = _get_env("LEGACY_PATH_MODE", "redirect").strip().lower()
    if mode not in LEGACY_PATH_MODES:
        mode = "redirect"

    return Settings(
        seed_todos=_parse_bool(_get_env("SEED_TODOS", "true"), True),
        legacy_path_mode=mode,
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_parse_log_level(_get_env("LOG_LEVEL", "INFO")),
        host=_get_env("HOST", "127.0.0.1").strip(),
        port=_parse_int(_get_env("PORT", "8000"), 8000),
    )
