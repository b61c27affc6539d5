"""Service settings loaded from environment variables (+ optional .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

ENV_PREFIX = "TASKS"
DEVELOPMENT = "development"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return tuple(p.strip() for p in raw.replace(",", " ").split() if p.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- HTTP ----
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: tuple[str, ...] = ("*",)

    # ---- App / logging ----
    environment: str = "production"
    log_level: str = "INFO"

    # ---- Data ----
    seed_samples: bool = True

    @property
    def docs_enabled(self) -> bool:
        """Interactive API docs are only served in development."""
        return self.environment.lower() == DEVELOPMENT

    @staticmethod
    def from_env(*, dotenv: bool = True) -> Settings:
        if dotenv:
            load_dotenv(override=False)

        return Settings(
            host=_env(_k("HOST"), "0.0.0.0"),
            # Plain PORT, as hosting platforms set it.
            port=_env_int("PORT", 8080),
            cors_origins=_env_list(_k("CORS_ORIGINS"), ("*",)),
            environment=_env(_k("ENV"), "production").strip() or "production",
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            seed_samples=_env_bool(_k("SEED_SAMPLES"), True),
        )
