"""Runtime settings read from the environment (and a local ``.env`` file)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///storefront.db"

_TRUTHY = {"1", "true", "yes", "on"}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    environment: str = "development"
    sql_echo: bool = False


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from ``env``, or from ``os.environ`` after loading ``.env``.

    ``DATABASE_URL`` takes any SQLAlchemy URL. ``DATABASE_PATH`` is accepted
    as a shortcut for a SQLite file.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    database_url = env.get("DATABASE_URL")
    if not database_url and env.get("DATABASE_PATH"):
        database_url = f"sqlite:///{env['DATABASE_PATH']}"

    log_level = env.get("LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )

    return Settings(
        database_url=database_url or DEFAULT_DATABASE_URL,
        log_level=log_level,
        environment=env.get("ENVIRONMENT", "development").lower(),
        sql_echo=env.get("SQL_ECHO", "").lower() in _TRUTHY,
    )
