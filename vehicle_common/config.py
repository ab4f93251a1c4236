"""Environment-driven settings shared by the API, console and desktop apps."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///vehicle_expenses.db"
TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    env: str = "prod"
    allowed_origins: List[str] = field(default_factory=list)
    log_level: str = "INFO"
    sql_echo: bool = False

    @property
    def is_development(self) -> bool:
        return self.env in {"dev", "development"}

    @classmethod
    def from_mapping(cls, environ: Mapping[str, str]) -> "Settings":
        origins = environ.get("VEHICLE_TRACKER_ALLOWED_ORIGINS", "")
        return cls(
            database_url=environ.get("DATABASE_URL") or DEFAULT_DATABASE_URL,
            env=environ.get("VEHICLE_TRACKER_ENV", "prod").strip().lower(),
            allowed_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
            log_level=environ.get("VEHICLE_TRACKER_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            sql_echo=environ.get("VEHICLE_TRACKER_SQL_ECHO", "").strip().lower() in TRUTHY,
        )


def load_settings(database_url: Optional[str] = None) -> Settings:
    """Read settings from the process environment after loading ``.env``."""
    load_dotenv()
    settings = Settings.from_mapping(os.environ)
    if database_url:
        settings = Settings(
            database_url=database_url,
            env=settings.env,
            allowed_origins=settings.allowed_origins,
            log_level=settings.log_level,
            sql_echo=settings.sql_echo,
        )
    return settings
