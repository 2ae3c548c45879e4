"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def normalize_database_url(url: str) -> str:
    """Point bare Postgres URLs at the psycopg driver."""

    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "RingLedger"
    DB_FILENAME = "ringledger.db"
    DEBUG = False
    TESTING = False
    IDENTITY_COOKIE_MAX_AGE = 60 * 60 * 24 * 365 * 5

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("RINGLEDGER_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("RINGLEDGER_DEV_MODE", default=True)
        self.DATABASE_URL = normalize_database_url(
            os.getenv("RINGLEDGER_DATABASE_URL", self._build_sqlite_url())
        )
        self.OWNER_KEY_HEADER = os.getenv("RINGLEDGER_OWNER_HEADER", "X-User-Key")
        self.IDENTITY_COOKIE = os.getenv("RINGLEDGER_IDENTITY_COOKIE", "ringledger_owner_key")
        self.REPAYMENT_KEYWORD = os.getenv("RINGLEDGER_REPAYMENT_KEYWORD", "repayment")
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("RINGLEDGER_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("RINGLEDGER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the pytest suite."""

    TESTING = True
