"""Database and repository wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import SQLModelPreferencesRepository, SQLModelTransactionRepository

EXTENSION_KEY = "ringledger"


def init_db(app: Flask) -> None:
    """Create the engine, ensure the schema and attach a session factory."""

    config: BaseConfig = app.config["RINGLEDGER_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    app.extensions[EXTENSION_KEY] = {"engine": engine, "session_factory": session_factory}
    # TODO(@migrations): replace create_all with Alembic once the schema stabilizes.


def _state() -> dict:
    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - only hit when init_db was skipped
        raise RuntimeError("Database engine not initialized")
    return state


def get_engine() -> Engine:
    """Return the engine bound to the current app."""

    return _state()["engine"]


def get_session_factory() -> SessionFactory:
    return _state()["session_factory"]


def transaction_repository() -> SQLModelTransactionRepository:
    return SQLModelTransactionRepository(get_session_factory())


def preferences_repository() -> SQLModelPreferencesRepository:
    return SQLModelPreferencesRepository(get_session_factory())
