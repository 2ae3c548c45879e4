"""Pytest configuration and shared fixtures for RingLedger tests.

Provides throwaway SQLite databases, repository session factories, a
transaction factory and a Flask app/test client wired against ``tmp_path``.
"""

from __future__ import annotations

import os
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from ringledger import create_app
from ringledger.infra.database import create_session_factory
from ringledger.models import Transaction
from ringledger.models.timestamps import utcnow

OWNER_A = "owner-aaaa-1111"
OWNER_B = "owner-bbbb-2222"


def owner_headers(owner_key: str = OWNER_A) -> dict[str, str]:
    return {"X-User-Key": owner_key}


def utc(*args: int) -> datetime:
    """Aware UTC datetime shorthand, e.g. ``utc(2026, 2, 8)``."""
    return datetime(*args, tzinfo=timezone.utc)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect."""

    return create_session_factory(db_engine)


@pytest.fixture
def transaction_factory(session_factory):
    """Factory for persisting test transactions.

    Returns:
        Callable: Function that creates and persists Transaction instances
    """

    def _create_transaction(
        amount: int,
        category: str = "food",
        tx_type: str = "expense",
        occurred_at: datetime | None = None,
        owner: str = OWNER_A,
    ) -> Transaction:
        if occurred_at is None:
            occurred_at = utcnow()
        transaction = Transaction(
            owner_key=owner,
            amount=amount,
            category=category,
            type=tx_type,
            occurred_at=occurred_at,
        )
        with session_factory() as session:
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
        return transaction

    return _create_transaction


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("RINGLEDGER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("RINGLEDGER_DATABASE_URL", f"sqlite:///{tmp_path / 'ledger.db'}")
    monkeypatch.setenv("RINGLEDGER_DEV_MODE", "true")
    application = create_app("testing")
    yield application
    application.extensions["ringledger"]["engine"].dispose()


@pytest.fixture()
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def create_tx(client):
    """POST a transaction through the API and return the decoded response."""

    def _create(owner: str = OWNER_A, **body):
        payload = {"amount": 1000, "category": "food", "type": "expense", "occurredAt": "2026-02-08"}
        payload.update(body)
        response = client.post("/api/transactions", json=payload, headers=owner_headers(owner))
        assert response.status_code == 200, response.get_json()
        return response.get_json()

    return _create


@pytest.fixture()
def local_timezone():
    """Switch the process local timezone for the duration of a test."""

    original = os.environ.get("TZ")

    def _apply(name: str) -> None:
        os.environ["TZ"] = name
        time.tzset()

    yield _apply

    if original is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = original
    time.tzset()
