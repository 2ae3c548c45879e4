"""SQLModel implementation of the transaction repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, ContextManager, Mapping, Optional

from sqlalchemy import delete, update
from sqlmodel import Session, select

from ...models.transaction import Transaction

_TABLE = Transaction.__table__  # type: ignore[attr-defined]


def month_bounds(month: str) -> tuple[datetime, datetime]:
    """Return the UTC ``[start, end)`` datetimes covering a ``YYYY-MM`` key."""

    start = datetime.strptime(month, "%Y-%m").replace(tzinfo=timezone.utc)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_for_owner(self, *, owner_key: str, month: Optional[str] = None) -> list[Transaction]:
        """List the owner's transactions, newest ``occurred_at`` first."""
        with self.session_factory() as session:
            statement = select(Transaction).where(Transaction.owner_key == owner_key)
            if month:
                start, end = month_bounds(month)
                statement = statement.where(Transaction.occurred_at >= start).where(
                    Transaction.occurred_at < end
                )
            statement = statement.order_by(
                Transaction.occurred_at.desc(),  # type: ignore[attr-defined]
                Transaction.created_at.desc(),  # type: ignore[attr-defined]
                Transaction.id.desc(),  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, transaction: Transaction, *, owner_key: str) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            transaction.owner_key = owner_key
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def update(
        self, transaction_id: int, changes: Mapping[str, Any], *, owner_key: str
    ) -> Optional[Transaction]:
        """Update the row matching both id and owner in a single statement."""
        with self.session_factory() as session:
            result = session.connection().execute(
                update(_TABLE)
                .where(_TABLE.c.id == transaction_id)
                .where(_TABLE.c.owner_key == owner_key)
                .values(**dict(changes))
            )
            if result.rowcount == 0:
                return None
            session.commit()
            obj = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.owner_key == owner_key)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def delete(self, transaction_id: int, *, owner_key: str) -> bool:
        """Delete the row matching both id and owner in a single statement."""
        with self.session_factory() as session:
            result = session.connection().execute(
                delete(_TABLE)
                .where(_TABLE.c.id == transaction_id)
                .where(_TABLE.c.owner_key == owner_key)
            )
            session.commit()
            return result.rowcount > 0


__all__ = ["SQLModelTransactionRepository", "month_bounds"]
