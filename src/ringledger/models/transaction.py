"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Optional

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from .timestamps import isoformat_utc, utc_datetime_field, utcnow

TRANSACTION_TYPES = ("income", "expense")


class Transaction(SQLModel, table=True):
    """A single income or expense entry owned by one device key."""

    __tablename__: ClassVar[str] = "ledger_transaction"
    __table_args__ = (Index("ix_ledger_transaction_owner_occurred", "owner_key", "occurred_at"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_key: str = Field(nullable=False, max_length=64)
    amount: int = Field(nullable=False, description="Always positive; direction comes from type")
    category: str = Field(nullable=False, max_length=255)
    detail_category: Optional[str] = Field(default=None, max_length=64)
    type: str = Field(nullable=False, max_length=16)
    occurred_at: datetime = utc_datetime_field(nullable=False)
    created_at: datetime = utc_datetime_field(default_factory=utcnow, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        """Render the row the way the JSON API exposes it."""

        return {
            "id": self.id,
            "ownerKey": self.owner_key,
            "amount": self.amount,
            "category": self.category,
            "detailCategory": self.detail_category,
            "type": self.type,
            "occurredAt": isoformat_utc(self.occurred_at),
            "createdAt": isoformat_utc(self.created_at),
        }
