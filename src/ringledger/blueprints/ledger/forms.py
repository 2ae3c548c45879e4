"""Ledger form validation helpers."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ...models.timestamps import utcnow
from ...models.transaction import TRANSACTION_TYPES
from ...services.ledger_service import clean_detail_category, parse_amount, parse_occurred_at


@dataclass(slots=True)
class TransactionForm:
    """Transaction input prior to validation.

    Checks run in a fixed order (amount, category, type, occurredAt) and stop
    at the first failure; ``error`` holds that single message.
    """

    amount: Optional[int] = None
    category: str = ""
    type: str = ""
    occurred_at: Optional[datetime] = None
    detail_category: Optional[str] = None
    require_occurred_at: bool = False
    error: Optional[str] = field(default=None, init=False)
    raw_data: dict[str, Any] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, require_occurred_at: bool = False) -> TransactionForm:
        """Create a form populated from a decoded JSON body."""

        form = cls(require_occurred_at=require_occurred_at)
        form.load(data)
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming mapping data to the form state."""

        keys = ("amount", "category", "type", "occurredAt", "detailCategory")
        self.raw_data = {key: data.get(key) for key in keys if key in data}

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.error = None

        parsed_amount = parse_amount(self.raw_data.get("amount"))
        units = math.trunc(parsed_amount) if parsed_amount is not None else 0
        if parsed_amount is None or parsed_amount <= 0 or units < 1:
            return self._fail("amount must be a positive number")
        self.amount = units

        raw_category = self.raw_data.get("category")
        self.category = ("" if raw_category is None else str(raw_category)).strip()
        if not self.category:
            return self._fail("category is required")

        self.type = self.raw_data.get("type") or ""
        if self.type not in TRANSACTION_TYPES:
            return self._fail('type must be "income" or "expense"')

        raw_occurred = self.raw_data.get("occurredAt")
        has_occurred = raw_occurred is not None and str(raw_occurred).strip() != ""
        if not has_occurred:
            if self.require_occurred_at:
                return self._fail("occurredAt is required (YYYY-MM-DD)")
            self.occurred_at = utcnow()
        else:
            self.occurred_at = parse_occurred_at(raw_occurred)
            if self.occurred_at is None:
                if self.require_occurred_at:
                    return self._fail("occurredAt is required (YYYY-MM-DD)")
                return self._fail("occurredAt must be a valid date (YYYY-MM-DD)")

        self.detail_category = clean_detail_category(self.raw_data.get("detailCategory"))
        return True

    def fields(self) -> dict[str, Any]:
        """Column values ready for the repository."""

        values: dict[str, Any] = {
            "amount": self.amount,
            "category": self.category,
            "type": self.type,
            "occurred_at": self.occurred_at,
        }
        # Updates leave detailCategory alone unless it was sent.
        if not self.require_occurred_at or "detailCategory" in self.raw_data:
            values["detail_category"] = self.detail_category
        return values

    def _fail(self, message: str) -> bool:
        self.error = message
        return False
