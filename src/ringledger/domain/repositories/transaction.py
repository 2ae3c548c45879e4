"""Transaction repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Owner-scoped persistence for ledger transactions.

    Every method takes the owner key alongside the row id; a row owned by a
    different key behaves exactly like a missing row.
    """

    def list_for_owner(self, *, owner_key: str, month: Optional[str] = None) -> list[Transaction]:
        """List transactions newest first, optionally narrowed to ``YYYY-MM``."""
        ...

    def create(self, transaction: Transaction, *, owner_key: str) -> Transaction:
        """Persist a new transaction for the owner."""
        ...

    def update(
        self, transaction_id: int, changes: Mapping[str, Any], *, owner_key: str
    ) -> Optional[Transaction]:
        """Apply ``changes`` to the matching row; ``None`` when nothing matched."""
        ...

    def delete(self, transaction_id: int, *, owner_key: str) -> bool:
        """Delete the matching row; ``False`` when nothing matched."""
        ...
