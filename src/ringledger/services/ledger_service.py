"""Ledger input parsing and owner-scoped CRUD orchestration."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Optional

from ..domain.repositories.transaction import TransactionRepository
from ..errors import NotFoundError
from ..logging_config import get_logger, mask_key
from ..models.timestamps import as_utc, start_of_day_utc
from ..models.transaction import Transaction
from .identity import OwnerContext

logger = get_logger("ledger")

DETAIL_CATEGORY_MAX = 64

_FULLWIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")
_SEPARATORS = str.maketrans("", "", ",，")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def normalize_amount_text(value: Any) -> str:
    """Map full-width digits to ASCII and drop thousands separators."""

    text = "" if value is None else str(value)
    return text.strip().translate(_FULLWIDTH_DIGITS).translate(_SEPARATORS)


def parse_amount(value: Any) -> Optional[float]:
    """Parse user-entered amounts such as ``"１，２００"`` or ``1200``.

    Returns ``None`` for empty, unparsable or non-finite input.
    """

    if isinstance(value, bool):
        return None
    text = normalize_amount_text(value)
    if not _DECIMAL.fullmatch(text):
        return None
    parsed = float(text)
    if not math.isfinite(parsed):
        return None
    return parsed


def parse_occurred_at(value: Any) -> Optional[datetime]:
    """Parse an ISO date or datetime into an aware UTC datetime.

    Values without an offset are read as UTC, so a bare date is UTC midnight.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return start_of_day_utc(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        if len(text) <= 10:
            text = text.replace("/", "-")
        if text[-1] in "Zz":
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    return as_utc(parsed)


def clean_detail_category(value: Any) -> Optional[str]:
    text = "" if value is None else str(value).strip()
    return text[:DETAIL_CATEGORY_MAX] or None


def list_transactions(
    repo: TransactionRepository, owner: OwnerContext, *, month: Optional[str] = None
) -> list[Transaction]:
    """Return every transaction the owner holds, newest first."""

    return repo.list_for_owner(owner_key=owner.owner_key, month=month)


def create_transaction(
    repo: TransactionRepository, owner: OwnerContext, fields: dict[str, Any]
) -> Transaction:
    """Persist validated ``fields`` as a new row for ``owner``."""

    created = repo.create(Transaction(owner_key=owner.owner_key, **fields), owner_key=owner.owner_key)
    logger.info(
        "Transaction created",
        extra={"owner": mask_key(owner.owner_key), "transaction_id": created.id},
    )
    return created


def update_transaction(
    repo: TransactionRepository, owner: OwnerContext, transaction_id: int, fields: dict[str, Any]
) -> Transaction:
    """Apply validated ``fields`` to a row the owner holds."""

    updated = repo.update(transaction_id, fields, owner_key=owner.owner_key)
    if updated is None:
        raise NotFoundError()
    logger.info(
        "Transaction updated",
        extra={"owner": mask_key(owner.owner_key), "transaction_id": transaction_id},
    )
    return updated


def delete_transaction(repo: TransactionRepository, owner: OwnerContext, transaction_id: int) -> None:
    """Hard-delete a row the owner holds."""

    if not repo.delete(transaction_id, owner_key=owner.owner_key):
        raise NotFoundError()
    logger.info(
        "Transaction deleted",
        extra={"owner": mask_key(owner.owner_key), "transaction_id": transaction_id},
    )


__all__ = [
    "clean_detail_category",
    "create_transaction",
    "delete_transaction",
    "list_transactions",
    "normalize_amount_text",
    "parse_amount",
    "parse_occurred_at",
    "update_transaction",
]
