"""Transaction CRUD routes.

Every route is scoped to the owner key in the request header. Rows owned by
another key are reported exactly like missing rows.
"""

from __future__ import annotations

from typing import Optional

from flask import jsonify

from ...errors import ValidationError
from ...extensions import transaction_repository
from ...services import aggregates, ledger_service
from ..common import current_owner, json_body, requested_id, requested_month
from . import bp
from .forms import TransactionForm


@bp.get("")
def list_transactions():
    """Return every owner transaction, newest ``occurredAt`` first."""

    owner = current_owner()
    month = requested_month(default_today=False)
    rows = ledger_service.list_transactions(transaction_repository(), owner, month=month)
    return jsonify([row.to_dict() for row in rows])


@bp.get("/categories")
def list_categories():
    """Distinct categories the owner has used, for form suggestions."""

    owner = current_owner()
    rows = ledger_service.list_transactions(transaction_repository(), owner)
    return jsonify(aggregates.category_suggestions(rows))


@bp.post("")
def create_transaction():
    owner = current_owner()
    form = TransactionForm.from_mapping(json_body())
    if not form.validate():
        raise ValidationError(form.error)

    created = ledger_service.create_transaction(transaction_repository(), owner, form.fields())
    return jsonify(created.to_dict())


@bp.patch("")
@bp.patch("/<int:transaction_id>")
def update_transaction(transaction_id: Optional[int] = None):
    owner = current_owner()
    target_id = requested_id(transaction_id)
    form = TransactionForm.from_mapping(json_body(), require_occurred_at=True)
    if not form.validate():
        raise ValidationError(form.error)

    updated = ledger_service.update_transaction(
        transaction_repository(), owner, target_id, form.fields()
    )
    return jsonify(updated.to_dict())


@bp.delete("")
@bp.delete("/<int:transaction_id>")
def delete_transaction(transaction_id: Optional[int] = None):
    owner = current_owner()
    target_id = requested_id(transaction_id)
    ledger_service.delete_transaction(transaction_repository(), owner, target_id)
    return jsonify({"ok": True})
