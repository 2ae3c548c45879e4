"""Summary dashboard routes."""

from __future__ import annotations

from flask import Response, current_app, jsonify, request

from ...errors import ValidationError
from ...extensions import preferences_repository, transaction_repository
from ...services import aggregates, ledger_service, reports
from ...services.preferences import load_preferences
from ..common import current_owner, requested_month
from . import bp
from .services import build_overview


@bp.get("")
def summary():
    """Month summary, goal rings, pie datasets and forecast in one payload."""

    owner = current_owner()
    month = requested_month()
    transactions = ledger_service.list_transactions(transaction_repository(), owner)
    prefs = load_preferences(preferences_repository(), owner)
    return jsonify(
        build_overview(
            transactions,
            prefs,
            month=month,
            repayment_keyword=current_app.config["REPAYMENT_KEYWORD"],
        )
    )


@bp.get("/pie.png")
def pie_png():
    """Donut chart of one month's categories for ``type`` (default expense)."""

    owner = current_owner()
    month = requested_month()
    tx_type = request.args.get("type", "expense")
    if tx_type not in ("income", "expense"):
        raise ValidationError('type must be "income" or "expense"')

    rows = ledger_service.list_transactions(transaction_repository(), owner, month=month)
    data = aggregates.pie_dataset(rows, tx_type)
    figure = reports.build_pie_chart(data, title=f"{tx_type.capitalize()} by category · {month}")
    return Response(reports.render_png(figure), mimetype="image/png")
