"""Flask CLI commands for RingLedger."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import click
from flask import Flask

from .extensions import get_engine, transaction_repository
from .infra.database import init_database
from .models.timestamps import current_month
from .models.transaction import Transaction
from .services import aggregates
from .services.identity import normalize_key

# (day, amount, category, type)
_DEMO_ROWS = (
    (1, 280_000, "salary", "income"),
    (3, 4_820, "food", "expense"),
    (5, 78_000, "rent", "expense"),
    (12, 30_000, "card repayment", "expense"),
    (18, 12_400, "utilities", "expense"),
    (22, 6_300, "food", "expense"),
)


def _owner_option(value: str) -> str:
    key = normalize_key(value)
    if key is None:
        raise click.BadParameter("owner key must be 8-64 characters")
    return key


def init_app(app: Flask) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("ringledger-init-db")
    def ringledger_init_db() -> None:
        """Create database tables."""

        init_database(get_engine())
        click.echo("Database ready.")

    @app.cli.command("ringledger-seed")
    @click.option("--owner", required=True, help="Owner key to seed data for")
    @click.option("--month", default=None, help="Target month (YYYY-MM); defaults to the current one")
    def ringledger_seed(owner: str, month: str | None) -> None:
        """Insert a month of demo transactions for an owner."""

        key = _owner_option(owner)
        target = datetime.strptime(month or current_month(), "%Y-%m").replace(tzinfo=timezone.utc)
        repo = transaction_repository()
        for day, amount, category, tx_type in _DEMO_ROWS:
            repo.create(
                Transaction(
                    owner_key=key,
                    amount=amount,
                    category=category,
                    type=tx_type,
                    occurred_at=target.replace(day=day),
                ),
                owner_key=key,
            )
        click.echo(f"Seeded {len(_DEMO_ROWS)} transactions.")

    @app.cli.command("ringledger-summary")
    @click.option("--owner", required=True, help="Owner key to summarize")
    @click.option("--month", default=None, help="Month (YYYY-MM); defaults to the current one")
    def ringledger_summary(owner: str, month: str | None) -> None:
        """Print the month summary as JSON."""

        key = _owner_option(owner)
        month = month or current_month()
        rows = transaction_repository().list_for_owner(owner_key=key)
        summary = aggregates.summarize(aggregates.filter_month(rows, month))
        click.echo(json.dumps({"month": month, **summary.to_dict()}))
