"""Dashboard payload assembled from the aggregate engine."""

from __future__ import annotations

from typing import Any, Sequence

from ...models.transaction import Transaction
from ...services import aggregates
from ...services.preferences import Preferences, tracker_to_dict


def build_overview(
    transactions: Sequence[Transaction],
    prefs: Preferences,
    *,
    month: str,
    repayment_keyword: str = aggregates.REPAYMENT_KEYWORD,
) -> dict[str, Any]:
    """Recompute every derived figure for ``month`` from the full collection."""

    month_rows = aggregates.filter_month(transactions, month)
    month_summary = aggregates.summarize(month_rows)
    cumulative = aggregates.summarize(transactions)
    settings = prefs.settings

    repaid = aggregates.repayment_total(transactions, repayment_keyword)
    debt = aggregates.goal_progress(repaid, settings.debt_total).to_dict()
    remaining = aggregates.remaining_debt(settings.debt_total, repaid)
    debt["remainingDebt"] = remaining
    # The debt ring drains as repayments come in.
    debt["ringRatio"] = (
        max(0.0, min(1.0, remaining / settings.debt_total)) if settings.debt_total > 0 else 0.0
    )

    category_totals = {
        datum.label: datum.value for datum in aggregates.pie_dataset(month_rows)
    }
    category_goals = [
        {
            "category": goal.category,
            **aggregates.goal_progress(category_totals.get(goal.category, 0), goal.target).to_dict(),
        }
        for goal in prefs.category_goals
    ]
    trackers = [
        {
            **tracker_to_dict(tracker),
            "progress": aggregates.goal_progress(tracker.current, tracker.target).to_dict(),
        }
        for tracker in prefs.trackers
    ]

    return {
        "month": month,
        "previousMonth": aggregates.add_months(month, -1),
        "nextMonth": aggregates.add_months(month, 1),
        "summary": month_summary.to_dict(),
        "cumulative": cumulative.to_dict(),
        "goals": {
            "balance": aggregates.goal_progress(
                month_summary.balance, settings.target_balance
            ).to_dict(),
            "save": aggregates.goal_progress(
                month_summary.balance, settings.monthly_save_target
            ).to_dict(),
            "debt": debt,
        },
        "categoryGoals": category_goals,
        "trackers": trackers,
        "pie": {
            "expense": [d.to_dict() for d in aggregates.pie_dataset(month_rows, "expense")],
            "income": [d.to_dict() for d in aggregates.pie_dataset(month_rows, "income")],
        },
        "forecast": aggregates.forecast(transactions, month).to_dict(),
        "categories": aggregates.category_suggestions(transactions),
    }
