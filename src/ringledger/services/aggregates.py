"""Derived figures computed from an in-memory transaction collection.

Every function here is pure and total: malformed amounts contribute zero
instead of raising, and nothing is cached between calls.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Sequence

REPAYMENT_KEYWORD = "repayment"


@dataclass(frozen=True, slots=True)
class MonthSummary:
    income: float = 0
    expense: float = 0
    balance: float = 0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class GoalProgress:
    """Progress toward a target; ``ratio`` is capped while ``achieved`` is not."""

    current: float
    target: float
    ratio: float
    percentage: int
    remaining: float
    achieved: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class PieDatum:
    label: str
    value: float
    share: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class MonthBalance:
    month: str
    balance: float


@dataclass(frozen=True, slots=True)
class Forecast:
    """Rough year-end projection from recent monthly balances."""

    recent_average: float
    remaining_months: int
    predicted_year_end: float
    level: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _field(tx: Any, *names: str) -> Any:
    """Read the first present attribute or mapping key from ``tx``."""

    for name in names:
        if isinstance(tx, Mapping):
            if name in tx:
                return tx[name]
        elif hasattr(tx, name):
            return getattr(tx, name)
    return None


def _amount(tx: Any) -> float:
    value = _field(tx, "amount")
    if isinstance(value, bool):
        return 0
    try:
        number = value if isinstance(value, (int, float)) else float(value)
    except (TypeError, ValueError):
        return 0
    if isinstance(number, float) and not math.isfinite(number):
        return 0
    return number


def _type(tx: Any) -> Optional[str]:
    return _field(tx, "type")


def _category(tx: Any) -> str:
    value = _field(tx, "category")
    return "" if value is None else str(value).strip()


def month_key(value: Any) -> Optional[str]:
    """Return the ``YYYY-MM`` prefix of a date, datetime or ISO string.

    Aware datetimes are bucketed by their UTC month.
    """

    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m")
    if isinstance(value, str) and len(value) >= 7:
        return value[:7]
    return None


def _tx_month(tx: Any) -> Optional[str]:
    return month_key(_field(tx, "occurred_at", "occurredAt"))


def filter_month(transactions: Iterable[Any], month: str) -> list[Any]:
    """Keep entries whose occurrence date falls in ``month`` (``YYYY-MM``)."""

    return [tx for tx in transactions if _tx_month(tx) == month]


def summarize(transactions: Iterable[Any]) -> MonthSummary:
    """Sum income and expense and derive the balance."""

    income = 0
    expense = 0
    for tx in transactions:
        kind = _type(tx)
        if kind == "income":
            income += _amount(tx)
        elif kind == "expense":
            expense += _amount(tx)
    return MonthSummary(income=income, expense=expense, balance=income - expense)


def goal_progress(current: float, target: float) -> GoalProgress:
    if target > 0:
        ratio = max(0.0, min(1.0, current / target))
    else:
        ratio = 0.0
    return GoalProgress(
        current=current,
        target=target,
        ratio=ratio,
        percentage=round(ratio * 100),
        remaining=max(0, target - current),
        achieved=target > 0 and current >= target,
    )


def is_repayment(tx: Any, keyword: str = REPAYMENT_KEYWORD) -> bool:
    return _type(tx) == "expense" and keyword in _category(tx)


def repayment_total(transactions: Iterable[Any], keyword: str = REPAYMENT_KEYWORD) -> float:
    """Sum expenses whose category mentions the repayment keyword."""

    return sum((_amount(tx) for tx in transactions if is_repayment(tx, keyword)), 0)


def remaining_debt(debt_total: float, repaid: float) -> float:
    return max(0, debt_total - repaid)


def debt_progress(
    transactions: Iterable[Any], debt_total: float, keyword: str = REPAYMENT_KEYWORD
) -> GoalProgress:
    return goal_progress(repayment_total(transactions, keyword), debt_total)


def pie_dataset(transactions: Iterable[Any], tx_type: Optional[str] = None) -> list[PieDatum]:
    """Group amounts by category in first-seen order.

    Group values are floored at zero and shares use ``value / max(1, total)``,
    so negative or all-zero groups never divide by zero.
    """

    totals: dict[str, float] = {}
    for tx in transactions:
        if tx_type is not None and _type(tx) != tx_type:
            continue
        label = _category(tx)
        totals[label] = totals.get(label, 0) + _amount(tx)

    values = {label: max(0, value) for label, value in totals.items()}
    denominator = max(1, sum(values.values()))
    return [
        PieDatum(label=label, value=value, share=value / denominator)
        for label, value in values.items()
    ]


def category_suggestions(transactions: Iterable[Any]) -> list[str]:
    """Distinct non-empty categories in first-seen order."""

    seen: dict[str, None] = {}
    for tx in transactions:
        label = _category(tx)
        if label:
            seen.setdefault(label, None)
    return list(seen)


def add_months(month: str, delta: int) -> str:
    """Shift a ``YYYY-MM`` key by ``delta`` months."""

    year, mon = (int(part) for part in month.split("-")[:2])
    index = year * 12 + (mon - 1) + delta
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def monthly_balances(transactions: Iterable[Any]) -> list[MonthBalance]:
    """Per-month balances in ascending month order."""

    buckets: dict[str, float] = defaultdict(float)
    for tx in transactions:
        key = _tx_month(tx)
        if key is None:
            continue
        kind = _type(tx)
        if kind == "income":
            buckets[key] += _amount(tx)
        elif kind == "expense":
            buckets[key] -= _amount(tx)
    return [MonthBalance(month=key, balance=buckets[key]) for key in sorted(buckets)]


def recent_average(balances: Sequence[MonthBalance], window: int = 3) -> float:
    recent = list(balances)[-window:] if window > 0 else []
    if not recent:
        return 0.0
    return sum(item.balance for item in recent) / len(recent)


def forecast(transactions: Sequence[Any], month: str, window: int = 3) -> Forecast:
    """Project the year-end balance from ``month`` onward."""

    month_balance = summarize(filter_month(transactions, month)).balance
    average = recent_average(monthly_balances(transactions), window)
    remaining_months = max(0, (13 - int(month[5:7])) - 1)

    if month_balance < 0:
        level = "danger"
    elif average < 0:
        level = "warning"
    else:
        level = "ok"

    return Forecast(
        recent_average=average,
        remaining_months=remaining_months,
        predicted_year_end=month_balance + average * remaining_months,
        level=level,
    )


__all__ = [
    "Forecast",
    "GoalProgress",
    "MonthBalance",
    "MonthSummary",
    "PieDatum",
    "add_months",
    "category_suggestions",
    "debt_progress",
    "filter_month",
    "forecast",
    "goal_progress",
    "is_repayment",
    "month_key",
    "monthly_balances",
    "pie_dataset",
    "recent_average",
    "remaining_debt",
    "repayment_total",
    "summarize",
]
