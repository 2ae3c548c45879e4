"""Per-owner goal configuration stored in the database."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlmodel import Field, SQLModel

from .timestamps import utc_datetime_field, utcnow

DEFAULT_TARGET_BALANCE = 200_000
DEFAULT_MONTHLY_SAVE_TARGET = 50_000
DEFAULT_DEBT_TOTAL = 0


class GoalSettings(SQLModel, table=True):
    """Headline goal targets for one owner key."""

    __tablename__: ClassVar[str] = "goal_settings"

    owner_key: str = Field(primary_key=True, max_length=64)
    target_balance: int = Field(default=DEFAULT_TARGET_BALANCE, nullable=False)
    monthly_save_target: int = Field(default=DEFAULT_MONTHLY_SAVE_TARGET, nullable=False)
    debt_total: int = Field(default=DEFAULT_DEBT_TOTAL, nullable=False)
    updated_at: datetime = utc_datetime_field(default_factory=utcnow, nullable=False)
