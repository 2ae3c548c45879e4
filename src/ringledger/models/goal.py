"""Category ring targets and free-form progress trackers."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from .timestamps import utc_datetime_field, utcnow

DEFAULT_TRACKER_COLOR = "#60a5fa"
MAX_TRACKERS = 8


class CategoryGoal(SQLModel, table=True):
    """Target amount for a single category ring."""

    __tablename__: ClassVar[str] = "category_goal"
    __table_args__ = (UniqueConstraint("owner_key", "category", name="uq_category_goal_owner"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_key: str = Field(nullable=False, index=True, max_length=64)
    category: str = Field(nullable=False, max_length=255)
    target: int = Field(default=0, nullable=False)


class Tracker(SQLModel, table=True):
    """User-defined progress ring with a manually maintained current value."""

    __tablename__: ClassVar[str] = "tracker"

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_key: str = Field(nullable=False, index=True, max_length=64)
    title: str = Field(nullable=False, max_length=64)
    current: int = Field(default=0, nullable=False)
    target: int = Field(default=100_000, nullable=False)
    color: str = Field(default=DEFAULT_TRACKER_COLOR, max_length=16)
    position: int = Field(default=0, nullable=False)
    created_at: datetime = utc_datetime_field(default_factory=utcnow, nullable=False)
