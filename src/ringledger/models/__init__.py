"""SQLModel table exports."""

from .goal import CategoryGoal, Tracker
from .settings import GoalSettings
from .transaction import Transaction

__all__ = [
    "CategoryGoal",
    "GoalSettings",
    "Tracker",
    "Transaction",
]
