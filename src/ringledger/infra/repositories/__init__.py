"""Concrete repository implementations using SQLModel."""

from .settings import SQLModelPreferencesRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelPreferencesRepository",
    "SQLModelTransactionRepository",
]
