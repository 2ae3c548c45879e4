"""Repository protocols consumed by the service layer."""

from .settings import PreferencesRepository
from .transaction import TransactionRepository

__all__ = ["PreferencesRepository", "TransactionRepository"]
