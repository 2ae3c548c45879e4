"""Blueprint exports."""

from . import identity, ledger, overview, preferences

__all__ = [
    "identity",
    "ledger",
    "overview",
    "preferences",
]
