"""Service layer for ledger, aggregates, identity and preferences."""
