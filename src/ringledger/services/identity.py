"""Anonymous per-device owner keys.

An owner key is an opaque 8-64 character string. Anyone holding the string
has full access to that owner's ledger; it partitions data, it does not
authenticate anyone.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

from ..errors import AuthorizationError

KEY_BYTES = 16
MIN_KEY_LENGTH = 8
MAX_KEY_LENGTH = 64
STORE_FIELD = "owner_key"


def generate_key() -> str:
    """Return a fresh random key rendered as lowercase hex."""

    return secrets.token_hex(KEY_BYTES)


def normalize_key(raw: Any) -> Optional[str]:
    """Return the trimmed key when it is within bounds, else ``None``."""

    if not isinstance(raw, str):
        return None
    key = raw.strip()
    if len(key) < MIN_KEY_LENGTH or len(key) > MAX_KEY_LENGTH:
        return None
    return key


def peek_key(store: MutableMapping[str, Any], field: str = STORE_FIELD) -> Optional[str]:
    """Read the stored key without issuing one."""

    return normalize_key(store.get(field))


def get_or_create_key(store: MutableMapping[str, Any], field: str = STORE_FIELD) -> str:
    """Return the stored key, generating and storing a new one when absent or malformed."""

    existing = peek_key(store, field)
    if existing is not None:
        return existing
    key = generate_key()
    store[field] = key
    return key


@dataclass(frozen=True, slots=True)
class OwnerContext:
    """The owner every ledger and preferences call is scoped to."""

    owner_key: str

    @classmethod
    def from_header(cls, value: Optional[str]) -> "OwnerContext":
        key = normalize_key(value)
        if key is None:
            raise AuthorizationError()
        return cls(owner_key=key)


__all__ = [
    "OwnerContext",
    "generate_key",
    "get_or_create_key",
    "normalize_key",
    "peek_key",
]
