"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from typing import Any, Optional

from flask import current_app, request

from ..errors import ValidationError
from ..models.timestamps import current_month
from ..services.identity import OwnerContext

# The month after MAX_YEAR-12 must still be a valid datetime bound.
MIN_YEAR = 1
MAX_YEAR = 9998


def current_owner() -> OwnerContext:
    """Build the owner context from the configured request header."""

    header = current_app.config["OWNER_KEY_HEADER"]
    return OwnerContext.from_header(request.headers.get(header))


def json_body() -> dict[str, Any]:
    """Return the decoded JSON object body, or an empty dict."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def requested_id(path_id: Optional[int] = None) -> int:
    """Resolve the target id from the URL path or the ``id`` query argument."""

    if path_id is not None:
        value: Any = path_id
    else:
        value = (request.args.get("id") or "").strip()
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError("id is required") from None
    if parsed <= 0:
        raise ValidationError("id is required")
    return parsed


def requested_month(default_today: bool = True) -> Optional[str]:
    """Validate the ``month`` query argument (``YYYY-MM``)."""

    raw = (request.args.get("month") or "").strip()
    if not raw:
        return current_month() if default_today else None
    parts = raw.split("-")
    if len(parts) != 2 or len(parts[0]) != 4 or not all(p.isascii() and p.isdigit() for p in parts):
        raise ValidationError("month must be YYYY-MM")
    if not MIN_YEAR <= int(parts[0]) <= MAX_YEAR or not 1 <= int(parts[1]) <= 12:
        raise ValidationError("month must be YYYY-MM")
    return f"{parts[0]}-{int(parts[1]):02d}"
