"""Owner-key issuance backed by a long-lived cookie."""

from __future__ import annotations

from flask import current_app, jsonify, request

from ...logging_config import get_logger, mask_key
from ...services import identity
from . import bp

logger = get_logger("identity")


@bp.get("")
def get_identity():
    """Return the caller's owner key, issuing a cookie when needed.

    With ``?peek=1`` nothing is issued and ``userKey`` is ``null`` when the
    cookie is missing or malformed.
    """

    cookie_name = current_app.config["IDENTITY_COOKIE"]
    jar = {identity.STORE_FIELD: request.cookies.get(cookie_name)}

    if request.args.get("peek") in {"1", "true", "yes"}:
        return jsonify({"userKey": identity.peek_key(jar)})

    existing = identity.peek_key(jar)
    key = identity.get_or_create_key(jar)
    response = jsonify({"userKey": key})
    if existing is None:
        response.set_cookie(
            cookie_name,
            key,
            max_age=current_app.config["IDENTITY_COOKIE_MAX_AGE"],
            path="/",
            httponly=True,
            samesite="Lax",
            secure=not current_app.config["DEV_MODE"],
        )
        logger.info("Issued owner key", extra={"owner": mask_key(key)})
    return response
