"""Identity blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("identity", __name__, url_prefix="/api/identity")

from . import routes  # noqa: E402,F401

__all__ = ["bp"]
