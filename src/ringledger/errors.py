"""HTTP error types and JSON error handlers."""

from __future__ import annotations

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import BadRequest, HTTPException, InternalServerError, NotFound

from .logging_config import get_logger

logger = get_logger("errors")


class AuthorizationError(BadRequest):
    """Owner key missing or outside the accepted length bounds."""

    description = "x-user-key header is required"


class ValidationError(BadRequest):
    """A submitted field failed validation; carries the first failing message."""

    description = "invalid request"


class NotFoundError(NotFound):
    """No row matched both the id and the owner key."""

    description = "Not found"


class InternalError(InternalServerError):
    """Unexpected failure; the client only ever sees the generic message."""

    description = "Internal Server Error"


def error_response(exc: HTTPException):
    """Render any HTTP exception as ``{"error": message}``."""

    return jsonify({"error": exc.description}), exc.code


def init_app(app: Flask) -> None:
    """Register JSON error handlers on the application."""

    @app.errorhandler(AuthorizationError)
    @app.errorhandler(ValidationError)
    @app.errorhandler(NotFoundError)
    @app.errorhandler(InternalError)
    def _handle_ledger_error(exc: HTTPException):
        return error_response(exc)

    @app.errorhandler(SQLAlchemyError)
    def _handle_store_error(exc: SQLAlchemyError):
        logger.exception("Store operation failed")
        return error_response(InternalError())

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error")
        return error_response(InternalError())


__all__ = [
    "AuthorizationError",
    "InternalError",
    "NotFoundError",
    "ValidationError",
    "error_response",
    "init_app",
]
