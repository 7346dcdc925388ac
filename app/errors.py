import logging
from flask import Blueprint, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException
from app.services.backend import BackendError
from app.utils.responses import error, validation_error_response

errors_bp = Blueprint("errors_bp", __name__)


class ConfirmationRequired(Exception):
    """A destructive action needs an explicit ``confirm=true`` from the user."""

    def __init__(self, message, scope=None, count=None):
        super().__init__(message)
        self.message = message
        self.scope = scope
        self.count = count


@errors_bp.app_errorhandler(ConfirmationRequired)
def handle_confirmation_required(e):
    return jsonify({
        "status": "error",
        "message": e.message,
        "code": 409,
        "confirm": {"scope": e.scope, "count": e.count},
    }), 409


@errors_bp.app_errorhandler(BackendError)
def handle_backend_error(e):
    logging.error("Backend operation failed: %s", e)
    return error(str(e), status=500, code=500)


@errors_bp.app_errorhandler(ValidationError)
def handle_validation_error(e):
    return validation_error_response(e.errors(include_url=False, include_context=False))


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return error(
        "An unexpected error occurred. Please try again later.",
        status=500,
        code=500,
    )
