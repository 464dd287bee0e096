"""
JSON error handling for the API.

Every error leaves the app as ``{"error": message}`` with the matching status
code; unexpected exceptions roll back the session and are logged.
"""

import logging
from flask import jsonify, request
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException
from extensions import db

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES = {
    400: 'Bad request',
    401: 'Unauthorized',
    403: 'Forbidden',
    404: 'Not found',
    405: 'Method not allowed',
}


class ValidationError(Exception):
    """Raised by request parsing helpers when a payload is malformed."""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_response(message, status_code):
    return jsonify({'error': message}), status_code


def handle_api_error(error, default_message='Internal server error'):
    """Turn an exception raised inside a route into a JSON response."""
    if isinstance(error, ValidationError):
        return error_response(error.message, error.status_code)
    if isinstance(error, HTTPException):
        return error_response(DEFAULT_MESSAGES.get(error.code, error.description), error.code)

    db.session.rollback()
    logger.error(f"{request.method} {request.path} failed: {error}", exc_info=error)
    return error_response(default_message, 500)


def register_error_handlers(app):
    """Register JSON handlers for HTTP errors, CSRF failures and anything unexpected."""

    @app.errorhandler(ValidationError)
    def validation_error(error):
        return error_response(error.message, error.status_code)

    @app.errorhandler(CSRFError)
    def csrf_error(error):
        return error_response('CSRF token missing or invalid', 400)

    @app.errorhandler(HTTPException)
    def http_error(error):
        message = error.description if error.code not in DEFAULT_MESSAGES else DEFAULT_MESSAGES[error.code]
        return error_response(message, error.code)

    @app.errorhandler(Exception)
    def unexpected_error(error):
        db.session.rollback()
        app.logger.error(f"Unexpected error on {request.path}: {error}", exc_info=error)
        return error_response('An unexpected error occurred', 500)
