"""
Error taxonomy for the Track Catalog API

Services raise these; register_error_handlers() maps them to JSON responses
so no route has to translate exceptions itself.
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map directly to an HTTP response"""
    status_code = 500
    message = 'Server error'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    message = 'Invalid request'


class AuthError(ApiError):
    status_code = 401
    message = 'Invalid credentials'


class NotFoundError(ApiError):
    status_code = 404
    message = 'Not found'


class ConflictError(ApiError):
    # The public contract reports duplicates as 400, not 409
    status_code = 400
    message = 'Track already exists'


class ServerError(ApiError):
    status_code = 500
    message = 'Server error'


class CatalogUnavailableError(ServerError):
    """Raised when the external catalog cannot be reached or answers badly"""
    status_code = 502
    message = 'Catalog service unavailable'


def register_error_handlers(app):
    """Install JSON error handlers on the Flask app"""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {error.message}")
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.error(f"Unhandled error: {error}", exc_info=True)
        return jsonify({'error': 'Server error'}), 500
