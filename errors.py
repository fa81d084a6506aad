"""Error taxonomy for the API and the handlers mapping it to JSON responses."""

import logging

from flask import jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import BadRequest, InternalServerError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message=None, error=None, errors=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.error = error
        self.errors = errors

    def to_dict(self):
        body = {"status": self.status_code, "message": self.message}
        if self.error:
            body["error"] = self.error
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(ApiError):
    status_code = 400
    message = "Invalid input"


class InvalidIdentifier(ValidationError):
    message = "Invalid ID format"


class ConflictError(ApiError):
    # Duplicate registrations are reported as 400, not 409.
    status_code = 400
    message = "Conflict"


class AuthError(ApiError):
    status_code = 401
    message = "Authentication required"


class ForbiddenError(ApiError):
    status_code = 403
    message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    message = "Not found"


class StoreUnavailable(ApiError):
    status_code = 503
    message = "Service Unavailable"


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    def internal_error(exc, generic):
        detail = str(exc) if app.config.get("EXPOSE_ERROR_DETAILS") else generic
        body = {"status": 500, "message": "Internal Server Error", "error": detail}
        return jsonify(body), 500

    @app.errorhandler(PyMongoError)
    def handle_store_error(exc):
        logger.exception("Document store operation failed")
        return internal_error(exc, "Document store operation failed")

    @app.errorhandler(InternalServerError)
    def handle_unexpected_error(exc):
        # Anything not raised as an ApiError or a driver error ends up here.
        original = exc.original_exception or exc
        logger.error("Unhandled %s while serving request", type(original).__name__,
                     exc_info=original)
        return internal_error(original, "Unexpected server error")

    @app.errorhandler(BadRequest)
    def handle_bad_request(exc):
        body = {"status": 400, "message": "Invalid request body", "error": exc.description}
        return jsonify(body), 400
