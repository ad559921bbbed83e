# fittrack/errors.py
from typing import List, Optional

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from . import db

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class ApiError(Exception):
    """Base class for errors that map onto a JSON response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"message": self.message}


class ValidationError(ApiError):
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else []

    def to_dict(self):
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class NotFoundError(ApiError):
    status_code = 404


class AuthError(ApiError):
    status_code = 401


class UnavailableError(ApiError):
    status_code = 503

    def to_dict(self):
        return {"message": self.message, "status": "disconnected"}


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(429)
    def handle_rate_limited(err):
        return jsonify({"message": RATE_LIMIT_MESSAGE}), 429

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        db.session.rollback()
        current_app.logger.exception(f"Unhandled error: {err}")
        detail = str(err) if current_app.config.get("APP_ENV") == "development" else "Something went wrong"
        return jsonify({"message": "Internal server error", "error": detail}), 500
