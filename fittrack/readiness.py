# fittrack/readiness.py
"""
Store readiness checks.

The active check lives in ``app.extensions["readiness"]`` so tests can hand
``create_app`` a fixed answer instead of a live database check.
"""
from flask import current_app, request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .errors import UnavailableError

UNAVAILABLE_MESSAGE = "Database connection unavailable. Please try again in a moment."


class DatabaseReadiness:
    def __init__(self, db):
        self.db = db

    def is_ready(self) -> bool:
        try:
            self.db.session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            self.db.session.rollback()
            current_app.logger.warning(f"[readiness] store unavailable: {e}")
            return False


class StaticReadiness:
    def __init__(self, ready: bool = True):
        self.ready = ready

    def is_ready(self) -> bool:
        return self.ready


def init_readiness(app, readiness):
    app.extensions["readiness"] = readiness


def require_store():
    """before_request hook: refuse to run handlers while the store is down."""
    if request.method == "OPTIONS":
        return None
    if not current_app.extensions["readiness"].is_ready():
        raise UnavailableError(UNAVAILABLE_MESSAGE)
