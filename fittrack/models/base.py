# fittrack/models/base.py
from datetime import datetime, timezone

from .. import db


def utcnow():
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def iso(value):
    return value.isoformat() if value else None


# SQLite only autoincrements INTEGER PRIMARY KEY columns
BigId = db.BigInteger().with_variant(db.Integer(), "sqlite")
