# fittrack/models/user.py
from werkzeug.security import generate_password_hash, check_password_hash
from .. import db
from .base import BigId, utcnow, iso


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(BigId, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_dict(self, include_created=False):
        data = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
        }
        if include_created:
            data["createdAt"] = iso(self.created_at)
        return data
