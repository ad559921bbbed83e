# fittrack/models/weight_entry.py
from .. import db
from .base import BigId, utcnow, iso


class WeightEntry(db.Model):
    """One body-weight reading per user per calendar day."""

    __tablename__ = "weight_entries"
    __table_args__ = (
        db.UniqueConstraint("user_id", "date", name="uq_weight_entries_user_date"),
    )

    id = db.Column(BigId, primary_key=True)
    user_id = db.Column(BigId, db.ForeignKey("users.id"), nullable=False)
    weight = db.Column(db.Float, nullable=False)
    date = db.Column(db.Date, nullable=False)
    notes = db.Column(db.String(500), nullable=False, default="")

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    user = db.relationship(
        "User", backref=db.backref("weight_entries", cascade="all, delete-orphan")
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user": self.user_id,
            "weight": self.weight,
            "date": iso(self.date),
            "notes": self.notes or "",
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }
