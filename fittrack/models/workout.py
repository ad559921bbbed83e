# fittrack/models/workout.py
from .. import db
from ..stats import total_volume
from .base import BigId, utcnow, iso


class Workout(db.Model):
    __tablename__ = "workouts"
    __table_args__ = (db.Index("ix_workouts_user_date", "user_id", "date"),)

    id = db.Column(BigId, primary_key=True)
    user_id = db.Column(BigId, db.ForeignKey("users.id"), nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=utcnow)
    notes = db.Column(db.String(500), nullable=False, default="")

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    user = db.relationship(
        "User", backref=db.backref("workouts", cascade="all, delete-orphan")
    )
    exercises = db.relationship(
        "WorkoutExercise",
        order_by="WorkoutExercise.position",
        cascade="all, delete-orphan",
        back_populates="workout",
    )

    @property
    def total_volume(self) -> float:
        return total_volume(self)

    def set_exercises(self, exercises):
        """Replace the exercise list from validated ``ExerciseInput`` values."""
        self.exercises = [
            WorkoutExercise(
                position=i,
                name=ex.name,
                sets=[
                    WorkoutSet(position=j, reps=s.reps, weight=s.weight)
                    for j, s in enumerate(ex.sets)
                ],
            )
            for i, ex in enumerate(exercises)
        ]

    def to_dict(self):
        return {
            "id": self.id,
            "user": self.user_id,
            "date": iso(self.date),
            "exercises": [ex.to_dict() for ex in self.exercises],
            "notes": self.notes or "",
            "totalVolume": self.total_volume,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }


class WorkoutExercise(db.Model):
    __tablename__ = "workout_exercises"

    id = db.Column(BigId, primary_key=True)
    workout_id = db.Column(
        BigId, db.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False
    )
    position = db.Column(db.Integer, nullable=False, default=0)
    name = db.Column(db.String(100), nullable=False)

    workout = db.relationship("Workout", back_populates="exercises")
    sets = db.relationship(
        "WorkoutSet",
        order_by="WorkoutSet.position",
        cascade="all, delete-orphan",
        back_populates="exercise",
    )

    def to_dict(self):
        return {
            "name": self.name,
            "sets": [s.to_dict() for s in self.sets],
        }


class WorkoutSet(db.Model):
    __tablename__ = "workout_sets"

    id = db.Column(BigId, primary_key=True)
    exercise_id = db.Column(
        BigId, db.ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False
    )
    position = db.Column(db.Integer, nullable=False, default=0)
    reps = db.Column(db.Integer, nullable=False)
    weight = db.Column(db.Float, nullable=False, default=0)

    exercise = db.relationship("WorkoutExercise", back_populates="sets")

    def to_dict(self):
        return {"reps": self.reps, "weight": self.weight}
