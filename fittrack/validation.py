# fittrack/validation.py
"""
Request-body parsing.

Each ``parse_*`` function turns a JSON body into a frozen input value or
raises ``ValidationError`` before anything touches the database.
"""
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, List, Mapping, Optional, Tuple

from .errors import ValidationError

MAX_BODY_WEIGHT = 1000
MAX_NOTES_LENGTH = 500
MAX_EXERCISE_NAME_LENGTH = 100
MAX_REPS = 10000


# ------------------------------
# Input values
# ------------------------------
@dataclass(frozen=True)
class SetInput:
    reps: int
    weight: float


@dataclass(frozen=True)
class ExerciseInput:
    name: str
    sets: Tuple[SetInput, ...]


@dataclass(frozen=True)
class WorkoutInput:
    date: Optional[datetime]
    exercises: Tuple[ExerciseInput, ...]
    notes: str


@dataclass(frozen=True)
class WorkoutPatch:
    date: Optional[datetime] = None
    exercises: Optional[Tuple[ExerciseInput, ...]] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class WeightEntryInput:
    weight: float
    date: date
    notes: str


@dataclass(frozen=True)
class WeightEntryPatch:
    weight: Optional[float] = None
    date: Optional[date] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class DateRange:
    """Inclusive bounds; either side may be open."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def clauses(self, column, days: bool = False) -> List[Any]:
        """SQL filter clauses; ``days`` compares against a Date column."""
        out = []
        if self.start is not None:
            out.append(column >= (self.start.date() if days else self.start))
        if self.end is not None:
            out.append(column <= (self.end.date() if days else self.end))
        return out


# ------------------------------
# Scalars
# ------------------------------
def _is_number(v: Any) -> bool:
    if not isinstance(v, (int, float)) or isinstance(v, bool):
        return False
    try:
        return math.isfinite(v)
    except OverflowError:
        # ints too large to become a float
        return False


def _is_whole(v: Any) -> bool:
    return _is_number(v) and float(v) == int(v)


def _parse_iso(value: Any, field: str) -> Tuple[datetime, bool]:
    """Return (naive UTC datetime, was_date_only)."""
    if isinstance(value, datetime):
        return value, False
    if isinstance(value, date):
        return datetime.combine(value, time.min), True
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid {field}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid {field}") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed, len(text) == 10


def parse_datetime(value: Any, field: str = "date") -> datetime:
    return _parse_iso(value, field)[0]


def parse_day(value: Any, field: str = "date") -> date:
    """Calendar day of a date or datetime string, time of day dropped."""
    parsed, _ = _parse_iso(value, field)
    if isinstance(value, str):
        # keep the day as written, before any timezone shift
        return date.fromisoformat(value.strip()[:10])
    return parsed.date()


def parse_notes(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Validation error", ["Notes must be a string"])
    notes = value.strip()
    if len(notes) > MAX_NOTES_LENGTH:
        raise ValidationError(
            "Validation error", [f"Notes cannot exceed {MAX_NOTES_LENGTH} characters"]
        )
    return notes


def parse_date_range(args: Mapping[str, Any]) -> DateRange:
    start = end = None
    if args.get("startDate"):
        start = parse_datetime(args.get("startDate"), "startDate")
    if args.get("endDate"):
        end, date_only = _parse_iso(args.get("endDate"), "endDate")
        if date_only:
            end = end + timedelta(days=1) - timedelta(microseconds=1)
    return DateRange(start=start, end=end)


# ------------------------------
# Weight entries
# ------------------------------
def parse_weight_entry(data: Mapping[str, Any], today: Optional[date] = None) -> WeightEntryInput:
    weight = data.get("weight")
    if not _is_number(weight):
        raise ValidationError("Valid weight is required")
    if weight <= 0 or weight > MAX_BODY_WEIGHT:
        raise ValidationError(f"Weight must be between 0 and {MAX_BODY_WEIGHT}")

    raw_date = data.get("date")
    day = parse_day(raw_date) if raw_date else (today or datetime.now(timezone.utc).date())

    return WeightEntryInput(weight=float(weight), date=day, notes=parse_notes(data.get("notes")))


def parse_weight_patch(data: Mapping[str, Any]) -> WeightEntryPatch:
    weight = None
    if "weight" in data:
        weight = data["weight"]
        if not _is_number(weight) or weight <= 0 or weight > MAX_BODY_WEIGHT:
            raise ValidationError(f"Weight must be a number between 0 and {MAX_BODY_WEIGHT}")
        weight = float(weight)

    day = parse_day(data["date"]) if data.get("date") else None
    notes = parse_notes(data["notes"]) if "notes" in data else None
    return WeightEntryPatch(weight=weight, date=day, notes=notes)


# ------------------------------
# Workouts
# ------------------------------
def _schema_errors_for_set(raw: Any) -> List[str]:
    if not isinstance(raw, Mapping):
        return ["Each set must be an object"]
    errors = []
    reps = raw.get("reps")
    if reps is None:
        errors.append("Reps are required")
    elif not _is_whole(reps):
        errors.append("Reps must be a whole number")
    elif reps < 1:
        errors.append("Reps must be at least 1")
    elif reps > MAX_REPS:
        errors.append(f"Reps cannot exceed {MAX_REPS}")

    weight = raw.get("weight")
    if weight is None:
        errors.append("Weight is required")
    elif not _is_number(weight):
        errors.append("Weight must be a number")
    elif weight < 0:
        errors.append("Weight cannot be negative")
    return errors


def build_exercises(raw_exercises: List[Any]) -> Tuple[ExerciseInput, ...]:
    """
    Storage-level check of an exercise list. Collects every violation and
    raises a single ``ValidationError("Validation error", errors)``.
    """
    errors: List[str] = []
    exercises = []
    for raw in raw_exercises:
        if not isinstance(raw, Mapping):
            errors.append("Each exercise must be an object")
            continue

        name = raw.get("name")
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            errors.append("Exercise name is required")
        elif len(name) > MAX_EXERCISE_NAME_LENGTH:
            errors.append(f"Exercise name cannot exceed {MAX_EXERCISE_NAME_LENGTH} characters")

        raw_sets = raw.get("sets")
        if not isinstance(raw_sets, list) or not raw_sets:
            errors.append("At least one set is required")
            raw_sets = []

        sets = []
        for raw_set in raw_sets:
            set_errors = _schema_errors_for_set(raw_set)
            if set_errors:
                errors.extend(set_errors)
            else:
                sets.append(SetInput(reps=int(raw_set["reps"]), weight=float(raw_set["weight"])))

        exercises.append(ExerciseInput(name=name, sets=tuple(sets)))

    if errors:
        # a message repeated across sets is reported once
        raise ValidationError("Validation error", list(dict.fromkeys(errors)))
    return tuple(exercises)


def parse_workout(data: Mapping[str, Any]) -> WorkoutInput:
    """Create: the first coarse violation rejects the whole workout."""
    exercises = data.get("exercises")
    if not isinstance(exercises, list) or not exercises:
        raise ValidationError("At least one exercise is required")

    for exercise in exercises:
        sets = exercise.get("sets") if isinstance(exercise, Mapping) else None
        name = exercise.get("name") if isinstance(exercise, Mapping) else None
        if not name or not isinstance(name, str) or not isinstance(sets, list) or not sets:
            raise ValidationError("Each exercise must have a name and at least one set")

        for s in sets:
            if (
                not isinstance(s, Mapping)
                or not _is_whole(s.get("reps"))
                or not _is_number(s.get("weight"))
                or s["reps"] < 1
                or s["weight"] < 0
            ):
                raise ValidationError("Each set must have valid reps (>= 1) and weight (>= 0)")

    raw_date = data.get("date")
    return WorkoutInput(
        date=parse_datetime(raw_date) if raw_date else None,
        exercises=build_exercises(exercises),
        notes=parse_notes(data.get("notes")),
    )


def parse_workout_patch(data: Mapping[str, Any]) -> WorkoutPatch:
    """
    Update: only a coarse check on the exercise list itself, then the
    storage-level check for whatever replaces it.
    """
    exercises = None
    if "exercises" in data and data["exercises"] is not None:
        raw = data["exercises"]
        if not isinstance(raw, list) or not raw:
            raise ValidationError("At least one exercise is required")
        exercises = build_exercises(raw)

    raw_date = data.get("date")
    return WorkoutPatch(
        date=parse_datetime(raw_date) if raw_date else None,
        exercises=exercises,
        notes=parse_notes(data["notes"]) if "notes" in data else None,
    )
