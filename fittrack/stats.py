# fittrack/stats.py
"""
Aggregations over one owner's entries.

Every function here accepts ORM rows or plain dicts and never raises on an
empty list: a user without data gets ``None``/``0`` fields back.
"""
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

RECENT_LIMIT = 5
MONTH_WINDOW_DAYS = 30
WEEK_WINDOW_DAYS = 7


def _get(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _as_number(value: Any) -> float:
    """Coerce a reps/weight value, treating anything non-numeric as 0."""
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return number


def total_volume(workout: Any) -> float:
    """Sum of reps * weight over every set of every exercise."""
    exercises = _get(workout, "exercises") or []
    if isinstance(exercises, (str, bytes, dict)):
        return 0
    volume = 0
    for exercise in exercises:
        sets = _get(exercise, "sets") or []
        if isinstance(sets, (str, bytes, dict)):
            continue
        for s in sets:
            volume += _as_number(_get(s, "reps")) * _as_number(_get(s, "weight"))
    return volume


def _newest_first(items: Iterable[Any]) -> List[Any]:
    return sorted(items, key=lambda item: _get(item, "date"), reverse=True)


def weight_stats(entries: Iterable[Any]) -> Dict[str, Any]:
    entries = _newest_first(entries)
    if not entries:
        return {
            "totalEntries": 0,
            "currentWeight": None,
            "previousWeight": None,
            "weightChange": None,
            "highestWeight": None,
            "lowestWeight": None,
            "totalChange": None,
            "recentEntries": [],
        }

    weights = [_get(e, "weight") for e in entries]
    current: Optional[float] = weights[0]
    previous: Optional[float] = weights[1] if len(weights) > 1 else None

    weight_change = None
    if current is not None and previous is not None:
        weight_change = current - previous

    total_change = None
    if len(weights) > 1 and current is not None and weights[-1] is not None:
        total_change = current - weights[-1]

    known = [w for w in weights if w is not None]
    return {
        "totalEntries": len(entries),
        "currentWeight": current,
        "previousWeight": previous,
        "weightChange": weight_change,
        "highestWeight": max(known) if known else None,
        "lowestWeight": min(known) if known else None,
        "totalChange": total_change,
        "recentEntries": entries[:RECENT_LIMIT],
    }


def workout_stats(workouts: Iterable[Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    workouts = _newest_first(workouts)
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    month_cutoff = now - timedelta(days=MONTH_WINDOW_DAYS)
    week_cutoff = now - timedelta(days=WEEK_WINDOW_DAYS)

    this_month = [w for w in workouts if _get(w, "date") >= month_cutoff]
    this_week = [w for w in this_month if _get(w, "date") >= week_cutoff]

    return {
        "totalWorkouts": len(workouts),
        "workoutsThisMonth": len(this_month),
        "workoutsThisWeek": len(this_week),
        "totalVolumeThisMonth": sum(total_volume(w) for w in this_month),
        "recentWorkouts": workouts[:RECENT_LIMIT],
    }
