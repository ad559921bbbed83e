# fittrack/history.py
"""
Activity feed and weight-progress views.

These work on already-serialized dicts (``Workout.to_dict()`` /
``WeightEntry.to_dict()``), so they are plain list arithmetic.
"""
import calendar
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from .stats import total_volume

ACTIVITY_TYPES = ("all", "workouts", "weight")
GROUP_MODES = ("date", "type")
PERIOD_MONTHS = {"1m": 1, "3m": 3, "6m": 6, "all": None}
TREND_WINDOW = 4


def _day_of(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _sort_key(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    return datetime.fromisoformat(str(value))


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


# ------------------------------
# Activity feed
# ------------------------------
def workout_activity(workout: Dict[str, Any]) -> Dict[str, Any]:
    exercises = workout.get("exercises") or []
    names = [ex.get("name") for ex in exercises[:2] if ex.get("name")]
    return {
        "id": workout.get("id"),
        "type": "workout",
        "date": workout.get("date"),
        "title": _plural(len(exercises), "exercise"),
        "subtitle": ", ".join(names) or "No exercises",
        "value": total_volume(workout),
        "notes": workout.get("notes") or "",
    }


def weight_activity(entry: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": entry.get("id"),
        "type": "weight",
        "date": entry.get("date"),
        "title": f"{entry.get('weight'):g} lbs",
        "subtitle": "Weight entry",
        "value": entry.get("weight"),
        "notes": entry.get("notes") or "",
    }


def merge_activities(workouts: List[Dict[str, Any]], entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    activities = [workout_activity(w) for w in workouts] + [weight_activity(e) for e in entries]
    return sorted(activities, key=lambda a: _sort_key(a["date"]), reverse=True)


def filter_activities(activities, activity_type: str = "all", query: str = ""):
    if activity_type == "workouts":
        activities = [a for a in activities if a["type"] == "workout"]
    elif activity_type == "weight":
        activities = [a for a in activities if a["type"] == "weight"]

    needle = (query or "").strip().lower()
    if needle:
        activities = [
            a for a in activities
            if needle in a["title"].lower()
            or needle in (a.get("subtitle") or "").lower()
            or needle in (a.get("notes") or "").lower()
        ]
    return list(activities)


def day_label(day: date, today: date) -> str:
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"

    diff_days = (today - day).days
    if 0 < diff_days <= 7:
        return f"{diff_days} days ago"
    if 0 < diff_days <= 30:
        return f"{-(-diff_days // 7)} weeks ago"

    label = f"{calendar.month_name[day.month]} {day.day}"
    if day.year != today.year:
        label += f", {day.year}"
    return label


def group_by_date(activities, today: Optional[date] = None) -> List[Dict[str, Any]]:
    today = today or date.today()
    groups: Dict[date, Dict[str, Any]] = {}
    for activity in activities:
        day = _day_of(activity["date"])
        if day not in groups:
            groups[day] = {
                "date": day.isoformat(),
                "displayDate": day_label(day, today),
                "activities": [],
            }
        groups[day]["activities"].append(activity)
    return [groups[d] for d in sorted(groups, reverse=True)]


def group_by_type(activities) -> List[Dict[str, Any]]:
    groups = [
        {
            "type": "workout",
            "title": "Workouts",
            "activities": [a for a in activities if a["type"] == "workout"],
        },
        {
            "type": "weight",
            "title": "Weight Tracking",
            "activities": [a for a in activities if a["type"] == "weight"],
        },
    ]
    return [g for g in groups if g["activities"]]


def activity_stats(activities, today: Optional[date] = None) -> Dict[str, int]:
    today = today or date.today()
    week_ago = today - timedelta(days=7)
    return {
        "total": len(activities),
        "workouts": sum(1 for a in activities if a["type"] == "workout"),
        "weights": sum(1 for a in activities if a["type"] == "weight"),
        "thisWeek": sum(1 for a in activities if _day_of(a["date"]) >= week_ago),
    }


# ------------------------------
# Weight progress
# ------------------------------
def months_before(day: date, months: int) -> date:
    """Same day-of-month ``months`` earlier, clamped to the month's last day."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _direction(change: float) -> str:
    if change > 0:
        return "up"
    if change < 0:
        return "down"
    return "stable"


def weight_progress(entries: List[Dict[str, Any]], period: str = "all", today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    ordered = sorted(entries, key=lambda e: _day_of(e["date"]))

    months = PERIOD_MONTHS[period]
    if months is None:
        window = ordered
    else:
        cutoff = months_before(today, months)
        window = [e for e in ordered if _day_of(e["date"]) >= cutoff]

    current = ordered[-1]["weight"] if ordered else None
    start = window[0]["weight"] if window else None
    total_change = current - start if current is not None and start is not None else 0

    insights = []
    if len(window) >= 2:
        recent = window[-TREND_WINDOW:]
        trend = recent[-1]["weight"] - recent[0]["weight"]
        avg_change = total_change / len(window)
        insights = [
            {
                "label": "Trend",
                "value": {"up": "Increasing", "down": "Decreasing", "stable": "Stable"}[_direction(trend)],
                "change": trend,
                "type": _direction(trend),
            },
            {
                "label": "Average Change",
                "value": f"{abs(avg_change):.1f} lbs",
                "change": avg_change,
                "type": _direction(avg_change),
            },
        ]

    return {
        "period": period,
        "entries": window,
        "totalEntries": len(ordered),
        "currentWeight": current,
        "startWeight": start,
        "totalChange": total_change,
        "insights": insights,
    }
