# fittrack/routes/history_routes.py

from flask import Blueprint, jsonify, request
from flask_jwt_extended import current_user, jwt_required

from ..errors import ValidationError
from ..history import (
    ACTIVITY_TYPES,
    GROUP_MODES,
    activity_stats,
    filter_activities,
    group_by_date,
    group_by_type,
    merge_activities,
)
from ..models.weight_entry import WeightEntry
from ..models.workout import Workout
from ..pagination import Page, parse_page_args
from ..readiness import require_store

history_bp = Blueprint("history", __name__)
history_bp.before_request(require_store)

# most recent rows pulled from each resource before merging
FETCH_LIMIT = 50
DEFAULT_LIMIT = 50


# ------------------------------
# GET /api/history?type=all|workouts|weight&q=&group=date|type&page&limit
# ------------------------------
@history_bp.route("", methods=["GET"])
@jwt_required()
def get_history():
    activity_type = request.args.get("type") or "all"
    if activity_type not in ACTIVITY_TYPES:
        raise ValidationError(f"type must be one of {', '.join(ACTIVITY_TYPES)}")
    group = request.args.get("group") or "date"
    if group not in GROUP_MODES:
        raise ValidationError(f"group must be one of {', '.join(GROUP_MODES)}")
    page, limit = parse_page_args(request.args, DEFAULT_LIMIT)

    workouts = (
        Workout.query.filter_by(user_id=current_user.id)
        .order_by(Workout.date.desc(), Workout.id.desc())
        .limit(FETCH_LIMIT)
        .all()
    )
    entries = (
        WeightEntry.query.filter_by(user_id=current_user.id)
        .order_by(WeightEntry.date.desc())
        .limit(FETCH_LIMIT)
        .all()
    )

    activities = merge_activities(
        [w.to_dict() for w in workouts],
        [e.to_dict() for e in entries],
    )
    filtered = filter_activities(activities, activity_type, request.args.get("q", ""))
    result = Page.from_sequence(filtered, page, limit)
    groups = group_by_date(result.items) if group == "date" else group_by_type(result.items)

    return jsonify(
        {
            "activities": result.items,
            "groups": groups,
            "stats": activity_stats(activities),
            "pagination": result.to_dict("totalActivities"),
        }
    ), 200
