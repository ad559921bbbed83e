# fittrack/routes/workout_routes.py

from typing import List

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required

from .. import db
from . import json_body
from ..errors import NotFoundError
from ..models.base import utcnow
from ..models.workout import Workout
from ..pagination import Page, parse_page_args
from ..readiness import require_store
from ..stats import workout_stats
from ..validation import parse_date_range, parse_workout, parse_workout_patch

workouts_bp = Blueprint("workouts", __name__)
workouts_bp.before_request(require_store)

DEFAULT_LIMIT = 20


# ------------------------------
# Helpers
# ------------------------------
def _owned_workout(workout_id: int) -> Workout:
    """Workout by id, scoped to the caller; someone else's is simply not found."""
    workout = Workout.query.filter_by(id=workout_id, user_id=current_user.id).first()
    if not workout:
        raise NotFoundError("Workout not found")
    return workout


# ------------------------------
# POST /api/workouts
# ------------------------------
@workouts_bp.route("", methods=["POST"])
@jwt_required()
def create_workout():
    data = parse_workout(json_body())

    workout = Workout(user_id=current_user.id, notes=data.notes)
    workout.date = data.date or utcnow()
    workout.set_exercises(data.exercises)

    db.session.add(workout)
    db.session.commit()
    current_app.logger.info(f"[workouts] created id={workout.id} user_id={current_user.id}")

    return jsonify({"message": "Workout created successfully", "workout": workout.to_dict()}), 201


# ------------------------------
# GET /api/workouts?page&limit&startDate&endDate
# ------------------------------
@workouts_bp.route("", methods=["GET"])
@jwt_required()
def list_workouts():
    page, limit = parse_page_args(request.args, DEFAULT_LIMIT)
    date_range = parse_date_range(request.args)

    query = Workout.query.filter(
        Workout.user_id == current_user.id,
        *date_range.clauses(Workout.date),
    )
    result = Page.from_query(query, page, limit, Workout.date.desc(), Workout.id.desc())

    return jsonify(
        {
            "workouts": [w.to_dict() for w in result.items],
            "pagination": result.to_dict("totalWorkouts"),
        }
    ), 200


# ------------------------------
# GET /api/workouts/stats
# ------------------------------
@workouts_bp.route("/stats", methods=["GET"])
@jwt_required()
def get_workout_stats():
    rows: List[Workout] = (
        Workout.query.filter_by(user_id=current_user.id)
        .order_by(Workout.date.desc(), Workout.id.desc())
        .all()
    )
    stats = workout_stats(rows)
    stats["recentWorkouts"] = [w.to_dict() for w in stats["recentWorkouts"]]
    return jsonify(stats), 200


# ------------------------------
# GET /api/workouts/<id>
# ------------------------------
@workouts_bp.route("/<int:workout_id>", methods=["GET"])
@jwt_required()
def get_workout(workout_id):
    return jsonify({"workout": _owned_workout(workout_id).to_dict()}), 200


# ------------------------------
# PUT /api/workouts/<id>
# ------------------------------
@workouts_bp.route("/<int:workout_id>", methods=["PUT"])
@jwt_required()
def update_workout(workout_id):
    patch = parse_workout_patch(json_body())
    workout = _owned_workout(workout_id)

    if patch.date is not None:
        workout.date = patch.date
    if patch.exercises is not None:
        workout.set_exercises(patch.exercises)
    if patch.notes is not None:
        workout.notes = patch.notes
    workout.updated_at = utcnow()

    db.session.commit()

    return jsonify({"message": "Workout updated successfully", "workout": workout.to_dict()}), 200


# ------------------------------
# DELETE /api/workouts/<id>
# ------------------------------
@workouts_bp.route("/<int:workout_id>", methods=["DELETE"])
@jwt_required()
def delete_workout(workout_id):
    workout = _owned_workout(workout_id)
    db.session.delete(workout)
    db.session.commit()
    return jsonify({"message": "Workout deleted successfully"}), 200
