# fittrack/routes/weight_routes.py

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required
from sqlalchemy.exc import IntegrityError

from .. import db
from . import json_body
from ..errors import NotFoundError, ValidationError
from ..history import PERIOD_MONTHS, weight_progress
from ..models.base import utcnow
from ..models.weight_entry import WeightEntry
from ..pagination import Page, parse_page_args
from ..readiness import require_store
from ..stats import weight_stats
from ..validation import parse_date_range, parse_weight_entry, parse_weight_patch

weight_bp = Blueprint("weight", __name__)
weight_bp.before_request(require_store)

DEFAULT_LIMIT = 50
DATE_TAKEN_MESSAGE = "A weight entry already exists for this date"


def _owned_entry(entry_id: int) -> WeightEntry:
    entry = WeightEntry.query.filter_by(id=entry_id, user_id=current_user.id).first()
    if not entry:
        raise NotFoundError("Weight entry not found")
    return entry


def _date_taken(entry: WeightEntry, day) -> bool:
    return WeightEntry.query.filter(
        WeightEntry.user_id == entry.user_id,
        WeightEntry.date == day,
        WeightEntry.id != entry.id,
    ).first() is not None


def _overwrite(entry: WeightEntry, data):
    entry.weight = data.weight
    entry.notes = data.notes
    entry.updated_at = utcnow()
    db.session.commit()
    return jsonify(
        {"message": "Weight entry updated successfully", "weightEntry": entry.to_dict()}
    ), 200


# ------------------------------
# POST /api/weight
# One entry per day: a second write for the same day overwrites it.
# ------------------------------
@weight_bp.route("", methods=["POST"])
@jwt_required()
def create_weight_entry():
    data = parse_weight_entry(json_body())

    entry = WeightEntry.query.filter_by(user_id=current_user.id, date=data.date).first()
    if entry:
        return _overwrite(entry, data)

    entry = WeightEntry(
        user_id=current_user.id,
        weight=data.weight,
        date=data.date,
        notes=data.notes,
    )
    db.session.add(entry)
    try:
        db.session.commit()
    except IntegrityError:
        # a concurrent request created this day first: last write wins
        db.session.rollback()
        entry = WeightEntry.query.filter_by(user_id=current_user.id, date=data.date).one()
        return _overwrite(entry, data)
    current_app.logger.info(f"[weight] created id={entry.id} user_id={current_user.id} date={entry.date}")

    return jsonify(
        {"message": "Weight entry created successfully", "weightEntry": entry.to_dict()}
    ), 201


# ------------------------------
# GET /api/weight?page&limit&startDate&endDate
# ------------------------------
@weight_bp.route("", methods=["GET"])
@jwt_required()
def list_weight_entries():
    page, limit = parse_page_args(request.args, DEFAULT_LIMIT)
    date_range = parse_date_range(request.args)

    query = WeightEntry.query.filter(
        WeightEntry.user_id == current_user.id,
        *date_range.clauses(WeightEntry.date, days=True),
    )
    result = Page.from_query(query, page, limit, WeightEntry.date.desc())

    return jsonify(
        {
            "weightEntries": [e.to_dict() for e in result.items],
            "pagination": result.to_dict("totalEntries"),
        }
    ), 200


# ------------------------------
# GET /api/weight/stats
# ------------------------------
@weight_bp.route("/stats", methods=["GET"])
@jwt_required()
def get_weight_stats():
    rows = (
        WeightEntry.query.filter_by(user_id=current_user.id)
        .order_by(WeightEntry.date.desc())
        .all()
    )
    stats = weight_stats(rows)
    stats["recentEntries"] = [e.to_dict() for e in stats["recentEntries"]]
    return jsonify(stats), 200


# ------------------------------
# GET /api/weight/progress?period=1m|3m|6m|all
# ------------------------------
@weight_bp.route("/progress", methods=["GET"])
@jwt_required()
def get_weight_progress():
    period = request.args.get("period") or "all"
    if period not in PERIOD_MONTHS:
        raise ValidationError(f"period must be one of {', '.join(PERIOD_MONTHS)}")

    rows = (
        WeightEntry.query.filter_by(user_id=current_user.id)
        .order_by(WeightEntry.date.asc())
        .all()
    )
    return jsonify(weight_progress([e.to_dict() for e in rows], period)), 200


# ------------------------------
# GET /api/weight/<id>
# ------------------------------
@weight_bp.route("/<int:entry_id>", methods=["GET"])
@jwt_required()
def get_weight_entry(entry_id):
    return jsonify({"weightEntry": _owned_entry(entry_id).to_dict()}), 200


# ------------------------------
# PUT /api/weight/<id>
# ------------------------------
@weight_bp.route("/<int:entry_id>", methods=["PUT"])
@jwt_required()
def update_weight_entry(entry_id):
    patch = parse_weight_patch(json_body())
    entry = _owned_entry(entry_id)

    if patch.date is not None and patch.date != entry.date:
        if _date_taken(entry, patch.date):
            raise ValidationError(DATE_TAKEN_MESSAGE)
        entry.date = patch.date
    if patch.weight is not None:
        entry.weight = patch.weight
    if patch.notes is not None:
        entry.notes = patch.notes
    entry.updated_at = utcnow()

    try:
        db.session.commit()
    except IntegrityError:
        # another request took that day between the check and the commit
        db.session.rollback()
        raise ValidationError(DATE_TAKEN_MESSAGE) from None

    return jsonify(
        {"message": "Weight entry updated successfully", "weightEntry": entry.to_dict()}
    ), 200


# ------------------------------
# DELETE /api/weight/<id>
# ------------------------------
@weight_bp.route("/<int:entry_id>", methods=["DELETE"])
@jwt_required()
def delete_weight_entry(entry_id):
    entry = _owned_entry(entry_id)
    db.session.delete(entry)
    db.session.commit()
    return jsonify({"message": "Weight entry deleted successfully"}), 200
