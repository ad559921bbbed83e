# fittrack/routes/auth_routes.py

from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import create_access_token, current_user, jwt_required

from .. import db
from . import json_body
from ..errors import AuthError, ValidationError
from ..models.user import User
from ..readiness import require_store

auth_bp = Blueprint("auth", __name__)
auth_bp.before_request(require_store)

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2


def _token_for(user: User) -> str:
    return create_access_token(identity=str(user.id))


# -----------------------------
# Routes
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    data = json_body()

    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""  # do NOT strip passwords

    if not name or not email or not password:
        raise ValidationError("All fields are required")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if User.query.filter_by(email=email).first():
        raise ValidationError("User with this email already exists")

    user = User(name=name, email=email)
    user.set_password(password)

    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"[auth/register] user_id={user.id}")

    return jsonify(
        {
            "message": "User registered successfully",
            "user": user.to_dict(),
            "token": _token_for(user),
        }
    ), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = json_body()

    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""

    if not email or not password:
        raise ValidationError("Email and password are required")

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        current_app.logger.info(f"[auth/login] failed login for '{email}'")
        raise AuthError("Invalid email or password")

    return jsonify(
        {
            "message": "Login successful",
            "user": user.to_dict(),
            "token": _token_for(user),
        }
    ), 200


@auth_bp.route("/profile", methods=["GET"])
@jwt_required()
def get_profile():
    return jsonify({"user": current_user.to_dict(include_created=True)}), 200


@auth_bp.route("/profile", methods=["PUT"])
@jwt_required()
def update_profile():
    data = json_body()
    name = data.get("name")

    if not isinstance(name, str) or len(name.strip()) < MIN_NAME_LENGTH:
        raise ValidationError(f"Name must be at least {MIN_NAME_LENGTH} characters long")

    current_user.name = name.strip()
    db.session.commit()

    return jsonify({"message": "Profile updated successfully", "user": current_user.to_dict()}), 200


@auth_bp.route("/change-password", methods=["POST"])
@jwt_required()
def change_password():
    data = json_body()
    current_password = data.get("currentPassword") or ""
    new_password = data.get("newPassword") or ""

    if not current_password or not new_password:
        raise ValidationError("Current password and new password are required")

    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if not current_user.check_password(current_password):
        raise AuthError("Current password is incorrect")

    current_user.set_password(new_password)
    db.session.commit()

    return jsonify({"message": "Password changed successfully"}), 200
